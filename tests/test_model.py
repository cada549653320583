import math

import numpy as np
import pytest

from wellenkugel import DegenerateResolutionError, SurfaceModel
from wellenkugel.mesh.grid import grid_index
from wellenkugel.mesh.surface import evaluate, parameter_values
from wellenkugel.mesh.texcoords import DEFAULT_PIVOT, grid_texcoords, rotate_about


class TestDescribe:
    def test_default_buffer_sizes(self):
        buffers = SurfaceModel().describe()
        assert (buffers.u_steps, buffers.v_steps) == (50, 50)
        assert buffers.vertex_count == 51 * 51
        assert buffers.triangle_count == 2 * 50 * 50
        assert buffers.indices.size == 15000

    @pytest.mark.parametrize("u_steps, v_steps", [(1, 1), (3, 7), (12, 5)])
    def test_buffer_lengths_agree(self, u_steps, v_steps):
        buffers = SurfaceModel(u_steps, v_steps).describe()
        n = (u_steps + 1) * (v_steps + 1)
        assert buffers.vertices.shape == (3 * n,)
        assert buffers.normals.shape == (3 * n,)
        assert buffers.texcoords.shape == (2 * n,)
        assert buffers.tangents.shape == (3 * n,)
        assert buffers.indices.shape == (6 * u_steps * v_steps,)
        assert buffers.indices.max() < n

    def test_vertices_are_surface_points(self):
        buffers = SurfaceModel(6, 4).describe()
        us, vs = parameter_values(6, 4)
        for i, u in enumerate(us):
            for j, v in enumerate(vs):
                k = grid_index(i, j, 4)
                assert tuple(buffers.vertices[3 * k:3 * k + 3]) == evaluate(u, v)

    def test_buffers_compare_by_identity(self):
        model = SurfaceModel(3, 3)
        first = model.describe()
        second = model.describe()
        assert first == first
        assert first != second
        assert len({first, second}) == 2

    def test_returns_copies(self):
        model = SurfaceModel(3, 3)
        buffers = model.describe()
        buffers.vertices[:] = 0.0
        assert model.describe().vertices[-1] != 0.0

    def test_save(self, tmp_path):
        buffers = SurfaceModel(3, 2).describe()
        path = buffers.save(tmp_path / "surface")
        assert path.name == "surface.npz"
        with np.load(path) as data:
            assert data["resolution"].tolist() == [3, 2]
            assert np.array_equal(data["vertices"], buffers.vertices)
            assert np.array_equal(data["indices"], buffers.indices)
            assert np.array_equal(data["texcoords"], buffers.texcoords)


class TestRegenerate:
    def test_changes_resolution(self):
        model = SurfaceModel(4, 4)
        model.regenerate_surface(8, 3)
        assert model.resolution == (8, 3)
        assert model.describe().vertex_count == 9 * 4
        assert model.revision == 2

    def test_invalid_keeps_previous_mesh(self):
        model = SurfaceModel(4, 4)
        mesh = model.mesh
        with pytest.raises(DegenerateResolutionError):
            model.regenerate_surface(0, 4)
        with pytest.raises(DegenerateResolutionError):
            model.regenerate_surface(4, -2)
        assert model.mesh is mesh
        assert model.revision == 1

    def test_invalid_initial_resolution(self):
        with pytest.raises(DegenerateResolutionError):
            SurfaceModel(0, 0)

    def test_keeps_texture_transform(self):
        model = SurfaceModel(4, 4)
        model.rotate_texcoords(0.5)
        model.move_pivot(0.25, 0.0)
        model.regenerate_surface(6, 3)
        expected = rotate_about(grid_texcoords(6, 3), 0.5, model.pivot)
        assert model.pivot == pytest.approx((0.75, 0.5))
        assert np.allclose(model.describe().texcoords, expected.ravel())


class TestTexcoordCommands:
    def test_texture_commands_bump_texcoord_revision(self):
        model = SurfaceModel(3, 3)
        assert model.texcoord_revision == 0
        model.rotate_texcoords(0.2)
        model.move_pivot(0.1, 0.1)
        model.reset_texcoords()
        assert model.texcoord_revision == 3
        assert model.revision == 1

    def test_rotate_is_absolute(self):
        model = SurfaceModel(5, 5)
        model.rotate_texcoords(1.0)
        first = model.describe().texcoords
        model.rotate_texcoords(1.0)
        assert np.array_equal(model.describe().texcoords, first)
        assert model.angle == 1.0

    def test_half_turn_maps_corner(self):
        model = SurfaceModel(2, 2)
        model.rotate_texcoords(math.pi)
        assert model.describe().texcoords[:2] == pytest.approx((1.0, 1.0))

    def test_rotation_leaves_geometry(self):
        model = SurfaceModel(5, 5)
        before = model.describe()
        model.rotate_texcoords(0.7)
        model.move_pivot(-0.1, 0.2)
        after = model.describe()
        assert np.array_equal(before.vertices, after.vertices)
        assert np.array_equal(before.normals, after.normals)
        assert np.array_equal(before.indices, after.indices)

    def test_move_pivot_clamps(self):
        model = SurfaceModel(2, 2)
        assert model.move_pivot(1.0, -1.0) == (1.0, 0.0)
        assert model.pivot == (1.0, 0.0)

    def test_reset(self):
        model = SurfaceModel(3, 3)
        model.rotate_texcoords(2.0)
        model.move_pivot(0.3, 0.3)
        model.reset_texcoords()
        assert model.angle == 0.0
        assert model.pivot == DEFAULT_PIVOT
        assert np.allclose(model.describe().texcoords, grid_texcoords(3, 3).ravel())

    def test_interleaved_buffer_follows_rotation(self):
        model = SurfaceModel(3, 3)
        model.mesh.interleaved_buffer()
        model.rotate_texcoords(0.4)
        buffer = model.mesh.interleaved_buffer()
        assert buffer.shape == (16, 11)
        assert np.array_equal(buffer[:, 6:8], model.mesh.uv.astype(np.float32))
