import math

import numpy as np
import pytest

from wellenkugel.config import ViewerSettings
from wellenkugel.model import SurfaceModel
from wellenkugel.visualization.backends import NOPGraphicsBackend, ShaderBuildError
from wellenkugel.visualization.camera import TrackballCamera
from wellenkugel.visualization.renderer import SurfaceRenderer, light_position


class FailingShaderBackend(NOPGraphicsBackend):
    def create_shader(self, vertex_source, fragment_source):
        raise ShaderBuildError("fragment", "0:12(3): error: syntax error, unexpected '}'")


@pytest.fixture
def setup():
    model = SurfaceModel(4, 3)
    graphics = NOPGraphicsBackend()
    renderer = SurfaceRenderer(model, ViewerSettings())
    renderer.initialize(graphics)
    return model, graphics, renderer


def test_light_position():
    assert light_position(0.0) == pytest.approx((10.0, 5.0, 0.0))
    assert light_position(500.0 * math.pi) == pytest.approx((0.0, 5.0, 10.0), abs=1e-5)
    assert light_position(1000.0 * math.pi) == pytest.approx((-10.0, 5.0, 0.0), abs=1e-5)


class TestInitialize:
    def test_creates_resources(self, setup):
        model, graphics, renderer = setup
        assert len(graphics.shaders) == 2
        assert len(graphics.meshes) == 1
        assert len(graphics.polylines) == 1
        assert graphics.state["ready"] is True

    def test_uploads_interleaved_vertices(self, setup):
        model, graphics, renderer = setup
        handle = graphics.meshes[0]
        assert handle.vertex_data.shape == (20, 11)
        assert np.array_equal(handle.vertex_data[:, :3], model.mesh.vertices.astype(np.float32))
        assert np.array_equal(handle.index_data, model.mesh.triangles)

    def test_wireframe_indices(self, setup):
        model, graphics, renderer = setup
        assert graphics.polylines[0].index_data.shape == (5 * 3 + 4 * 4, 2)
        assert graphics.polylines[0].vertex_data.shape == (20, 3)

    def test_shader_error_is_fatal(self):
        renderer = SurfaceRenderer(SurfaceModel(2, 2))
        with pytest.raises(ShaderBuildError) as info:
            renderer.initialize(FailingShaderBackend())
        assert info.value.stage == "fragment"
        assert "syntax error" in info.value.diagnostics

    def test_sync_requires_initialize(self):
        renderer = SurfaceRenderer(SurfaceModel(2, 2))
        with pytest.raises(RuntimeError):
            renderer.sync()


class TestDraw:
    def test_sets_uniforms(self, setup):
        model, graphics, renderer = setup
        renderer.draw(TrackballCamera(), (800, 600), time_ms=0.0)
        uniforms = graphics.shaders[0].uniforms
        for name in (
            "u_matrix",
            "u_normal_matrix",
            "u_light_position",
            "u_view_position",
            "u_ambient_color",
            "u_diffuse_color",
            "u_specular_color",
            "u_shininess",
        ):
            assert name in uniforms
        assert uniforms["u_light_position"] == pytest.approx((10.0, 5.0, 0.0))
        assert uniforms["u_shininess"] == 32.0
        assert (uniforms["u_diffuse_texture"], uniforms["u_specular_texture"], uniforms["u_normal_texture"]) == (0, 1, 2)

    def test_viewport_and_clear(self, setup):
        model, graphics, renderer = setup
        renderer.draw(TrackballCamera(), (800, 600))
        assert graphics.viewport == (0, 0, 800, 600)
        assert graphics.clears == 1
        assert graphics.state["polygon_mode"] == "fill"

    def test_binds_three_texture_units(self, setup):
        model, graphics, renderer = setup
        renderer.draw(TrackballCamera(), (100, 100))
        assert sorted(t.bound_unit for t in graphics.textures) == [0, 1, 2]

    def test_draws_mesh(self, setup):
        model, graphics, renderer = setup
        camera = TrackballCamera()
        renderer.draw(camera, (100, 100))
        renderer.draw(camera, (100, 100))
        assert graphics.meshes[0].draws == 2
        assert graphics.polylines[0].draws == 0

    def test_wireframe_overlay(self, setup):
        model, graphics, renderer = setup
        renderer.show_wireframe = True
        renderer.draw(TrackballCamera(), (100, 100))
        assert graphics.polylines[0].draws == 1
        assert "u_color" in graphics.shaders[1].uniforms

    def test_zero_height_viewport(self, setup):
        model, graphics, renderer = setup
        camera = TrackballCamera()
        renderer.draw(camera, (640, 0))
        assert camera.aspect == 1.0


class TestSync:
    def test_regenerate_uploads_new_mesh(self, setup):
        model, graphics, renderer = setup
        model.regenerate_surface(6, 6)
        renderer.draw(TrackballCamera(), (100, 100))
        assert len(graphics.meshes) == 2
        assert graphics.meshes[0].deleted is True
        assert graphics.polylines[0].deleted is True
        assert graphics.meshes[1].vertex_data.shape == (49, 11)

    def test_texcoords_update_in_place(self, setup):
        model, graphics, renderer = setup
        model.rotate_texcoords(0.6)
        renderer.sync()
        handle = graphics.meshes[0]
        assert len(graphics.meshes) == 1
        assert handle.uploads == 2
        assert np.array_equal(handle.vertex_data[:, 6:8], model.mesh.uv.astype(np.float32))

    def test_clean_sync_does_nothing(self, setup):
        model, graphics, renderer = setup
        renderer.sync()
        assert graphics.meshes[0].uploads == 1
        renderer.sync()
        assert graphics.meshes[0].uploads == 1

    def test_rotation_reaches_gpu_on_draw(self, setup):
        model, graphics, renderer = setup
        model.rotate_texcoords(1.0)
        renderer.draw(TrackballCamera(), (100, 100))
        assert np.allclose(renderer.mesh_handle.vertex_data[:, 6:8], model.mesh.uv)

    @pytest.mark.parametrize("command", [
        lambda model: model.move_pivot(0.2, -0.1),
        lambda model: model.reset_texcoords(),
    ])
    def test_pivot_and_reset_reach_gpu(self, setup, command):
        model, graphics, renderer = setup
        model.rotate_texcoords(0.8)
        renderer.sync()
        command(model)
        renderer.draw(TrackballCamera(), (100, 100))
        assert graphics.meshes[0].uploads == 3
        assert np.allclose(graphics.meshes[0].vertex_data[:, 6:8], model.mesh.uv)

    def test_texture_command_after_regenerate(self, setup):
        model, graphics, renderer = setup
        model.regenerate_surface(5, 5)
        model.rotate_texcoords(0.3)
        renderer.sync()
        assert len(graphics.meshes) == 2
        assert graphics.meshes[1].uploads == 1
        assert np.allclose(graphics.meshes[1].vertex_data[:, 6:8], model.mesh.uv)


def test_delete(setup):
    model, graphics, renderer = setup
    renderer.delete()
    assert graphics.meshes[0].deleted is True
    assert all(shader.deleted for shader in graphics.shaders)
