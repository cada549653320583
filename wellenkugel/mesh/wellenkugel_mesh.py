"""The Wellenkugel surface as a textured, normal-mapped triangle mesh."""

import numpy as np

from .grid import flatten_grid, grid_lines, grid_triangles
from .mesh import Mesh2, Mesh3
from .surface import DEFAULT_STEPS, sample_grid, validate_resolution
from .tangents import TangentMode, compute_tangents
from .texcoords import DEFAULT_PIVOT, TexCoordTransform, grid_texcoords


class WellenkugelMesh(Mesh3):
    def __init__(
        self,
        u_steps: int = DEFAULT_STEPS,
        v_steps: int = DEFAULT_STEPS,
        tangent_mode=TangentMode.CONSTANT,
        angle: float = 0.0,
        pivot=DEFAULT_PIVOT,
    ):
        u_steps, v_steps = validate_resolution(u_steps, v_steps)
        self.u_steps = u_steps
        self.v_steps = v_steps
        self.tangent_mode = TangentMode(tangent_mode)

        self.grid = sample_grid(u_steps, v_steps)
        vertices = flatten_grid(self.grid)
        triangles = grid_triangles(u_steps, v_steps)
        self.texture_transform = TexCoordTransform(grid_texcoords(u_steps, v_steps), angle, pivot)
        tangents = compute_tangents(u_steps, v_steps, self.tangent_mode)

        super().__init__(vertices=vertices, triangles=triangles, uvs=self.texture_transform.coords, tangents=tangents)
        self.compute_vertex_normals()

    def rotate_texcoords(self, angle: float):
        self.uv = self.texture_transform.rotate(angle)
        self.invalidate_buffer()
        return self.uv

    def move_pivot(self, du: float, dv: float):
        pivot = self.texture_transform.move_pivot(du, dv)
        self.uv = self.texture_transform.coords
        self.invalidate_buffer()
        return pivot

    def reset_texcoords(self):
        self.uv = self.texture_transform.reset()
        self.invalidate_buffer()
        return self.uv

    def wireframe(self) -> Mesh2:
        """u-lines and v-lines of the sampling grid over the same vertices."""
        return Mesh2(self.vertices, grid_lines(self.u_steps, self.v_steps))

    @property
    def normal_buffer(self) -> np.ndarray:
        return self.vertex_normals.ravel()

    @property
    def texcoord_buffer(self) -> np.ndarray:
        return self.uv.ravel()

    @property
    def tangent_buffer(self) -> np.ndarray:
        return self.tangents.ravel()
