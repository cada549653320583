"""Surface model driven by explicit commands.

``SurfaceModel`` owns the current ``WellenkugelMesh`` and exposes the three
commands the render loop issues: ``regenerate_surface``,
``rotate_texcoords`` and ``move_pivot``. ``describe()`` returns the flat,
consistently indexed buffers a renderer or test harness consumes.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np

from wellenkugel import log
from wellenkugel.mesh.surface import DEFAULT_STEPS, validate_resolution
from wellenkugel.mesh.tangents import TangentMode
from wellenkugel.mesh.texcoords import DEFAULT_PIVOT
from wellenkugel.mesh.wellenkugel_mesh import WellenkugelMesh


@dataclass(frozen=True, eq=False)
class SurfaceBuffers:
    u_steps: int
    v_steps: int
    vertices: np.ndarray
    normals: np.ndarray
    texcoords: np.ndarray
    tangents: np.ndarray
    indices: np.ndarray

    @property
    def vertex_count(self) -> int:
        return self.vertices.size // 3

    @property
    def triangle_count(self) -> int:
        return self.indices.size // 3

    def save(self, path: str | Path) -> Path:
        """Write all buffers to a numpy ``.npz`` archive."""
        path = Path(path)
        np.savez(
            path,
            resolution=np.array([self.u_steps, self.v_steps], dtype=np.int64),
            vertices=self.vertices,
            normals=self.normals,
            texcoords=self.texcoords,
            tangents=self.tangents,
            indices=self.indices,
        )
        if path.suffix != ".npz":
            path = path.with_name(path.name + ".npz")
        return path


class SurfaceModel:
    def __init__(
        self,
        u_steps: int = DEFAULT_STEPS,
        v_steps: int = DEFAULT_STEPS,
        tangent_mode=TangentMode.CONSTANT,
    ):
        self.tangent_mode = TangentMode(tangent_mode)
        self.angle = 0.0
        self.pivot = DEFAULT_PIVOT
        self.mesh: WellenkugelMesh | None = None
        self.revision = 0
        self.texcoord_revision = 0
        self.regenerate_surface(u_steps, v_steps)

    @property
    def resolution(self) -> tuple[int, int]:
        return self.mesh.u_steps, self.mesh.v_steps

    def regenerate_surface(self, u_steps: int, v_steps: int) -> WellenkugelMesh:
        """Rebuild every buffer at the new resolution.

        The texture angle and pivot carry over to the new mesh. On invalid
        input the previous mesh is kept and ``DegenerateResolutionError``
        propagates.
        """
        u_steps, v_steps = validate_resolution(u_steps, v_steps)
        self.mesh = WellenkugelMesh(
            u_steps,
            v_steps,
            tangent_mode=self.tangent_mode,
            angle=self.angle,
            pivot=self.pivot,
        )
        self.revision += 1
        log.debug(
            f"Surface regenerated at {u_steps}x{v_steps}: "
            f"{self.mesh.get_vertex_count()} vertices, {self.mesh.get_face_count()} triangles"
        )
        return self.mesh

    def rotate_texcoords(self, angle: float) -> np.ndarray:
        """Set the absolute texture rotation angle (radians) about the pivot."""
        self.angle = float(angle)
        coords = self.mesh.rotate_texcoords(self.angle)
        self.texcoord_revision += 1
        return coords

    def move_pivot(self, du: float, dv: float) -> tuple[float, float]:
        self.pivot = self.mesh.move_pivot(du, dv)
        self.texcoord_revision += 1
        return self.pivot

    def reset_texcoords(self) -> np.ndarray:
        """Back to angle 0 about the default pivot."""
        self.angle = 0.0
        self.pivot = DEFAULT_PIVOT
        coords = self.mesh.reset_texcoords()
        self.texcoord_revision += 1
        return coords

    def describe(self) -> SurfaceBuffers:
        mesh = self.mesh
        return SurfaceBuffers(
            u_steps=mesh.u_steps,
            v_steps=mesh.v_steps,
            vertices=mesh.vertex_buffer.copy(),
            normals=mesh.normal_buffer.copy(),
            texcoords=mesh.texcoord_buffer.copy(),
            tangents=mesh.tangent_buffer.copy(),
            indices=mesh.index_buffer.copy(),
        )
