# wellenkugel/visualization/backends/nop_graphics.py
from __future__ import annotations

from typing import Tuple

import numpy as np

from .base import (
    GraphicsBackend,
    MeshHandle,
    PolylineHandle,
    ShaderHandle,
    TextureHandle,
)


# --- NOP wrappers for GPU resources ---------------------------------------


class NOPShaderHandle(ShaderHandle):
    """Shader that "exists" and remembers the uniforms it was given."""

    def __init__(self, vertex_source: str, fragment_source: str):
        self.vertex_source = vertex_source
        self.fragment_source = fragment_source
        self.uniforms: dict = {}
        self.in_use = False
        self.deleted = False

    def use(self):
        self.in_use = True

    def stop(self):
        self.in_use = False

    def delete(self):
        self.deleted = True

    def set_uniform_matrix4(self, name: str, matrix):
        self.uniforms[name] = np.array(matrix, dtype=np.float32)

    def set_uniform_vec3(self, name: str, vector):
        self.uniforms[name] = np.array(vector, dtype=np.float32)

    def set_uniform_vec4(self, name: str, vector):
        self.uniforms[name] = np.array(vector, dtype=np.float32)

    def set_uniform_float(self, name: str, value: float):
        self.uniforms[name] = float(value)

    def set_uniform_int(self, name: str, value: int):
        self.uniforms[name] = int(value)


class NOPMeshHandle(MeshHandle):
    """Mesh handle that keeps a copy of the uploaded data and draws nothing."""

    def __init__(self, mesh):
        self._mesh = mesh
        self.uploads = 0
        self.draws = 0
        self.deleted = False
        self.vertex_data = None
        self.index_data = np.array(mesh.indices, dtype=np.uint32).copy()
        self._upload()

    def _upload(self):
        self.vertex_data = np.array(self._mesh.interleaved_buffer(), dtype=np.float32).copy()
        self.uploads += 1

    def update_vertices(self):
        self._upload()

    def draw(self):
        self.draws += 1

    def delete(self):
        self.deleted = True


class NOPPolylineHandle(PolylineHandle):
    """Polyline that does not draw either."""

    def __init__(self, mesh):
        self.vertex_data = np.array(mesh.interleaved_buffer(), dtype=np.float32).copy()
        self.index_data = np.array(mesh.indices, dtype=np.uint32).copy()
        self.draws = 0
        self.deleted = False

    def draw(self):
        self.draws += 1

    def delete(self):
        self.deleted = True


class NOPTextureHandle(TextureHandle):
    """Texture placeholder."""

    def __init__(self, size: Tuple[int, int] = (0, 0)):
        self.size = size
        self.bound_unit = None

    def bind(self, unit: int = 0):
        self.bound_unit = unit

    def delete(self):
        pass


# --- Graphics backend without real rendering ------------------------------


class NOPGraphicsBackend(GraphicsBackend):
    """
    GraphicsBackend that satisfies the interface, but:
    - draws nothing;
    - never touches OpenGL (or any other API);
    - keeps the handles it created, for unit tests and headless runs.
    """

    def __init__(self):
        self._viewport: Tuple[int, int, int, int] = (0, 0, 0, 0)
        self._state = {}
        self.shaders: list[NOPShaderHandle] = []
        self.meshes: list[NOPMeshHandle] = []
        self.polylines: list[NOPPolylineHandle] = []
        self.textures: list[NOPTextureHandle] = []
        self.clears = 0

    def ensure_ready(self):
        self._state["ready"] = True

    def set_viewport(self, x: int, y: int, w: int, h: int):
        self._viewport = (x, y, w, h)

    def clear_color_depth(self, color):
        self._state["clear_color"] = tuple(color)
        self.clears += 1

    def set_polygon_mode(self, mode: str):
        self._state["polygon_mode"] = mode

    def create_shader(self, vertex_source: str, fragment_source: str) -> ShaderHandle:
        handle = NOPShaderHandle(vertex_source, fragment_source)
        self.shaders.append(handle)
        return handle

    def create_mesh(self, mesh) -> MeshHandle:
        handle = NOPMeshHandle(mesh)
        self.meshes.append(handle)
        return handle

    def create_polyline(self, mesh) -> PolylineHandle:
        handle = NOPPolylineHandle(mesh)
        self.polylines.append(handle)
        return handle

    def create_texture(self, image_data, size: Tuple[int, int], channels: int = 4, mipmap: bool = True, clamp: bool = False) -> TextureHandle:
        handle = NOPTextureHandle(size)
        self.textures.append(handle)
        return handle

    @property
    def viewport(self) -> Tuple[int, int, int, int]:
        return self._viewport

    @property
    def state(self) -> dict:
        return dict(self._state)
