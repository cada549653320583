"""Shader wrapper delegating compilation and uniform uploads to a graphics backend."""

from __future__ import annotations

from pathlib import Path
import numpy as np

from wellenkugel import log

from .backends import get_default_graphics_backend
from .backends.base import GraphicsBackend, ShaderBuildError, ShaderHandle

SHADER_DIR = Path(__file__).resolve().parent / "shaders"


class ShaderProgram:
    """A GLSL shader program (vertex + fragment).

    Matrices are uploaded row-major (numpy layout); the backend transposes
    them for GLSL.
    """

    def __init__(self, vertex_source: str, fragment_source: str, name: str = "shader"):
        self.vertex_source = vertex_source
        self.fragment_source = fragment_source
        self.name = name
        self._compiled = False
        self._handle: ShaderHandle | None = None
        self._backend: GraphicsBackend | None = None

    @property
    def compiled(self) -> bool:
        return self._compiled

    def ensure_ready(self, graphics: GraphicsBackend | None = None):
        """Compile and link on ``graphics``; ``ShaderBuildError`` propagates."""
        if self._compiled:
            return
        backend = graphics or self._backend or get_default_graphics_backend()
        if backend is None:
            raise RuntimeError("Graphics backend is not available for shader compilation.")
        self._backend = backend
        try:
            self._handle = backend.create_shader(self.vertex_source, self.fragment_source)
        except ShaderBuildError as e:
            log.error(f"Shader '{self.name}' failed at {e.stage} stage:\n{e.diagnostics}")
            raise
        self._compiled = True
        log.debug(f"Shader '{self.name}' built")

    def _require_handle(self) -> ShaderHandle:
        if self._handle is None:
            raise RuntimeError("ShaderProgram is not compiled. Call ensure_ready() first.")
        return self._handle

    def use(self):
        self._require_handle().use()

    def stop(self):
        if self._handle:
            self._handle.stop()

    def delete(self):
        if self._handle:
            self._handle.delete()
            self._handle = None
        self._compiled = False

    def set_uniform_matrix4(self, name: str, matrix: np.ndarray):
        """Upload a 4x4 matrix (float32) to uniform ``name``."""
        self._require_handle().set_uniform_matrix4(name, matrix)

    def set_uniform_vec3(self, name: str, vector: np.ndarray):
        self._require_handle().set_uniform_vec3(name, vector)

    def set_uniform_vec4(self, name: str, vector: np.ndarray):
        self._require_handle().set_uniform_vec4(name, vector)

    def set_uniform_float(self, name: str, value: float):
        self._require_handle().set_uniform_float(name, value)

    def set_uniform_int(self, name: str, value: int):
        self._require_handle().set_uniform_int(name, value)

    @classmethod
    def from_files(cls, vertex_path: str | Path, fragment_path: str | Path, name: str | None = None) -> "ShaderProgram":
        vertex_source = Path(vertex_path).read_text(encoding="utf-8")
        fragment_source = Path(fragment_path).read_text(encoding="utf-8")
        return cls(vertex_source=vertex_source, fragment_source=fragment_source, name=name or Path(vertex_path).stem)

    @classmethod
    def surface_shader(cls) -> "ShaderProgram":
        """Blinn-Phong shading with a tangent-space normal map."""
        return cls.from_files(SHADER_DIR / "surface.vert", SHADER_DIR / "surface.frag", name="surface")

    @classmethod
    def wireframe_shader(cls) -> "ShaderProgram":
        return cls.from_files(SHADER_DIR / "wireframe.vert", SHADER_DIR / "wireframe.frag", name="wireframe")


__all__ = ["ShaderProgram", "ShaderBuildError", "SHADER_DIR"]
