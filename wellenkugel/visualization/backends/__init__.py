"""Backend registry and default implementations.

The OpenGL and GLFW backends import their bindings lazily so that the
NOP backends stay usable on machines without a display.
"""

from __future__ import annotations
from typing import Optional

from .base import (
    Action,
    BackendWindow,
    GraphicsBackend,
    Key,
    MeshHandle,
    MouseButton,
    PolylineHandle,
    ShaderBuildError,
    ShaderHandle,
    TextureHandle,
    WindowBackend,
)
from .nop_graphics import NOPGraphicsBackend
from .nop_window import NOPWindowBackend

_default_graphics_backend: Optional[GraphicsBackend] = None
_default_window_backend: Optional[WindowBackend] = None


def set_default_graphics_backend(backend: GraphicsBackend):
    global _default_graphics_backend
    _default_graphics_backend = backend


def get_default_graphics_backend() -> Optional[GraphicsBackend]:
    return _default_graphics_backend


def set_default_window_backend(backend: WindowBackend):
    global _default_window_backend
    _default_window_backend = backend


def get_default_window_backend() -> Optional[WindowBackend]:
    return _default_window_backend


def create_opengl_backends() -> tuple[GraphicsBackend, WindowBackend]:
    """GLFW window backend plus OpenGL graphics backend."""
    from .glfw import GLFWWindowBackend
    from .opengl import OpenGLGraphicsBackend

    return OpenGLGraphicsBackend(), GLFWWindowBackend()


__all__ = [
    "Action",
    "BackendWindow",
    "GraphicsBackend",
    "Key",
    "MeshHandle",
    "MouseButton",
    "PolylineHandle",
    "ShaderBuildError",
    "ShaderHandle",
    "TextureHandle",
    "WindowBackend",
    "set_default_graphics_backend",
    "get_default_graphics_backend",
    "set_default_window_backend",
    "get_default_window_backend",
    "create_opengl_backends",
    "NOPGraphicsBackend",
    "NOPWindowBackend",
]
