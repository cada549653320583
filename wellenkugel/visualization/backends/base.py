"""Backend interfaces decoupling rendering/window code from specific libraries."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Callable, Tuple


class ShaderBuildError(RuntimeError):
    """Raised when GLSL compilation or program linking fails.

    ``stage`` is ``"vertex"``, ``"fragment"`` or ``"link"``; ``diagnostics``
    holds the backend's info log.
    """

    def __init__(self, stage: str, diagnostics: str):
        super().__init__(f"{stage} shader build failed: {diagnostics}")
        self.stage = stage
        self.diagnostics = diagnostics


class Action(IntEnum):
    RELEASE = 0
    PRESS = 1
    REPEAT = 2


class MouseButton(IntEnum):
    LEFT = 0
    RIGHT = 1
    MIDDLE = 2


class Key(IntEnum):
    """Key codes, numerically equal to GLFW's."""
    UNKNOWN = -1
    SPACE = 32
    MINUS = 45
    EQUAL = 61
    E = 69
    Q = 81
    R = 82
    W = 87
    LEFT_BRACKET = 91
    RIGHT_BRACKET = 93
    ESCAPE = 256
    RIGHT = 262
    LEFT = 263
    DOWN = 264
    UP = 265


class ShaderHandle(ABC):
    """Backend-specific shader program."""

    @abstractmethod
    def use(self):
        ...

    @abstractmethod
    def stop(self):
        ...

    @abstractmethod
    def delete(self):
        ...

    @abstractmethod
    def set_uniform_matrix4(self, name: str, matrix):
        ...

    @abstractmethod
    def set_uniform_vec3(self, name: str, vector):
        ...

    @abstractmethod
    def set_uniform_vec4(self, name: str, vector):
        ...

    @abstractmethod
    def set_uniform_float(self, name: str, value: float):
        ...

    @abstractmethod
    def set_uniform_int(self, name: str, value: int):
        ...


class MeshHandle(ABC):
    """Backend mesh buffers ready for drawing."""

    @abstractmethod
    def draw(self):
        ...

    @abstractmethod
    def update_vertices(self):
        """Re-upload the vertex attributes of the same mesh."""
        ...

    @abstractmethod
    def delete(self):
        ...


class PolylineHandle(ABC):
    """Backend polyline buffers."""

    @abstractmethod
    def draw(self):
        ...

    @abstractmethod
    def delete(self):
        ...


class TextureHandle(ABC):
    """Backend texture object."""

    @abstractmethod
    def bind(self, unit: int = 0):
        ...

    @abstractmethod
    def delete(self):
        ...


class GraphicsBackend(ABC):
    """Abstract graphics backend (OpenGL, Vulkan, etc.)."""

    @abstractmethod
    def ensure_ready(self):
        ...

    @abstractmethod
    def set_viewport(self, x: int, y: int, w: int, h: int):
        ...

    @abstractmethod
    def clear_color_depth(self, color):
        ...

    @abstractmethod
    def set_polygon_mode(self, mode: str):  # "fill" / "line"
        ...

    @abstractmethod
    def create_shader(self, vertex_source: str, fragment_source: str) -> ShaderHandle:
        ...

    @abstractmethod
    def create_mesh(self, mesh) -> MeshHandle:
        ...

    @abstractmethod
    def create_polyline(self, mesh) -> PolylineHandle:
        ...

    @abstractmethod
    def create_texture(self, image_data, size: Tuple[int, int], channels: int = 4, mipmap: bool = True, clamp: bool = False) -> TextureHandle:
        ...


class BackendWindow(ABC):
    """Window wrapper with OpenGL context."""

    @abstractmethod
    def close(self):
        ...

    @abstractmethod
    def should_close(self) -> bool:
        ...

    @abstractmethod
    def make_current(self):
        ...

    @abstractmethod
    def swap_buffers(self):
        ...

    @abstractmethod
    def framebuffer_size(self) -> Tuple[int, int]:
        ...

    @abstractmethod
    def set_should_close(self, flag: bool):
        ...

    @abstractmethod
    def set_framebuffer_size_callback(self, callback: Callable):
        ...

    @abstractmethod
    def set_cursor_pos_callback(self, callback: Callable):
        ...

    @abstractmethod
    def set_scroll_callback(self, callback: Callable):
        ...

    @abstractmethod
    def set_mouse_button_callback(self, callback: Callable):
        ...

    @abstractmethod
    def set_key_callback(self, callback: Callable):
        ...

    @abstractmethod
    def time_ms(self) -> float:
        ...


class WindowBackend(ABC):
    """Factory for windows plus event loop hooks."""

    @abstractmethod
    def create_window(self, width: int, height: int, title: str) -> BackendWindow:
        ...

    @abstractmethod
    def poll_events(self):
        ...

    @abstractmethod
    def terminate(self):
        ...
