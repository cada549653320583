"""Projection helpers and a mouse-driven trackball camera."""

from __future__ import annotations

import math

import numpy as np

from .backends.base import Action, MouseButton


def perspective(fov_y: float, aspect: float, near: float, far: float) -> np.ndarray:
    f = 1.0 / math.tan(fov_y * 0.5)
    proj = np.zeros((4, 4), dtype=np.float32)
    proj[0, 0] = f / max(1e-6, aspect)
    proj[1, 1] = f
    proj[2, 2] = (far + near) / (near - far)
    proj[2, 3] = (2 * far * near) / (near - far)
    proj[3, 2] = -1.0
    return proj


def translation(x: float, y: float, z: float) -> np.ndarray:
    mat = np.identity(4, dtype=np.float32)
    mat[:3, 3] = (x, y, z)
    return mat


def axis_rotation(axis, angle: float) -> np.ndarray:
    """4x4 rotation by ``angle`` radians about ``axis`` (Rodrigues)."""
    axis = np.asarray(axis, dtype=np.float64)
    axis = axis / np.linalg.norm(axis)
    x, y, z = axis
    c = math.cos(angle)
    s = math.sin(angle)
    t = 1.0 - c
    mat = np.identity(4, dtype=np.float32)
    mat[:3, :3] = [
        [t * x * x + c,     t * x * y - s * z, t * x * z + s * y],
        [t * x * y + s * z, t * y * y + c,     t * y * z - s * x],
        [t * x * z - s * y, t * y * z + s * x, t * z * z + c],
    ]
    return mat


def normal_matrix(model_view: np.ndarray) -> np.ndarray:
    """``(MV^-1)^T``, for transforming normals and tangents."""
    return np.linalg.inv(model_view).T.astype(np.float32)


class TrackballCamera:
    """Rotates the scene with left-drag, zooms with the scroll wheel.

    The model-view matrix is ``T(0, 0, -distance) * R_tilt * R_drag``: the
    dragged rotation is applied first, then a fixed tilt presenting the
    surface at an angle, then the push away from the eye.
    """

    TILT_AXIS = (math.sqrt(0.5), math.sqrt(0.5), 0.0)
    TILT_ANGLE = 0.7

    def __init__(
        self,
        distance: float = 80.0,
        fov_y: float = math.pi / 8,
        near: float = 1.0,
        far: float = 100.0,
        min_distance: float = 5.0,
        max_distance: float = 95.0,
    ):
        self.distance = distance
        self._initial_distance = distance
        self.fov_y = fov_y
        self.near = near
        self.far = far
        self.aspect = 1.0
        self._min_distance = min_distance
        self._max_distance = max_distance
        self._rotate_speed = 0.01  # radians per pixel
        self._zoom_speed = 2.0
        self.rotation = np.identity(4, dtype=np.float32)
        self._dragging = False
        self._last: tuple[float, float] | None = None

    def reset(self):
        self.rotation = np.identity(4, dtype=np.float32)
        self.distance = self._initial_distance

    def set_aspect(self, aspect: float):
        self.aspect = aspect

    def rotate(self, dx: float, dy: float):
        """Turn by a mouse delta in pixels: x around the view's up axis, y around its right axis."""
        yaw = axis_rotation((0.0, 1.0, 0.0), dx * self._rotate_speed)
        pitch = axis_rotation((1.0, 0.0, 0.0), dy * self._rotate_speed)
        self.rotation = (yaw @ pitch @ self.rotation).astype(np.float32)

    def zoom(self, delta: float):
        self.distance = float(np.clip(self.distance + delta, self._min_distance, self._max_distance))

    def get_view_matrix(self) -> np.ndarray:
        tilt = axis_rotation(self.TILT_AXIS, self.TILT_ANGLE)
        return translation(0.0, 0.0, -self.distance) @ tilt @ self.rotation

    def get_projection_matrix(self) -> np.ndarray:
        return perspective(self.fov_y, self.aspect, self.near, self.far)

    def on_mouse_button(self, button: MouseButton, action: Action, mods: int):
        if button == MouseButton.LEFT:
            self._dragging = action == Action.PRESS
        if action == Action.RELEASE:
            self._last = None

    def on_mouse_move(self, x: float, y: float):
        if not self._dragging:
            self._last = None
            return
        if self._last is None:
            self._last = (x, y)
            return
        dx = x - self._last[0]
        dy = y - self._last[1]
        self._last = (x, y)
        self.rotate(dx, dy)

    def on_scroll(self, xoffset: float, yoffset: float):
        self.zoom(-yoffset * self._zoom_speed)
