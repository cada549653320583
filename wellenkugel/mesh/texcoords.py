"""Texture coordinates of the surface grid and their runtime rotation."""

from __future__ import annotations

import math

import numpy as np

from .surface import validate_resolution

DEFAULT_PIVOT = (0.5, 0.5)


def grid_texcoords(u_steps: int, v_steps: int) -> np.ndarray:
    """``(i / u_steps, j / v_steps)`` for every grid position, row-major ``(N, 2)``."""
    u_steps, v_steps = validate_resolution(u_steps, v_steps)
    s = np.arange(u_steps + 1, dtype=np.float64) / u_steps
    t = np.arange(v_steps + 1, dtype=np.float64) / v_steps
    ss, tt = np.meshgrid(s, t, indexing="ij")
    return np.stack([ss.ravel(), tt.ravel()], axis=1)


def rotate_about(coords: np.ndarray, angle: float, pivot) -> np.ndarray:
    """Rotate 2D points by ``angle`` radians around ``pivot``."""
    coords = np.asarray(coords, dtype=np.float64)
    cu, cv = float(pivot[0]), float(pivot[1])
    c = math.cos(angle)
    s = math.sin(angle)
    du = coords[:, 0] - cu
    dv = coords[:, 1] - cv
    return np.stack([du * c - dv * s + cu, du * s + dv * c + cv], axis=1)


def clamp_pivot(u: float, v: float) -> tuple[float, float]:
    return (min(max(u, 0.0), 1.0), min(max(v, 0.0), 1.0))


class TexCoordTransform:
    """Rotation of a texture coordinate buffer about a movable pivot.

    The angle is absolute: ``rotate(angle)`` replaces the previous angle and
    the buffer is recomputed from the unrotated grid coordinates. Callers
    that want incremental rotation keep the running angle themselves.
    """

    def __init__(self, base: np.ndarray, angle: float = 0.0, pivot=DEFAULT_PIVOT):
        self._base = np.array(base, dtype=np.float64)
        self._base.setflags(write=False)
        self.angle = float(angle)
        self.pivot = clamp_pivot(float(pivot[0]), float(pivot[1]))
        self.coords = np.empty_like(self._base)
        self._apply()

    @property
    def base(self) -> np.ndarray:
        return self._base

    def rotate(self, angle: float) -> np.ndarray:
        self.angle = float(angle)
        self._apply()
        return self.coords

    def move_pivot(self, du: float, dv: float) -> tuple[float, float]:
        """Shift the pivot and clamp it into [0, 1]²; the current angle is re-applied."""
        self.pivot = clamp_pivot(self.pivot[0] + du, self.pivot[1] + dv)
        self._apply()
        return self.pivot

    def reset(self) -> np.ndarray:
        self.angle = 0.0
        self.pivot = DEFAULT_PIVOT
        self._apply()
        return self.coords

    def _apply(self):
        # in place, so views held by a mesh see the update
        self.coords[...] = rotate_about(self._base, self.angle, self.pivot)
