"""Per-vertex tangents for tangent-space normal mapping."""

from __future__ import annotations

from enum import Enum

import numpy as np

from .surface import sample_partial_u

CONSTANT_TANGENT = (1.0, 0.0, 0.0)


class TangentMode(str, Enum):
    # (1, 0, 0) everywhere, not a geometric tangent
    CONSTANT = "constant"
    # normalized dP/du of the surface
    PARAMETRIC = "parametric"


def constant_tangents(vertex_count: int) -> np.ndarray:
    return np.tile(np.asarray(CONSTANT_TANGENT, dtype=np.float64), (vertex_count, 1))


def parametric_tangents(u_steps: int, v_steps: int) -> np.ndarray:
    """Unit ``dP/du`` per grid vertex; zero derivatives fall back to ``CONSTANT_TANGENT``."""
    du = sample_partial_u(u_steps, v_steps).reshape(-1, 3)
    norms = np.linalg.norm(du, axis=1)
    tangents = constant_tangents(du.shape[0])
    ok = norms > 0
    tangents[ok] = du[ok] / norms[ok, None]
    return tangents


def compute_tangents(u_steps: int, v_steps: int, mode=TangentMode.CONSTANT) -> np.ndarray:
    mode = TangentMode(mode)
    if mode is TangentMode.PARAMETRIC:
        return parametric_tangents(u_steps, v_steps)
    return constant_tangents((u_steps + 1) * (v_steps + 1))
