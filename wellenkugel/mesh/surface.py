"""Wellenkugel parametric surface and its u,v grid sampler.

The surface is parameterized as::

    x = u * cos(cos(u)) * cos(v)
    y = u * cos(cos(u)) * sin(v)
    z = u * sin(cos(u))

with ``u`` in [0, 14.5] and ``v`` in [0, 1.5*pi].
"""

from __future__ import annotations

import math

import numpy as np

U_MIN = 0.0
U_MAX = 14.5
V_MIN = 0.0
V_MAX = 1.5 * math.pi

DEFAULT_STEPS = 50


class DegenerateResolutionError(ValueError):
    """Raised when a grid resolution has a non-positive step count."""

    def __init__(self, u_steps, v_steps):
        super().__init__(
            f"Surface resolution must be positive integers, got u_steps={u_steps!r}, v_steps={v_steps!r}"
        )
        self.u_steps = u_steps
        self.v_steps = v_steps


def validate_resolution(u_steps, v_steps) -> tuple[int, int]:
    """Return ``(u_steps, v_steps)`` as ints or raise ``DegenerateResolutionError``."""
    for steps in (u_steps, v_steps):
        if isinstance(steps, bool) or not isinstance(steps, (int, np.integer)) or steps <= 0:
            raise DegenerateResolutionError(u_steps, v_steps)
    return int(u_steps), int(v_steps)


def evaluate(u: float, v: float) -> tuple[float, float, float]:
    """Point of the surface at parameters ``(u, v)``."""
    radius = u * math.cos(math.cos(u))
    return (
        radius * math.cos(v),
        radius * math.sin(v),
        u * math.sin(math.cos(u)),
    )


def partial_u(u: float, v: float) -> tuple[float, float, float]:
    """Analytic derivative ``dP/du`` at ``(u, v)``."""
    cos_u = math.cos(u)
    sin_u = math.sin(u)
    # r(u) = u cos(cos u), h(u) = u sin(cos u)
    dr = math.cos(cos_u) + u * math.sin(cos_u) * sin_u
    dh = math.sin(cos_u) - u * math.cos(cos_u) * sin_u
    return (dr * math.cos(v), dr * math.sin(v), dh)


def parameter_values(u_steps: int, v_steps: int) -> tuple[list[float], list[float]]:
    """Sampled ``u`` and ``v`` values, ``u_steps + 1`` and ``v_steps + 1`` of them.

    Samples are taken by index (``u_min + i * du``) rather than by
    accumulating ``du``, so the count never depends on rounding.
    """
    u_steps, v_steps = validate_resolution(u_steps, v_steps)
    du = (U_MAX - U_MIN) / u_steps
    dv = (V_MAX - V_MIN) / v_steps
    us = [U_MIN + i * du for i in range(u_steps + 1)]
    vs = [V_MIN + j * dv for j in range(v_steps + 1)]
    return us, vs


def sample_grid(u_steps: int = DEFAULT_STEPS, v_steps: int = DEFAULT_STEPS) -> np.ndarray:
    """Sample the surface into a read-only ``(u_steps+1, v_steps+1, 3)`` array.

    Row ``i`` holds the points of constant ``u``, column ``j`` those of
    constant ``v``.
    """
    us, vs = parameter_values(u_steps, v_steps)
    grid = np.empty((len(us), len(vs), 3), dtype=np.float64)
    for i, u in enumerate(us):
        for j, v in enumerate(vs):
            grid[i, j] = evaluate(u, v)
    grid.setflags(write=False)
    return grid


def sample_partial_u(u_steps: int, v_steps: int) -> np.ndarray:
    """``dP/du`` on the same grid as ``sample_grid``."""
    us, vs = parameter_values(u_steps, v_steps)
    out = np.empty((len(us), len(vs), 3), dtype=np.float64)
    for i, u in enumerate(us):
        for j, v in enumerate(vs):
            out[i, j] = partial_u(u, v)
    return out
