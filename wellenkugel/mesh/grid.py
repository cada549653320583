"""Connectivity of a regular (u, v) grid: vertex flattening, triangles and lines."""

from __future__ import annotations

import numpy as np

from .surface import validate_resolution


def grid_index(i: int, j: int, v_steps: int) -> int:
    """Flat vertex index of grid position ``(i, j)``."""
    return i * (v_steps + 1) + j


def flatten_grid(grid: np.ndarray) -> np.ndarray:
    """Row-major ``(N, 3)`` vertex array of a ``(rows, cols, 3)`` grid."""
    grid = np.asarray(grid)
    if grid.ndim != 3 or grid.shape[2] != 3:
        raise ValueError("Grid must be a (rows, cols, 3) array.")
    rows, cols, _ = grid.shape
    return np.array(grid, dtype=np.float64).reshape(rows * cols, 3)


def grid_triangles(u_steps: int, v_steps: int) -> np.ndarray:
    """Two triangles per cell as an ``(2 * u_steps * v_steps, 3)`` uint32 array.

    For each cell the emitted triangles are
    ``(top_left, bottom_left, top_right)`` and
    ``(top_right, bottom_left, bottom_right)``.
    The winding is fixed; swapping it flips every vertex normal.
    """
    u_steps, v_steps = validate_resolution(u_steps, v_steps)
    i, j = np.meshgrid(np.arange(u_steps), np.arange(v_steps), indexing="ij")
    top_left = (i * (v_steps + 1) + j).ravel()
    top_right = top_left + 1
    bottom_left = ((i + 1) * (v_steps + 1) + j).ravel()
    bottom_right = bottom_left + 1

    triangles = np.empty((2 * top_left.size, 3), dtype=np.uint32)
    triangles[0::2] = np.stack([top_left, bottom_left, top_right], axis=1)
    triangles[1::2] = np.stack([top_right, bottom_left, bottom_right], axis=1)
    return triangles


def grid_lines(u_steps: int, v_steps: int) -> np.ndarray:
    """Segments along the u-lines and then the v-lines of the grid, ``(M, 2)`` uint32."""
    u_steps, v_steps = validate_resolution(u_steps, v_steps)
    cols = v_steps + 1
    index = np.arange((u_steps + 1) * cols, dtype=np.uint32).reshape(u_steps + 1, cols)

    # constant u, running along v
    u_lines = np.stack([index[:, :-1].ravel(), index[:, 1:].ravel()], axis=1)
    # constant v, running along u
    v_lines = np.stack([index[:-1, :].T.ravel(), index[1:, :].T.ravel()], axis=1)
    return np.vstack([u_lines, v_lines]).astype(np.uint32)
