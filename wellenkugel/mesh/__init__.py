"""Mesh module - parametric sampling, grid connectivity and derived vertex attributes."""

from .grid import flatten_grid, grid_index, grid_lines, grid_triangles
from .mesh import Mesh, Mesh2, Mesh3, VertexAttribType, VertexAttribute, VertexLayout
from .surface import DegenerateResolutionError, evaluate, sample_grid, validate_resolution
from .tangents import TangentMode, compute_tangents
from .texcoords import TexCoordTransform, grid_texcoords, rotate_about
from .wellenkugel_mesh import WellenkugelMesh

__all__ = [
    "DegenerateResolutionError",
    "Mesh",
    "Mesh2",
    "Mesh3",
    "TangentMode",
    "TexCoordTransform",
    "VertexAttribType",
    "VertexAttribute",
    "VertexLayout",
    "WellenkugelMesh",
    "compute_tangents",
    "evaluate",
    "flatten_grid",
    "grid_index",
    "grid_lines",
    "grid_texcoords",
    "grid_triangles",
    "rotate_about",
    "sample_grid",
    "validate_resolution",
]
