"""
Wellenkugel - interactive viewer for the Wellenkugel parametric surface.

Main modules:
- mesh - surface sampling, grid triangulation, normals, texture coordinates, tangents
- model - command interface over the generated surface buffers
- visualization - graphics backends, shaders and the viewer window
"""

from .mesh import DegenerateResolutionError, TangentMode, WellenkugelMesh
from .model import SurfaceBuffers, SurfaceModel

__version__ = '0.1.0'

__all__ = [
    'DegenerateResolutionError',
    'SurfaceBuffers',
    'SurfaceModel',
    'TangentMode',
    'WellenkugelMesh',
]
