"""Rendering plumbing: backends, shaders, textures and camera."""

from .backends import NOPGraphicsBackend, NOPWindowBackend, ShaderBuildError
from .camera import TrackballCamera
from .renderer import SurfaceRenderer
from .shader import ShaderProgram
from .texture import Texture

__all__ = [
    "NOPGraphicsBackend",
    "NOPWindowBackend",
    "ShaderBuildError",
    "ShaderProgram",
    "SurfaceRenderer",
    "Texture",
    "TrackballCamera",
]
