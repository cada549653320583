"""Uploads the surface model to a graphics backend and draws it."""

from __future__ import annotations

import math

import numpy as np

from wellenkugel import log
from wellenkugel.config import ViewerSettings
from wellenkugel.model import SurfaceModel

from .backends.base import GraphicsBackend, MeshHandle, PolylineHandle
from .camera import TrackballCamera, normal_matrix
from .shader import ShaderProgram
from .texture import FLAT_NORMAL_COLOR, WHITE, Texture

BACKGROUND = (1.0, 1.0, 1.0, 1.0)
WIREFRAME_COLOR = (0.1, 0.1, 0.1, 1.0)

DIFFUSE_UNIT = 0
SPECULAR_UNIT = 1
NORMAL_UNIT = 2


def light_position(time_ms: float, radius: float = 10.0, height: float = 5.0, speed: float = 0.001) -> np.ndarray:
    """Light circling the y axis: ``(r cos(wt), h, r sin(wt))``."""
    angle = time_ms * speed
    return np.array([radius * math.cos(angle), height, radius * math.sin(angle)], dtype=np.float32)


def _load_texture(path, fallback_rgba) -> Texture:
    if path:
        return Texture.from_file(path)
    return Texture.from_color(fallback_rgba)


class SurfaceRenderer:
    """GPU side of a ``SurfaceModel``.

    ``initialize`` builds shaders, textures and buffers in one go and any
    failure there is fatal. Afterwards ``sync`` keeps the uploaded buffers in
    step with the model: a new mesh revision is uploaded from scratch, a
    texture transform (a new ``texcoord_revision``) only re-uploads the
    vertex data of the current mesh handle.
    """

    def __init__(self, model: SurfaceModel, settings: ViewerSettings | None = None):
        self.model = model
        self.settings = settings or ViewerSettings()
        self.graphics: GraphicsBackend | None = None
        self.shader = ShaderProgram.surface_shader()
        self.wire_shader = ShaderProgram.wireframe_shader()
        self.textures: dict[int, Texture] = {}
        self.mesh_handle: MeshHandle | None = None
        self.wire_handle: PolylineHandle | None = None
        self.show_wireframe = False
        self._uploaded_revision = None
        self._uploaded_texcoords = None

    def initialize(self, graphics: GraphicsBackend):
        self.graphics = graphics
        graphics.ensure_ready()
        self.shader.ensure_ready(graphics)
        self.wire_shader.ensure_ready(graphics)

        s = self.settings
        self.textures = {
            DIFFUSE_UNIT: _load_texture(s.diffuse_texture, WHITE),
            SPECULAR_UNIT: _load_texture(s.specular_texture, WHITE),
            NORMAL_UNIT: _load_texture(s.normal_texture, FLAT_NORMAL_COLOR),
        }
        self._upload_mesh()
        log.info("Renderer initialized")

    def sync(self):
        """Bring GPU buffers up to date with the model."""
        if self.graphics is None:
            raise RuntimeError("SurfaceRenderer is not initialized.")
        if self._uploaded_revision != self.model.revision:
            self._upload_mesh()
        elif self._uploaded_texcoords != self.model.texcoord_revision:
            self.mesh_handle.update_vertices()
            self._uploaded_texcoords = self.model.texcoord_revision

    def _upload_mesh(self):
        self._release_mesh()
        mesh = self.model.mesh
        self.mesh_handle = self.graphics.create_mesh(mesh)
        self.wire_handle = self.graphics.create_polyline(mesh.wireframe())
        self._uploaded_revision = self.model.revision
        self._uploaded_texcoords = self.model.texcoord_revision
        log.debug(f"Uploaded surface revision {self.model.revision}")

    def _release_mesh(self):
        if self.mesh_handle is not None:
            self.mesh_handle.delete()
            self.mesh_handle = None
        if self.wire_handle is not None:
            self.wire_handle.delete()
            self.wire_handle = None

    def draw(self, camera: TrackballCamera, viewport_size: tuple[int, int], time_ms: float = 0.0):
        self.sync()
        graphics = self.graphics
        width, height = viewport_size
        graphics.set_viewport(0, 0, width, height)
        camera.set_aspect(width / height if height else 1.0)
        graphics.clear_color_depth(BACKGROUND)

        model_view = camera.get_view_matrix()
        matrix = camera.get_projection_matrix() @ model_view
        s = self.settings

        self.shader.use()
        self.shader.set_uniform_matrix4("u_matrix", matrix)
        self.shader.set_uniform_matrix4("u_normal_matrix", normal_matrix(model_view))
        self.shader.set_uniform_vec3("u_light_position", light_position(time_ms, s.light_radius, s.light_height, s.light_speed))
        self.shader.set_uniform_vec3("u_view_position", s.view_position)
        self.shader.set_uniform_vec3("u_ambient_color", s.ambient)
        self.shader.set_uniform_vec3("u_diffuse_color", s.diffuse)
        self.shader.set_uniform_vec3("u_specular_color", s.specular)
        self.shader.set_uniform_float("u_shininess", s.shininess)
        self.shader.set_uniform_int("u_diffuse_texture", DIFFUSE_UNIT)
        self.shader.set_uniform_int("u_specular_texture", SPECULAR_UNIT)
        self.shader.set_uniform_int("u_normal_texture", NORMAL_UNIT)
        for unit, texture in self.textures.items():
            texture.bind(graphics, unit)

        graphics.set_polygon_mode("fill")
        self.mesh_handle.draw()
        self.shader.stop()

        if self.show_wireframe:
            self.wire_shader.use()
            self.wire_shader.set_uniform_matrix4("u_matrix", matrix)
            self.wire_shader.set_uniform_vec4("u_color", WIREFRAME_COLOR)
            self.wire_handle.draw()
            self.wire_shader.stop()

    def delete(self):
        self._release_mesh()
        for texture in self.textures.values():
            texture.delete()
        self.textures = {}
        self.shader.delete()
        self.wire_shader.delete()
