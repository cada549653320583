"""OpenGL-based graphics backend."""

from __future__ import annotations

import ctypes
from typing import Dict, Tuple

import numpy as np
from OpenGL import GL as gl
from OpenGL.raw.GL.VERSION.GL_2_0 import glVertexAttribPointer as _gl_vertex_attrib_pointer

from wellenkugel.mesh.mesh import Mesh, VertexAttribType

from .base import (
    GraphicsBackend,
    MeshHandle,
    PolylineHandle,
    ShaderBuildError,
    ShaderHandle,
    TextureHandle,
)

_OPENGL_INITED = False

_STAGE_NAMES = {
    gl.GL_VERTEX_SHADER: "vertex",
    gl.GL_FRAGMENT_SHADER: "fragment",
}


def _info_log_text(log) -> str:
    return log.decode("utf-8", errors="replace") if isinstance(log, bytes) else str(log)


def _compile_shader(source: str, shader_type: int) -> int:
    shader = gl.glCreateShader(shader_type)
    gl.glShaderSource(shader, source)
    gl.glCompileShader(shader)
    status = gl.glGetShaderiv(shader, gl.GL_COMPILE_STATUS)
    if not status:
        log = _info_log_text(gl.glGetShaderInfoLog(shader))
        gl.glDeleteShader(shader)
        raise ShaderBuildError(_STAGE_NAMES.get(shader_type, "unknown"), log)
    return shader


def _link_program(shaders: list[int]) -> int:
    program = gl.glCreateProgram()

    for shader in shaders:
        gl.glAttachShader(program, shader)

    gl.glLinkProgram(program)
    status = gl.glGetProgramiv(program, gl.GL_LINK_STATUS)
    if not status:
        log = _info_log_text(gl.glGetProgramInfoLog(program))
        gl.glDeleteProgram(program)
        raise ShaderBuildError("link", log)

    for shader in shaders:
        gl.glDetachShader(program, shader)
        gl.glDeleteShader(shader)

    return program


class OpenGLShaderHandle(ShaderHandle):
    def __init__(self, vertex_source: str, fragment_source: str):
        self.vertex_source = vertex_source
        self.fragment_source = fragment_source
        self.program: int | None = None
        self._uniform_cache: Dict[str, int] = {}
        self._ensure_compiled()

    def _ensure_compiled(self):
        if self.program is not None:
            return
        vert = _compile_shader(self.vertex_source, gl.GL_VERTEX_SHADER)
        try:
            frag = _compile_shader(self.fragment_source, gl.GL_FRAGMENT_SHADER)
        except ShaderBuildError:
            gl.glDeleteShader(vert)
            raise
        self.program = _link_program([vert, frag])

    def use(self):
        self._ensure_compiled()
        gl.glUseProgram(self.program)

    def stop(self):
        gl.glUseProgram(0)

    def delete(self):
        if self.program is not None:
            gl.glDeleteProgram(self.program)
            self.program = None
        self._uniform_cache.clear()

    def _uniform_location(self, name: str) -> int:
        if name not in self._uniform_cache:
            location = gl.glGetUniformLocation(self.program, name.encode("utf-8"))
            self._uniform_cache[name] = location
        return self._uniform_cache[name]

    def set_uniform_matrix4(self, name: str, matrix):
        self._ensure_compiled()
        mat = np.ascontiguousarray(matrix, dtype=np.float32)
        gl.glUniformMatrix4fv(self._uniform_location(name), 1, True, mat.ctypes.data_as(ctypes.POINTER(ctypes.c_float)))

    def set_uniform_vec3(self, name: str, vector):
        self._ensure_compiled()
        vec = np.asarray(vector, dtype=np.float32)
        gl.glUniform3f(self._uniform_location(name), float(vec[0]), float(vec[1]), float(vec[2]))

    def set_uniform_vec4(self, name: str, vector):
        self._ensure_compiled()
        vec = np.asarray(vector, dtype=np.float32)
        gl.glUniform4f(self._uniform_location(name), float(vec[0]), float(vec[1]), float(vec[2]), float(vec[3]))

    def set_uniform_float(self, name: str, value: float):
        self._ensure_compiled()
        gl.glUniform1f(self._uniform_location(name), float(value))

    def set_uniform_int(self, name: str, value: int):
        self._ensure_compiled()
        gl.glUniform1i(self._uniform_location(name), int(value))


GL_TYPE_MAP = {
    VertexAttribType.FLOAT32: gl.GL_FLOAT,
    VertexAttribType.INT32:   gl.GL_INT,
    VertexAttribType.UINT32:  gl.GL_UNSIGNED_INT,
}

class OpenGLMeshHandle(MeshHandle):
    def __init__(self, mesh: Mesh):
        self._mesh = mesh
        if self._mesh.type == "triangles":
            if self._mesh.vertex_normals is None:
                self._mesh.compute_vertex_normals()
        self._vao: int | None = None
        self._vbo: int | None = None
        self._ebo: int | None = None
        self._index_count = self._mesh.indices.size
        self._upload()

    def _upload(self):
        buf = self._mesh.interleaved_buffer()
        layout = self._mesh.get_vertex_layout()
        indices = np.ascontiguousarray(self._mesh.indices, dtype=np.uint32)

        self._vao = gl.glGenVertexArrays(1)
        self._vbo = gl.glGenBuffers(1)
        self._ebo = gl.glGenBuffers(1)

        gl.glBindVertexArray(self._vao)

        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, self._vbo)
        gl.glBufferData(gl.GL_ARRAY_BUFFER, buf.nbytes, buf, gl.GL_STATIC_DRAW)

        gl.glBindBuffer(gl.GL_ELEMENT_ARRAY_BUFFER, self._ebo)
        gl.glBufferData(gl.GL_ELEMENT_ARRAY_BUFFER, indices.nbytes, indices, gl.GL_STATIC_DRAW)

        for index, attr in enumerate(layout.attributes):
            gl_type = GL_TYPE_MAP[attr.vtype]
            gl.glEnableVertexAttribArray(index)
            _gl_vertex_attrib_pointer(
                index,
                attr.size,
                gl_type,
                gl.GL_FALSE,
                layout.stride,
                ctypes.c_void_p(attr.offset),
            )

        gl.glBindVertexArray(0)

    def update_vertices(self):
        buf = self._mesh.interleaved_buffer()
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, self._vbo)
        gl.glBufferSubData(gl.GL_ARRAY_BUFFER, 0, buf.nbytes, buf)
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, 0)

    def draw(self):
        gl.glBindVertexArray(self._vao or 0)
        gl.glDrawElements(gl.GL_TRIANGLES, self._index_count, gl.GL_UNSIGNED_INT, ctypes.c_void_p(0))
        gl.glBindVertexArray(0)

    def delete(self):
        if self._vao is None:
            return
        gl.glDeleteVertexArrays(1, [self._vao])
        gl.glDeleteBuffers(1, [self._vbo])
        gl.glDeleteBuffers(1, [self._ebo])
        self._vao = self._vbo = self._ebo = None


class OpenGLPolylineHandle(PolylineHandle):
    def __init__(self, mesh: Mesh):
        self._vertices = np.ascontiguousarray(mesh.interleaved_buffer(), dtype=np.float32)
        self._indices = np.ascontiguousarray(mesh.indices, dtype=np.uint32)
        self._layout = mesh.get_vertex_layout()
        self._vao: int | None = None
        self._vbo: int | None = None
        self._ebo: int | None = None
        self._upload()

    def _upload(self):
        vertex_block = self._vertices.ravel()
        self._vao = gl.glGenVertexArrays(1)
        self._vbo = gl.glGenBuffers(1)
        self._ebo = gl.glGenBuffers(1)
        gl.glBindVertexArray(self._vao)
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, self._vbo)
        gl.glBufferData(gl.GL_ARRAY_BUFFER, vertex_block.nbytes, vertex_block, gl.GL_STATIC_DRAW)
        gl.glBindBuffer(gl.GL_ELEMENT_ARRAY_BUFFER, self._ebo)
        gl.glBufferData(gl.GL_ELEMENT_ARRAY_BUFFER, self._indices.nbytes, self._indices, gl.GL_STATIC_DRAW)
        layout = self._layout
        for index, attr in enumerate(layout.attributes):
            gl.glEnableVertexAttribArray(index)
            _gl_vertex_attrib_pointer(index, attr.size, GL_TYPE_MAP[attr.vtype], gl.GL_FALSE, layout.stride, ctypes.c_void_p(attr.offset))
        gl.glBindVertexArray(0)

    def draw(self):
        gl.glBindVertexArray(self._vao or 0)
        gl.glDrawElements(gl.GL_LINES, self._indices.size, gl.GL_UNSIGNED_INT, ctypes.c_void_p(0))
        gl.glBindVertexArray(0)

    def delete(self):
        if self._vao is None:
            return
        gl.glDeleteVertexArrays(1, [self._vao])
        gl.glDeleteBuffers(1, [self._vbo])
        gl.glDeleteBuffers(1, [self._ebo])
        self._vao = self._vbo = self._ebo = None


class OpenGLTextureHandle(TextureHandle):
    def __init__(self, image_data: np.ndarray, size: Tuple[int, int], channels: int = 4, mipmap: bool = True, clamp: bool = False):
        self._handle: int | None = None
        self._channels = channels
        self._data = np.ascontiguousarray(image_data, dtype=np.uint8)
        self._size = size
        self._mipmap = mipmap
        self._clamp = clamp
        self._upload()

    def _upload(self):
        self._handle = gl.glGenTextures(1)
        gl.glBindTexture(gl.GL_TEXTURE_2D, self._handle)
        gl.glPixelStorei(gl.GL_UNPACK_ALIGNMENT, 1)
        internal_format = gl.GL_RGBA if self._channels != 1 else gl.GL_RED
        gl_format = internal_format
        gl.glTexImage2D(gl.GL_TEXTURE_2D, 0, internal_format, self._size[0], self._size[1], 0, gl_format, gl.GL_UNSIGNED_BYTE, self._data)
        if self._mipmap:
            gl.glGenerateMipmap(gl.GL_TEXTURE_2D)
        min_filter = gl.GL_LINEAR_MIPMAP_LINEAR if self._mipmap else gl.GL_LINEAR
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MIN_FILTER, min_filter)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MAG_FILTER, gl.GL_LINEAR)
        wrap_mode = gl.GL_CLAMP_TO_EDGE if self._clamp else gl.GL_REPEAT
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_S, wrap_mode)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_T, wrap_mode)

    def bind(self, unit: int = 0):
        gl.glActiveTexture(gl.GL_TEXTURE0 + unit)
        gl.glBindTexture(gl.GL_TEXTURE_2D, self._handle or 0)

    def delete(self):
        if self._handle is not None:
            gl.glDeleteTextures(1, [self._handle])
            self._handle = None


class OpenGLGraphicsBackend(GraphicsBackend):
    def ensure_ready(self):
        global _OPENGL_INITED
        if _OPENGL_INITED:
            return
        gl.glEnable(gl.GL_DEPTH_TEST)
        _OPENGL_INITED = True

    def set_viewport(self, x: int, y: int, w: int, h: int):
        gl.glViewport(x, y, w, h)

    def clear_color_depth(self, color):
        gl.glClearColor(float(color[0]), float(color[1]), float(color[2]), float(color[3]))
        gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)

    def set_polygon_mode(self, mode: str):
        gl_mode = gl.GL_LINE if mode == "line" else gl.GL_FILL
        gl.glPolygonMode(gl.GL_FRONT_AND_BACK, gl_mode)

    def create_shader(self, vertex_source: str, fragment_source: str) -> ShaderHandle:
        return OpenGLShaderHandle(vertex_source, fragment_source)

    def create_mesh(self, mesh: Mesh) -> MeshHandle:
        return OpenGLMeshHandle(mesh)

    def create_polyline(self, mesh: Mesh) -> PolylineHandle:
        return OpenGLPolylineHandle(mesh)

    def create_texture(self, image_data, size: Tuple[int, int], channels: int = 4, mipmap: bool = True, clamp: bool = False) -> TextureHandle:
        return OpenGLTextureHandle(image_data, size, channels=channels, mipmap=mipmap, clamp=clamp)
