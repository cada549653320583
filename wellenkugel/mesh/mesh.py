"""Base mesh classes and vertex layout definitions."""

import numpy as np
from enum import Enum

# GPU COMPATIBILITY

class VertexAttribType(Enum):
    FLOAT32 = "float32"
    INT32 = "int32"
    UINT32 = "uint32"

class VertexAttribute:
    def __init__(self, name, size, vtype: VertexAttribType, offset):
        self.name = name
        self.size = size
        self.vtype = vtype
        self.offset = offset


class VertexLayout:
    def __init__(self, stride, attributes):
        self.stride = stride    # bytes per vertex
        self.attributes = attributes  # list of VertexAttribute


class Mesh:
    def __init__(self, vertices: np.ndarray, indices: np.ndarray):
        self.vertices = np.asarray(vertices, dtype=np.float64)
        self.indices  = np.asarray(indices,  dtype=np.uint32)
        self.type = "triangles" if self.indices.shape[1] == 3 else "lines"
        self._inter = None

    def get_vertex_layout(self) -> VertexLayout:
        raise NotImplementedError("get_vertex_layout must be implemented in subclasses.")

    def get_vertex_count(self) -> int:
        return self.vertices.shape[0]

    @property
    def vertex_buffer(self) -> np.ndarray:
        """Flat ``x0, y0, z0, x1, ...`` view of the vertex positions."""
        return self.vertices.ravel()

    @property
    def index_buffer(self) -> np.ndarray:
        """Flat index sequence, 3 per triangle or 2 per segment."""
        return self.indices.ravel()


class Mesh2(Mesh):
    """Line mesh storing vertex positions and segment indices."""

    def __init__(self, vertices: np.ndarray, indices: np.ndarray):
        super().__init__(vertices, indices)
        self._validate_mesh()

    def _validate_mesh(self):
        """Ensure that the vertex/index arrays have correct shapes and bounds."""
        if self.vertices.ndim != 2 or self.vertices.shape[1] != 3:
            raise ValueError("Vertices must be a Nx3 array.")
        if self.indices.ndim != 2 or self.indices.shape[1] != 2:
            raise ValueError("Indices must be a Mx2 array.")

    def interleaved_buffer(self):
        return self.vertices.astype(np.float32)

    def get_vertex_layout(self):
        return VertexLayout(
            stride=3*4,
            attributes=[
                VertexAttribute("position", 3, VertexAttribType.FLOAT32, 0)
            ]
        )


class Mesh3(Mesh):
    """Triangle mesh with optional per-vertex normals, uvs and tangents."""

    def __init__(
        self,
        vertices: np.ndarray,
        triangles: np.ndarray,
        uvs: np.ndarray | None = None,
        tangents: np.ndarray | None = None,
    ):
        super().__init__(vertices, triangles)

        self.uv = np.asarray(uvs, dtype=np.float64) if uvs is not None else None
        self.tangents = np.asarray(tangents, dtype=np.float64) if tangents is not None else None
        self._validate_mesh()
        self.vertex_normals = None
        self.face_normals = None

    def build_interleaved_buffer(self):
        pos = self.vertices.astype(np.float32)

        if self.vertex_normals is None:
            normals = np.zeros_like(self.vertices, dtype=np.float32)
        else:
            normals = self.vertex_normals.astype(np.float32)

        if self.uv is None:
            uvs = np.zeros((self.vertices.shape[0], 2), dtype=np.float32)
        else:
            uvs = self.uv.astype(np.float32)

        if self.tangents is None:
            tangents = np.zeros_like(self.vertices, dtype=np.float32)
        else:
            tangents = self.tangents.astype(np.float32)

        return np.ascontiguousarray(np.hstack([pos, normals, uvs, tangents]))

    def interleaved_buffer(self):
        if self._inter is None:
            self._inter = self.build_interleaved_buffer()
        return self._inter

    def invalidate_buffer(self):
        """Drop the cached interleaved buffer after an attribute changed."""
        self._inter = None

    @property
    def triangles(self):
        return self.indices

    @triangles.setter
    def triangles(self, value):
        self.indices = value

    def get_vertex_layout(self) -> VertexLayout:
        return VertexLayout(
            stride=11 * 4,  # pos(3) + normal(3) + uv(2) + tangent(3)
            attributes=[
                VertexAttribute("position", 3, VertexAttribType.FLOAT32, 0),
                VertexAttribute("normal",   3, VertexAttribType.FLOAT32, 12),
                VertexAttribute("uv",       2, VertexAttribType.FLOAT32, 24),
                VertexAttribute("tangent",  3, VertexAttribType.FLOAT32, 32),
            ]
        )

    def _validate_mesh(self):
        """Ensure that the vertex/index arrays have correct shapes and bounds."""
        if self.vertices.ndim != 2 or self.vertices.shape[1] != 3:
            raise ValueError("Vertices must be a Nx3 array.")
        if self.triangles.ndim != 2 or self.triangles.shape[1] != 3:
            raise ValueError("Triangles must be a Mx3 array.")
        if np.any(self.triangles >= self.vertices.shape[0]):
            raise ValueError("Triangle indices must be valid vertex indices.")
        if self.uv is not None and self.uv.shape != (self.vertices.shape[0], 2):
            raise ValueError("UVs must be a Nx2 array matching the vertices.")
        if self.tangents is not None and self.tangents.shape != self.vertices.shape:
            raise ValueError("Tangents must be a Nx3 array matching the vertices.")

    def get_face_count(self) -> int:
        return self.triangles.shape[0]

    def compute_faces_normals(self):
        """Compute per-face normals ``n = (v1-v0) × (v2-v0) / ||...||``."""
        v0 = self.vertices[self.triangles[:, 0], :]
        v1 = self.vertices[self.triangles[:, 1], :]
        v2 = self.vertices[self.triangles[:, 2], :]
        normals = np.cross(v1 - v0, v2 - v0)
        norms = np.linalg.norm(normals, axis=1, keepdims=True)
        norms[norms == 0] = 1  # Prevent division by zero
        self.face_normals = normals / norms
        return self.face_normals

    def compute_vertex_normals(self):
        """Compute area-weighted vertex normals: ``n_v = sum_{t∈F(v)} ( (v1-v0) × (v2-v0) ).``

        The face normals are left unnormalized so larger faces contribute more.
        A vertex whose sum has zero length keeps the zero vector.
        """
        normals = np.zeros_like(self.vertices, dtype=np.float64)
        v0 = self.vertices[self.triangles[:, 0], :]
        v1 = self.vertices[self.triangles[:, 1], :]
        v2 = self.vertices[self.triangles[:, 2], :]
        face_normals = np.cross(v1 - v0, v2 - v0)
        # unbuffered, in triangle order: every corner gets its face's normal
        np.add.at(normals, self.triangles.ravel(), np.repeat(face_normals, 3, axis=0))
        norms = np.linalg.norm(normals, axis=1)
        norms[norms == 0] = 1.0
        self.vertex_normals = (normals.T / norms).T
        self.invalidate_buffer()
        return self.vertex_normals
