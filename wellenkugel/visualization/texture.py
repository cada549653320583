"""Simple 2D texture wrapper for the graphics backend."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image
from .backends.base import GraphicsBackend, TextureHandle

# tangent-space +Z, i.e. "no perturbation"
FLAT_NORMAL_COLOR = (128, 128, 255, 255)
WHITE = (255, 255, 255, 255)


class Texture:
    """Loads an image via Pillow and uploads it as ``GL_TEXTURE_2D``."""

    def __init__(self, path: Optional[str | Path] = None):
        self._handle: Optional[TextureHandle] = None
        self._image_data: Optional[np.ndarray] = None
        self._size: Optional[tuple[int, int]] = None
        if path is not None:
            self.load(path)

    @property
    def size(self) -> Optional[tuple[int, int]]:
        return self._size

    @property
    def image_data(self) -> Optional[np.ndarray]:
        return self._image_data

    def load(self, path: str | Path):
        with Image.open(path) as source:
            image = source.convert("RGBA")
        self.set_image(image)

    def set_image(self, image: Image.Image):
        image = image.convert("RGBA").transpose(Image.Transpose.FLIP_TOP_BOTTOM)
        self._image_data = np.array(image, dtype=np.uint8)
        self._size = image.size
        self._handle = None

    def _ensure_handle(self, graphics: GraphicsBackend) -> TextureHandle:
        if self._handle is not None:
            return self._handle
        if self._image_data is None or self._size is None:
            raise RuntimeError("Texture has no image data to upload.")
        self._handle = graphics.create_texture(self._image_data, self._size, channels=4)
        return self._handle

    def bind(self, graphics: GraphicsBackend, unit: int = 0):
        self._ensure_handle(graphics).bind(unit)

    def delete(self):
        if self._handle is not None:
            self._handle.delete()
            self._handle = None

    @classmethod
    def from_file(cls, path: str | Path) -> "Texture":
        tex = cls()
        tex.load(path)
        return tex

    @classmethod
    def from_color(cls, rgba, size: tuple[int, int] = (1, 1)) -> "Texture":
        tex = cls()
        tex.set_image(Image.new("RGBA", size, tuple(int(c) for c in rgba)))
        return tex
