"""Interactive window showing the surface."""

from __future__ import annotations

from typing import Optional

from wellenkugel import log
from wellenkugel.config import ViewerSettings
from wellenkugel.controller import SurfaceController
from wellenkugel.model import SurfaceModel

from wellenkugel.visualization.backends import get_default_graphics_backend, get_default_window_backend
from wellenkugel.visualization.backends.base import Action, BackendWindow, GraphicsBackend, Key, MouseButton, WindowBackend
from wellenkugel.visualization.camera import TrackballCamera
from wellenkugel.visualization.renderer import SurfaceRenderer


class SurfaceViewer:
    """Owns the window, camera, renderer and controller of one surface.

    Construction only wires objects together; ``open`` creates the window
    and performs the one-shot GPU initialization.
    """

    def __init__(
        self,
        model: SurfaceModel,
        settings: Optional[ViewerSettings] = None,
        graphics: Optional[GraphicsBackend] = None,
        window_backend: Optional[WindowBackend] = None,
    ):
        self.model = model
        self.settings = settings or ViewerSettings()
        self.graphics = graphics or get_default_graphics_backend()
        self.window_backend = window_backend or get_default_window_backend()
        if self.graphics is None or self.window_backend is None:
            raise RuntimeError("SurfaceViewer needs a graphics backend and a window backend.")

        s = self.settings
        self.camera = TrackballCamera(distance=s.camera_distance, fov_y=s.fov_y, near=s.near, far=s.far)
        self.renderer = SurfaceRenderer(model, s)
        self.controller = SurfaceController(model, s, renderer=self.renderer, camera=self.camera)
        self.handle: Optional[BackendWindow] = None

    def open(self):
        s = self.settings
        self.handle = self.window_backend.create_window(s.width, s.height, s.title)
        self.handle.make_current()
        self.handle.set_key_callback(self._handle_key)
        self.handle.set_mouse_button_callback(self._handle_mouse_button)
        self.handle.set_cursor_pos_callback(self._handle_cursor_pos)
        self.handle.set_scroll_callback(self._handle_scroll)
        self.handle.set_framebuffer_size_callback(self._handle_resize)
        self.renderer.initialize(self.graphics)
        log.info(f"Viewer opened at {s.width}x{s.height}, surface {self.model.resolution[0]}x{self.model.resolution[1]}")

    @property
    def should_close(self) -> bool:
        return self.handle is None or self.handle.should_close()

    def render_frame(self):
        self.handle.make_current()
        self.renderer.draw(self.camera, self.handle.framebuffer_size(), self.handle.time_ms())
        self.handle.swap_buffers()

    def run(self, max_frames: Optional[int] = None) -> int:
        """Event loop until the window closes or ESC is pressed; returns the frame count."""
        frames = 0
        try:
            if self.handle is None:
                self.open()
            while not self.should_close:
                if max_frames is not None and frames >= max_frames:
                    break
                self.window_backend.poll_events()
                if self.controller.quit_requested:
                    self.handle.set_should_close(True)
                    break
                self.render_frame()
                frames += 1
        finally:
            self.close()
        return frames

    def close(self):
        self.renderer.delete()
        if self.handle is not None:
            self.handle.close()
            self.handle = None
        self.window_backend.terminate()
        log.info("Viewer closed")

    # --- event routing --------------------------------------------------

    def _handle_key(self, window, key: Key, scancode: int, action: Action, mods: int):
        self.controller.on_key(key, scancode, action, mods)

    def _handle_mouse_button(self, window, button: MouseButton, action: Action, mods: int):
        self.camera.on_mouse_button(button, action, mods)

    def _handle_cursor_pos(self, window, x: float, y: float):
        self.camera.on_mouse_move(x, y)

    def _handle_scroll(self, window, xoffset: float, yoffset: float):
        self.camera.on_scroll(xoffset, yoffset)

    def _handle_resize(self, window, width: int, height: int):
        log.debug(f"Framebuffer resized to {width}x{height}")
