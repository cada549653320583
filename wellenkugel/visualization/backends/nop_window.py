from typing import Tuple

from .base import Action, BackendWindow, Key, MouseButton, WindowBackend


class NOPWindowHandle(BackendWindow):
    """
    Pseudo window:
    - has a size;
    - can be closed;
    - stores callbacks and fires them only through the ``emit_*`` helpers.
    """

    def __init__(self, width: int, height: int, title: str):
        self._width = width
        self._height = height
        self.title = title
        self._closed = False
        self._time_ms = 0.0
        self.swaps = 0

        self._framebuffer_callback = None
        self._cursor_callback = None
        self._scroll_callback = None
        self._mouse_callback = None
        self._key_callback = None

    # --- BackendWindow API ----------------------------------------------

    def close(self):
        self._closed = True

    def should_close(self) -> bool:
        return self._closed is True

    def make_current(self):
        pass

    def swap_buffers(self):
        self.swaps += 1

    def framebuffer_size(self) -> Tuple[int, int]:
        return self._width, self._height

    def set_should_close(self, flag: bool):
        if flag:
            self._closed = True

    def set_framebuffer_size_callback(self, callback):
        self._framebuffer_callback = callback

    def set_cursor_pos_callback(self, callback):
        self._cursor_callback = callback

    def set_scroll_callback(self, callback):
        self._scroll_callback = callback

    def set_mouse_button_callback(self, callback):
        self._mouse_callback = callback

    def set_key_callback(self, callback):
        self._key_callback = callback

    def time_ms(self) -> float:
        return self._time_ms

    # --- scripted input ---------------------------------------------------

    def advance(self, ms: float):
        self._time_ms += ms

    def emit_key(self, key: Key, action: Action = Action.PRESS, mods: int = 0):
        if self._key_callback is not None:
            self._key_callback(self, key, 0, action, mods)

    def emit_mouse_button(self, button: MouseButton, action: Action, mods: int = 0):
        if self._mouse_callback is not None:
            self._mouse_callback(self, button, action, mods)

    def emit_cursor(self, x: float, y: float):
        if self._cursor_callback is not None:
            self._cursor_callback(self, x, y)

    def emit_scroll(self, xoffset: float, yoffset: float):
        if self._scroll_callback is not None:
            self._scroll_callback(self, xoffset, yoffset)

    def emit_resize(self, width: int, height: int):
        self._width, self._height = width, height
        if self._framebuffer_callback is not None:
            self._framebuffer_callback(self, width, height)


class NOPWindowBackend(WindowBackend):
    """Window backend without real windows (handy for tests)."""

    def __init__(self):
        self.windows: list[NOPWindowHandle] = []
        self.polls = 0
        self.terminations = 0

    def create_window(self, width: int, height: int, title: str) -> NOPWindowHandle:
        window = NOPWindowHandle(width, height, title)
        self.windows.append(window)
        return window

    def poll_events(self):
        self.polls += 1

    def terminate(self):
        self.terminations += 1
