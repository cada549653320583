"""Keyboard control surface issuing commands to the surface model.

Bindings:

    [ / ]        u resolution down / up
    - / =        v resolution down / up
    Q / E        rotate the texture counter-clockwise / clockwise
    arrow keys   move the texture rotation pivot
    W            toggle the wireframe overlay
    R            reset view, texture rotation and pivot
    ESC          quit
"""

from __future__ import annotations

from wellenkugel import log
from wellenkugel.config import ViewerSettings
from wellenkugel.mesh.surface import DegenerateResolutionError
from wellenkugel.model import SurfaceModel
from wellenkugel.visualization.backends.base import Action, Key


class SurfaceController:
    def __init__(self, model: SurfaceModel, settings: ViewerSettings | None = None, renderer=None, camera=None):
        self.model = model
        self.settings = settings or ViewerSettings()
        self.renderer = renderer
        self.camera = camera
        self.quit_requested = False

    # --- commands -------------------------------------------------------

    def set_resolution(self, u_steps: int, v_steps: int):
        """Clamp to ``[1, max_steps]`` and regenerate if the resolution changed."""
        limit = self.settings.max_steps
        u_steps = min(max(int(u_steps), 1), limit)
        v_steps = min(max(int(v_steps), 1), limit)
        if (u_steps, v_steps) == self.model.resolution:
            return
        try:
            self.model.regenerate_surface(u_steps, v_steps)
        except DegenerateResolutionError as e:
            log.warn(e, "Resolution change rejected")
            return
        log.info(f"Resolution {u_steps}x{v_steps}")

    def change_resolution(self, du: int, dv: int):
        u_steps, v_steps = self.model.resolution
        step = self.settings.step_increment
        self.set_resolution(u_steps + du * step, v_steps + dv * step)

    def rotate_texture(self, direction: int):
        """Advance the absolute texture angle by one ``rotation_step``."""
        self.model.rotate_texcoords(self.model.angle + direction * self.settings.rotation_step)

    def move_pivot(self, du: float, dv: float):
        pivot = self.model.move_pivot(du, dv)
        log.debug(f"Pivot moved to ({pivot[0]:.3f}, {pivot[1]:.3f})")

    def reset(self):
        self.model.reset_texcoords()
        if self.camera is not None:
            self.camera.reset()

    def toggle_wireframe(self):
        if self.renderer is not None:
            self.renderer.show_wireframe = not self.renderer.show_wireframe

    # --- input ----------------------------------------------------------

    def on_key(self, key: Key, scancode: int, action: Action, mods: int):
        if action == Action.RELEASE:
            return
        step = self.settings.pivot_step
        bindings = {
            Key.LEFT_BRACKET: lambda: self.change_resolution(-1, 0),
            Key.RIGHT_BRACKET: lambda: self.change_resolution(1, 0),
            Key.MINUS: lambda: self.change_resolution(0, -1),
            Key.EQUAL: lambda: self.change_resolution(0, 1),
            Key.Q: lambda: self.rotate_texture(1),
            Key.E: lambda: self.rotate_texture(-1),
            Key.LEFT: lambda: self.move_pivot(-step, 0.0),
            Key.RIGHT: lambda: self.move_pivot(step, 0.0),
            Key.DOWN: lambda: self.move_pivot(0.0, -step),
            Key.UP: lambda: self.move_pivot(0.0, step),
            Key.W: self.toggle_wireframe,
            Key.R: self.reset,
        }
        if key == Key.ESCAPE:
            self.quit_requested = True
            return
        command = bindings.get(key)
        if command is not None:
            command()
