"""Viewer settings: defaults, JSON persistence and overrides."""

from __future__ import annotations

import json
import math
import os
from dataclasses import asdict, dataclass, field, fields
from typing import Optional

from wellenkugel import log

CONFIG_DIR = os.path.expanduser("~/.config/wellenkugel")
SETTINGS_FILE = os.path.join(CONFIG_DIR, "settings.json")


@dataclass
class ViewerSettings:
    # mesh
    u_steps: int = 50
    v_steps: int = 50
    max_steps: int = 300
    step_increment: int = 1
    tangent_mode: str = "constant"

    # window
    width: int = 1000
    height: int = 1000
    title: str = "Wellenkugel"

    # camera
    fov_y: float = math.pi / 8
    near: float = 1.0
    far: float = 100.0
    camera_distance: float = 80.0
    view_position: list = field(default_factory=lambda: [0.0, 0.0, 5.0])

    # light, orbiting around the y axis
    light_radius: float = 10.0
    light_height: float = 5.0
    light_speed: float = 0.001  # radians per millisecond

    # material
    ambient: list = field(default_factory=lambda: [0.2, 0.2, 0.2])
    diffuse: list = field(default_factory=lambda: [0.7, 0.7, 0.7])
    specular: list = field(default_factory=lambda: [1.0, 1.0, 1.0])
    shininess: float = 32.0

    # textures; None means a flat generated texture
    diffuse_texture: Optional[str] = None
    specular_texture: Optional[str] = None
    normal_texture: Optional[str] = None

    # texture-space controls
    rotation_step: float = math.pi / 36
    pivot_step: float = 0.05

    @classmethod
    def from_dict(cls, data: dict) -> "ViewerSettings":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            log.warn(f"Ignoring unknown settings: {', '.join(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> dict:
        return asdict(self)

    def updated(self, **overrides) -> "ViewerSettings":
        """Copy with every non-None override applied."""
        data = self.to_dict()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return ViewerSettings.from_dict(data)

    @classmethod
    def load(cls, path: str | None = None) -> "ViewerSettings":
        """Load settings from ``path`` (default: the user settings file).

        A missing file gives the defaults; a broken one is logged and
        also gives the defaults.
        """
        path = path or SETTINGS_FILE
        if not os.path.exists(path):
            return cls()
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("settings root must be a JSON object")
            return cls.from_dict(data)
        except Exception as e:
            log.error(f"Failed to load settings from {path}: {e}")
            return cls()

    def save(self, path: str | None = None):
        path = path or SETTINGS_FILE
        try:
            os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=2)
        except Exception as e:
            log.error(f"Failed to save settings to {path}: {e}")
