"""Camera constants and settings helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

REFERENCE_SIZE = 1000.0  # app orientation, in pixels
WORLD_UNIT_PIXELS = 1000.0  # 1 world unit == 1000 pixels

DEFAULT_FIELD_OF_VIEW = 58.10


class ProjectionMode(str, Enum):
    PERSPECTIVE = "perspective"
    ORTHOGRAPHIC = "orthographic"

    @classmethod
    def parse(cls, value: "ProjectionMode | str | None") -> Optional["ProjectionMode"]:
        """Return the matching mode, or ``None`` for anything unrecognised."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class Fit(str, Enum):
    NONE = "none"
    WIDTH = "width"
    HEIGHT = "height"


class CoordinateSystem(str, Enum):
    """Clip space depth convention used by the frustum builders."""

    WEBGL = "webgl"  # depth in [-1, 1]
    WEBGPU = "webgpu"  # depth in [0, 1]


def default_clip_planes(mode: ProjectionMode | None) -> tuple[float, float]:
    if mode is ProjectionMode.PERSPECTIVE:
        return 0.01, 1000.0
    return -1000.0, 1000.0


@dataclass
class CameraSettings:
    """Construction parameters for :class:`viewmath.camera.Camera3D`."""

    mode: ProjectionMode = ProjectionMode.PERSPECTIVE
    width: float = REFERENCE_SIZE
    height: float = REFERENCE_SIZE
    fit: Fit = Fit.NONE
    near: Optional[float] = None
    far: Optional[float] = None
    field_of_view: float = DEFAULT_FIELD_OF_VIEW
    coordinate_system: CoordinateSystem = CoordinateSystem.WEBGL

    def clip_planes(self) -> tuple[float, float]:
        near, far = default_clip_planes(ProjectionMode.parse(self.mode))
        return (
            near if self.near is None else self.near,
            far if self.far is None else self.far,
        )
