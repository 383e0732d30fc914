"""Hybrid perspective/orthographic camera."""
from __future__ import annotations

import logging
import math
from typing import Any, Optional

import numpy as np

from .projection import (
    Frustum,
    ProjectionError,
    ViewOffset,
    invert_projection,
    make_orthographic,
    make_perspective,
)
from .settings import (
    DEFAULT_FIELD_OF_VIEW,
    REFERENCE_SIZE,
    WORLD_UNIT_PIXELS,
    CameraSettings,
    CoordinateSystem,
    Fit,
    ProjectionMode,
    default_clip_planes,
)

_logger = logging.getLogger(__name__)

_SIZE_FIELDS = (
    "last_width", "last_height", "fov", "aspect", "left", "right", "top", "bottom",
)


def _as_vector3(value: Any) -> np.ndarray:
    return np.array(value, dtype=np.float64).reshape(3)


class Camera3D:
    """Camera whose frustum is derived from the viewport size and a fit policy.

    The projection code only relies on ``position`` and
    ``coordinate_system``; ``update_matrix_world`` is a hook for hosts that
    track world transforms.
    """

    def __init__(
        self,
        mode: ProjectionMode | str = ProjectionMode.PERSPECTIVE,
        width: float = REFERENCE_SIZE,
        height: float = REFERENCE_SIZE,
        fit: Fit | str = Fit.NONE,
        near: Optional[float] = None,
        far: Optional[float] = None,
        field_of_view: Optional[float] = None,
        position: Any = None,
        coordinate_system: CoordinateSystem = CoordinateSystem.WEBGL,
    ) -> None:
        self.mode = ProjectionMode.parse(mode)
        self.fit = Fit(fit)
        default_near, default_far = default_clip_planes(self.mode)
        self.near = default_near if near is None else float(near)
        self.far = default_far if far is None else float(far)
        self.field_of_view = DEFAULT_FIELD_OF_VIEW if field_of_view is None else float(field_of_view)
        self.coordinate_system = coordinate_system

        # One world unit in front of the target, so the orthographic frustum
        # starts at reference scale.
        if position is None:
            position = (0.0, 0.0, REFERENCE_SIZE / WORLD_UNIT_PIXELS)
        self.position = _as_vector3(position)
        self.target = np.zeros(3)

        self.view: Optional[ViewOffset] = None
        self.zoom = 1.0

        self.fov = DEFAULT_FIELD_OF_VIEW
        self.aspect = 1.0
        self.left = self.right = self.top = self.bottom = 0.0
        self.last_width = float(width)
        self.last_height = float(height)

        self.frustum: Optional[Frustum] = None
        self.projection_matrix = np.identity(4)
        self.projection_matrix_inverse = np.identity(4)

        self.set_size(width, height)

    @classmethod
    def from_settings(cls, settings: CameraSettings) -> "Camera3D":
        near, far = settings.clip_planes()
        return cls(
            mode=settings.mode,
            width=settings.width,
            height=settings.height,
            fit=settings.fit,
            near=near,
            far=far,
            field_of_view=settings.field_of_view,
            coordinate_system=settings.coordinate_system,
        )

    @property
    def is_perspective(self) -> bool:
        return self.mode is ProjectionMode.PERSPECTIVE

    @property
    def is_orthographic(self) -> bool:
        return self.mode is ProjectionMode.ORTHOGRAPHIC

    def update_matrix_world(self) -> None:
        """Host hook; this camera keeps no world matrix of its own."""

    def set_size(self, width: float = REFERENCE_SIZE, height: float = REFERENCE_SIZE) -> None:
        """Re-derive the frustum for a new viewport; on failure nothing changes."""
        previous = {name: getattr(self, name) for name in _SIZE_FIELDS}
        self.last_width = width
        self.last_height = height

        # Perspective
        if self.fit is Fit.NONE:
            tan_fov = math.tan(math.radians(self.field_of_view) / 2)
            self.fov = (360 / math.pi) * math.atan(tan_fov * (height / REFERENCE_SIZE))
        else:
            self.fov = self.field_of_view
        self.aspect = width / height

        # Orthographic
        ortho_width = width if self.fit is Fit.NONE else REFERENCE_SIZE
        ortho_height = height if self.fit is Fit.NONE else REFERENCE_SIZE
        aspect_width = height / width if self.fit is Fit.WIDTH else 1.0
        aspect_height = width / height if self.fit is Fit.HEIGHT else 1.0
        self.left = -ortho_width / aspect_width / 2
        self.right = ortho_width / aspect_width / 2
        self.top = ortho_height * aspect_height / 2
        self.bottom = -ortho_height * aspect_height / 2

        try:
            self.update_projection_matrix()
        except ProjectionError:
            self.__dict__.update(previous)
            raise

    def change_type(self, new_mode: ProjectionMode | str) -> None:
        """Switch projection mode, re-deriving ``near`` from ``far``."""
        self.mode = ProjectionMode.parse(new_mode)
        if self.mode is None:
            _logger.debug("Unknown projection mode %r, camera disabled", new_mode)

        # Approximations carried over unchanged from the host camera.
        if self.is_perspective:
            self.near = 10 / self.far
        if self.is_orthographic:
            self.near = -self.far

        self.update_projection_matrix()

    def update_projection_matrix(self, target: Any = None) -> None:
        if self.is_perspective:
            self._update_perspective()
        elif self.is_orthographic:
            self._update_orthographic(target)

    def _update_perspective(self) -> None:
        near = self.near
        top = near * math.tan(math.radians(0.5 * self.fov))
        height = 2 * top
        width = self.aspect * height
        left = -0.5 * width

        view = self.view
        if view is not None:
            left += view.offset_x * width / view.full_width
            top -= view.offset_y * height / view.full_height
            width *= view.width / view.full_width
            height *= view.height / view.full_height

        frustum = Frustum(left, left + width, top, top - height, near, self.far)
        matrix = make_perspective(
            frustum.left, frustum.right, frustum.top, frustum.bottom,
            frustum.near, frustum.far, self.coordinate_system,
        )
        self._store(frustum, matrix)

    def _update_orthographic(self, target: Any) -> None:
        if target is not None and hasattr(target, "position"):
            target = target.position
        anchor = self.target if target is None else _as_vector3(target)
        distance = float(np.linalg.norm(self.position - anchor))
        zoom = distance / WORLD_UNIT_PIXELS

        dx = ((self.right - self.left) * zoom) / 2
        dy = ((self.top - self.bottom) * zoom) / 2
        cx = (self.right + self.left) / 2
        cy = (self.top + self.bottom) / 2

        left = cx - dx
        right = cx + dx
        top = cy + dy
        bottom = cy - dy

        view = self.view
        if view is not None:
            scale_w = ((self.right - self.left) / view.full_width) * zoom
            scale_h = ((self.top - self.bottom) / view.full_height) * zoom
            left += scale_w * view.offset_x
            right = left + scale_w * view.width
            top -= scale_h * view.offset_y
            bottom = top - scale_h * view.height

        frustum = Frustum(left, right, top, bottom, self.near, self.far)
        matrix = make_orthographic(
            frustum.left, frustum.right, frustum.top, frustum.bottom,
            frustum.near, frustum.far, self.coordinate_system,
        )
        self._store(frustum, matrix)
        self.target = anchor

    def _store(self, frustum: Frustum, matrix: np.ndarray) -> None:
        inverse = invert_projection(matrix)
        self.frustum = frustum
        self.projection_matrix = matrix
        self.projection_matrix_inverse = inverse

    def set_view_offset(
        self,
        full_width: float,
        full_height: float,
        x: float,
        y: float,
        width: float,
        height: float,
    ) -> None:
        previous = self.view
        self.view = ViewOffset(full_width, full_height, x, y, width, height)
        try:
            self.set_size(full_width, full_height)
        except ProjectionError:
            self.view = previous
            raise

    def clear_view_offset(self) -> None:
        view = self.view
        if view is None:
            return
        self.view = None
        try:
            self.set_size(view.full_width, view.full_height)
        except ProjectionError:
            self.view = view
            raise

    def copy(self, source: "Camera3D") -> "Camera3D":
        self.fit = source.fit
        self.near = source.near
        self.far = source.far
        self.field_of_view = source.field_of_view
        self.mode = source.mode
        self.coordinate_system = source.coordinate_system
        self.position = source.position.copy()

        self.set_size(source.last_width, source.last_height)
        return self

    def clone(self) -> "Camera3D":
        return Camera3D().copy(self)

    def __repr__(self) -> str:
        mode = self.mode.value if self.mode is not None else None
        return (
            f"Camera3D(mode={mode!r}, fit={self.fit.value!r}, "
            f"size=({self.last_width}, {self.last_height}), near={self.near}, far={self.far})"
        )
