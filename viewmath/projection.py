"""Projection matrix construction."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .settings import CoordinateSystem


class ProjectionError(ArithmeticError):
    """Raised when a projection matrix cannot be built or inverted."""


@dataclass(frozen=True)
class ViewOffset:
    """Sub-rectangle of a larger virtual viewport, in pixels."""

    full_width: float
    full_height: float
    offset_x: float
    offset_y: float
    width: float
    height: float


@dataclass(frozen=True)
class Frustum:
    left: float
    right: float
    top: float
    bottom: float
    near: float
    far: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.top - self.bottom


def make_perspective(
    left: float,
    right: float,
    top: float,
    bottom: float,
    near: float,
    far: float,
    coordinate_system: CoordinateSystem = CoordinateSystem.WEBGL,
) -> np.ndarray:
    """
    Build an off-axis perspective projection matrix.

    The camera looks down -Z. Bounds are given on the near plane, so an
    asymmetric frustum (one tile of a larger view) is expressed directly
    through ``left``/``right``/``top``/``bottom``.

    Returns:
        4x4 projection matrix (row-major, float64). Degenerate bounds
        produce non-finite entries rather than raising.
    """
    P = np.zeros((4, 4), dtype=np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        n = np.float64(near)
        f = np.float64(far)
        P[0, 0] = 2.0 * n / (right - left)
        P[1, 1] = 2.0 * n / (top - bottom)
        P[0, 2] = (right + left) / np.float64(right - left)
        P[1, 2] = (top + bottom) / np.float64(top - bottom)

        if coordinate_system is CoordinateSystem.WEBGPU:
            P[2, 2] = -f / (f - n)
            P[2, 3] = (-f * n) / (f - n)
        else:
            P[2, 2] = -(f + n) / (f - n)
            P[2, 3] = (-2.0 * f * n) / (f - n)

    P[3, 2] = -1.0
    return P


def make_orthographic(
    left: float,
    right: float,
    top: float,
    bottom: float,
    near: float,
    far: float,
    coordinate_system: CoordinateSystem = CoordinateSystem.WEBGL,
) -> np.ndarray:
    """Build an orthographic projection matrix (row-major, float64)."""
    P = np.zeros((4, 4), dtype=np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        w = 1.0 / np.float64(right - left)
        h = 1.0 / np.float64(top - bottom)
        p = 1.0 / np.float64(far - near)

        P[0, 0] = 2.0 * w
        P[1, 1] = 2.0 * h
        P[0, 3] = -(right + left) * w
        P[1, 3] = -(top + bottom) * h

        if coordinate_system is CoordinateSystem.WEBGPU:
            P[2, 2] = -1.0 * p
            P[2, 3] = -near * p
        else:
            P[2, 2] = -2.0 * p
            P[2, 3] = -(far + near) * p

    P[3, 3] = 1.0
    return P


def invert_projection(m: np.ndarray) -> np.ndarray:
    """
    Compute the exact inverse of a 4x4 projection matrix.

    Raises:
        ProjectionError: If ``m`` holds NaN/inf or is singular.
    """
    if not np.all(np.isfinite(m)):
        raise ProjectionError(f"Projection matrix is not finite:\n{m}")
    try:
        inverse = np.linalg.inv(m)
    except np.linalg.LinAlgError as exc:
        raise ProjectionError("Projection matrix is not invertible") from exc
    if not np.all(np.isfinite(inverse)):
        raise ProjectionError("Projection matrix inverse is not finite")
    return inverse
