"""2D affine transform matrix."""
from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Mapping, Sequence
from typing import Any, Iterable, Iterator, Optional, Tuple

import numpy as np
from pygame.math import Vector2

_logger = logging.getLogger(__name__)

_IDENTITY = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


class SingularMatrixError(ValueError):
    """Raised by a strict inverse of a matrix whose determinant is zero."""


def _product(lhs: np.ndarray, rhs: np.ndarray) -> np.ndarray:
    """Six-value product ``lhs * rhs``: the map applying ``rhs`` first."""
    return np.array(
        [
            lhs[0] * rhs[0] + lhs[2] * rhs[1],
            lhs[1] * rhs[0] + lhs[3] * rhs[1],
            lhs[0] * rhs[2] + lhs[2] * rhs[3],
            lhs[1] * rhs[2] + lhs[3] * rhs[3],
            lhs[0] * rhs[4] + lhs[2] * rhs[5] + lhs[4],
            lhs[1] * rhs[4] + lhs[3] * rhs[5] + lhs[5],
        ],
        dtype=np.float64,
    )


def _pair(x: Any, y: Optional[float]) -> Tuple[float, float]:
    if y is not None:
        return float(x), float(y)
    if hasattr(x, "x") and hasattr(x, "y"):
        return float(x.x), float(x.y)
    return float(x[0]), float(x[1])


def _write_pair(target: Any, x: float, y: float) -> Any:
    if target is None:
        return Vector2(x, y)
    if isinstance(target, Vector2):
        target.update(x, y)
    elif hasattr(target, "x") and hasattr(target, "y"):
        target.x = x
        target.y = y
    else:
        target[0] = x
        target[1] = y
    return target


class Matrix2:
    """
    2D 3x2 transformation matrix stored as six values::

        [ 0 Xx  2 Yx  4 Ox ]
        [ 1 Xy  3 Yy  5 Oy ]

    Columns are the X basis, the Y basis and the origin, so a point maps as
    ``(a*x + c*y + tx, b*x + d*y + ty)``. Mutating methods work in place and
    return ``self``.
    """

    __slots__ = ("m",)

    def __init__(self, values: Optional[Iterable[float]] = None) -> None:
        if values is None:
            self.m = np.array(_IDENTITY, dtype=np.float64)
            return
        m = np.array(list(values), dtype=np.float64)
        if m.shape != (6,):
            raise ValueError(f"Matrix2 needs exactly 6 values, got {m.size}")
        self.m = m

    def __repr__(self) -> str:
        return "Matrix2([" + ", ".join(f"{v:g}" for v in self.m) + "])"

    def __iter__(self) -> Iterator[float]:
        return iter(self.m.tolist())

    def __matmul__(self, other: "Matrix2") -> "Matrix2":
        if not isinstance(other, Matrix2):
            return NotImplemented
        return Matrix2(_product(self.m, other.m))

    def copy(self, other: "Matrix2") -> "Matrix2":
        self.m = other.m.copy()
        return self

    def clone(self) -> "Matrix2":
        return Matrix2(self.m)

    def identity(self) -> "Matrix2":
        """Reset this matrix to identity."""
        self.m = np.array(_IDENTITY, dtype=np.float64)
        return self

    def multiply(self, other: "Matrix2") -> "Matrix2":
        """Store ``self * other``: ``other`` is applied first, then the old ``self``."""
        self.m = _product(self.m, other.m)
        return self

    def premultiply(self, other: "Matrix2") -> "Matrix2":
        """Store ``other * self``: the old ``self`` is applied first, then ``other``."""
        self.m = _product(other.m, self.m)
        return self

    def compose(
        self,
        px: float,
        py: float,
        sx: float,
        sy: float,
        ox: float,
        oy: float,
        rotation: float,
    ) -> "Matrix2":
        """
        Build translation, rotation about the origin point ``(ox, oy)`` and
        scale, in that order of composition.
        """
        self.m = np.array([1.0, 0.0, 0.0, 1.0, px, py], dtype=np.float64)

        if rotation != 0:
            c = math.cos(rotation)
            s = math.sin(rotation)
            self.multiply(Matrix2([1, 0, 0, 1, +ox, +oy]))
            self.multiply(Matrix2([c, s, -s, c, 0, 0]))
            self.multiply(Matrix2([1, 0, 0, 1, -ox, -oy]))

        if sx != 1 or sy != 1:
            self.scale(sx, sy)
        return self

    def decompose(self, target: Any) -> "Matrix2":
        """
        Write position, rotation and scale into ``target``.

        Attributes are used for objects and keys for mappings. Position and
        scale are only written when the slot exists; values that are not
        objects (numbers, strings, sequences) leave ``target`` untouched.
        """
        if isinstance(target, Mapping):
            if target.get("position") is not None:
                self.get_position(target["position"])
            target["rotation"] = self.get_rotation()
            if target.get("scale") is not None:
                self.get_scale(target["scale"])
            return self
        if target is None or isinstance(target, (numbers.Number, str, bytes, Sequence, np.ndarray)):
            return self
        if getattr(target, "position", None) is not None:
            self.get_position(target.position)
        target.rotation = self.get_rotation()
        if getattr(target, "scale", None) is not None:
            self.get_scale(target.scale)
        return self

    def translate(self, x: float, y: float) -> "Matrix2":
        """Translate in the matrix's own basis (post-multiply)."""
        m = self.m
        m[4] += m[0] * x + m[2] * y
        m[5] += m[1] * x + m[3] * y
        return self

    def rotate(self, radians: float) -> "Matrix2":
        c = math.cos(radians)
        s = math.sin(radians)
        m = self.m
        m0 = m[0] * c + m[2] * s
        m1 = m[1] * c + m[3] * s
        m2 = m[0] * -s + m[2] * c
        m3 = m[1] * -s + m[3] * c
        m[0:4] = (m0, m1, m2, m3)
        return self

    def scale(self, sx: Any, sy: Optional[float] = None) -> "Matrix2":
        """Scale the basis columns; accepts ``(sx, sy)`` or one pair-like value."""
        sx, sy = _pair(sx, sy)
        m = self.m
        m[0] *= sx
        m[1] *= sx
        m[2] *= sy
        m[3] *= sy
        return self

    def skew(self, radian_x: float, radian_y: float) -> "Matrix2":
        return self.multiply(Matrix2([1, math.tan(radian_y), math.tan(radian_x), 1, 0, 0]))

    def set_position(self, x: float, y: float) -> "Matrix2":
        self.m[4] = x
        self.m[5] = y
        return self

    def get_scale(self, target: Any = None) -> Any:
        """Length of each basis column; mirroring does not show up here."""
        m = self.m
        return _write_pair(target, math.hypot(m[0], m[1]), math.hypot(m[2], m[3]))

    def get_position(self, target: Any = None) -> Any:
        return _write_pair(target, self.m[4], self.m[5])

    def get_rotation(self) -> float:
        """Angle of the X basis column, in radians."""
        return math.atan2(self.m[1], self.m[0])

    def get_shear(self) -> float:
        """Deviation of the Y basis from perpendicular to the X basis."""
        return math.atan2(self.m[3], self.m[2]) - (math.pi / 2) - self.get_rotation()

    def get_sign(self, target: Any = None) -> Any:
        """
        Per-axis signs of ``a`` and ``d``.

        This is a coarse heuristic: a 180 degree rotation reports ``(-1, -1)``
        although it contains no mirroring. Use ``determinant() < 0`` to detect
        a reflection.
        """
        sign_x = -1.0 if self.m[0] < 0 else 1.0
        sign_y = -1.0 if self.m[3] < 0 else 1.0
        return _write_pair(target, sign_x, sign_y)

    def determinant(self) -> float:
        """Negative when the transform includes a mirroring, zero when singular."""
        m = self.m
        return float(m[0] * m[3] - m[1] * m[2])

    def get_inverse(self, strict: bool = False) -> "Matrix2":
        """
        Return the inverse as a new matrix.

        A singular matrix is reported through the log and yields non-finite
        values; with ``strict=True`` it raises :class:`SingularMatrixError`.
        """
        d = self.determinant()
        if d == 0:
            if strict:
                raise SingularMatrixError(f"{self!r} is non-invertible")
            _logger.warning("Matrix2.get_inverse(): matrix is non-invertible: %r", self)
        m = self.m
        with np.errstate(divide="ignore", invalid="ignore"):
            inv_d = np.float64(1.0) / np.float64(d)
            values = [
                m[3] * inv_d,
                -m[1] * inv_d,
                -m[2] * inv_d,
                m[0] * inv_d,
                inv_d * (m[2] * m[5] - m[3] * m[4]),
                inv_d * (m[1] * m[4] - m[0] * m[5]),
            ]
        return Matrix2(values)

    def transform_point(self, x: Any, y: Optional[float] = None) -> Vector2:
        """Transform a point given as ``(x, y)`` or one point-like value."""
        px, py = _pair(x, y)
        m = self.m
        return Vector2(px * m[0] + py * m[2] + m[4], px * m[1] + py * m[3] + m[5])

    def transform_points(self, points: np.ndarray) -> np.ndarray:
        """Transform an ``(N, 2)`` array of points, returning a new array."""
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        m = self.m
        linear = np.array([[m[0], m[2]], [m[1], m[3]]])
        return pts @ linear.T + m[4:6]

    def to_array(self) -> np.ndarray:
        """Homogeneous 3x3 form of this matrix."""
        m = self.m
        return np.array(
            [
                [m[0], m[2], m[4]],
                [m[1], m[3], m[5]],
                [0.0, 0.0, 1.0],
            ]
        )
