"""2D affine matrices.

A Matrix holds the six coefficients ``(a, b, c, d, e, f)`` of

    [x', y'] = [x*a + y*c + e, x*b + y*d + f]

Composition is ``multiply(m1, m2)`` = apply ``m2`` first, then ``m1``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

Point = tuple[float, float]


@dataclass(frozen=True)
class Matrix:
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    def as_tuple(self) -> tuple[float, float, float, float, float, float]:
        return (self.a, self.b, self.c, self.d, self.e, self.f)

    @property
    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    def has_rotation_or_skew(self, eps: float = 1e-9) -> bool:
        """True when the linear part is not axis-aligned."""
        return abs(self.b) > eps or abs(self.c) > eps

    def is_uniform_scale(self, eps: float = 1e-9) -> bool:
        """Pure uniform scale + translation (mirroring allowed)."""
        return not self.has_rotation_or_skew(eps) and abs(abs(self.a) - abs(self.d)) <= eps

    def axis_scales(self) -> tuple[float, float]:
        """Length of the transformed unit x and y vectors."""
        return (math.hypot(self.a, self.b), math.hypot(self.c, self.d))

    def is_identity(self, eps: float = 1e-9) -> bool:
        return all(abs(v - w) <= eps for v, w in zip(self.as_tuple(), _IDENTITY.as_tuple()))


_IDENTITY = Matrix()


def identity() -> Matrix:
    return _IDENTITY


def multiply(m1: Matrix, m2: Matrix) -> Matrix:
    """Compose ``m1 ∘ m2``: a point is transformed by ``m2`` first."""
    return Matrix(
        a=m1.a * m2.a + m1.c * m2.b,
        b=m1.b * m2.a + m1.d * m2.b,
        c=m1.a * m2.c + m1.c * m2.d,
        d=m1.b * m2.c + m1.d * m2.d,
        e=m1.a * m2.e + m1.c * m2.f + m1.e,
        f=m1.b * m2.e + m1.d * m2.f + m1.f,
    )


def compose(*matrices: Matrix) -> Matrix:
    """Left-to-right product; the rightmost matrix acts on the point first."""
    result = _IDENTITY
    for m in matrices:
        result = multiply(result, m)
    return result


def transform_point(p: Point, m: Matrix) -> Point:
    x, y = p
    return (x * m.a + y * m.c + m.e, x * m.b + y * m.d + m.f)


def transform_points(points: list[Point], m: Matrix) -> list[Point]:
    return [transform_point(p, m) for p in points]


# --- Constructors ---


def translate(tx: float, ty: float = 0.0) -> Matrix:
    return Matrix(1.0, 0.0, 0.0, 1.0, tx, ty)


def scale(sx: float, sy: float | None = None) -> Matrix:
    return Matrix(sx, 0.0, 0.0, sx if sy is None else sy, 0.0, 0.0)


def rotate(degrees: float, cx: float | None = None, cy: float | None = None) -> Matrix:
    """Rotation about the origin, or about ``(cx, cy)`` when given."""
    rad = math.radians(degrees)
    cos, sin = math.cos(rad), math.sin(rad)
    rotation = Matrix(cos, sin, -sin, cos, 0.0, 0.0)
    if cx is None or cy is None:
        return rotation
    return compose(translate(cx, cy), rotation, translate(-cx, -cy))


def skew_x(degrees: float) -> Matrix:
    return Matrix(1.0, 0.0, math.tan(math.radians(degrees)), 1.0, 0.0, 0.0)


def skew_y(degrees: float) -> Matrix:
    return Matrix(1.0, math.tan(math.radians(degrees)), 0.0, 1.0, 0.0, 0.0)
