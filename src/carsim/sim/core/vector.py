from __future__ import annotations

import math
from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Context, Decimal

EPS = 1e-9

_Q8_QUANTUM = Decimal("1e-8")
_Q8_CONTEXT = Context(prec=400, rounding=ROUND_HALF_UP)
_Q8_MAX = 2**63 - 1
_Q8_MIN = -(2**63)


def _q8(value: float) -> int:
    if not math.isfinite(value):
        if math.isnan(value):
            return 0
        return _Q8_MAX if value > 0 else _Q8_MIN
    quantized = Decimal(repr(value)).quantize(_Q8_QUANTUM, context=_Q8_CONTEXT)
    return int(quantized.scaleb(8, context=_Q8_CONTEXT))


@dataclass(frozen=True, slots=True, eq=False)
class Vector2:
    """Immutable 2D vector.

    Equality and hashing round both coordinates to 8 decimal places first,
    so vectors that only differ by float noise compare equal.
    """

    x: float = 0.0
    y: float = 0.0

    def __neg__(self) -> "Vector2":
        return Vector2(-self.x, -self.y)

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2":
        return Vector2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> "Vector2":
        return Vector2(self.x * scalar, self.y * scalar)

    def __truediv__(self, scalar: float) -> "Vector2":
        return Vector2(self.x / scalar, self.y / scalar)

    def __getitem__(self, index: int) -> float:
        if index == 0:
            return self.x
        if index == 1:
            return self.y
        raise IndexError(f"Vector2 index out of range: {index}")

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Vector2):
            return NotImplemented
        return _q8(self.x) == _q8(other.x) and _q8(self.y) == _q8(other.y)

    def __hash__(self) -> int:
        return hash((_q8(self.x), _q8(self.y)))

    def __reduce__(self):
        return (Vector2, (self.x, self.y))

    def __str__(self) -> str:
        return f"({self.x:.2f}, {self.y:.2f})"

    @property
    def size(self) -> float:
        return math.hypot(self.x, self.y)

    @property
    def size_sqr(self) -> float:
        return self.x * self.x + self.y * self.y

    @property
    def is_unit(self) -> bool:
        return abs(self.size_sqr - 1.0) <= EPS

    @property
    def is_zero(self) -> bool:
        return self.size_sqr <= EPS * EPS

    @property
    def angle(self) -> float:
        return math.atan2(self.y, self.x)

    def dot(self, other: "Vector2") -> float:
        return self.x * other.x + self.y * other.y

    def copy(self, **changes: float) -> "Vector2":
        return replace(self, **changes)

    @staticmethod
    def by_angle(angle: float) -> "Vector2":
        return Vector2(math.cos(angle), math.sin(angle))

    @staticmethod
    def by_angle_size(angle: float, size: float) -> "Vector2":
        return Vector2.by_angle(angle) * size


ZERO = Vector2()


def normalize(v: Vector2) -> Vector2:
    """Unit vector of ``v``. ``v`` must not be zero."""
    return v / v.size


def perp(v: Vector2) -> Vector2:
    """``v`` rotated by +90 degrees."""
    return Vector2(-v.y, v.x)


def truncate(v: Vector2, max_size: float) -> Vector2:
    """Limit the magnitude of ``v`` to ``max_size``; returns ``v`` itself when already short enough."""
    if v.size_sqr <= max_size * max_size:
        return v
    return normalize(v) * max_size


def lerp(a: Vector2, b: Vector2, t: float) -> Vector2:
    t = max(0.0, min(1.0, t))
    return a + (b - a) * t


def distance(a: Vector2, b: Vector2) -> float:
    return (b - a).size


def rotate(v: Vector2, theta: float) -> Vector2:
    c = math.cos(theta)
    s = math.sin(theta)
    return Vector2(v.x * c - v.y * s, v.x * s + v.y * c)


def resize(v: Vector2, size: float) -> Vector2:
    # A zero vector has no direction to keep; (1, 0) is returned whatever ``size`` is.
    if v.is_zero:
        return Vector2(1.0, 0.0)
    return v * (size / v.size)
