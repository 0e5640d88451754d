"""Immutable 2D vector value type.

Every operation returns a new ``Vector2``; instances are frozen so no
stored vector can be mutated through an alias. Degenerate inputs
(zero-length vectors, zero projection targets, division by zero) resolve
to the zero vector instead of raising.

Screen coordinates: ``up()`` is ``(0, -1)`` and ``down()`` is ``(0, 1)``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Tuple

from motion.utils import clamp as _clamp

if TYPE_CHECKING:  # pragma: no cover
    from motion.services import RandomSource

EPSILON = 1e-10  # magnitudes below this count as zero


@dataclass(frozen=True)
class Vector2:
    x: float = 0.0
    y: float = 0.0

    # ---- Constructors ----
    @classmethod
    def zero(cls) -> "Vector2":
        return cls(0.0, 0.0)

    @classmethod
    def one(cls) -> "Vector2":
        return cls(1.0, 1.0)

    @classmethod
    def up(cls) -> "Vector2":
        return cls(0.0, -1.0)

    @classmethod
    def down(cls) -> "Vector2":
        return cls(0.0, 1.0)

    @classmethod
    def left(cls) -> "Vector2":
        return cls(-1.0, 0.0)

    @classmethod
    def right(cls) -> "Vector2":
        return cls(1.0, 0.0)

    @classmethod
    def from_angle(cls, angle: float, length: float = 1.0) -> "Vector2":
        return cls(math.cos(angle) * length, math.sin(angle) * length)

    @classmethod
    def from_tuple(cls, pair: Tuple[float, float]) -> "Vector2":
        return cls(float(pair[0]), float(pair[1]))

    @classmethod
    def random(cls, length: float = 1.0, rng: "RandomSource | None" = None) -> "Vector2":
        """Vector of the given length pointing in a uniformly random direction."""
        if rng is None:
            from motion.rng_service import RNGService

            rng = RNGService.get()
        return cls.from_angle(rng.random() * math.pi * 2, length)

    # ---- Arithmetic ----
    def add(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def subtract(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def multiply(self, scalar: float) -> "Vector2":
        return Vector2(self.x * scalar, self.y * scalar)

    scale = multiply

    def divide(self, scalar: float) -> "Vector2":
        if scalar == 0:
            return Vector2.zero()
        return Vector2(self.x / scalar, self.y / scalar)

    def __add__(self, other: "Vector2") -> "Vector2":
        return self.add(other)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return self.subtract(other)

    def __mul__(self, scalar: float) -> "Vector2":
        return self.multiply(scalar)

    def __rmul__(self, scalar: float) -> "Vector2":
        return self.multiply(scalar)

    def __truediv__(self, scalar: float) -> "Vector2":
        return self.divide(scalar)

    def __neg__(self) -> "Vector2":
        return Vector2(-self.x, -self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    # ---- Length ----
    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def magnitude_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def normalize(self) -> "Vector2":
        mag = self.magnitude()
        if mag < EPSILON:
            return Vector2.zero()
        return Vector2(self.x / mag, self.y / mag)

    def set_magnitude(self, length: float) -> "Vector2":
        return self.normalize().multiply(length)

    def limit(self, max_length: float) -> "Vector2":
        """Rescale to ``max_length`` only when currently longer than it."""
        mag_sq = self.magnitude_squared()
        if mag_sq > max_length * max_length:
            return self.set_magnitude(max_length)
        return Vector2(self.x, self.y)

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0

    # ---- Products & angles ----
    def dot(self, other: "Vector2") -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Vector2") -> float:
        """2D cross product (z-component of the 3D cross product)."""
        return self.x * other.y - self.y * other.x

    def distance(self, other: "Vector2") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def distance_squared(self, other: "Vector2") -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def angle(self) -> float:
        """Angle in radians from the positive x-axis."""
        return math.atan2(self.y, self.x)

    def angle_to(self, other: "Vector2") -> float:
        magnitudes = self.magnitude() * other.magnitude()
        if magnitudes == 0:
            return 0.0
        return math.acos(_clamp(self.dot(other) / magnitudes, -1.0, 1.0))

    def rotate(self, angle: float) -> "Vector2":
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return Vector2(self.x * cos_a - self.y * sin_a, self.x * sin_a + self.y * cos_a)

    # ---- Geometry ----
    def reflect(self, normal: "Vector2") -> "Vector2":
        """Mirror this vector about the surface with the given normal.

        ``normal`` is normalized internally; a zero normal leaves the vector
        unchanged.
        """
        n = normal.normalize()
        d = 2 * self.dot(n)
        return Vector2(self.x - n.x * d, self.y - n.y * d)

    def project_onto(self, target: "Vector2") -> "Vector2":
        denom = target.magnitude_squared()
        if denom < EPSILON:
            return Vector2.zero()
        return target.multiply(self.dot(target) / denom)

    def reject_from(self, target: "Vector2") -> "Vector2":
        return self.subtract(self.project_onto(target))

    def lerp(self, other: "Vector2", t: float) -> "Vector2":
        return Vector2(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)

    def clamp(self, lo: "Vector2", hi: "Vector2") -> "Vector2":
        return Vector2(_clamp(self.x, lo.x, hi.x), _clamp(self.y, lo.y, hi.y))

    # ---- Misc ----
    def approx_equals(self, other: "Vector2", epsilon: float = 1e-6) -> bool:
        return abs(self.x - other.x) <= epsilon and abs(self.y - other.y) <= epsilon

    def clone(self) -> "Vector2":
        return Vector2(self.x, self.y)

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def __str__(self) -> str:
        return f"Vector2({self.x}, {self.y})"


__all__ = ["Vector2", "EPSILON"]
