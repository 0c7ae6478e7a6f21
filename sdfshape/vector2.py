"""Two-dimensional vectors with double precision."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Union

__all__ = ["Vector2", "Point2", "dot_product", "cross_product"]


@dataclass(frozen=True, init=False)
class Vector2:
    """An immutable 2D euclidean vector.

    ``Vector2(v)`` sets both components to ``v``; ``Vector2()`` is the zero vector.
    """

    x: float
    y: float

    __slots__ = ("x", "y")

    def __init__(self, x: float = 0.0, y: float | None = None) -> None:
        object.__setattr__(self, "x", float(x))
        object.__setattr__(self, "y", float(x if y is None else y))

    def length(self) -> float:
        """Return the euclidean length."""
        return math.sqrt(self.x * self.x + self.y * self.y)

    def direction(self) -> float:
        """Return the angle of the vector in radians."""
        return math.atan2(self.y, self.x)

    def normalize(self, allow_zero: bool = False) -> Vector2:
        """Return a unit vector of the same direction.

        A zero vector becomes (0, 1), or stays zero if ``allow_zero``.
        """
        length = self.length()
        if length == 0:
            return Vector2(0.0, float(not allow_zero))
        return Vector2(self.x / length, self.y / length)

    def orthogonal(self, polarity: bool = True) -> Vector2:
        """Return a vector of the same length perpendicular to this one."""
        return Vector2(-self.y, self.x) if polarity else Vector2(self.y, -self.x)

    def orthonormal(self, polarity: bool = True, allow_zero: bool = False) -> Vector2:
        """Return a unit vector perpendicular to this one."""
        length = self.length()
        if length == 0:
            fallback = float(not allow_zero)
            return Vector2(0.0, fallback if polarity else -fallback)
        if polarity:
            return Vector2(-self.y / length, self.x / length)
        return Vector2(self.y / length, -self.x / length)

    def project(self, vector: Vector2, positive: bool = False) -> Vector2:
        """Project ``vector`` onto the direction of this vector.

        With ``positive``, a projection pointing away yields the zero vector.
        """
        n = self.normalize(True)
        t = dot_product(vector, n)
        if positive and t <= 0:
            return Vector2()
        return t * n

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __bool__(self) -> bool:
        return bool(self.x or self.y)

    def __pos__(self) -> Vector2:
        return self

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    def __add__(self, other: Vector2) -> Vector2:
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, other: Union[Vector2, float]) -> Vector2:
        if isinstance(other, Vector2):
            return Vector2(self.x * other.x, self.y * other.y)
        if isinstance(other, (int, float)):
            return Vector2(self.x * other, self.y * other)
        return NotImplemented

    def __rmul__(self, other: float) -> Vector2:
        if isinstance(other, (int, float)):
            return Vector2(other * self.x, other * self.y)
        return NotImplemented

    def __truediv__(self, other: Union[Vector2, float]) -> Vector2:
        if isinstance(other, Vector2):
            return Vector2(self.x / other.x, self.y / other.y)
        if isinstance(other, (int, float)):
            return Vector2(self.x / other, self.y / other)
        return NotImplemented

    def __rtruediv__(self, other: float) -> Vector2:
        if isinstance(other, (int, float)):
            return Vector2(other / self.x, other / self.y)
        return NotImplemented


Point2 = Vector2
"""A vector used as a point."""


def dot_product(a: Vector2, b: Vector2) -> float:
    """Dot product of two vectors."""
    return a.x * b.x + a.y * b.y


def cross_product(a: Vector2, b: Vector2) -> float:
    """Scalar 2D cross product of two vectors."""
    return a.x * b.y - a.y * b.x