"""Mapping between shape coordinates and pixel coordinates."""

from __future__ import annotations

from dataclasses import dataclass, field

from .vector2 import Point2, Vector2

__all__ = ["Projection"]


@dataclass(frozen=True)
class Projection:
    """A scale-and-translate transformation from shape space to pixel space."""

    scale: Vector2 = field(default_factory=lambda: Vector2(1.0))
    translate: Vector2 = field(default_factory=lambda: Vector2(0.0))

    def project(self, coord: Point2) -> Point2:
        """Convert a shape coordinate to a pixel coordinate."""
        return self.scale * (coord + self.translate)

    def unproject(self, coord: Point2) -> Point2:
        """Convert a pixel coordinate to a shape coordinate."""
        return coord / self.scale - self.translate

    def project_vector(self, vector: Vector2) -> Vector2:
        """Convert a vector to pixel space."""
        return self.scale * vector

    def unproject_vector(self, vector: Vector2) -> Vector2:
        """Convert a vector from pixel space."""
        return vector / self.scale

    def project_x(self, x: float) -> float:
        """Convert an X coordinate from shape to pixel space."""
        return self.scale.x * (x + self.translate.x)

    def project_y(self, y: float) -> float:
        """Convert a Y coordinate from shape to pixel space."""
        return self.scale.y * (y + self.translate.y)

    def unproject_x(self, x: float) -> float:
        """Convert an X coordinate from pixel to shape space."""
        return x / self.scale.x - self.translate.x

    def unproject_y(self, y: float) -> float:
        """Convert a Y coordinate from pixel to shape space."""
        return y / self.scale.y - self.translate.y