"""Edge segments, edge colors, bounding boxes and closed contours."""

from __future__ import annotations

import abc
import enum
import math
from dataclasses import dataclass, field
from typing import Iterator, Sequence

from .signed_distance import SignedDistance
from .vector2 import Point2, Vector2, cross_product, dot_product

__all__ = ["EdgeColor", "EdgeSegment", "Bounds", "Contour", "LARGE_VALUE"]

LARGE_VALUE = 1e240


class EdgeColor(enum.IntFlag):
    """Color channels an edge contributes to."""

    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7


@dataclass
class Bounds:
    """A mutable axis-aligned bounding box: left, bottom, right, top.

    The default box is empty (inverted), so that including any point sets it.
    """

    l: float = LARGE_VALUE
    b: float = LARGE_VALUE
    r: float = -LARGE_VALUE
    t: float = -LARGE_VALUE

    def include(self, point: Point2) -> None:
        """Grow the box to contain ``point``."""
        self.l = min(self.l, point.x)
        self.b = min(self.b, point.y)
        self.r = max(self.r, point.x)
        self.t = max(self.t, point.y)


class EdgeSegment(abc.ABC):
    """A parametric edge of a contour, defined for 0 <= t <= 1."""

    def __init__(self, color: EdgeColor = EdgeColor.WHITE) -> None:
        self.color = color

    @abc.abstractmethod
    def point(self, t: float) -> Point2:
        """Return the point at parameter ``t``."""

    @abc.abstractmethod
    def direction(self, t: float) -> Vector2:
        """Return the tangent direction at parameter ``t``."""

    @abc.abstractmethod
    def signed_distance(self, origin: Point2) -> tuple[SignedDistance, float]:
        """Return the signed distance to ``origin`` and the parameter of the nearest point."""

    @abc.abstractmethod
    def bound(self, bounds: Bounds) -> None:
        """Grow ``bounds`` to contain the edge."""

    @abc.abstractmethod
    def reverse(self) -> None:
        """Reverse the edge's direction in place."""

    @abc.abstractmethod
    def scanline_intersections(self, y: float) -> Sequence[tuple[float, int]]:
        """Return (x, direction) pairs where the edge crosses the horizontal line at ``y``."""

    @abc.abstractmethod
    def split_in_thirds(self) -> tuple[EdgeSegment, EdgeSegment, EdgeSegment]:
        """Return three edges that together trace this one."""

    def deconverge(self, param: int, amount: float) -> EdgeSegment:
        """Return the edge to use in place of this one, with its tangent at
        end ``param`` nudged by ``amount`` to break a convergent corner.

        Edges whose shape cannot be adjusted return themselves.
        """
        return self


def _shoelace(a: Point2, b: Point2) -> float:
    return (b.x - a.x) * (a.y + b.y)


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


@dataclass
class Contour:
    """A single closed contour of a shape."""

    edges: list[EdgeSegment] = field(default_factory=list)

    def __iter__(self) -> Iterator[EdgeSegment]:
        return iter(self.edges)

    def __len__(self) -> int:
        return len(self.edges)

    def add_edge(self, edge: EdgeSegment) -> EdgeSegment:
        """Append an edge and return it."""
        self.edges.append(edge)
        return edge

    def bound(self, bounds: Bounds) -> Bounds:
        """Grow ``bounds`` to fit the contour and return it."""
        for edge in self.edges:
            edge.bound(bounds)
        return bounds

    def bound_miters(
        self, bounds: Bounds, border: float, miter_limit: float, polarity: int
    ) -> Bounds:
        """Grow ``bounds`` to fit the mitered corners of the contour's border."""
        if not self.edges:
            return bounds
        prev_dir = self.edges[-1].direction(1).normalize(True)
        for edge in self.edges:
            cur_dir = -edge.direction(0).normalize(True)
            if polarity * cross_product(prev_dir, cur_dir) >= 0:
                miter_length = miter_limit
                q = 0.5 * (1 - dot_product(prev_dir, cur_dir))
                if q > 0:
                    miter_length = min(1 / math.sqrt(q), miter_limit)
                miter = edge.point(0) + border * miter_length * (prev_dir + cur_dir).normalize(True)
                bounds.include(miter)
            prev_dir = edge.direction(1).normalize(True)
        return bounds

    def winding(self) -> int:
        """Return 1 for positive winding, -1 for negative, 0 if undetermined."""
        edges = self.edges
        if not edges:
            return 0
        if len(edges) == 1:
            edge = edges[0]
            points = [edge.point(0), edge.point(1 / 3), edge.point(2 / 3)]
            pairs = zip(points, points[1:] + points[:1])
        elif len(edges) == 2:
            first, second = edges
            points = [first.point(0), first.point(0.5), second.point(0), second.point(0.5)]
            pairs = zip(points, points[1:] + points[:1])
        else:
            points = [edge.point(0) for edge in edges]
            pairs = zip(points[-1:] + points[:-1], points)
        total = 0.0
        for a, b in pairs:
            total += _shoelace(a, b)
        return _sign(total)

    def reverse(self) -> None:
        """Reverse the order and direction of the contour's edges."""
        self.edges.reverse()
        for edge in self.edges:
            edge.reverse()