"""Vector shapes made of closed contours."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .contour import Bounds, Contour
from .scanline import Intersection, Scanline
from .vector2 import dot_product

__all__ = ["Shape", "CORNER_DOT_EPSILON", "DECONVERGENCE_FACTOR"]

CORNER_DOT_EPSILON = 0.000001
"""Threshold of the dot product of adjacent edge directions to be considered convergent."""

DECONVERGENCE_FACTOR = 0.000001
"""Proportional adjustment of a control point used to eliminate convergent corners."""


def _mix(a: float, b: float, weight: float) -> float:
    return (1 - weight) * a + weight * b


@dataclass
class _Crossing:
    x: float
    direction: int
    contour: int


@dataclass
class Shape:
    """A vector shape: a list of contours.

    ``inverse_y_axis`` marks shapes whose Y coordinates run top to bottom.
    """

    contours: list[Contour] = field(default_factory=list)
    inverse_y_axis: bool = False

    def add_contour(self, contour: Contour | None = None) -> Contour:
        """Append a contour (a new blank one if none is given) and return it."""
        if contour is None:
            contour = Contour()
        self.contours.append(contour)
        return contour

    def normalize(self) -> None:
        """Prepare the geometry for distance field generation.

        Single-edge contours are split in three; convergent corners are deconverged.
        """
        for contour in self.contours:
            edges = contour.edges
            if len(edges) == 1:
                contour.edges = list(edges[0].split_in_thirds())
                continue
            if not edges:
                continue
            prev_index = len(edges) - 1
            for index in range(len(edges)):
                prev_dir = edges[prev_index].direction(1).normalize()
                cur_dir = edges[index].direction(0).normalize()
                if dot_product(prev_dir, cur_dir) < CORNER_DOT_EPSILON - 1:
                    edges[prev_index] = edges[prev_index].deconverge(1, DECONVERGENCE_FACTOR)
                    edges[index] = edges[index].deconverge(0, DECONVERGENCE_FACTOR)
                prev_index = index

    def validate(self) -> bool:
        """Return whether every contour is made of edges that join end to start."""
        for contour in self.contours:
            if not contour.edges:
                continue
            last = contour.edges[-1]
            if last is None:
                return False
            corner = last.point(1)
            for edge in contour.edges:
                if edge is None or edge.point(0) != corner:
                    return False
                corner = edge.point(1)
        return True

    def bound(self, bounds: Bounds) -> Bounds:
        """Grow ``bounds`` to fit the shape and return it."""
        for contour in self.contours:
            contour.bound(bounds)
        return bounds

    def bound_miters(
        self, bounds: Bounds, border: float, miter_limit: float, polarity: int
    ) -> Bounds:
        """Grow ``bounds`` to fit the mitered corners of the shape's border."""
        for contour in self.contours:
            contour.bound_miters(bounds, border, miter_limit, polarity)
        return bounds

    def get_bounds(self, border: float = 0, miter_limit: float = 0, polarity: int = 0) -> Bounds:
        """Return the smallest box around the shape, optionally with a (mitered) border."""
        bounds = self.bound(Bounds())
        if border > 0:
            bounds.l -= border
            bounds.b -= border
            bounds.r += border
            bounds.t += border
            if miter_limit > 0:
                self.bound_miters(bounds, border, miter_limit, polarity)
        return bounds

    def scanline(self, y: float) -> Scanline:
        """Return the scanline that crosses the shape at ``y``."""
        return Scanline(
            Intersection(x, direction)
            for contour in self.contours
            for edge in contour.edges
            for x, direction in edge.scanline_intersections(y)
        )

    def edge_count(self) -> int:
        """Return the total number of edges."""
        return sum(len(contour.edges) for contour in self.contours)

    def orient_contours(self) -> None:
        """Orient unoriented (even-odd) contours so that the non-zero rule fills alike."""
        ratio = 0.5 * (math.sqrt(5) - 1)
        orientations = [0] * len(self.contours)
        for i, contour in enumerate(self.contours):
            if orientations[i] or not contour.edges:
                continue
            y0 = contour.edges[0].point(0).y
            y1 = y0
            for edge in contour.edges:
                if y0 != y1:
                    break
                y1 = edge.point(1).y
            for edge in contour.edges:
                if y0 != y1:
                    break
                y1 = edge.point(ratio).y
            y = _mix(y0, y1, ratio)
            crossings = [
                _Crossing(x, direction, j)
                for j, other in enumerate(self.contours)
                for edge in other.edges
                for x, direction in edge.scanline_intersections(y)
            ]
            crossings.sort(key=lambda crossing: crossing.x)
            for prev, cur in zip(crossings, crossings[1:]):
                if cur.x == prev.x:
                    prev.direction = cur.direction = 0
            for j, crossing in enumerate(crossings):
                if crossing.direction:
                    orientations[crossing.contour] += 2 * ((j & 1) ^ (crossing.direction > 0)) - 1
        for contour, orientation in zip(self.contours, orientations):
            if orientation < 0:
                contour.reverse()