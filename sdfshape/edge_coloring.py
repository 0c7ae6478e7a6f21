"""Assignment of color channels to the edges of a shape."""

from __future__ import annotations

import math
from dataclasses import dataclass
from itertools import takewhile

from .contour import Contour, EdgeColor, EdgeSegment
from .shape import Shape
from .vector2 import Vector2, cross_product, dot_product

__all__ = [
    "EDGE_LENGTH_PRECISION",
    "is_corner",
    "estimate_edge_length",
    "edge_coloring_simple",
    "edge_coloring_ink_trap",
]

EDGE_LENGTH_PRECISION = 4
"""Number of straight pieces used to estimate the length of an edge."""

_START_COLORS = (EdgeColor.CYAN, EdgeColor.MAGENTA, EdgeColor.YELLOW)


def is_corner(a_dir: Vector2, b_dir: Vector2, cross_threshold: float) -> bool:
    """Return whether two unit directions meeting at a point form a corner."""
    return dot_product(a_dir, b_dir) <= 0 or abs(cross_product(a_dir, b_dir)) > cross_threshold


def estimate_edge_length(edge: EdgeSegment) -> float:
    """Estimate the length of ``edge`` by summing straight pieces."""
    length = 0.0
    prev = edge.point(0)
    for i in range(1, EDGE_LENGTH_PRECISION + 1):
        cur = edge.point(1.0 / EDGE_LENGTH_PRECISION * i)
        length += (cur - prev).length()
        prev = cur
    return length


def _switch_color(
    color: EdgeColor, seed: int, banned: EdgeColor = EdgeColor.BLACK
) -> tuple[EdgeColor, int]:
    """Return the next color after ``color`` avoiding ``banned``, and the remaining seed."""
    combined = color & banned
    if combined in (EdgeColor.RED, EdgeColor.GREEN, EdgeColor.BLUE):
        return EdgeColor(combined ^ EdgeColor.WHITE), seed
    if color in (EdgeColor.BLACK, EdgeColor.WHITE):
        return _START_COLORS[seed % 3], seed // 3
    shifted = int(color) << (1 + (seed & 1))
    return EdgeColor((shifted | shifted >> 3) & int(EdgeColor.WHITE)), seed >> 1


def _corner_indices(contour: Contour, cross_threshold: float) -> list[int]:
    edges = contour.edges
    if not edges:
        return []
    corners = []
    prev_direction = edges[-1].direction(1)
    for index, edge in enumerate(edges):
        if is_corner(prev_direction.normalize(), edge.direction(0).normalize(), cross_threshold):
            corners.append(index)
        prev_direction = edge.direction(1)
    return corners


def _teardrop_index(i: int, m: int) -> int:
    return int(3 + 2.875 * i / (m - 1) - 1.4375 + 0.5) - 2


def _color_teardrop(contour: Contour, corner: int, seed: int) -> int:
    """Color a contour with a single corner, splitting edges if there are fewer than three."""
    first, seed = _switch_color(EdgeColor.WHITE, seed)
    last, seed = _switch_color(first, seed)
    colors = (first, EdgeColor.WHITE, last)
    edges = contour.edges
    m = len(edges)
    if m >= 3:
        for i in range(m):
            edges[(corner + i) % m].color = colors[_teardrop_index(i, m)]
    elif m >= 1:
        parts: list[EdgeSegment | None] = [None] * 7
        parts[3 * corner : 3 * corner + 3] = edges[0].split_in_thirds()
        if m >= 2:
            parts[3 - 3 * corner : 6 - 3 * corner] = edges[1].split_in_thirds()
            for k, part in enumerate(parts[:6]):
                part.color = colors[k // 2]
        else:
            for part, color in zip(parts[:3], colors):
                part.color = color
        contour.edges = list(takewhile(lambda part: part is not None, parts))
    return seed


def _fill_white(contour: Contour) -> None:
    for edge in contour.edges:
        edge.color = EdgeColor.WHITE


def edge_coloring_simple(shape: Shape, angle_threshold: float, seed: int = 0) -> None:
    """Color the edges of ``shape`` for multi-channel distance fields.

    ``angle_threshold`` is the largest angle in radians still considered a corner;
    values below half pi are taken as the external angle. Edges may be split.
    """
    cross_threshold = math.sin(angle_threshold)
    for contour in shape.contours:
        corners = _corner_indices(contour, cross_threshold)
        if not corners:
            _fill_white(contour)
        elif len(corners) == 1:
            seed = _color_teardrop(contour, corners[0], seed)
        else:
            corner_count = len(corners)
            spline = 0
            start = corners[0]
            edges = contour.edges
            m = len(edges)
            color, seed = _switch_color(EdgeColor.WHITE, seed)
            initial_color = color
            for i in range(m):
                index = (start + i) % m
                if spline + 1 < corner_count and corners[spline + 1] == index:
                    spline += 1
                    banned = initial_color if spline == corner_count - 1 else EdgeColor.BLACK
                    color, seed = _switch_color(color, seed, banned)
                edges[index].color = color


@dataclass
class _InkTrapCorner:
    index: int
    prev_edge_length_estimate: float
    minor: bool = False
    color: EdgeColor = EdgeColor.BLACK


def edge_coloring_ink_trap(shape: Shape, angle_threshold: float, seed: int = 0) -> None:
    """Color the edges of ``shape`` so that short ink-trap edges may be dropped
    without breaking the coloring rules."""
    cross_threshold = math.sin(angle_threshold)
    for contour in shape.contours:
        edges = contour.edges
        spline_length = 0.0
        corners: list[_InkTrapCorner] = []
        if edges:
            prev_direction = edges[-1].direction(1)
            for index, edge in enumerate(edges):
                if is_corner(prev_direction.normalize(), edge.direction(0).normalize(), cross_threshold):
                    corners.append(_InkTrapCorner(index, spline_length))
                    spline_length = 0.0
                spline_length += estimate_edge_length(edge)
                prev_direction = edge.direction(1)

        if not corners:
            _fill_white(contour)
        elif len(corners) == 1:
            seed = _color_teardrop(contour, corners[0].index, seed)
        else:
            corner_count = len(corners)
            major_count = corner_count
            if corner_count > 3:
                corners[0].prev_edge_length_estimate += spline_length
                for i, corner in enumerate(corners):
                    following = corners[(i + 1) % corner_count].prev_edge_length_estimate
                    after = corners[(i + 2) % corner_count].prev_edge_length_estimate
                    if corner.prev_edge_length_estimate > following and following < after:
                        corner.minor = True
                        major_count -= 1
            color = EdgeColor.WHITE
            initial_color = EdgeColor.BLACK
            for corner in corners:
                if not corner.minor:
                    major_count -= 1
                    banned = initial_color if major_count == 0 else EdgeColor.BLACK
                    color, seed = _switch_color(color, seed, banned)
                    corner.color = color
                    if not initial_color:
                        initial_color = color
            for i, corner in enumerate(corners):
                if corner.minor:
                    next_color = corners[(i + 1) % corner_count].color
                    corner.color = EdgeColor((color & next_color) ^ EdgeColor.WHITE)
                else:
                    color = corner.color
            spline = 0
            start = corners[0].index
            color = corners[0].color
            m = len(edges)
            for i in range(m):
                index = (start + i) % m
                if spline + 1 < corner_count and corners[spline + 1].index == index:
                    spline += 1
                    color = corners[spline].color
                edges[index].color = color