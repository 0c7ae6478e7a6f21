"""Edge coloring that gives different colors to edges lying close together."""

from __future__ import annotations

import math
import sys
from collections import deque
from itertools import takewhile
from typing import Sequence

from .contour import Contour, EdgeColor, EdgeSegment
from .edge_coloring import is_corner
from .shape import Shape

__all__ = [
    "MAX_RECOLOR_STEPS",
    "EDGE_DISTANCE_PRECISION",
    "edge_to_edge_distance",
    "edge_coloring_by_distance",
]

MAX_RECOLOR_STEPS = 16
"""Most recoloring steps tried before an edge is left out of the graph."""

EDGE_DISTANCE_PRECISION = 16
"""Number of samples per edge when estimating the distance between two edges."""

_U64 = (1 << 64) - 1
_FIRST_POSSIBLE_COLOR = (-1, 0, 1, 0, 2, 2, 1, 0)
_SPLINE_COLORS = (EdgeColor.YELLOW, EdgeColor.CYAN, EdgeColor.MAGENTA)


def edge_to_edge_distance(a: EdgeSegment, b: EdgeSegment, precision: int) -> float:
    """Estimate the smallest distance between two edges by sampling each one.

    Edges that share an endpoint are at distance zero.
    """
    a0, a1, b0, b1 = a.point(0), a.point(1), b.point(0), b.point(1)
    if a0 == b0 or a0 == b1 or a1 == b0 or a1 == b1:
        return 0.0
    step = 1.0 / precision
    min_distance = (b0 - a0).length()
    for i in range(precision + 1):
        distance, _ = a.signed_distance(b.point(step * i))
        min_distance = min(min_distance, abs(distance.distance))
    for i in range(precision + 1):
        distance, _ = b.signed_distance(a.point(step * i))
        min_distance = min(min_distance, abs(distance.distance))
    return min_distance


def _spline_to_spline_distance(
    segments: Sequence[EdgeSegment], a_range: range, b_range: range, precision: int
) -> float:
    min_distance = sys.float_info.max
    for ai in a_range:
        for bi in b_range:
            if not min_distance:
                return min_distance
            min_distance = min(
                min_distance, edge_to_edge_distance(segments[ai], segments[bi], precision)
            )
    return min_distance


def _color_second_degree_graph(edge_matrix: list[list[int]], seed: int) -> list[int]:
    coloring: list[int] = []
    for i, row in enumerate(edge_matrix):
        possible = 7
        for j in range(i):
            if row[j]:
                possible &= ~(1 << coloring[j])
        color = 0
        if possible == 1:
            color = 0
        elif possible == 2:
            color = 1
        elif possible == 3:
            color = seed & 1
            seed >>= 1
        elif possible == 4:
            color = 2
        elif possible == 5:
            color = ((seed + 1) & 1) << 1
            seed >>= 1
        elif possible == 6:
            color = (seed & 1) + 1
            seed >>= 1
        elif possible == 7:
            color = ((seed + i) & _U64) % 3
            seed //= 3
        coloring.append(color)
    return coloring


def _possible_colors(coloring: Sequence[int], edge_vector: Sequence[int]) -> int:
    used = 0
    for color, connected in zip(coloring, edge_vector):
        if connected and color >= 0:
            used |= 1 << color
    return 7 & ~used


def _uncolor_same_neighbors(
    uncolored: deque[int], coloring: list[int], edge_matrix: list[list[int]], vertex: int
) -> None:
    count = len(coloring)
    for i in (*range(vertex + 1, count), *range(vertex)):
        if edge_matrix[vertex][i] and coloring[i] == coloring[vertex]:
            coloring[i] = -1
            uncolored.append(i)


def _try_add_edge(coloring: list[int], edge_matrix: list[list[int]], a: int, b: int) -> bool:
    edge_matrix[a][b] = edge_matrix[b][a] = 1
    if coloring[a] != coloring[b]:
        return True
    b_possible = _possible_colors(coloring, edge_matrix[b])
    if b_possible:
        coloring[b] = _FIRST_POSSIBLE_COLOR[b_possible]
        return True
    trial = list(coloring)
    uncolored: deque[int] = deque()
    trial[b] = _FIRST_POSSIBLE_COLOR[7 & ~(1 << trial[a])]
    _uncolor_same_neighbors(uncolored, trial, edge_matrix, b)
    step = 0
    while uncolored and step < MAX_RECOLOR_STEPS:
        i = uncolored.popleft()
        possible = _possible_colors(trial, edge_matrix[i])
        if possible:
            trial[i] = _FIRST_POSSIBLE_COLOR[possible]
            continue
        while True:
            trial[i] = step % 3
            step += 1
            if not (edge_matrix[i][a] and trial[i] == trial[a]):
                break
        _uncolor_same_neighbors(uncolored, trial, edge_matrix, i)
    if uncolored:
        edge_matrix[a][b] = edge_matrix[b][a] = 0
        return False
    coloring[:] = trial
    return True


def _corners(contour: Contour, cross_threshold: float) -> list[int]:
    edges = contour.edges
    corners = []
    prev_direction = edges[-1].direction(1)
    for index, edge in enumerate(edges):
        if is_corner(prev_direction.normalize(), edge.direction(0).normalize(), cross_threshold):
            corners.append(index)
        prev_direction = edge.direction(1)
    return corners


def _split_contour_into_splines(
    shape: Shape, cross_threshold: float
) -> tuple[list[EdgeSegment], list[int]]:
    segments: list[EdgeSegment] = []
    starts: list[int] = []
    for contour in shape.contours:
        edges = contour.edges
        if not edges:
            continue
        corners = _corners(contour, cross_threshold)
        starts.append(len(segments))
        if not corners:
            segments.extend(edges)
        elif len(corners) == 1:
            corner = corners[0]
            m = len(edges)
            if m >= 3:
                for i in range(m):
                    if i == m // 2:
                        starts.append(len(segments))
                    edge = edges[(corner + i) % m]
                    if int(3 + 2.875 * i / (m - 1) - 1.4375 + 0.5) - 3:
                        segments.append(edge)
                    else:
                        edge.color = EdgeColor.WHITE
            else:
                parts: list[EdgeSegment | None] = [None] * 7
                parts[3 * corner : 3 * corner + 3] = edges[0].split_in_thirds()
                if m >= 2:
                    parts[3 - 3 * corner : 6 - 3 * corner] = edges[1].split_in_thirds()
                    segments.extend(parts[0:2])
                    parts[2].color = parts[3].color = EdgeColor.WHITE
                    starts.append(len(segments))
                    segments.extend(parts[4:6])
                else:
                    segments.append(parts[0])
                    parts[1].color = EdgeColor.WHITE
                    starts.append(len(segments))
                    segments.append(parts[2])
                contour.edges = list(takewhile(lambda part: part is not None, parts))
        else:
            corner_count = len(corners)
            spline = 0
            start = corners[0]
            m = len(edges)
            for i in range(m):
                index = (start + i) % m
                if spline + 1 < corner_count and corners[spline + 1] == index:
                    starts.append(len(segments))
                    spline += 1
                segments.append(edges[index])
    starts.append(len(segments))
    return segments, starts


def edge_coloring_by_distance(shape: Shape, angle_threshold: float, seed: int = 0) -> None:
    """Color the edges of ``shape`` so that nearby edges get different colors.

    Slower than the other strategies: it measures the distance between all
    pairs of splines and solves a graph coloring. Edges may be split.
    """
    seed = int(seed) & _U64
    cross_threshold = math.sin(angle_threshold)
    segments, starts = _split_contour_into_splines(shape, cross_threshold)
    spline_count = len(starts) - 1
    if not spline_count:
        return

    spans = [range(starts[i], starts[i + 1]) for i in range(spline_count)]
    graph_edges = sorted(
        (
            (
                _spline_to_spline_distance(segments, spans[i], spans[j], EDGE_DISTANCE_PRECISION),
                i,
                j,
            )
            for i in range(spline_count)
            for j in range(i + 1, spline_count)
        ),
        key=lambda item: item[0],
    )

    edge_matrix = [[0] * spline_count for _ in range(spline_count)]
    next_edge = 0
    while next_edge < len(graph_edges) and not graph_edges[next_edge][0]:
        _, row, col = graph_edges[next_edge]
        edge_matrix[row][col] = edge_matrix[col][row] = 1
        next_edge += 1

    coloring = _color_second_degree_graph(edge_matrix, seed)
    for _, row, col in graph_edges[next_edge:]:
        _try_add_edge(coloring, edge_matrix, row, col)

    spline = -1
    for i, segment in enumerate(segments):
        while spline + 1 < spline_count and starts[spline + 1] == i:
            spline += 1
        segment.color = _SPLINE_COLORS[coloring[spline]]