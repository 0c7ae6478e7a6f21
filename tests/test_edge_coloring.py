import math

import pytest

from sdfshape.contour import Bounds, Contour, EdgeColor, EdgeSegment
from sdfshape.edge_coloring import (
    edge_coloring_ink_trap,
    edge_coloring_simple,
    estimate_edge_length,
    is_corner,
)
from sdfshape.shape import Shape
from sdfshape.signed_distance import SignedDistance
from sdfshape.vector2 import Vector2, cross_product, dot_product

THRESHOLD = 3.0


class Line(EdgeSegment):
    def __init__(self, p0, p1, color=EdgeColor.WHITE):
        super().__init__(color)
        self.p0 = p0
        self.p1 = p1

    def point(self, t):
        return self.p0 + (self.p1 - self.p0) * t

    def direction(self, t):
        return self.p1 - self.p0

    def signed_distance(self, origin):
        ab = self.p1 - self.p0
        denom = dot_product(ab, ab)
        t = 0.0 if denom == 0 else max(0.0, min(1.0, dot_product(origin - self.p0, ab) / denom))
        diff = origin - self.point(t)
        sign = 1.0 if cross_product(ab, origin - self.p0) >= 0 else -1.0
        return SignedDistance(sign * diff.length(), 0.0), t

    def bound(self, bounds):
        bounds.include(self.p0)
        bounds.include(self.p1)

    def reverse(self):
        self.p0, self.p1 = self.p1, self.p0

    def scanline_intersections(self, y):
        if (self.p0.y <= y < self.p1.y) or (self.p1.y <= y < self.p0.y):
            t = (y - self.p0.y) / (self.p1.y - self.p0.y)
            return [(self.point(t).x, 1 if self.p1.y > self.p0.y else -1)]
        return []

    def split_in_thirds(self):
        a, b, c, d = (self.point(k / 3) for k in range(4))
        return Line(a, b, self.color), Line(b, c, self.color), Line(c, d, self.color)


class Quadratic(EdgeSegment):
    def __init__(self, p0, p1, p2, color=EdgeColor.WHITE):
        super().__init__(color)
        self.p = [p0, p1, p2]

    def point(self, t):
        p0, p1, p2 = self.p
        return p0 * ((1 - t) ** 2) + p1 * (2 * t * (1 - t)) + p2 * (t * t)

    def direction(self, t):
        p0, p1, p2 = self.p
        return (p1 - p0) * (2 * (1 - t)) + (p2 - p1) * (2 * t)

    def signed_distance(self, origin):
        samples = [k / 32 for k in range(33)]
        t = min(samples, key=lambda s: (self.point(s) - origin).length())
        return SignedDistance((self.point(t) - origin).length(), 0.0), t

    def bound(self, bounds):
        for k in range(33):
            bounds.include(self.point(k / 32))

    def reverse(self):
        self.p.reverse()

    def scanline_intersections(self, y):
        return []

    def _sub(self, t0, t1):
        a = self.point(t0)
        control = a + self.direction(t0) * ((t1 - t0) / 2)
        return Quadratic(a, control, self.point(t1), self.color)

    def split_in_thirds(self):
        return self._sub(0, 1 / 3), self._sub(1 / 3, 2 / 3), self._sub(2 / 3, 1)


def polygon(points):
    contour = Contour()
    for a, b in zip(points, points[1:] + points[:1]):
        contour.add_edge(Line(a, b))
    return contour


def square():
    return polygon([Vector2(0, 0), Vector2(1, 0), Vector2(1, 1), Vector2(0, 1)])


def regular_polygon(n):
    return polygon([Vector2(math.cos(2 * math.pi * k / n), math.sin(2 * math.pi * k / n)) for k in range(n)])


def teardrop():
    tip = Vector2(0, 0)
    center = Vector2(2, 0)
    arc = [
        center + Vector2(math.cos(math.radians(120 - 5 * k)), math.sin(math.radians(120 - 5 * k)))
        for k in range(49)
    ]
    return polygon([tip] + arc)


def bits(color):
    return bin(int(color)).count("1")


def colors_of(contour):
    return [edge.color for edge in contour.edges]


def test_is_corner_for_perpendicular_directions():
    assert is_corner(Vector2(1, 0), Vector2(0, 1), math.sin(THRESHOLD))


def test_is_corner_false_for_same_direction():
    assert not is_corner(Vector2(1, 0), Vector2(1, 0), math.sin(THRESHOLD))


def test_is_corner_for_reversal():
    assert is_corner(Vector2(1, 0), Vector2(-1, 0), math.sin(THRESHOLD))


def test_estimate_edge_length_of_line_is_exact():
    p0, p1 = Vector2(1, 2), Vector2(4, 6)
    assert estimate_edge_length(Line(p0, p1)) == pytest.approx((p1 - p0).length())


def test_estimate_edge_length_of_curve_between_chord_and_polygon():
    p0, p1, p2 = Vector2(0, 0), Vector2(1, 2), Vector2(2, 0)
    length = estimate_edge_length(Quadratic(p0, p1, p2))
    assert (p2 - p0).length() < length < (p1 - p0).length() + (p2 - p1).length()


@pytest.mark.parametrize("coloring", [edge_coloring_simple, edge_coloring_ink_trap])
def test_smooth_contour_is_white(coloring):
    shape = Shape([regular_polygon(64)])
    coloring(shape, THRESHOLD)
    assert all(color == EdgeColor.WHITE for color in colors_of(shape.contours[0]))


@pytest.mark.parametrize("coloring", [edge_coloring_simple, edge_coloring_ink_trap])
@pytest.mark.parametrize("seed", [0, 1, 2, 7, 12345])
@pytest.mark.parametrize("make", [square, lambda: regular_polygon(3), lambda: regular_polygon(5)])
def test_corners_separate_colors(coloring, seed, make):
    shape = Shape([make()])
    coloring(shape, THRESHOLD, seed)
    colors = colors_of(shape.contours[0])
    for color in colors:
        assert bits(color) == 2
    for prev, cur in zip(colors[-1:] + colors[:-1], colors):
        assert prev != cur
        assert bits(prev & cur) <= 1


@pytest.mark.parametrize("coloring", [edge_coloring_simple, edge_coloring_ink_trap])
def test_coloring_is_deterministic_for_seed(coloring):
    first = Shape([square(), regular_polygon(5)])
    second = Shape([square(), regular_polygon(5)])
    coloring(first, THRESHOLD, 42)
    coloring(second, THRESHOLD, 42)
    assert [colors_of(c) for c in first.contours] == [colors_of(c) for c in second.contours]


@pytest.mark.parametrize("coloring", [edge_coloring_simple, edge_coloring_ink_trap])
def test_teardrop_with_many_edges(coloring):
    contour = teardrop()
    count = len(contour.edges)
    shape = Shape([contour])
    coloring(shape, THRESHOLD)
    colors = colors_of(shape.contours[0])
    assert len(colors) == count
    assert colors[0] != colors[-1]
    assert bits(colors[0]) == 2 and bits(colors[-1]) == 2
    assert colors[count // 2] == EdgeColor.WHITE


@pytest.mark.parametrize("coloring", [edge_coloring_simple, edge_coloring_ink_trap])
def test_single_edge_teardrop_is_split(coloring):
    edge = Quadratic(Vector2(0, 0), Vector2(2, 1), Vector2(0, 0))
    shape = Shape([Contour([edge])])
    coloring(shape, THRESHOLD)
    contour = shape.contours[0]
    assert len(contour.edges) == 3
    first, middle, last = colors_of(contour)
    assert middle == EdgeColor.WHITE
    assert first != last
    assert bits(first) == 2 and bits(last) == 2
    assert contour.edges[0].point(0) == Vector2(0, 0)
    assert contour.edges[2].point(1) == Vector2(0, 0)


def test_two_edge_teardrop_is_split_into_six():
    a = Quadratic(Vector2(0, 0), Vector2(2, 1), Vector2(3, 0))
    b = Quadratic(Vector2(3, 0), Vector2(2, -1), Vector2(0, 0))
    corners_checked = is_corner(
        b.direction(1).normalize(), a.direction(0).normalize(), math.sin(THRESHOLD)
    ) and not is_corner(a.direction(1).normalize(), b.direction(0).normalize(), math.sin(THRESHOLD))
    assert corners_checked
    shape = Shape([Contour([a, b])])
    edge_coloring_simple(shape, THRESHOLD)
    colors = colors_of(shape.contours[0])
    assert len(colors) == 6
    assert colors[0] == colors[1]
    assert colors[2] == colors[3] == EdgeColor.WHITE
    assert colors[4] == colors[5]
    assert colors[0] != colors[5]


def test_coloring_keeps_geometry():
    shape = Shape([square()])
    before = shape.get_bounds()
    edge_coloring_simple(shape, THRESHOLD, 3)
    after = shape.bound(Bounds())
    assert (after.l, after.b, after.r, after.t) == (before.l, before.b, before.r, before.t)
    assert shape.validate()


def test_ink_trap_notched_rectangle_keeps_two_channel_colors():
    points = [
        Vector2(0, 0), Vector2(10, 0), Vector2(10, 4), Vector2(5.2, 4),
        Vector2(5, 3.8), Vector2(4.8, 4), Vector2(0, 4),
    ]
    shape = Shape([polygon(points)])
    edge_coloring_ink_trap(shape, THRESHOLD, 9)
    colors = colors_of(shape.contours[0])
    assert len(colors) == len(points)
    for color in colors:
        assert bits(color) == 2
    for prev, cur in zip(colors[-1:] + colors[:-1], colors):
        assert prev != cur