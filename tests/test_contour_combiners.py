import sys
from dataclasses import dataclass

from sdfshape.contour import Contour, EdgeColor, EdgeSegment
from sdfshape.contour_combiners import (
    OverlappingContourCombiner,
    SimpleContourCombiner,
    resolve_distance,
)
from sdfshape.shape import Shape
from sdfshape.signed_distance import SignedDistance
from sdfshape.vector2 import Vector2, cross_product, dot_product


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
        param = dot_product(origin - self.p0, ab) / dot_product(ab, ab)
        offset = origin - self.point(min(max(param, 0.0), 1.0))
        side = 1.0 if cross_product(ab, offset) <= 0 else -1.0
        return SignedDistance(side * offset.length(), 0.0), param

    def bound(self, bounds):
        bounds.include(self.p0)
        bounds.include(self.p1)

    def reverse(self):
        self.p0, self.p1 = self.p1, self.p0

    def scanline_intersections(self, y):
        return []

    def split_in_thirds(self):
        a, b = self.point(1 / 3), self.point(2 / 3)
        return (Line(self.p0, a), Line(a, b), Line(b, self.p1))


class ScalarSelector:
    def __init__(self):
        self.point = None
        self.value = -sys.float_info.max

    def reset(self, p):
        self.point = p
        self.value = -sys.float_info.max

    def add(self, d):
        if abs(d) < abs(self.value):
            self.value = d

    def merge(self, other):
        self.add(other.value)

    def distance(self):
        return self.value


@dataclass
class Multi:
    r: float
    g: float
    b: float


def square(x0, y0, size, clockwise=True):
    corners = [(x0, y0), (x0, y0 + size), (x0 + size, y0 + size), (x0 + size, y0)]
    vertices = [Vector2(x, y) for x, y in corners]
    contour = Contour([Line(a, b) for a, b in zip(vertices, vertices[1:] + vertices[:1])])
    if not clockwise:
        contour.reverse()
    return contour


def test_resolve_distance_scalar_and_multi():
    assert resolve_distance(0.25) == 0.25
    assert resolve_distance(Multi(0.1, 0.5, 0.3)) == 0.3
    assert resolve_distance(Multi(-2.0, 4.0, 1.0)) == 1.0


def test_simple_combiner_shares_one_selector():
    shape = Shape([square(0, 0, 1), square(2, 0, 1)])
    combiner = SimpleContourCombiner(shape, ScalarSelector)
    point = Vector2(0.5, 0.5)
    combiner.reset(point)
    assert combiner.edge_selector(0) is combiner.edge_selector(1)
    combiner.edge_selector(0).add(0.3)
    combiner.edge_selector(1).add(-0.7)
    assert combiner.distance() == 0.3
    assert combiner.edge_selector(0).point == point


def test_overlapping_combiner_has_selector_per_contour():
    shape = Shape([square(0, 0, 1), square(2, 0, 1)])
    combiner = OverlappingContourCombiner(shape, ScalarSelector)
    point = Vector2(1, 1)
    combiner.reset(point)
    assert combiner.edge_selector(0) is not combiner.edge_selector(1)
    assert combiner.edge_selector(1).point == point


def test_overlapping_single_contour_returns_its_distance():
    combiner = OverlappingContourCombiner(Shape([square(0, 0, 1)]), ScalarSelector)
    combiner.reset(Vector2(0.5, 0.5))
    combiner.edge_selector(0).add(0.5)
    assert combiner.distance() == 0.5


def test_overlapping_union_uses_farther_inner_boundary():
    shape = Shape([square(0, 0, 2), square(1, 0, 2)])
    assert shape.contours[0].winding() == shape.contours[1].winding()
    simple = SimpleContourCombiner(shape, ScalarSelector)
    overlapping = OverlappingContourCombiner(shape, ScalarSelector)
    for combiner in (simple, overlapping):
        combiner.reset(Vector2(1.5, 1))
        combiner.edge_selector(0).add(0.3)
        combiner.edge_selector(1).add(0.5)
    assert simple.distance() == 0.3
    assert overlapping.distance() == 0.5


def test_overlapping_hole_returns_hole_distance():
    shape = Shape([square(0, 0, 4), square(1, 1, 2, clockwise=False)])
    assert shape.contours[0].winding() == -shape.contours[1].winding()
    combiner = OverlappingContourCombiner(shape, ScalarSelector)
    combiner.reset(Vector2(2, 2))
    combiner.edge_selector(0).add(0.8)
    combiner.edge_selector(1).add(-0.2)
    assert combiner.distance() == -0.2


def test_overlapping_without_edges_returns_far_distance():
    combiner = OverlappingContourCombiner(Shape([square(0, 0, 1)]), ScalarSelector)
    combiner.reset(Vector2(5, 5))
    assert combiner.distance() == -sys.float_info.max