"""Strategies that combine per-contour edge distances into a shape distance."""

from __future__ import annotations

from typing import Any, Callable, Generic, Protocol, TypeVar

from .shape import Shape
from .vector2 import Point2

__all__ = [
    "EdgeSelector",
    "SimpleContourCombiner",
    "OverlappingContourCombiner",
    "resolve_distance",
]


class EdgeSelector(Protocol):
    """What a combiner needs from an edge selector."""

    def reset(self, p: Point2) -> None: ...

    def merge(self, other: Any) -> None: ...

    def distance(self) -> Any: ...


S = TypeVar("S", bound=EdgeSelector)


def _median(a: float, b: float, c: float) -> float:
    return max(min(a, b), min(max(a, b), c))


def resolve_distance(distance: Any) -> float:
    """Reduce a distance to a scalar: numbers as they are, multi-channel
    distances (with ``r``, ``g``, ``b``) to the median of their channels."""
    if isinstance(distance, (int, float)):
        return float(distance)
    return _median(distance.r, distance.g, distance.b)


class SimpleContourCombiner(Generic[S]):
    """Selects the nearest edge over the whole shape."""

    def __init__(self, shape: Shape, selector_factory: Callable[[], S]) -> None:
        self._selector = selector_factory()

    def reset(self, p: Point2) -> None:
        """Start a new query at point ``p``."""
        self._selector.reset(p)

    def edge_selector(self, i: int) -> S:
        """Return the selector for contour ``i`` (one selector serves all)."""
        return self._selector

    def distance(self) -> Any:
        """Return the selected distance."""
        return self._selector.distance()


class OverlappingContourCombiner(Generic[S]):
    """Selects the nearest contour that actually borders filled and unfilled area."""

    def __init__(self, shape: Shape, selector_factory: Callable[[], S]) -> None:
        self._factory = selector_factory
        self._point = Point2()
        self._windings = [contour.winding() for contour in shape.contours]
        self._selectors = [selector_factory() for _ in shape.contours]

    def reset(self, p: Point2) -> None:
        """Start a new query at point ``p``."""
        self._point = p
        for selector in self._selectors:
            selector.reset(p)

    def edge_selector(self, i: int) -> S:
        """Return the selector for contour ``i``."""
        return self._selectors[i]

    def _fresh(self) -> S:
        selector = self._factory()
        selector.reset(self._point)
        return selector

    def distance(self) -> Any:
        """Return the combined distance across all contours."""
        pairs = list(zip(self._windings, self._selectors))
        shape_selector = self._fresh()
        inner_selector = self._fresh()
        outer_selector = self._fresh()
        for winding, selector in pairs:
            edge_distance = resolve_distance(selector.distance())
            shape_selector.merge(selector)
            if winding > 0 and edge_distance >= 0:
                inner_selector.merge(selector)
            if winding < 0 and edge_distance <= 0:
                outer_selector.merge(selector)

        shape_distance = shape_selector.distance()
        inner_distance = inner_selector.distance()
        outer_distance = outer_selector.distance()
        inner_scalar = resolve_distance(inner_distance)
        outer_scalar = resolve_distance(outer_distance)

        if inner_scalar >= 0 and abs(inner_scalar) <= abs(outer_scalar):
            distance = inner_distance
            chosen_winding = 1
            for winding, selector in pairs:
                if winding > 0:
                    contour_distance = selector.distance()
                    value = resolve_distance(contour_distance)
                    if abs(value) < abs(outer_scalar) and value > resolve_distance(distance):
                        distance = contour_distance
        elif outer_scalar <= 0 and abs(outer_scalar) < abs(inner_scalar):
            distance = outer_distance
            chosen_winding = -1
            for winding, selector in pairs:
                if winding < 0:
                    contour_distance = selector.distance()
                    value = resolve_distance(contour_distance)
                    if abs(value) < abs(inner_scalar) and value < resolve_distance(distance):
                        distance = contour_distance
        else:
            return shape_distance

        for winding, selector in pairs:
            if winding != chosen_winding:
                contour_distance = selector.distance()
                value = resolve_distance(contour_distance)
                current = resolve_distance(distance)
                if value * current >= 0 and abs(value) < abs(current):
                    distance = contour_distance
        if resolve_distance(distance) == resolve_distance(shape_distance):
            distance = shape_distance
        return distance