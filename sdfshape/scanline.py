"""Horizontal scanlines through a shape and fill-rule evaluation."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from itertools import accumulate
from typing import Iterable

__all__ = ["FillRule", "Intersection", "Scanline", "interpret_fill_rule"]


class FillRule(enum.Enum):
    """How a winding total is turned into inside or outside."""

    NONZERO = 0
    ODD = 1
    POSITIVE = 2
    NEGATIVE = 3


def interpret_fill_rule(intersections: int, fill_rule: FillRule) -> bool:
    """Resolve an intersection total into a fill value under ``fill_rule``."""
    if fill_rule is FillRule.NONZERO:
        return intersections != 0
    if fill_rule is FillRule.ODD:
        return bool(intersections & 1)
    if fill_rule is FillRule.POSITIVE:
        return intersections > 0
    if fill_rule is FillRule.NEGATIVE:
        return intersections < 0
    return False


@dataclass(frozen=True)
class Intersection:
    """A crossing of the scanline at ``x`` with vertical direction ``direction``."""

    x: float
    direction: int


class _Cursor:
    """Walks the intersections of one scanline, tracking whether it is inside."""

    def __init__(self, line: Scanline, fill_rule: FillRule, end: float) -> None:
        self._items = line._intersections
        self._index = 0
        self._end = end
        self._fill_rule = fill_rule
        self.inside = False
        self.x = self._items[0].x if self._items else end

    def step(self, x_next: float) -> None:
        if self.x == x_next and self._index < len(self._items):
            self.inside = interpret_fill_rule(self._items[self._index].direction, self._fill_rule)
            self._index += 1
            self.x = self._items[self._index].x if self._index < len(self._items) else self._end


class Scanline:
    """Intersections of a horizontal line with a shape, sorted and accumulated."""

    def __init__(self, intersections: Iterable[Intersection] = ()) -> None:
        self._intersections: list[Intersection] = []
        self._last_index = 0
        self.set_intersections(intersections)

    @staticmethod
    def overlap(a: Scanline, b: Scanline, x_from: float, x_to: float, fill_rule: FillRule) -> float:
        """Return the length within [x_from, x_to] where both scanlines agree on fill."""
        ca = _Cursor(a, fill_rule, x_to)
        cb = _Cursor(b, fill_rule, x_to)
        while ca.x < x_from or cb.x < x_from:
            x_next = min(ca.x, cb.x)
            ca.step(x_next)
            cb.step(x_next)
        total = 0.0
        x = x_from
        while ca.x < x_to or cb.x < x_to:
            x_next = min(ca.x, cb.x)
            if ca.inside == cb.inside:
                total += x_next - x
            ca.step(x_next)
            cb.step(x_next)
            x = x_next
        if ca.inside == cb.inside:
            total += x_to - x
        return total

    def set_intersections(self, intersections: Iterable[Intersection]) -> None:
        """Replace the intersections; they are sorted and their directions summed."""
        ordered = sorted(intersections, key=lambda i: i.x)
        totals = accumulate(i.direction for i in ordered)
        self._intersections = [Intersection(i.x, total) for i, total in zip(ordered, totals)]
        self._last_index = 0

    def _move_to(self, x: float) -> int:
        items = self._intersections
        if not items:
            return -1
        index = self._last_index
        if x < items[index].x:
            while True:
                if index == 0:
                    self._last_index = 0
                    return -1
                index -= 1
                if not x < items[index].x:
                    break
        else:
            while index < len(items) - 1 and x >= items[index + 1].x:
                index += 1
        self._last_index = index
        return index

    def count_intersections(self, x: float) -> int:
        """Return the number of intersections left of or at ``x``."""
        return self._move_to(x) + 1

    def sum_intersections(self, x: float) -> int:
        """Return the total direction of intersections left of or at ``x``."""
        index = self._move_to(x)
        return self._intersections[index].direction if index >= 0 else 0

    def filled(self, x: float, fill_rule: FillRule) -> bool:
        """Return whether the scanline is filled at ``x``."""
        return interpret_fill_rule(self.sum_intersections(x), fill_rule)