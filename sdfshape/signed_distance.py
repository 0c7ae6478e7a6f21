"""Signed distance with an alignment tie-breaker."""

from __future__ import annotations

import sys
from dataclasses import dataclass

__all__ = ["SignedDistance"]


@dataclass
class SignedDistance:
    """A signed distance and alignment, ordered by absolute distance then by ``dot``."""

    distance: float = -sys.float_info.max
    dot: float = 1.0

    def __lt__(self, other: SignedDistance) -> bool:
        a, b = abs(self.distance), abs(other.distance)
        return a < b or (a == b and self.dot < other.dot)

    def __gt__(self, other: SignedDistance) -> bool:
        a, b = abs(self.distance), abs(other.distance)
        return a > b or (a == b and self.dot > other.dot)

    def __le__(self, other: SignedDistance) -> bool:
        a, b = abs(self.distance), abs(other.distance)
        return a < b or (a == b and self.dot <= other.dot)

    def __ge__(self, other: SignedDistance) -> bool:
        a, b = abs(self.distance), abs(other.distance)
        return a > b or (a == b and self.dot >= other.dot)