"""Error correction that removes interpolation artifacts from a multi-channel distance field."""

from __future__ import annotations

import enum
import math
from typing import Sequence

import numpy as np

from .artifacts import (
    BaseArtifactClassifier,
    edge_between_texels,
    has_diagonal_artifact,
    has_linear_artifact,
    median,
)
from .contour import EdgeColor
from .projection import Projection
from .shape import Shape
from .vector2 import Point2, Vector2

__all__ = [
    "StencilFlags",
    "MSDFErrorCorrection",
    "DEFAULT_MIN_DEVIATION_RATIO",
    "DEFAULT_MIN_IMPROVE_RATIO",
    "PROTECTION_RADIUS_TOLERANCE",
]

DEFAULT_MIN_DEVIATION_RATIO = 1.11111111111111111
"""Default minimum ratio between the actual and the largest expected distance delta."""

DEFAULT_MIN_IMPROVE_RATIO = 1.11111111111111111
"""Default minimum ratio between the distance error before and after correction."""

PROTECTION_RADIUS_TOLERANCE = 1.001


class StencilFlags(enum.IntFlag):
    """Per-texel flags kept in the stencil."""

    NONE = 0
    ERROR = 1
    """Texel expected to cause interpolation errors."""
    PROTECTED = 2
    """Texel that only gets the error flag if it causes an inversion artifact."""


_CHANNEL_COLORS = (EdgeColor.RED, EdgeColor.GREEN, EdgeColor.BLUE)


def _as_float32(value: float) -> float:
    return float(np.float32(value))


class MSDFErrorCorrection:
    """Finds and removes texels of an MSDF that cause interpolation artifacts.

    ``stencil`` is a ``(height, width)`` ``uint8`` array that is cleared on
    construction and receives the flags of :class:`StencilFlags`. Distance
    fields are ``(height, width, channels)`` float arrays with at least three
    channels, indexed by row then column.
    """

    def __init__(
        self,
        stencil: np.ndarray,
        projection: Projection,
        distance_range: float,
        min_deviation_ratio: float = DEFAULT_MIN_DEVIATION_RATIO,
        min_improve_ratio: float = DEFAULT_MIN_IMPROVE_RATIO,
    ) -> None:
        if stencil.ndim != 2 or stencil.dtype != np.uint8:
            raise ValueError("stencil must be a two-dimensional uint8 array")
        self.stencil = stencil
        self.projection = projection
        self.inv_range = 1 / distance_range
        self.min_deviation_ratio = min_deviation_ratio
        self.min_improve_ratio = min_improve_ratio
        self.stencil.fill(0)

    @property
    def width(self) -> int:
        return self.stencil.shape[1]

    @property
    def height(self) -> int:
        return self.stencil.shape[0]

    def _texels(self, sdf: np.ndarray) -> list[list[list[float]]]:
        if sdf.ndim != 3 or sdf.shape[2] < 3:
            raise ValueError("distance field must have shape (height, width, channels>=3)")
        if sdf.shape[:2] != self.stencil.shape:
            raise ValueError("distance field and stencil differ in size")
        return np.asarray(sdf[:, :, :3], dtype=np.float32).tolist()

    def _mark(self, x: int, y: int, flag: StencilFlags) -> None:
        self.stencil[y, x] |= int(flag)

    def protect_corners(self, shape: Shape) -> None:
        """Mark the texels around every color-changing corner as protected."""
        width, height = self.width, self.height
        for contour in shape.contours:
            if not contour.edges:
                continue
            prev_edge = contour.edges[-1]
            for edge in contour.edges:
                common = int(prev_edge.color) & int(edge.color)
                if not common & (common - 1):
                    p = self.projection.project(edge.point(0))
                    if shape.inverse_y_axis:
                        p = Point2(p.x, height - p.y)
                    l = math.floor(p.x - 0.5)
                    b = math.floor(p.y - 0.5)
                    r, t = l + 1, b + 1
                    if l < width and b < height and r >= 0 and t >= 0:
                        for x, y in ((l, b), (r, b), (l, t), (r, t)):
                            if 0 <= x < width and 0 <= y < height:
                                self._mark(x, y, StencilFlags.PROTECTED)
                prev_edge = edge

    def _protect_extreme_channels(self, x: int, y: int, msd: Sequence[float], m: float, mask: int) -> None:
        if any(mask & color and msd[k] != m for k, color in enumerate(_CHANNEL_COLORS)):
            self._mark(x, y, StencilFlags.PROTECTED)

    def _protect_pair(
        self,
        texels: list[list[list[float]]],
        medians: list[list[float]],
        first: tuple[int, int],
        second: tuple[int, int],
        radius: float,
    ) -> None:
        (x0, y0), (x1, y1) = first, second
        m0, m1 = medians[y0][x0], medians[y1][x1]
        if abs(m0 - 0.5) + abs(m1 - 0.5) < radius:
            a, b = texels[y0][x0], texels[y1][x1]
            mask = int(edge_between_texels(a, b))
            self._protect_extreme_channels(x0, y0, a, m0, mask)
            self._protect_extreme_channels(x1, y1, b, m1, mask)

    def _radius(self, vector: Vector2) -> float:
        return _as_float32(PROTECTION_RADIUS_TOLERANCE * self.projection.unproject_vector(vector).length())

    def protect_edges(self, sdf: np.ndarray) -> None:
        """Mark texels whose non-median channels contribute to a nearby edge as protected."""
        texels = self._texels(sdf)
        medians = [[median(*texel) for texel in row] for row in texels]
        width, height = self.width, self.height

        radius = self._radius(Vector2(self.inv_range, 0))
        for y in range(height):
            for x in range(width - 1):
                self._protect_pair(texels, medians, (x, y), (x + 1, y), radius)

        radius = self._radius(Vector2(0, self.inv_range))
        for y in range(height - 1):
            for x in range(width):
                self._protect_pair(texels, medians, (x, y), (x, y + 1), radius)

        radius = self._radius(Vector2(self.inv_range))
        for y in range(height - 1):
            for x in range(width - 1):
                self._protect_pair(texels, medians, (x, y), (x + 1, y + 1), radius)
                self._protect_pair(texels, medians, (x + 1, y), (x, y + 1), radius)

    def protect_all(self) -> None:
        """Mark every texel as protected."""
        self.stencil |= int(StencilFlags.PROTECTED)

    def find_errors(self, sdf: np.ndarray) -> None:
        """Flag texels expected to cause interpolation artifacts, judging by the field alone."""
        texels = self._texels(sdf)
        width, height = self.width, self.height
        unproject = self.projection.unproject_vector
        h_span = self.min_deviation_ratio * unproject(Vector2(self.inv_range, 0)).length()
        v_span = self.min_deviation_ratio * unproject(Vector2(0, self.inv_range)).length()
        d_span = self.min_deviation_ratio * unproject(Vector2(self.inv_range)).length()

        for y in range(height):
            for x in range(width):
                c = texels[y][x]
                cm = median(*c)
                protected = bool(self.stencil[y, x] & StencilFlags.PROTECTED)
                h = BaseArtifactClassifier(h_span, protected)
                v = BaseArtifactClassifier(v_span, protected)
                d = BaseArtifactClassifier(d_span, protected)
                left = texels[y][x - 1] if x > 0 else None
                right = texels[y][x + 1] if x < width - 1 else None
                below = texels[y - 1][x] if y > 0 else None
                above = texels[y + 1][x] if y < height - 1 else None
                error = (
                    (left is not None and has_linear_artifact(h, cm, c, left))
                    or (below is not None and has_linear_artifact(v, cm, c, below))
                    or (right is not None and has_linear_artifact(h, cm, c, right))
                    or (above is not None and has_linear_artifact(v, cm, c, above))
                    or (
                        left is not None and below is not None
                        and has_diagonal_artifact(d, cm, c, left, below, texels[y - 1][x - 1])
                    )
                    or (
                        right is not None and below is not None
                        and has_diagonal_artifact(d, cm, c, right, below, texels[y - 1][x + 1])
                    )
                    or (
                        left is not None and above is not None
                        and has_diagonal_artifact(d, cm, c, left, above, texels[y + 1][x - 1])
                    )
                    or (
                        right is not None and above is not None
                        and has_diagonal_artifact(d, cm, c, right, above, texels[y + 1][x + 1])
                    )
                )
                if error:
                    self._mark(x, y, StencilFlags.ERROR)

    def apply(self, sdf: np.ndarray) -> np.ndarray:
        """Turn every texel flagged as an error into a single-channel texel, in place."""
        if sdf.ndim != 3 or sdf.shape[2] < 3:
            raise ValueError("distance field must have shape (height, width, channels>=3)")
        if sdf.shape[:2] != self.stencil.shape:
            raise ValueError("distance field and stencil differ in size")
        mask = (self.stencil & int(StencilFlags.ERROR)) != 0
        medians = np.median(sdf[:, :, :3], axis=-1)
        sdf[mask, :3] = medians[mask][:, None]
        return sdf