# sdfshape

Geometry and post-processing tools for multi-channel signed distance fields
(MSDF) built from vector shapes: shapes made of closed contours, bounding
boxes, scanlines and fill rules, contour orientation, edge coloring, contour
combiners, and error correction of a computed MSDF held in a numpy array.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `sdfshape.vector2` – the immutable `Vector2` (alias `Point2`) with
  `length`, `direction`, `normalize`, `orthogonal`, `orthonormal`, `project`
  and arithmetic operators, plus `dot_product` and `cross_product`.
- `sdfshape.projection` – `Projection(scale, translate)`, mapping shape
  coordinates to pixel coordinates (`project`, `project_vector`,
  `project_x`, `project_y`) and back (`unproject`, `unproject_vector`,
  `unproject_x`, `unproject_y`).
- `sdfshape.signed_distance` – `SignedDistance(distance, dot)`, ordered by
  absolute distance and then by `dot`.
- `sdfshape.scanline` – `Scanline`, `Intersection`, `FillRule` (`NONZERO`,
  `ODD`, `POSITIVE`, `NEGATIVE`) and `interpret_fill_rule`. A scanline sorts
  its intersections and sums their directions; it answers
  `count_intersections(x)`, `sum_intersections(x)` and `filled(x, rule)`, and
  `Scanline.overlap(a, b, x_from, x_to, rule)` measures where two scanlines
  agree on fill.
- `sdfshape.contour` – `EdgeColor` (an `IntFlag` of red, green and blue
  channels), the abstract `EdgeSegment`, the mutable `Bounds` box and
  `Contour` with `add_edge`, `bound`, `bound_miters`, `winding` and `reverse`.
- `sdfshape.shape` – `Shape` with `add_contour`, `validate`, `normalize`,
  `bound`, `bound_miters`, `get_bounds`, `scanline`, `edge_count` and
  `orient_contours`.
- `sdfshape.contour_combiners` – `SimpleContourCombiner` and
  `OverlappingContourCombiner`, plus `resolve_distance`.
- `sdfshape.edge_coloring` – `edge_coloring_simple`,
  `edge_coloring_ink_trap`, `is_corner` and `estimate_edge_length`.
- `sdfshape.edge_coloring_distance` – `edge_coloring_by_distance` and
  `edge_to_edge_distance`.
- `sdfshape.artifacts` – the tests behind error correction:
  `BaseArtifactClassifier`, `has_linear_artifact`, `has_diagonal_artifact`,
  `edge_between_texels`, `interpolated_median`, `is_artifact`, `median`,
  `mix` and `solve_quadratic`.
- `sdfshape.error_correction` – `MSDFErrorCorrection` and `StencilFlags`.

## Edge segments

`EdgeSegment` is an abstract base class; the package ships no concrete
segment types. A shape is built from your own subclasses, which implement
`point`, `direction`, `signed_distance`, `bound`, `reverse`,
`scanline_intersections` and `split_in_thirds` (and may override
`deconverge`). A straight line could look like this:

```python
from sdfshape.contour import Bounds, Contour, EdgeColor, EdgeSegment
from sdfshape.signed_distance import SignedDistance
from sdfshape.vector2 import Vector2, cross_product, dot_product


class Line(EdgeSegment):
    def __init__(self, p0, p1, color=EdgeColor.WHITE):
        super().__init__(color)
        self.p = [p0, p1]

    def point(self, t):
        return self.p[0] + t * (self.p[1] - self.p[0])

    def direction(self, t):
        return self.p[1] - self.p[0]

    def signed_distance(self, origin):
        p0, p1 = self.p
        aq, ab = origin - p0, p1 - p0
        param = dot_product(aq, ab) / dot_product(ab, ab)
        eq = (p1 if param > 0.5 else p0) - origin
        endpoint = eq.length()
        if 0 < param < 1:
            ortho = dot_product(ab.orthonormal(False), aq)
            if abs(ortho) < endpoint:
                return SignedDistance(ortho, 0), param
        sign = 1 if cross_product(aq, ab) > 0 else -1
        dot = abs(dot_product(ab.normalize(), eq.normalize()))
        return SignedDistance(sign * endpoint, dot), param

    def bound(self, bounds):
        bounds.include(self.p[0])
        bounds.include(self.p[1])

    def reverse(self):
        self.p.reverse()

    def scanline_intersections(self, y):
        p0, p1 = self.p
        if p0.y <= y < p1.y or p1.y <= y < p0.y:
            t = (y - p0.y) / (p1.y - p0.y)
            return [(self.point(t).x, 1 if p1.y > p0.y else -1)]
        return []

    def split_in_thirds(self):
        cuts = (0, 1 / 3, 2 / 3, 1)
        return tuple(
            Line(self.point(a), self.point(b), self.color) for a, b in zip(cuts, cuts[1:])
        )
```

## Example

```python
from sdfshape.edge_coloring import edge_coloring_simple
from sdfshape.projection import Projection
from sdfshape.scanline import FillRule
from sdfshape.shape import Shape
from sdfshape.vector2 import Vector2

corners = [Vector2(0, 0), Vector2(1, 0), Vector2(1, 1), Vector2(0, 1)]
shape = Shape()
square = shape.add_contour()
for a, b in zip(corners, corners[1:] + corners[:1]):
    square.add_edge(Line(a, b))

assert shape.validate()
shape.normalize()
shape.orient_contours()
edge_coloring_simple(shape, 3.0, seed=0)

bounds = shape.get_bounds()          # Bounds(l=0.0, b=0.0, r=1.0, t=1.0)
line = shape.scanline(0.5)
print(line.filled(0.5, FillRule.NONZERO))   # True
print(line.filled(2.0, FillRule.NONZERO))   # False

projection = Projection(Vector2(2, 2), Vector2(0.5, 0.5))
print(projection.project(Vector2(1, 1)))    # Vector2(x=3.0, y=3.0)
```

## Contour combiners

Both combiners take the shape and a factory for edge selectors. A selector
is any object with `reset(p)`, `merge(other)` and `distance()`; distances may
be plain numbers or objects with `r`, `g` and `b` channels, reduced to a
scalar by `resolve_distance` (the median of the channels).
`SimpleContourCombiner` shares one selector across all contours;
`OverlappingContourCombiner` keeps one per contour and uses each contour's
winding to pick the contour that actually borders filled and unfilled area.

## Error correction

`MSDFErrorCorrection(stencil, projection, distance_range,
min_deviation_ratio=..., min_improve_ratio=...)` works on a distance field
stored as a float array of shape `(height, width, channels)` with at least
three channels, indexed by row then column. The stencil is a `(height, width)`
`uint8` array; it is cleared on construction and collects `StencilFlags`
(`ERROR`, `PROTECTED`).

```python
import numpy as np

from sdfshape.error_correction import MSDFErrorCorrection, StencilFlags

sdf = np.zeros((32, 32, 3), dtype=np.float32)   # a computed MSDF
stencil = np.zeros((32, 32), dtype=np.uint8)
corrector = MSDFErrorCorrection(stencil, Projection(Vector2(16), Vector2(0.5)), 0.125)
corrector.protect_corners(shape)   # texels around color-changing corners
corrector.protect_edges(sdf)       # texels whose channels form a nearby edge
corrector.find_errors(sdf)         # flag texels that cause interpolation artifacts
corrector.apply(sdf)               # flagged texels become single-channel, in place
```

`protect_all()` marks every texel as protected, so that only texels causing
fill inversion are flagged.

## What the package does not do

- It has no concrete line or curve segments, no edge selectors and no
  distance field generator: the field passed to error correction must be
  computed elsewhere.
- `find_errors` judges artifacts from the distance field alone; it does not
  compare against the exact distance to the shape, so `min_improve_ratio` is
  stored but not used.
- It reads and writes no font, SVG or image files and has no command-line
  tool.