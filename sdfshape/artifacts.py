"""Detection of interpolation artifacts between texels of a multi-channel distance field."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol, Sequence

from .contour import EdgeColor

__all__ = [
    "ARTIFACT_T_EPSILON",
    "CLASSIFIER_FLAG_CANDIDATE",
    "CLASSIFIER_FLAG_ARTIFACT",
    "ArtifactClassifier",
    "BaseArtifactClassifier",
    "median",
    "mix",
    "solve_quadratic",
    "edge_between_texels",
    "interpolated_median",
    "is_artifact",
    "has_linear_artifact",
    "has_diagonal_artifact",
]

ARTIFACT_T_EPSILON = 0.01
CLASSIFIER_FLAG_CANDIDATE = 0x01
CLASSIFIER_FLAG_ARTIFACT = 0x02

Texel = Sequence[float]


def median(a: float, b: float, c: float) -> float:
    """Return the median of three values."""
    return max(min(a, b), min(max(a, b), c))


def mix(a: float, b: float, t: float) -> float:
    """Linearly interpolate between ``a`` and ``b``."""
    return (1 - t) * a + t * b


def solve_quadratic(a: float, b: float, c: float) -> list[float]:
    """Return the real roots of a*x^2 + b*x + c = 0.

    Falls back to the linear equation when ``a`` is negligible; a fully
    degenerate equation yields no roots.
    """
    if a == 0 or abs(b) > 1e12 * abs(a):
        if b == 0:
            return []
        return [-c / b]
    discriminant = b * b - 4 * a * c
    if discriminant > 0:
        root = math.sqrt(discriminant)
        return [(-b + root) / (2 * a), (-b - root) / (2 * a)]
    if discriminant == 0:
        return [-b / (2 * a)]
    return []


class ArtifactClassifier(Protocol):
    """Decides whether an interpolated median indicates an artifact."""

    def range_test(self, at: float, bt: float, xt: float, am: float, bm: float, xm: float) -> int: ...

    def evaluate(self, t: float, m: float, flags: int) -> bool: ...


@dataclass(frozen=True)
class BaseArtifactClassifier:
    """Recognizes artifacts from the contents of the distance field alone."""

    span: float
    protected: bool

    def range_test(self, at: float, bt: float, xt: float, am: float, bm: float, xm: float) -> int:
        """Return classifier flags for median ``xm`` at ``xt`` between ``am`` at ``at`` and ``bm`` at ``bt``."""
        if (
            (am > 0.5 and bm > 0.5 and xm <= 0.5)
            or (am < 0.5 and bm < 0.5 and xm >= 0.5)
            or (not self.protected and median(am, bm, xm) != xm)
        ):
            ax_span = (xt - at) * self.span
            bx_span = (bt - xt) * self.span
            if not (am - ax_span <= xm <= am + ax_span and bm - bx_span <= xm <= bm + bx_span):
                return CLASSIFIER_FLAG_CANDIDATE | CLASSIFIER_FLAG_ARTIFACT
            return CLASSIFIER_FLAG_CANDIDATE
        return 0

    def evaluate(self, t: float, m: float, flags: int) -> bool:
        """Return whether the combined flags indicate an artifact."""
        return bool(flags & CLASSIFIER_FLAG_ARTIFACT)


def _edge_between_texels_channel(a: Texel, b: Texel, channel: int) -> bool:
    denominator = a[channel] - b[channel]
    if denominator == 0:
        return False
    t = (a[channel] - 0.5) / denominator
    if 0 < t < 1:
        c = [mix(a[k], b[k], t) for k in range(3)]
        return median(*c) == c[channel]
    return False


def edge_between_texels(a: Texel, b: Texel) -> EdgeColor:
    """Return the channels that contribute to an edge between texels ``a`` and ``b``."""
    mask = EdgeColor.BLACK
    for channel, color in enumerate((EdgeColor.RED, EdgeColor.GREEN, EdgeColor.BLUE)):
        if _edge_between_texels_channel(a, b, channel):
            mask |= color
    return mask


def interpolated_median(a: Texel, b: Texel, t: float) -> float:
    """Return the median of the linear interpolation of texels ``a`` and ``b`` at ``t``."""
    return median(mix(a[0], b[0], t), mix(a[1], b[1], t), mix(a[2], b[2], t))


def _quadratic_median(a: Texel, l: Texel, q: Texel, t: float) -> float:
    return median(*(t * (t * q[k] + l[k]) + a[k] for k in range(3)))


def is_artifact(
    is_protected: bool, ax_span: float, bx_span: float, am: float, bm: float, xm: float
) -> bool:
    """Return whether the interpolated median ``xm`` is an artifact."""
    return (
        not is_protected
        or (am > 0.5 and bm > 0.5 and xm <= 0.5)
        or (am < 0.5 and bm < 0.5 and xm >= 0.5)
    ) and not (am - ax_span <= xm <= am + ax_span and bm - bx_span <= xm <= bm + bx_span)


def _has_linear_artifact_inner(
    classifier: ArtifactClassifier, am: float, bm: float, a: Texel, b: Texel, da: float, db: float
) -> bool:
    if da == db:
        return False
    t = da / (da - db)
    if ARTIFACT_T_EPSILON < t < 1 - ARTIFACT_T_EPSILON:
        xm = interpolated_median(a, b, t)
        return classifier.evaluate(t, xm, classifier.range_test(0, 1, t, am, bm, xm))
    return False


def _has_diagonal_artifact_inner(
    classifier: ArtifactClassifier,
    am: float,
    dm: float,
    a: Texel,
    l: Texel,
    q: Texel,
    da: float,
    dbc: float,
    dd: float,
    t_ex0: float,
    t_ex1: float,
) -> bool:
    for t in solve_quadratic(dd - dbc + da, dbc - da - da, da):
        if not ARTIFACT_T_EPSILON < t < 1 - ARTIFACT_T_EPSILON:
            continue
        xm = _quadratic_median(a, l, q, t)
        flags = classifier.range_test(0, 1, t, am, dm, xm)
        for t_ex in (t_ex0, t_ex1):
            if 0 < t_ex < 1:
                t_end = [0.0, 1.0]
                t_end[int(t_ex > t)] = t_ex
                flags |= classifier.range_test(t_end[0], t_end[1], t, am, dm, xm)
        if classifier.evaluate(t, xm, flags):
            return True
    return False


def has_linear_artifact(classifier: ArtifactClassifier, am: float, a: Texel, b: Texel) -> bool:
    """Return whether interpolating adjacent texels ``a`` (median ``am``) and ``b`` shows an artifact.

    Only the texel further from the edge is reported.
    """
    bm = median(b[0], b[1], b[2])
    return abs(am - 0.5) >= abs(bm - 0.5) and (
        _has_linear_artifact_inner(classifier, am, bm, a, b, a[1] - a[0], b[1] - b[0])
        or _has_linear_artifact_inner(classifier, am, bm, a, b, a[2] - a[1], b[2] - b[1])
        or _has_linear_artifact_inner(classifier, am, bm, a, b, a[0] - a[2], b[0] - b[2])
    )


def _vertex_t(l: float, q: float) -> float:
    if q == 0:
        return math.nan
    return -0.5 * l / q


def has_diagonal_artifact(
    classifier: ArtifactClassifier, am: float, a: Texel, b: Texel, c: Texel, d: Texel
) -> bool:
    """Return whether bilinear interpolation between diagonal texels ``a`` and ``d``
    (with ``b``, ``c`` on the other diagonal) shows an artifact."""
    dm = median(d[0], d[1], d[2])
    if abs(am - 0.5) < abs(dm - 0.5):
        return False
    abc = [a[k] - b[k] - c[k] for k in range(3)]
    l = [-a[k] - abc[k] for k in range(3)]
    q = [d[k] + abc[k] for k in range(3)]
    t_ex = [_vertex_t(l[k], q[k]) for k in range(3)]
    return (
        _has_diagonal_artifact_inner(
            classifier, am, dm, a, l, q,
            a[1] - a[0], b[1] - b[0] + c[1] - c[0], d[1] - d[0], t_ex[0], t_ex[1],
        )
        or _has_diagonal_artifact_inner(
            classifier, am, dm, a, l, q,
            a[2] - a[1], b[2] - b[1] + c[2] - c[1], d[2] - d[1], t_ex[1], t_ex[2],
        )
        or _has_diagonal_artifact_inner(
            classifier, am, dm, a, l, q,
            a[0] - a[2], b[0] - b[2] + c[0] - c[2], d[0] - d[2], t_ex[2], t_ex[0],
        )
    )