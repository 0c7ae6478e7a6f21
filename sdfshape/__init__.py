"""Vector shapes, scanlines, edge coloring, contour combiners and MSDF error correction."""

__version__ = "0.1.0"

__all__ = [
    "vector2",
    "projection",
    "signed_distance",
    "scanline",
    "contour",
    "shape",
    "contour_combiners",
    "edge_coloring",
    "edge_coloring_distance",
    "artifacts",
    "error_correction",
]