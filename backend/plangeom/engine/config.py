"""Engine configuration — numeric constants for simplification and validity."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EngineConfig:
    """Constants shared by the normalizer and the simplifier."""

    # Chebyshev distance under which two consecutive points are merged
    proximity_threshold: float = 0.4

    # Polygons with area / perimeter below this are slivers
    min_area_perimeter_ratio: float = 0.2

    # Matrix coefficients below this count as zero (rotation/skew detection)
    epsilon: float = 1e-9

    # Decimal places for emitted coordinates
    precision: int = 3

    # Minimum point counts after reduction
    min_polygon_points: int = 3
    min_closed_polyline_points: int = 2
    min_polyline_points: int = 2


DEFAULT_CONFIG = EngineConfig()
