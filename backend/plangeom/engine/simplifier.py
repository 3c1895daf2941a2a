"""Point simplifier & validity filter.

Runs after the shape normalizer on every point-sequence candidate:

1. proximity reduction (Chebyshev distance, threshold 0.4)
2. closing-point removal (polygons outside itinerary/furniture layers)
3. minimum point count
4. area/perimeter sliver filter (polygons outside itinerary/furniture layers)
5. itinerary/furniture polygons become explicitly closed polylines

A candidate that fails any check becomes a Rejection.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from plangeom.engine.config import DEFAULT_CONFIG, EngineConfig
from plangeom.engine.context import ProcessingContext, Rejection
from plangeom.engine.geometry import Polygon, Polyline
from plangeom.engine.matrix import Point
from plangeom.engine.path_parser import PathCommand
from plangeom.utils.geometry import as_array, is_finite_point, polygon_area, polygon_perimeter, within

logger = logging.getLogger(__name__)


def reduce_points(points: Iterable[Point], threshold: float = DEFAULT_CONFIG.proximity_threshold) -> list[Point]:
    """Keep a point only if it moves more than ``threshold`` on some axis.

    Distance is measured against the last kept point. Non-finite points are
    dropped. Applying this twice gives the same result as applying it once.
    """
    kept: list[Point] = []
    for p in points:
        if not is_finite_point(p):
            continue
        if not kept or not within(p, kept[-1], threshold):
            kept.append(p)
    return kept


def drop_closing_point(points: list[Point], threshold: float = DEFAULT_CONFIG.proximity_threshold) -> list[Point]:
    """Remove a trailing point that duplicates the start of the ring."""
    if len(points) >= 2 and within(points[-1], points[0], threshold):
        return points[:-1]
    return points


def close_ring(points: list[Point], threshold: float = DEFAULT_CONFIG.proximity_threshold) -> list[Point]:
    """Append a copy of the first point unless the ring is already closed."""
    if points and not within(points[-1], points[0], threshold):
        return [*points, points[0]]
    return points


def area_and_perimeter(points: list[Point]) -> tuple[float, float]:
    """(area, perimeter) of the implicitly closed ring."""
    arr = as_array(points)
    return polygon_area(arr), polygon_perimeter(arr, closed=True)


def simplify_polygon(
    points: Iterable[Point],
    source_id: str = "",
    context: ProcessingContext = ProcessingContext.DEFAULT,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Polygon | Polyline | Rejection:
    """Validate a closed point sequence.

    In itinerary/furniture layers the result is a closed Polyline; elsewhere a
    Polygon that passed the sliver filter.
    """
    threshold = config.proximity_threshold
    reduced = reduce_points(points, threshold)

    if context.keeps_closed_polylines:
        if len(reduced) < config.min_closed_polyline_points:
            return _reject(source_id, f"too few points ({len(reduced)}) for closed polyline")
        return Polyline(tuple(close_ring(reduced, threshold)), source_id)

    reduced = drop_closing_point(reduced, threshold)
    if len(reduced) < config.min_polygon_points:
        return _reject(source_id, f"too few points ({len(reduced)} < {config.min_polygon_points}) for polygon")

    area, perimeter = area_and_perimeter(reduced)
    if perimeter == 0:
        return _reject(source_id, "polygon perimeter is zero")
    ratio = area / perimeter
    if ratio < config.min_area_perimeter_ratio:
        return _reject(
            source_id,
            f"area/perimeter ratio too small ({ratio:.4f} < {config.min_area_perimeter_ratio})",
        )
    return Polygon(tuple(reduced), source_id)


def simplify_polyline(
    points: Iterable[Point],
    source_id: str = "",
    config: EngineConfig = DEFAULT_CONFIG,
) -> Polyline | Rejection:
    """Validate an open point sequence."""
    reduced = reduce_points(points, config.proximity_threshold)
    if len(reduced) < config.min_polyline_points:
        return _reject(source_id, f"too few points ({len(reduced)}) for polyline")
    return Polyline(tuple(reduced), source_id)


def is_single_point_path(commands: list[PathCommand], threshold: float = DEFAULT_CONFIG.proximity_threshold) -> bool:
    """True when every coordinate of the path stays near its first moveto."""
    if not commands:
        return True
    first = commands[0].end
    for cmd in commands:
        for point in cmd.control_points():
            if not within(point, first, threshold):
                return False
    return True


def _reject(source_id: str, reason: str) -> Rejection:
    logger.debug("Rejecting %s: %s", source_id or "<anonymous>", reason)
    return Rejection(source_id, reason)
