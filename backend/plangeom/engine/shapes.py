"""Shape normalizers — one per ShapeKind.

Each normalizer takes a descriptor in local coordinates plus the composed
matrix and returns a Geometry in document coordinates, or a Rejection.
Point-sequence results go through the simplifier before they are returned.
"""

from __future__ import annotations

import logging
import math

from plangeom.engine.config import EngineConfig
from plangeom.engine.context import ProcessingContext, Rejection
from plangeom.engine.geometry import Circle, Ellipse, Geometry, Line, Path, Polyline, Rect, ShapeKind
from plangeom.engine.matrix import Matrix, Point, transform_point, transform_points
from plangeom.engine.path_parser import PathCommand, parse_and_absolutize, subpath_count
from plangeom.engine.primitives import (
    CircleShape,
    EllipseShape,
    LineShape,
    PathShape,
    PolygonShape,
    PolylineShape,
    RectShape,
    is_positive,
)
from plangeom.engine.registry import normalizer
from plangeom.engine.simplifier import (
    is_single_point_path,
    reduce_points,
    simplify_polygon,
    simplify_polyline,
)
from plangeom.utils.geometry import is_finite_point

logger = logging.getLogger(__name__)


@normalizer(kind=ShapeKind.RECT, description="Rect stays a rect unless rotated or skewed")
def normalize_rect(
    shape: RectShape, matrix: Matrix, context: ProcessingContext, config: EngineConfig
) -> Geometry | Rejection:
    if not is_positive(shape.width, shape.height):
        return Rejection(shape.source_id, f"rect has non-positive size {shape.width}x{shape.height}")

    x0, y0 = shape.x, shape.y
    x1, y1 = shape.x + shape.width, shape.y + shape.height

    if not matrix.has_rotation_or_skew(config.epsilon):
        # Origin follows the transform; extents keep their magnitude under mirroring
        x, y = transform_point((x0, y0), matrix)
        width, height = abs(shape.width * matrix.a), abs(shape.height * matrix.d)
        if not _all_finite(x, y, width, height):
            return _non_finite(shape.source_id, "rect")
        return Rect(x, y, width, height, shape.source_id)

    corners = transform_points([(x0, y0), (x1, y0), (x1, y1), (x0, y1)], matrix)
    if not all(is_finite_point(p) for p in corners):
        return _non_finite(shape.source_id, "rect")
    logger.debug("Rect %s converted to polygon (rotation/skew)", shape.source_id)
    return simplify_polygon(corners, shape.source_id, context, config)


@normalizer(kind=ShapeKind.LINE, description="Two transformed endpoints")
def normalize_line(
    shape: LineShape, matrix: Matrix, context: ProcessingContext, config: EngineConfig
) -> Geometry | Rejection:
    ends = [transform_point((shape.x1, shape.y1), matrix), transform_point((shape.x2, shape.y2), matrix)]
    reduced = reduce_points(ends, config.proximity_threshold)
    if len(reduced) < 2:
        return Rejection(shape.source_id, "line has zero length")

    if context is ProcessingContext.ITINERARY:
        return Polyline(tuple(reduced), shape.source_id)
    (ax, ay), (bx, by) = reduced
    return Line(ax, ay, bx, by, shape.source_id)


@normalizer(kind=ShapeKind.POLYGON, description="Transformed, reduced, sliver-filtered ring")
def normalize_polygon(
    shape: PolygonShape, matrix: Matrix, context: ProcessingContext, config: EngineConfig
) -> Geometry | Rejection:
    if not shape.points:
        return Rejection(shape.source_id, "polygon has no points")
    return simplify_polygon(transform_points(list(shape.points), matrix), shape.source_id, context, config)


@normalizer(kind=ShapeKind.POLYLINE, description="Transformed, reduced open point sequence")
def normalize_polyline(
    shape: PolylineShape, matrix: Matrix, context: ProcessingContext, config: EngineConfig
) -> Geometry | Rejection:
    if not shape.points:
        return Rejection(shape.source_id, "polyline has no points")
    return simplify_polyline(transform_points(list(shape.points), matrix), shape.source_id, config)


@normalizer(kind=ShapeKind.CIRCLE, description="Transformed center, scaled radius")
def normalize_circle(
    shape: CircleShape, matrix: Matrix, context: ProcessingContext, config: EngineConfig
) -> Geometry | Rejection:
    if not is_positive(shape.r):
        return Rejection(shape.source_id, f"circle has non-positive radius {shape.r}")

    cx, cy = transform_point((shape.cx, shape.cy), matrix)
    if matrix.is_uniform_scale(config.epsilon):
        r = shape.r * abs(matrix.a)
    else:
        # Kept as a circle; radius follows the x axis scale
        r = shape.r * matrix.axis_scales()[0]
        logger.debug("Circle %s under non-uniform transform: radius approximated", shape.source_id)
    if not _all_finite(cx, cy, r):
        return _non_finite(shape.source_id, "circle")
    return Circle(cx, cy, r, shape.source_id)


@normalizer(kind=ShapeKind.ELLIPSE, description="Transformed center, per-axis scaled radii")
def normalize_ellipse(
    shape: EllipseShape, matrix: Matrix, context: ProcessingContext, config: EngineConfig
) -> Geometry | Rejection:
    if not is_positive(shape.rx, shape.ry):
        return Rejection(shape.source_id, f"ellipse has non-positive radii {shape.rx},{shape.ry}")

    cx, cy = transform_point((shape.cx, shape.cy), matrix)
    if not matrix.has_rotation_or_skew(config.epsilon):
        rx, ry = shape.rx * abs(matrix.a), shape.ry * abs(matrix.d)
    else:
        sx, sy = matrix.axis_scales()
        rx, ry = shape.rx * sx, shape.ry * sy
        logger.debug("Ellipse %s under rotation/skew: radii approximated", shape.source_id)
    if not _all_finite(cx, cy, rx, ry):
        return _non_finite(shape.source_id, "ellipse")
    return Ellipse(cx, cy, rx, ry, shape.source_id)


@normalizer(kind=ShapeKind.PATH, description="Absolutized path; straight-line paths become polygons")
def normalize_path(
    shape: PathShape, matrix: Matrix, context: ProcessingContext, config: EngineConfig
) -> Geometry | Rejection:
    commands = parse_and_absolutize(shape.d)
    if not commands:
        return Rejection(shape.source_id, "empty or unparseable path data")

    transformed = [transform_command(cmd, matrix, config.epsilon) for cmd in commands]
    if not all(_command_is_finite(cmd) for cmd in transformed):
        return _non_finite(shape.source_id, "path")

    if _is_polygon_candidate(transformed):
        closed = transformed[-1].letter == "Z"
        # A Z before the end draws back to the start, so its end point is a vertex
        body = transformed[:-1] if closed else transformed
        points = [cmd.end for cmd in body]
        if closed:
            return simplify_polygon(points, shape.source_id, context, config)
        return simplify_polyline(points, shape.source_id, config)

    if is_single_point_path(transformed, config.proximity_threshold):
        return Rejection(shape.source_id, "path describes a single point")
    return Path(tuple(transformed), shape.source_id)


def _is_polygon_candidate(commands: list[PathCommand]) -> bool:
    """Straight segments only, one subpath."""
    return all(cmd.letter in ("M", "L", "Z") for cmd in commands) and subpath_count(commands) == 1


def _all_finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def _command_is_finite(cmd: PathCommand) -> bool:
    points = [cmd.origin, cmd.end]
    if cmd.reflected is not None:
        points.append(cmd.reflected)
    return _all_finite(*cmd.params) and all(is_finite_point(p) for p in points)


def _non_finite(source_id: str, what: str) -> Rejection:
    logger.debug("Rejecting %s: non-finite %s coordinates", source_id or "<anonymous>", what)
    return Rejection(source_id, f"{what} has non-finite coordinates")


def transform_command(cmd: PathCommand, matrix: Matrix, eps: float = 1e-9) -> PathCommand:
    """Apply ``matrix`` to every coordinate an absolute command carries.

    H and V become L since their axis may no longer be horizontal/vertical.
    Arc radii follow only uniform scales; other transforms move the endpoint.
    """
    origin = transform_point(cmd.origin, matrix)
    end = transform_point(cmd.end, matrix)
    letter = cmd.letter

    if letter in ("M", "L"):
        return PathCommand(letter, end, origin, end)
    if letter in ("H", "V"):
        return PathCommand("L", end, origin, end)
    if letter == "Z":
        return PathCommand("Z", (), origin, end)
    if letter == "A":
        rx, ry, rotation, large_arc, sweep = cmd.params[:5]
        if matrix.is_uniform_scale(eps):
            rx, ry = rx * abs(matrix.a), ry * abs(matrix.d)
        if matrix.determinant < 0:
            # Mirroring reverses the drawing direction
            sweep = 0.0 if sweep else 1.0
        return PathCommand("A", (rx, ry, rotation, large_arc, sweep, *end), origin, end)

    params: list[float] = []
    for point in cmd.control_points():
        params.extend(transform_point(point, matrix))
    reflected: Point | None = None
    if cmd.reflected is not None:
        reflected = transform_point(cmd.reflected, matrix)
    return PathCommand(letter, tuple(params), origin, end, reflected)
