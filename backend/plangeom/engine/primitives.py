"""Primitive shape descriptors extracted from document nodes.

A descriptor holds a node's geometry in local (untransformed) coordinates.
``describe`` reads it from the node's attributes, or returns a Rejection when
the node is not a supported primitive or an attribute is not a number.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from plangeom.engine.context import Rejection
from plangeom.engine.geometry import ShapeKind
from plangeom.engine.matrix import Point

if TYPE_CHECKING:
    from plangeom.svg.document import SvgNode

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
# Leading number with an optional unit suffix ("12.5px")
_LENGTH_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*(?:px)?\s*$")


@dataclass(frozen=True)
class RectShape:
    x: float
    y: float
    width: float
    height: float
    source_id: str = ""
    kind = ShapeKind.RECT


@dataclass(frozen=True)
class LineShape:
    x1: float
    y1: float
    x2: float
    y2: float
    source_id: str = ""
    kind = ShapeKind.LINE


@dataclass(frozen=True)
class PolygonShape:
    points: tuple[Point, ...]
    source_id: str = ""
    kind = ShapeKind.POLYGON


@dataclass(frozen=True)
class PolylineShape:
    points: tuple[Point, ...]
    source_id: str = ""
    kind = ShapeKind.POLYLINE


@dataclass(frozen=True)
class PathShape:
    d: str
    source_id: str = ""
    kind = ShapeKind.PATH


@dataclass(frozen=True)
class CircleShape:
    cx: float
    cy: float
    r: float
    source_id: str = ""
    kind = ShapeKind.CIRCLE


@dataclass(frozen=True)
class EllipseShape:
    cx: float
    cy: float
    rx: float
    ry: float
    source_id: str = ""
    kind = ShapeKind.ELLIPSE


Primitive = Union[RectShape, LineShape, PolygonShape, PolylineShape, PathShape, CircleShape, EllipseShape]


class _InvalidAttribute(ValueError):
    pass


def parse_length(value: str | None, default: float = 0.0) -> float:
    """Numeric attribute value; missing means ``default``."""
    if value is None or not value.strip():
        return default
    match = _LENGTH_RE.match(value)
    if not match:
        raise _InvalidAttribute(f"not a number: {value!r}")
    return float(match.group(1))


def parse_points(text: str | None) -> tuple[Point, ...]:
    """Coordinate pairs from a ``points`` attribute; an odd trailing value is dropped."""
    if not text:
        return ()
    values = [float(tok) for tok in _NUMBER_RE.findall(text)]
    if len(values) % 2:
        logger.warning("Odd number of coordinates in points list; dropping last value")
        values = values[:-1]
    return tuple((values[i], values[i + 1]) for i in range(0, len(values), 2))


def _lengths(node: SvgNode, *names: str) -> list[float]:
    return [parse_length(node.get(name)) for name in names]


def describe(node: SvgNode) -> Primitive | Rejection:
    """Primitive descriptor for a drawable node."""
    source_id = node.get("id") or ""
    try:
        kind = ShapeKind(node.tag)
    except ValueError:
        return Rejection(source_id, f"unsupported element <{node.tag}>")

    try:
        if kind is ShapeKind.RECT:
            x, y, width, height = _lengths(node, "x", "y", "width", "height")
            return RectShape(x, y, width, height, source_id)
        if kind is ShapeKind.LINE:
            x1, y1, x2, y2 = _lengths(node, "x1", "y1", "x2", "y2")
            return LineShape(x1, y1, x2, y2, source_id)
        if kind is ShapeKind.POLYGON:
            return PolygonShape(parse_points(node.get("points")), source_id)
        if kind is ShapeKind.POLYLINE:
            return PolylineShape(parse_points(node.get("points")), source_id)
        if kind is ShapeKind.PATH:
            # Inkscape keeps the pre-effect outline here
            d = node.get("inkscape:original-d") or node.get("d") or ""
            return PathShape(d, source_id)
        if kind is ShapeKind.CIRCLE:
            cx, cy, r = _lengths(node, "cx", "cy", "r")
            return CircleShape(cx, cy, r, source_id)
        if kind is ShapeKind.ELLIPSE:
            cx, cy, rx, ry = _lengths(node, "cx", "cy", "rx", "ry")
            return EllipseShape(cx, cy, rx, ry, source_id)
    except _InvalidAttribute as e:
        logger.warning("Invalid attribute on <%s id=%r>: %s", node.tag, source_id, e)
        return Rejection(source_id, f"invalid attribute: {e}")

    raise AssertionError(f"Unhandled shape kind: {kind}")


def is_positive(*values: float) -> bool:
    return all(math.isfinite(v) and v > 0 for v in values)
