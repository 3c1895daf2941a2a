"""Output geometry — the tagged union produced by the shape normalizer.

Every variant is a frozen dataclass carrying the ``source_id`` of the node it
came from. ``attributes()`` gives the formatted SVG-style payload.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

from plangeom.engine.matrix import Point
from plangeom.engine.path_parser import PathCommand, encode_path, format_number
from plangeom.utils.geometry import as_array, centroid, polygon_centroid


class ShapeKind(str, enum.Enum):
    RECT = "rect"
    LINE = "line"
    POLYGON = "polygon"
    POLYLINE = "polyline"
    PATH = "path"
    CIRCLE = "circle"
    ELLIPSE = "ellipse"


def format_points(points: tuple[Point, ...], precision: int = 3) -> str:
    return " ".join(f"{format_number(x, precision)},{format_number(y, precision)}" for x, y in points)


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    source_id: str = ""
    kind = ShapeKind.RECT

    @property
    def reference_point(self) -> Point:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def attributes(self, precision: int = 3) -> dict[str, str]:
        return {
            "x": format_number(self.x, precision),
            "y": format_number(self.y, precision),
            "width": format_number(self.width, precision),
            "height": format_number(self.height, precision),
        }


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    source_id: str = ""
    kind = ShapeKind.LINE

    @property
    def points(self) -> tuple[Point, ...]:
        return ((self.x1, self.y1), (self.x2, self.y2))

    @property
    def reference_point(self) -> Point:
        return ((self.x1 + self.x2) / 2, (self.y1 + self.y2) / 2)

    def attributes(self, precision: int = 3) -> dict[str, str]:
        return {
            "x1": format_number(self.x1, precision),
            "y1": format_number(self.y1, precision),
            "x2": format_number(self.x2, precision),
            "y2": format_number(self.y2, precision),
        }


@dataclass(frozen=True)
class Polygon:
    points: tuple[Point, ...]
    source_id: str = ""
    kind = ShapeKind.POLYGON

    @property
    def reference_point(self) -> Point:
        return polygon_centroid(as_array(self.points))

    def attributes(self, precision: int = 3) -> dict[str, str]:
        return {"points": format_points(self.points, precision)}


@dataclass(frozen=True)
class Polyline:
    points: tuple[Point, ...]
    source_id: str = ""
    kind = ShapeKind.POLYLINE

    @property
    def reference_point(self) -> Point:
        return centroid(as_array(self.points))

    def attributes(self, precision: int = 3) -> dict[str, str]:
        return {"points": format_points(self.points, precision)}


@dataclass(frozen=True)
class Path:
    commands: tuple[PathCommand, ...]
    source_id: str = ""
    kind = ShapeKind.PATH

    @property
    def d(self) -> str:
        return encode_path(list(self.commands))

    @property
    def reference_point(self) -> Point:
        ends = [cmd.end for cmd in self.commands if cmd.letter != "Z"]
        return centroid(as_array(ends))

    def attributes(self, precision: int = 3) -> dict[str, str]:
        return {"d": encode_path(list(self.commands), precision)}


@dataclass(frozen=True)
class Circle:
    cx: float
    cy: float
    r: float
    source_id: str = ""
    kind = ShapeKind.CIRCLE

    @property
    def reference_point(self) -> Point:
        return (self.cx, self.cy)

    def attributes(self, precision: int = 3) -> dict[str, str]:
        return {
            "cx": format_number(self.cx, precision),
            "cy": format_number(self.cy, precision),
            "r": format_number(self.r, precision),
        }


@dataclass(frozen=True)
class Ellipse:
    cx: float
    cy: float
    rx: float
    ry: float
    source_id: str = ""
    kind = ShapeKind.ELLIPSE

    @property
    def reference_point(self) -> Point:
        return (self.cx, self.cy)

    def attributes(self, precision: int = 3) -> dict[str, str]:
        return {
            "cx": format_number(self.cx, precision),
            "cy": format_number(self.cy, precision),
            "rx": format_number(self.rx, precision),
            "ry": format_number(self.ry, precision),
        }


Geometry = Union[Rect, Line, Polygon, Polyline, Path, Circle, Ellipse]
