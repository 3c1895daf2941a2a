"""PlanGeom geometry transformation & simplification engine."""

from plangeom.engine.config import EngineConfig
from plangeom.engine.context import ProcessingContext, Rejection
from plangeom.engine.geometry import Circle, Ellipse, Geometry, Line, Path, Polygon, Polyline, Rect, ShapeKind
from plangeom.engine.matrix import Matrix, identity, multiply, transform_point
from plangeom.engine.pipeline import GeometryEngine, create_engine
from plangeom.engine.registry import get_registry, normalizer

# Registers the built-in normalizers
import plangeom.engine.shapes  # noqa: E402,F401

__all__ = [
    "EngineConfig",
    "ProcessingContext",
    "Rejection",
    "ShapeKind",
    "Geometry",
    "Rect",
    "Line",
    "Polygon",
    "Polyline",
    "Path",
    "Circle",
    "Ellipse",
    "Matrix",
    "identity",
    "multiply",
    "transform_point",
    "GeometryEngine",
    "create_engine",
    "get_registry",
    "normalizer",
]
