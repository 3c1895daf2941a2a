"""FastAPI dependency injection."""

from __future__ import annotations

from plangeom.config import Settings, settings
from plangeom.engine import GeometryEngine, create_engine

_engine: GeometryEngine | None = None


def get_settings() -> Settings:
    return settings


def get_engine() -> GeometryEngine:
    """Shared engine without a root calibration."""
    global _engine
    if _engine is None:
        _engine = create_engine()
    return _engine
