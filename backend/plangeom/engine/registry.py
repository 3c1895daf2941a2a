"""Normalizer registry — one normalizer function per shape kind, registered via decorator.

Usage:
    @normalizer(kind=ShapeKind.RECT, description="Axis-aligned rect or rotated polygon")
    def normalize_rect(shape, matrix, context, config) -> Geometry | Rejection:
        ...

The engine refuses to run while any ShapeKind has no normalizer, so adding a
kind to the enum without a normalizer fails at startup instead of silently
dropping shapes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from plangeom.engine.geometry import ShapeKind

if TYPE_CHECKING:
    from plangeom.engine.config import EngineConfig
    from plangeom.engine.context import ProcessingContext, Rejection
    from plangeom.engine.geometry import Geometry
    from plangeom.engine.matrix import Matrix

logger = logging.getLogger(__name__)

NormalizerFn = Callable[[Any, "Matrix", "ProcessingContext", "EngineConfig"], "Geometry | Rejection"]


@dataclass
class NormalizerSpec:
    kind: ShapeKind
    fn: NormalizerFn
    description: str = ""


class NormalizerRegistry:
    """Registry of shape normalizers keyed by ShapeKind."""

    def __init__(self) -> None:
        self._normalizers: dict[ShapeKind, NormalizerSpec] = {}

    def register(self, spec: NormalizerSpec) -> None:
        if spec.kind in self._normalizers:
            raise ValueError(f"Duplicate normalizer for kind: {spec.kind.value}")
        self._normalizers[spec.kind] = spec
        logger.debug("Registered normalizer for %s", spec.kind.value)

    def get(self, kind: ShapeKind) -> NormalizerSpec:
        return self._normalizers[kind]

    def all(self) -> list[NormalizerSpec]:
        return [self._normalizers[k] for k in ShapeKind if k in self._normalizers]

    def missing(self) -> set[ShapeKind]:
        return {k for k in ShapeKind if k not in self._normalizers}

    def ensure_complete(self) -> None:
        missing = self.missing()
        if missing:
            names = ", ".join(sorted(k.value for k in missing))
            raise ValueError(f"No normalizer registered for: {names}")

    @property
    def count(self) -> int:
        return len(self._normalizers)


# Module-level singleton
_registry = NormalizerRegistry()


def get_registry() -> NormalizerRegistry:
    return _registry


def normalizer(*, kind: ShapeKind, description: str = "", registry: NormalizerRegistry | None = None):
    """Decorator to register a normalizer function."""

    def decorator(fn: NormalizerFn):
        (registry or _registry).register(NormalizerSpec(kind=kind, fn=fn, description=description))
        return fn

    return decorator
