"""Processing context and per-node result types."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ProcessingContext(str, enum.Enum):
    """Layer the geometry belongs to."""

    DEFAULT = "default"
    # Routes: closed shapes become explicit closed polylines
    ITINERARY = "itinerary"
    # Furniture layer: same closed-polyline representation as itineraries
    FURNITURE = "furniture"

    @property
    def keeps_closed_polylines(self) -> bool:
        return self is not ProcessingContext.DEFAULT


@dataclass(frozen=True)
class Rejection:
    """Explicit 'no output' for a node, with a reason for diagnostics."""

    source_id: str
    reason: str

    def __bool__(self) -> bool:
        return False
