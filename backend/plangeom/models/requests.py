"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from plangeom.engine.context import ProcessingContext


class CalibrationRequest(BaseModel):
    source: tuple[float, float, float, float] = Field(..., description="Source rect (x, y, width, height)")
    target: tuple[float, float, float, float] = Field(..., description="Target rect (x, y, width, height)")


class NormalizeRequest(BaseModel):
    svg: str = Field(..., description="Raw SVG code")
    context: ProcessingContext = Field(
        default=ProcessingContext.DEFAULT,
        description="Layer the shapes belong to (default, itinerary, furniture)",
    )
    calibration: CalibrationRequest | None = Field(
        default=None,
        description="Optional root calibration applied on top of the document transforms",
    )
