"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    normalizers_registered: int = 0


class GeometryOut(BaseModel):
    kind: str
    source_id: str = ""
    attributes: dict[str, str] = Field(default_factory=dict)
    reference_point: tuple[float, float] = (0.0, 0.0)


class RejectionOut(BaseModel):
    source_id: str = ""
    reason: str


class NormalizeResponse(BaseModel):
    geometries: list[GeometryOut] = Field(default_factory=list)
    rejections: list[RejectionOut] = Field(default_factory=list)
    processing_time_ms: float = 0.0
