"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from plangeom import __version__
from plangeom.engine import get_registry
from plangeom.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        normalizers_registered=get_registry().count,
    )
