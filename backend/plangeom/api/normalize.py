"""POST /api/normalize — normalize every drawable shape of an SVG document."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends, HTTPException

from plangeom.config import Settings
from plangeom.dependencies import get_engine, get_settings
from plangeom.engine import GeometryEngine, Rejection, create_engine
from plangeom.engine.transform_parser import calibration_matrix
from plangeom.models.requests import NormalizeRequest
from plangeom.models.responses import GeometryOut, NormalizeResponse, RejectionOut
from plangeom.svg.document import SvgParseError, parse_svg_document

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/normalize", response_model=NormalizeResponse)
def normalize(
    request: NormalizeRequest,
    engine: GeometryEngine = Depends(get_engine),
    settings: Settings = Depends(get_settings),
) -> NormalizeResponse:
    start = time.perf_counter()

    try:
        root = parse_svg_document(request.svg)
    except SvgParseError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    if request.calibration is not None:
        try:
            root_matrix = calibration_matrix(request.calibration.source, request.calibration.target)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e)) from e
        engine = create_engine(config=engine.config, root_matrix=root_matrix)

    results = engine.normalize_document(root, request.context, settings.engine_max_workers)
    precision = engine.config.precision

    response = NormalizeResponse()
    for result in results:
        if isinstance(result, Rejection):
            response.rejections.append(RejectionOut(source_id=result.source_id, reason=result.reason))
            continue
        x, y = result.reference_point
        response.geometries.append(
            GeometryOut(
                kind=result.kind.value,
                source_id=result.source_id,
                attributes=result.attributes(precision),
                reference_point=(round(x, precision), round(y, precision)),
            )
        )

    response.processing_time_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "Normalize request: %d geometries, %d rejections",
        len(response.geometries),
        len(response.rejections),
    )
    return response
