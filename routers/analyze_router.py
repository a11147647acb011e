# ===== routers/analyze_router.py =====
from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import ValidationError

from models.analyze_request import AnalyzeRequest
from routers.dependencies import get_analysis_service
from services.analysis_service import AnalysisService

router = APIRouter(tags=["Analyze"])

MISSING_FIELDS = {"error": "Missing required fields"}


def _parse_request(payload: Any):
    # Empty body, non-object body or wrongly typed fields all count as missing input
    if not isinstance(payload, dict):
        return None
    try:
        return AnalyzeRequest.model_validate(payload)
    except ValidationError as e:
        logger.info(f"Rejected /analyze request, invalid fields: {e.error_count()}")
        return None


@router.post("/analyze")
async def analyze(payload: Any = Body(None), service: AnalysisService = Depends(get_analysis_service)):
    request = _parse_request(payload)
    if request is None:
        return JSONResponse(content=MISSING_FIELDS, status_code=400)

    missing = request.missing_fields()
    if missing:
        logger.info(f"Rejected /analyze request, missing: {', '.join(missing)}")
        return JSONResponse(content=MISSING_FIELDS, status_code=400)

    try:
        result = await service.run_analysis(request)
        return JSONResponse(content=jsonable_encoder(result), status_code=200)
    except Exception as e:
        logger.exception(f"Analysis error: {e}")
        return JSONResponse(
            content={"error": "Internal server error", "details": str(e)},
            status_code=500,
        )
