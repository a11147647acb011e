# ===== routers/history_router.py =====

from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from loguru import logger

from routers.dependencies import get_analysis_service
from services.analysis_service import AnalysisService

router = APIRouter(prefix="/history", tags=["History"])


@router.get("")
def list_history(service: AnalysisService = Depends(get_analysis_service)):
    try:
        return JSONResponse(content=jsonable_encoder(service.list_history()), status_code=200)
    except Exception as e:
        logger.exception(f"History fetch error: {e}")
        return JSONResponse(content={"error": "Failed to fetch history"}, status_code=500)


@router.get("/{report_id}")
def get_report(report_id: str, service: AnalysisService = Depends(get_analysis_service)):
    try:
        report = service.get_report(report_id)
    except Exception as e:
        logger.exception(f"Report fetch error: {e}")
        return JSONResponse(content={"error": "Failed to fetch report"}, status_code=500)

    if report is None:
        return JSONResponse(content={"error": "Report not found"}, status_code=404)
    return JSONResponse(content=jsonable_encoder(report), status_code=200)
