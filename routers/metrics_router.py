# routers/metrics_router.py
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from loguru import logger

from routers.dependencies import get_analysis_service
from services.analysis_service import AnalysisService

router = APIRouter(tags=["Metrics"])


@router.get("/dashboard-metrics")
def dashboard_metrics(service: AnalysisService = Depends(get_analysis_service)):
    try:
        return service.dashboard_metrics()
    except Exception as e:
        logger.exception(f"Dashboard metrics error: {e}")
        return JSONResponse(content={"error": "Failed to fetch dashboard metrics"}, status_code=500)
