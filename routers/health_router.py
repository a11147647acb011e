# routers/health_router.py
from fastapi import APIRouter, Depends

from routers.dependencies import get_analysis_service
from services.analysis_service import AnalysisService

router = APIRouter(tags=["Health"])


@router.get("/health")
def health(service: AnalysisService = Depends(get_analysis_service)):
    return service.health()
