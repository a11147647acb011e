# routers/dependencies.py
from fastapi import Request

from services.analysis_service import AnalysisService


def get_analysis_service(request: Request) -> AnalysisService:
    # Built once in main.lifespan
    return request.app.state.analysis_service
