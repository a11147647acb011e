# ===== main.py =====
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from loguru import logger

from config import load_settings
from routers.analyze_router import router as analyze_router
from routers.health_router import router as health_router
from routers.history_router import router as history_router
from routers.metrics_router import router as metrics_router
from services.ai_client import AIClient
from services.analysis_service import AnalysisService
from utils.db.report_db import ReportDBManager
from utils.logging_setup import configure_logging
from utils.scraping.ad_library_scraper import build_scraper

settings = load_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)

    report_db = ReportDBManager(settings)
    if report_db.ping():
        logger.info("MongoDB connected")
    else:
        logger.error("MongoDB unreachable at startup; /health will report it as disconnected")

    scraper = build_scraper(settings)
    app.state.analysis_service = AnalysisService(
        report_db=report_db,
        ai_client=AIClient(settings),
        scraper=scraper,
    )
    logger.info(f"Server ready on port {settings.port} (scraper backend: {settings.scraper_backend})")
    try:
        yield
    finally:
        await scraper.close()
        report_db.close()


app = FastAPI(title="Cubelytics Backend API", version="1.0", lifespan=lifespan)

# CORS open to any origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(analyze_router, prefix=settings.api_prefix)
app.include_router(history_router, prefix=settings.api_prefix)
app.include_router(metrics_router, prefix=settings.api_prefix)
app.include_router(health_router)


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "Cubelytics Backend API"


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.port)
