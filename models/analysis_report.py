# models/analysis_report.py

from datetime import datetime, timezone
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from models.ad_record import AdRecord


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AnalysisReport(BaseModel):
    """Document persisted once per /analyze call. `aiAnalysis` is stored exactly as the AI returned it."""
    productTitle: str = Field(min_length=1)
    targetCountry: str = Field(min_length=1)
    keywords: List[str] = Field(min_length=1)
    imageUrl: Optional[str] = None
    adsData: List[AdRecord] = Field(default_factory=list)
    aiAnalysis: Optional[Dict[str, Any]] = None
    createdAt: datetime = Field(default_factory=_utcnow)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump()
