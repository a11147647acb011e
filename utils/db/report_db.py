# ===== utils/db/report_db.py =====

from typing import Any, Dict, List, Optional

from bson import ObjectId
from loguru import logger
from pymongo import DESCENDING, MongoClient
from pymongo.errors import PyMongoError

from config import Settings
from models.analysis_report import AnalysisReport

COLLECTION_NAME = "analysisreports"

SUMMARY_PROJECTION = {
    "productTitle": 1,
    "targetCountry": 1,
    "createdAt": 1,
    "aiAnalysis": 1,
}


class ReportDBManager:
    """Insert-only store of AnalysisReport documents (no update or delete)."""

    def __init__(self, settings: Settings, client: Optional[MongoClient] = None):
        if client is None:
            client = MongoClient(
                settings.mongodb_uri,
                serverSelectionTimeoutMS=5000,
                socketTimeoutMS=45000,
                tz_aware=True,
            )
        self.client = client
        self.db = self.client[settings.mongodb_db]
        self.collection = self.db[COLLECTION_NAME]

    def save(self, report: AnalysisReport) -> str:
        """Inserts the report and returns the generated id as a hex string."""
        result = self.collection.insert_one(report.to_document())
        return str(result.inserted_id)

    def list_recent(self, limit: int = 10) -> List[Dict[str, Any]]:
        cursor = (
            self.collection.find({}, SUMMARY_PROJECTION)
            .sort([("createdAt", DESCENDING), ("_id", DESCENDING)])
            .limit(limit)
        )
        return list(cursor)

    def get_by_id(self, report_id: str) -> Optional[Dict[str, Any]]:
        if not ObjectId.is_valid(report_id):
            return None
        return self.collection.find_one({"_id": ObjectId(report_id)})

    def count_reports(self) -> int:
        return self.collection.count_documents({})

    def count_markets(self) -> int:
        return len(self.collection.distinct("targetCountry"))

    def count_ads(self) -> int:
        result = list(self.collection.aggregate([
            {"$group": {"_id": None, "n": {"$sum": {"$size": {"$ifNull": ["$adsData", []]}}}}},
        ]))
        return int(result[0]["n"]) if result else 0

    def ping(self) -> bool:
        try:
            self.client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.warning(f"MongoDB ping failed: {e}")
            return False

    def close(self) -> None:
        self.client.close()
