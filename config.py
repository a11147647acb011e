# config.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import os

from dotenv import load_dotenv


def _as_bool(value: Optional[str], default: bool) -> bool:
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    # AI provider (Gemini via its OpenAI-compatible endpoint)
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.0-flash"
    ai_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    ai_timeout: float = 50.0
    ai_json_mode: bool = True

    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "cubelytics"

    # HTTP
    port: int = 4000
    api_prefix: str = ""

    # Scraper
    scraper_backend: str = "chromium"  # "chromium" | "chrome"
    chrome_executable_path: Optional[str] = None
    max_browsers: int = 2
    scrape_max_attempts: int = 3
    scrape_retry_delay: float = 2.0

    log_level: str = "INFO"


def load_settings() -> Settings:
    """Reads .env + process environment once; the result is passed explicitly to every component."""
    load_dotenv()
    return Settings(
        gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
        gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.0-flash"),
        ai_base_url=os.getenv("AI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta/openai/"),
        ai_timeout=float(os.getenv("AI_TIMEOUT", "50")),
        ai_json_mode=_as_bool(os.getenv("AI_JSON_MODE"), True),
        mongodb_uri=os.getenv("MONGODB_URI", "mongodb://localhost:27017"),
        mongodb_db=os.getenv("MONGODB_DB", "cubelytics"),
        port=int(os.getenv("PORT", "4000")),
        api_prefix=os.getenv("API_PREFIX", "").rstrip("/"),
        scraper_backend=os.getenv("SCRAPER_BACKEND", "chromium").strip().lower(),
        chrome_executable_path=os.getenv("CHROME_EXECUTABLE_PATH") or None,
        max_browsers=int(os.getenv("MAX_BROWSERS", "2")),
        scrape_max_attempts=int(os.getenv("SCRAPE_MAX_ATTEMPTS", "3")),
        scrape_retry_delay=float(os.getenv("SCRAPE_RETRY_DELAY", "2")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
