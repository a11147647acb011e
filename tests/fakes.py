"""Test doubles shared by the test modules."""
from contextlib import asynccontextmanager
from typing import List, Optional
from unittest.mock import AsyncMock, MagicMock

import mongomock

from config import Settings
from models.ad_record import AdRecord
from utils.db.report_db import ReportDBManager


def make_report_db(settings: Optional[Settings] = None) -> ReportDBManager:
    return ReportDBManager(settings or Settings(), client=mongomock.MongoClient())


class FakeAIClient:
    def __init__(self, text: Optional[str] = None, exc: Optional[Exception] = None):
        self.text = text
        self.exc = exc
        self.prompts: List[str] = []

    async def generate(self, prompt: str) -> Optional[str]:
        self.prompts.append(prompt)
        if self.exc:
            raise self.exc
        return self.text


class FakeScraper:
    def __init__(self, ads: Optional[List[AdRecord]] = None, exc: Optional[Exception] = None):
        self.ads = ads or []
        self.exc = exc
        self.calls = []

    async def scrape(self, keyword: str, country: str) -> List[AdRecord]:
        self.calls.append((keyword, country))
        if self.exc:
            raise self.exc
        return list(self.ads)

    async def close(self) -> None:
        pass


def make_page(cards=None):
    page = MagicMock()
    page.goto = AsyncMock()
    page.wait_for_selector = AsyncMock()
    page.query_selector = AsyncMock(return_value=None)
    page.wait_for_timeout = AsyncMock()
    page.evaluate = AsyncMock(return_value=cards if cards is not None else [])
    return page


def make_browser(page):
    context = MagicMock()
    context.add_init_script = AsyncMock()
    context.new_page = AsyncMock(return_value=page)
    context.close = AsyncMock()
    browser = MagicMock()
    browser.new_context = AsyncMock(return_value=context)
    return browser, context


class FakePool:
    """Hands out one prepared browser, or raises `exc` on acquire."""

    def __init__(self, browser=None, exc: Optional[Exception] = None):
        self.browser = browser
        self.exc = exc
        self.released = 0
        self.close = AsyncMock()

    @asynccontextmanager
    async def acquire(self):
        if self.exc:
            raise self.exc
        try:
            yield self.browser
        finally:
            self.released += 1


def card(i: int) -> dict:
    return {
        "advertiser": f"Advertiser {i}",
        "adPreviewText": f"Preview {i}",
        "videoSrc": None,
        "poster": None,
        "image": f"https://scontent.example/{i}.jpg",
    }


def mock_openai_client(result=None, exc: Optional[Exception] = None):
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=result, side_effect=exc)
    return client
