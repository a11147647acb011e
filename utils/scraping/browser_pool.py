# utils/scraping/browser_pool.py
from __future__ import annotations
import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, List, Optional

from loguru import logger
from playwright.async_api import Browser, Playwright, async_playwright

BrowserLauncher = Callable[[Playwright], Awaitable[Browser]]


class BrowserPool:
    """
    Bounded pool of headless browsers.

    - At most `max_browsers` are checked out at the same time; extra callers wait.
    - A browser is reused only if the block that used it finished cleanly and it is still connected.
    - Callers isolate their work in a fresh browser context.
    """

    def __init__(self, launcher: BrowserLauncher, max_browsers: int = 2):
        if max_browsers < 1:
            raise ValueError("max_browsers must be >= 1")
        self._launcher = launcher
        self.max_browsers = max_browsers
        self._semaphore = asyncio.Semaphore(max_browsers)
        self._start_lock = asyncio.Lock()
        self._idle: List[Browser] = []
        self._playwright: Optional[Playwright] = None
        self._closed = False

    async def _ensure_playwright(self) -> Playwright:
        async with self._start_lock:
            if self._playwright is None:
                self._playwright = await async_playwright().start()
                logger.debug("Playwright driver started")
            return self._playwright

    async def _checkout(self) -> Browser:
        while self._idle:
            browser = self._idle.pop()
            if browser.is_connected():
                return browser
        playwright = await self._ensure_playwright()
        browser = await self._launcher(playwright)
        logger.debug("Launched new browser instance")
        return browser

    async def _checkin(self, browser: Browser, healthy: bool) -> None:
        if healthy and not self._closed and browser.is_connected():
            self._idle.append(browser)
            return
        try:
            await browser.close()
        except Exception as e:
            logger.debug(f"Browser close failed: {e}")

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[Browser]:
        if self._closed:
            raise RuntimeError("BrowserPool is closed")
        async with self._semaphore:
            # close() may have run while this caller was queued
            if self._closed:
                raise RuntimeError("BrowserPool is closed")
            browser = await self._checkout()
            healthy = False
            try:
                yield browser
                healthy = True
            finally:
                await self._checkin(browser, healthy)

    @property
    def idle_count(self) -> int:
        return len(self._idle)

    async def close(self) -> None:
        self._closed = True
        while self._idle:
            await self._checkin(self._idle.pop(), healthy=False)
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
            logger.debug("Playwright driver stopped")
