"""
Meta Ad Library scraper.

Opens the public search-results page for a keyword/country pair and reads up to
MAX_ADS ad cards (advertiser, preview text, video, image) through CSS selectors.
The selectors match Facebook's generated class names and break whenever the page
markup changes; a broken selector shows up as an empty result, never as an error.
"""
from __future__ import annotations
import sys
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from loguru import logger
from playwright.async_api import Browser, Page, Playwright
from playwright.async_api import Error as PlaywrightError
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_fixed

from config import Settings
from models.ad_record import AdRecord
from utils.scraping.browser_pool import BrowserPool

AD_LIBRARY_BASE = "https://www.facebook.com/ads/library/"
MAX_ADS = 10

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/98.0.4758.102 Safari/537.36"
)
VIEWPORT = {"width": 1366, "height": 900}

# Selectors (Facebook atomic CSS classes)
CARD_SELECTOR = ".x1plvlek"
ADVERTISER_SELECTOR = ".x8t9es0.x1fvot60.xxio538.x108nfp6.xq9mrsl.x1h4wwuj.x117nqv4.xeuugli"
PREVIEW_TEXT_SELECTOR = ".x8t9es0.xw23nyj.xo1l8bm.x63nzvj.x108nfp6.xq9mrsl.x1h4wwuj.xeuugli span"
COOKIE_BUTTON_SELECTOR = 'button[data-cookiebanner="accept_button"]'

# Timeouts (ms)
NAVIGATION_TIMEOUT = 40_000
FIRST_CARD_TIMEOUT = 10_000
RESULTS_TIMEOUT = 15_000
COOKIE_SETTLE_MS = 1_000

STEALTH_ARGS = ["--disable-blink-features=AutomationControlled"]
STEALTH_INIT_SCRIPT = "Object.defineProperty(navigator, 'webdriver', { get: () => undefined });"

JS_EXTRACT_ADS = """
(opts) => {
    const cards = Array.from(document.querySelectorAll(opts.card)).slice(0, opts.limit);
    return cards.map(card => {
        const advertiser = card.querySelector(opts.advertiser);
        const preview = card.querySelector(opts.preview);
        const video = card.querySelector('video');
        const img = card.querySelector('img');
        return {
            advertiser: advertiser ? advertiser.innerText : 'Unknown',
            adPreviewText: preview ? preview.innerText : null,
            videoSrc: video ? (video.src || null) : null,
            poster: video ? (video.poster || null) : null,
            image: img ? (img.src || null) : null,
        };
    });
}
"""


def build_ad_library_url(keyword: str, country: str) -> str:
    return (
        f"{AD_LIBRARY_BASE}?active_status=all&ad_type=all"
        f"&country={quote(country, safe='')}&q={quote(keyword, safe='')}"
    )


class AdLibraryScraper:
    """Backend-independent scraping flow; subclasses only decide how a browser is launched."""

    backend_name = "base"

    def __init__(self, settings: Settings, pool: Optional[BrowserPool] = None):
        self.settings = settings
        self.max_attempts = max(1, settings.scrape_max_attempts)
        self.retry_delay = settings.scrape_retry_delay
        self.pool = pool or BrowserPool(self.launch_browser, settings.max_browsers)

    async def launch_browser(self, playwright: Playwright) -> Browser:
        raise NotImplementedError

    async def scrape(self, keyword: str, country: str) -> List[AdRecord]:
        """Never raises: any failure (launch, navigation, missing selectors) gives []."""
        url = build_ad_library_url(keyword, country)
        logger.info(f"Scraping ad library [{self.backend_name}]: {url}")
        try:
            async with self.pool.acquire() as browser:
                context = await browser.new_context(
                    user_agent=USER_AGENT,
                    viewport=VIEWPORT,
                    java_script_enabled=True,
                    ignore_https_errors=True,
                )
                try:
                    await context.add_init_script(STEALTH_INIT_SCRIPT)
                    page = await context.new_page()
                    await self._navigate(page, url)
                    await self._dismiss_cookie_banner(page)
                    await page.wait_for_selector(CARD_SELECTOR, timeout=RESULTS_TIMEOUT)
                    ads = await self._extract_ads(page)
                finally:
                    await context.close()
        except Exception as e:
            logger.error(f"Ad library scrape failed for '{keyword}' ({country}): {e}")
            return []

        logger.info(f"Scraped {len(ads)} ads for '{keyword}' ({country})")
        return ads

    async def _navigate(self, page: Page, url: str) -> None:
        """goto + first-card wait, retried with a fixed delay; the last error is re-raised."""
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_fixed(self.retry_delay),
            retry=retry_if_exception_type(PlaywrightError),
            before_sleep=lambda state: logger.warning(
                f"Navigation attempt {state.attempt_number}/{self.max_attempts} failed: {state.outcome.exception()}"
            ),
            reraise=True,
        ):
            with attempt:
                await page.goto(url, wait_until="domcontentloaded", timeout=NAVIGATION_TIMEOUT)
                await page.wait_for_selector(CARD_SELECTOR, timeout=FIRST_CARD_TIMEOUT)

    async def _dismiss_cookie_banner(self, page: Page) -> None:
        try:
            button = await page.query_selector(COOKIE_BUTTON_SELECTOR)
            if button:
                await button.click()
                await page.wait_for_timeout(COOKIE_SETTLE_MS)
                logger.debug("Cookie banner dismissed")
        except PlaywrightError as e:
            logger.debug(f"Cookie banner not found or could not be clicked: {e}")

    async def _extract_ads(self, page: Page) -> List[AdRecord]:
        raw: List[Dict[str, Any]] = await page.evaluate(JS_EXTRACT_ADS, {
            "card": CARD_SELECTOR,
            "advertiser": ADVERTISER_SELECTOR,
            "preview": PREVIEW_TEXT_SELECTOR,
            "limit": MAX_ADS,
        }) or []
        return [AdRecord(**item) for item in raw[:MAX_ADS]]

    async def close(self) -> None:
        await self.pool.close()


class BundledChromiumScraper(AdLibraryScraper):
    """Playwright's bundled Chromium with flags for constrained/serverless hosts."""

    backend_name = "chromium"
    launch_args = STEALTH_ARGS + [
        "--no-sandbox",
        "--disable-dev-shm-usage",
        "--disable-gpu",
        "--single-process",
        "--no-zygote",
    ]

    async def launch_browser(self, playwright: Playwright) -> Browser:
        return await playwright.chromium.launch(headless=True, args=self.launch_args)


def default_chrome_path(platform: str = sys.platform) -> str:
    if platform == "win32":
        return r"C:\Program Files\Google\Chrome\Application\chrome.exe"
    if platform == "darwin":
        return "/Applications/Google Chrome.app/Contents/MacOS/Google Chrome"
    return "/usr/bin/google-chrome"


class LocalChromeScraper(AdLibraryScraper):
    """A locally installed Chrome (CHROME_EXECUTABLE_PATH or the platform default)."""

    backend_name = "chrome"

    @property
    def executable_path(self) -> str:
        return self.settings.chrome_executable_path or default_chrome_path()

    async def launch_browser(self, playwright: Playwright) -> Browser:
        return await playwright.chromium.launch(
            headless=True,
            executable_path=self.executable_path,
            args=STEALTH_ARGS,
        )


SCRAPER_BACKENDS = {
    BundledChromiumScraper.backend_name: BundledChromiumScraper,
    LocalChromeScraper.backend_name: LocalChromeScraper,
}


def build_scraper(settings: Settings, pool: Optional[BrowserPool] = None) -> AdLibraryScraper:
    backend = SCRAPER_BACKENDS.get(settings.scraper_backend)
    if backend is None:
        raise ValueError(
            f"Unknown SCRAPER_BACKEND '{settings.scraper_backend}' (expected one of {sorted(SCRAPER_BACKENDS)})"
        )
    return backend(settings, pool=pool)
