# frame_catalog/delegates/web_scraper_delegate.py
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional

from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Playwright

logger = logging.getLogger(__name__)

class WebScraperDelegate:
    """
    Owns the headless browser for one scrape run.

    The browser and its context are opened once in __aenter__ and closed once in __aexit__;
    every listing page gets its own short-lived Page via open_page().
    """
    def __init__(self, user_agent: str, viewport: Dict, headless: bool = True,
                 navigation_timeout: int = 30000, settle_delay: int = 2000, scroll_delay: int = 1000):
        self.user_agent = user_agent
        self.viewport = viewport
        self.headless = headless
        self.navigation_timeout = navigation_timeout
        self.settle_delay = settle_delay
        self.scroll_delay = scroll_delay
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None

    async def __aenter__(self):
        logger.debug("Starting Playwright and launching browser (headless=%s)...", self.headless)
        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(headless=self.headless)
            self._context = await self._browser.new_context(
                user_agent=self.user_agent,
                viewport=self.viewport,
            )
        except Exception:
            await self.__aexit__(None, None, None)
            raise
        logger.debug("Playwright browser launched and context created.")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        logger.debug("Closing browser context and stopping Playwright...")
        if self._context:
            await self._context.close()
        if self._browser:
            await self._browser.close()
        if self._playwright:
            await self._playwright.stop()
        self._context = self._browser = self._playwright = None
        logger.debug("Playwright resources released.")

    @asynccontextmanager
    async def open_page(self) -> AsyncIterator[Page]:
        """Yields a fresh page and closes it on every exit path."""
        if not self._context:
            raise RuntimeError("Browser context not initialized. Use WebScraperDelegate as 'async with'.")
        page = await self._context.new_page()
        try:
            yield page
        finally:
            await page.close()

    async def load_listing(self, page: Page, url: str) -> None:
        """
        Navigates to a listing page and gives lazy-loaded grids a chance to fill in.

        The waits are fixed, so slow sites can still come back with some items missing.
        Navigation errors and timeouts propagate to the caller.
        """
        logger.debug("Navigating to %s (timeout: %s ms)", url, self.navigation_timeout)
        await page.goto(url, wait_until="domcontentloaded", timeout=self.navigation_timeout)
        await page.wait_for_timeout(self.settle_delay)
        await page.evaluate("() => window.scrollTo(0, document.body.scrollHeight)")
        await page.wait_for_timeout(self.scroll_delay)
