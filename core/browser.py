"""
Browser pool manager for Brand Audit
Shares one Playwright Chromium instance, bounded by a semaphore, across captures
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from playwright.async_api import async_playwright, Browser, Page

from config import settings

logger = logging.getLogger(__name__)


class BrowserPool:
    """
    Lazily launches a headless browser and hands out fresh pages.

    At most ``pool_size`` pages are open at once; every page lives in its
    own context so cookies never leak between captures.
    """

    def __init__(
        self,
        pool_size: int = settings.BROWSER_POOL_SIZE,
        launch_timeout: int = settings.BROWSER_LAUNCH_TIMEOUT,
        user_agent: str = settings.USER_AGENT,
    ):
        self.pool_size = pool_size
        self.launch_timeout = launch_timeout
        self.user_agent = user_agent

        self.playwright = None
        self.browser: Optional[Browser] = None
        self.semaphore = asyncio.Semaphore(pool_size)
        self._lock = asyncio.Lock()

    async def initialize(self):
        """Launch the browser if it is not running"""
        if self.browser is not None and self.browser.is_connected():
            return

        async with self._lock:
            if self.browser is not None and self.browser.is_connected():
                return

            try:
                logger.info("🚀 Launching headless browser...")
                if self.playwright is None:
                    self.playwright = await async_playwright().start()
                self.browser = await asyncio.wait_for(
                    self._create_browser(), timeout=self.launch_timeout
                )
                logger.info("✅ Browser launched")
            except Exception as e:
                logger.error(f"❌ Failed to launch browser: {str(e)}")
                await self.cleanup()
                raise

    async def _create_browser(self) -> Browser:
        """Create a new browser instance with container-friendly settings"""
        return await self.playwright.chromium.launch(
            headless=True,
            args=[
                "--disable-blink-features=AutomationControlled",
                "--disable-dev-shm-usage",  # Prevents memory issues in Docker
                "--no-sandbox",
                "--disable-setuid-sandbox",
                "--disable-gpu",
            ],
        )

    @asynccontextmanager
    async def page(self, width: int, height: int):
        """
        Yield a new page with the given viewport; closes it (and its context) on exit.
        """
        async with self.semaphore:
            await self.initialize()
            context = await self.browser.new_context(
                viewport={"width": width, "height": height},
                user_agent=self.user_agent,
            )
            try:
                page: Page = await context.new_page()
                yield page
            finally:
                try:
                    await context.close()
                except Exception as e:
                    logger.warning(f"⚠️  Error closing browser context: {str(e)}")

    async def cleanup(self):
        """Close the browser and stop Playwright"""
        if self.browser is not None:
            try:
                await self.browser.close()
            except Exception as e:
                logger.warning(f"⚠️  Error closing browser: {str(e)}")
            self.browser = None

        if self.playwright is not None:
            try:
                await self.playwright.stop()
            except Exception as e:
                logger.warning(f"⚠️  Error stopping Playwright: {str(e)}")
            self.playwright = None
