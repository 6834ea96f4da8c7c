"""
Screenshot capture for Brand Audit.

Captures the above-the-fold view of a website and of a Google results page
for a company name. Every failure resolves to None.
"""

import logging
from typing import Optional
from urllib.parse import quote_plus

from config import settings
from core.browser import BrowserPool
from utils.images.processor import encode_screenshot
from utils.urls import normalize_url

logger = logging.getLogger(__name__)

SEARCH_URL = "https://www.google.com/search?q={query}"


class VisualCapturer:
    def __init__(self, pool: BrowserPool, enabled: bool = True):
        self.pool = pool
        self.enabled = enabled

    async def _screenshot(self, url: str, width: int, height: int, settle_ms: int) -> Optional[str]:
        if not self.enabled:
            return None

        try:
            async with self.pool.page(width, height) as page:
                await page.goto(url, wait_until="networkidle", timeout=settings.PAGE_LOAD_TIMEOUT)
                # Let animations and lazy loading finish
                await page.wait_for_timeout(settle_ms)
                raw = await page.screenshot(type="jpeg", quality=settings.SCREENSHOT_QUALITY)
            return encode_screenshot(
                raw,
                max_dimension=settings.MAX_SCREENSHOT_DIMENSION,
                quality=settings.SCREENSHOT_QUALITY,
            )
        except Exception as e:
            logger.warning(f"⚠️  Error screenshotting {url}: {str(e)}")
            return None

    async def capture_site(self, url: str) -> Optional[str]:
        """Base64 JPEG of the site's first viewport, or None."""
        return await self._screenshot(
            normalize_url(url),
            settings.SITE_VIEWPORT_WIDTH,
            settings.SITE_VIEWPORT_HEIGHT,
            settings.SITE_SETTLE_MS,
        )

    async def capture_search(self, company_name: str) -> Optional[str]:
        """Base64 JPEG of the search results page for the company name, or None."""
        return await self._screenshot(
            SEARCH_URL.format(query=quote_plus(company_name)),
            settings.SEARCH_VIEWPORT_WIDTH,
            settings.SEARCH_VIEWPORT_HEIGHT,
            settings.SEARCH_SETTLE_MS,
        )
