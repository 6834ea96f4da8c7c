"""
HTML fetcher for Brand Audit.

Best effort: one GET, then one retry on the www. host, then give up.
"""

import logging
from typing import Optional
from urllib.parse import urlsplit

import httpx

from config import settings
from utils.urls import normalize_url, with_www

logger = logging.getLogger(__name__)


def build_http_client() -> httpx.AsyncClient:
    """Create the process-wide HTTP client used for page fetches."""
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=settings.FETCH_TIMEOUT,
        headers={
            "User-Agent": settings.USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        },
    )


class ContentFetcher:
    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def _get(self, url: str) -> str:
        # Any status is a response; only transport failures raise
        response = await self.client.get(url)
        return response.text

    async def fetch(self, url: str) -> Optional[str]:
        """
        Fetch raw HTML for ``url``. Never raises.

        Returns:
            The response body, or None when both attempts failed
        """
        url = normalize_url(url)
        try:
            return await self._get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as error:
            if urlsplit(url).netloc.startswith("www."):
                logger.warning(f"⚠️  Error fetching {url}: {error}")
                return None

            fallback = with_www(url)
            try:
                return await self._get(fallback)
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                logger.warning(f"⚠️  Error fetching {url} (and {fallback}): {error}; {e}")
                return None
