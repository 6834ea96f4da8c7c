# Core package - scraping collaborators
from .browser import BrowserPool
from .capture import VisualCapturer
from .fetcher import ContentFetcher, build_http_client

__all__ = [
    # Browser pool
    "BrowserPool",
    # Screenshots
    "VisualCapturer",
    # HTML
    "ContentFetcher",
    "build_http_client",
]
