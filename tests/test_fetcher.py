"""
Tests for ContentFetcher: normalization, single www. fallback, never raising.
"""

import httpx
import pytest

from core.fetcher import ContentFetcher
from utils.urls import normalize_url, with_www


def _fetcher(handler):
    seen = []

    def recording(request: httpx.Request):
        seen.append(request.url)
        return handler(request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(recording))
    return ContentFetcher(client), seen


def _fail(request):
    raise httpx.ConnectError("connection refused", request=request)


class TestNormalizeUrl:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("example.com", "https://example.com"),
            ("  example.com/about  ", "https://example.com/about"),
            ("http://example.com", "http://example.com"),
            ("https://www.example.com", "https://www.example.com"),
            ("", "https://"),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_url(raw) == expected

    def test_with_www(self):
        assert with_www("https://example.com/a://b") == "https://www.example.com/a://b"


class TestFetch:
    @pytest.mark.asyncio
    async def test_bare_domain_fetched_over_https(self):
        fetcher, seen = _fetcher(lambda request: httpx.Response(200, text="<html>ok</html>"))

        html = await fetcher.fetch("example.com")

        assert html == "<html>ok</html>"
        assert len(seen) == 1
        assert seen[0].scheme == "https"
        assert seen[0].host == "example.com"

    @pytest.mark.asyncio
    async def test_error_status_is_not_a_failure(self):
        fetcher, seen = _fetcher(lambda request: httpx.Response(404, text="not found"))

        assert await fetcher.fetch("https://example.com") == "not found"
        assert len(seen) == 1

    @pytest.mark.asyncio
    async def test_falls_back_to_www_once(self):
        def handler(request):
            if request.url.host == "www.example.com":
                return httpx.Response(200, text="from www")
            return _fail(request)

        fetcher, seen = _fetcher(handler)

        assert await fetcher.fetch("example.com") == "from www"
        assert [u.host for u in seen] == ["example.com", "www.example.com"]

    @pytest.mark.asyncio
    async def test_both_attempts_fail_returns_none(self):
        fetcher, seen = _fetcher(_fail)

        assert await fetcher.fetch("example.com") is None
        assert len(seen) == 2

    @pytest.mark.asyncio
    async def test_www_url_gets_no_second_attempt(self):
        fetcher, seen = _fetcher(_fail)

        assert await fetcher.fetch("https://www.example.com") is None
        assert len(seen) == 1

    @pytest.mark.asyncio
    async def test_timeout_returns_none(self):
        def handler(request):
            raise httpx.ReadTimeout("too slow", request=request)

        fetcher, _ = _fetcher(handler)

        assert await fetcher.fetch("slow.example") is None

    @pytest.mark.asyncio
    async def test_malformed_url_returns_none(self):
        fetcher, seen = _fetcher(lambda request: httpx.Response(200, text="unreachable"))

        assert await fetcher.fetch("https://exa mple.com:notaport") is None

    @pytest.mark.asyncio
    async def test_www_elsewhere_in_url_still_gets_fallback(self):
        def handler(request):
            if request.url.host == "www.a.com":
                return httpx.Response(200, text="from www")
            return _fail(request)

        fetcher, seen = _fetcher(handler)

        assert await fetcher.fetch("https://a.com/?next=https://www.b.com") == "from www"
        assert [u.host for u in seen] == ["a.com", "www.a.com"]
