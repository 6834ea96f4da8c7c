import pytest

from analyzer.pipeline import BrandAuditor
from tests.fakes import FakeCapturer, FakeFetcher, FakeLLM, RecordingSleep, page_html


@pytest.fixture
def pages():
    return {
        "acme.com": page_html("Acme"),
        "rival.com": page_html("Rival"),
        "other.com": page_html("Other"),
    }


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def fake_fetcher(pages):
    return FakeFetcher(pages)


@pytest.fixture
def fake_capturer():
    return FakeCapturer()


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def auditor(fake_fetcher, fake_capturer, fake_llm, recording_sleep):
    return BrandAuditor(
        fetcher=fake_fetcher,
        capturer=fake_capturer,
        llm=fake_llm,
        call_delay=0.5,
        comparator_delay=1.0,
        sleep=recording_sleep,
    )
