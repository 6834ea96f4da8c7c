"""
Tests for the Claude boundary (LLMClient) and the call pacer.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from config import settings
from utils.clients.anthropic import CallPacer, LLMClient


def _client(*blocks):
    create = AsyncMock(return_value=SimpleNamespace(content=list(blocks)))
    return SimpleNamespace(messages=SimpleNamespace(create=create)), create


class TestLLMClient:
    @pytest.mark.asyncio
    async def test_images_precede_text(self):
        client, create = _client(SimpleNamespace(type="text", text='{"ok": true}'))

        reply = await LLMClient(client, model="test-model").send_prompt(
            "describe", images=["AAA", None, "BBB"], max_tokens=500
        )

        assert reply == '{"ok": true}'
        kwargs = create.await_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["max_tokens"] == 500
        content = kwargs["messages"][0]["content"]
        assert [block["type"] for block in content] == ["image", "image", "text"]
        assert content[0]["source"] == {"type": "base64", "media_type": "image/jpeg", "data": "AAA"}
        assert content[1]["source"]["data"] == "BBB"
        assert content[2] == {"type": "text", "text": "describe"}

    @pytest.mark.asyncio
    async def test_text_only_prompt(self):
        client, create = _client(SimpleNamespace(type="text", text="hi"))

        await LLMClient(client).send_prompt("hello")

        kwargs = create.await_args.kwargs
        assert kwargs["model"] == settings.ANTHROPIC_MODEL
        assert kwargs["max_tokens"] == 300
        assert kwargs["messages"] == [{"role": "user", "content": [{"type": "text", "text": "hello"}]}]

    @pytest.mark.asyncio
    async def test_joins_text_blocks_only(self):
        client, _ = _client(
            SimpleNamespace(type="text", text='{"a": '),
            SimpleNamespace(type="thinking", thinking="..."),
            SimpleNamespace(type="text", text="1}"),
        )

        assert await LLMClient(client).send_prompt("x") == '{"a": 1}'

    @pytest.mark.asyncio
    async def test_api_errors_propagate(self):
        client, create = _client()
        create.side_effect = RuntimeError("down")

        with pytest.raises(RuntimeError):
            await LLMClient(client).send_prompt("x")


class FakeClock:
    def __init__(self):
        self.now = 100.0
        self.sleeps = []

    def __call__(self):
        return self.now

    async def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class TestCallPacer:
    @pytest.mark.asyncio
    async def test_first_call_never_waits(self):
        clock = FakeClock()
        pacer = CallPacer(sleep=clock.sleep, clock=clock)

        await pacer.wait(0.5)

        assert clock.sleeps == []

    @pytest.mark.asyncio
    async def test_sleeps_only_the_remaining_interval(self):
        clock = FakeClock()
        pacer = CallPacer(sleep=clock.sleep, clock=clock)
        pacer.mark()

        clock.now += 0.2
        await pacer.wait(0.5)

        assert clock.sleeps == [pytest.approx(0.3)]

    @pytest.mark.asyncio
    async def test_no_sleep_when_interval_already_elapsed(self):
        clock = FakeClock()
        pacer = CallPacer(sleep=clock.sleep, clock=clock)
        pacer.mark()

        clock.now += 2.0
        await pacer.wait(1.0)

        assert clock.sleeps == []

    @pytest.mark.asyncio
    async def test_consecutive_calls_are_spaced(self):
        clock = FakeClock()
        pacer = CallPacer(sleep=clock.sleep, clock=clock)
        starts = []

        for interval in (0.5, 0.5, 1.0, 0.5):
            await pacer.wait(interval)
            starts.append(clock.now)
            pacer.mark()

        gaps = [b - a for a, b in zip(starts, starts[1:])]
        assert gaps == [pytest.approx(0.5), pytest.approx(1.0), pytest.approx(0.5)]

    @pytest.mark.asyncio
    async def test_zero_interval_disables_pacing(self):
        clock = FakeClock()
        pacer = CallPacer(sleep=clock.sleep, clock=clock)
        pacer.mark()

        await pacer.wait(0)

        assert clock.sleeps == []
