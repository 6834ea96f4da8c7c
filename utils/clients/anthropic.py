"""
Anthropic API client utilities for Brand Audit.

This module wraps the Claude API behind one narrow capability,
``send_prompt(text, images) -> text``, and provides the pacer that keeps
consecutive calls of one audit a fixed interval apart.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, List, Optional

import anthropic

from config import get_anthropic_api_key, get_anthropic_model

logger = logging.getLogger(__name__)


def build_anthropic_client(api_key: Optional[str] = None) -> anthropic.AsyncAnthropic:
    """Create the process-wide async Anthropic client."""
    return anthropic.AsyncAnthropic(api_key=api_key or get_anthropic_api_key() or None)


class LLMClient:
    """
    Sends a single user message (images, then text) and returns the reply text.

    Holds no per-call state, so one instance is shared by every audit.
    """

    def __init__(self, client: anthropic.AsyncAnthropic, model: Optional[str] = None):
        self.client = client
        self.model = model or get_anthropic_model()

    async def send_prompt(
        self,
        text: str,
        images: Optional[List[Optional[str]]] = None,
        max_tokens: int = 300,
    ) -> str:
        """
        Args:
            text: Prompt text
            images: Base64-encoded JPEG screenshots; None entries are skipped
            max_tokens: Reply token limit

        Returns:
            Concatenated text blocks of the reply

        Raises:
            anthropic.APIError: On any API failure (handled by the caller)
        """
        content = []

        for image in images or []:
            if not image:
                continue
            content.append({
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": "image/jpeg",
                    "data": image,
                },
            })

        content.append({"type": "text", "text": text})

        message = await self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens,
            messages=[
                {
                    "role": "user",
                    "content": content,
                }
            ],
        )

        return "".join(
            block.text for block in message.content if getattr(block, "type", None) == "text"
        )


class CallPacer:
    """
    Keeps consecutive LLM calls at least ``interval`` seconds apart.

    ``wait`` sleeps only for whatever part of the interval has not already
    elapsed since the previous ``mark``; the first call never waits.
    """

    def __init__(
        self,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._sleep = sleep
        self._clock = clock
        self._last_call: Optional[float] = None

    async def wait(self, interval: float):
        if self._last_call is None or interval <= 0:
            return
        remaining = interval - (self._clock() - self._last_call)
        if remaining > 0:
            await self._sleep(remaining)

    def mark(self):
        self._last_call = self._clock()
