"""
LLM-backed inference stages for Brand Audit

Every stage builds a prompt, calls the LLM once and parses the JSON object
embedded in the reply. Failed calls, unparseable replies and replies of the
wrong shape become None (or a sentinel, where noted).
"""

import logging
from typing import List, Optional, Type, TypeVar

import anthropic
from pydantic import BaseModel, ValidationError

from config import settings
from models import (
    ComparisonResult,
    CompetitorSuggestion,
    CompetitorSuggestions,
    FirstImpression,
    MessagingInference,
    StructuredContent,
    Takeaways,
    VisualInference,
)
from analyzer.prompts import (
    format_brand_summary,
    get_comparison_prompt,
    get_competitor_prompt,
    get_first_impression_prompt,
    get_messaging_prompt,
    get_takeaways_prompt,
    get_visuals_prompt,
)
from utils.parsing.json import JSONReply, parse_json_reply

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class InferenceStages:
    """
    The six LLM-backed analyzers.

    ``llm`` is anything with ``async send_prompt(text, images, max_tokens) -> str``.
    """

    def __init__(self, llm):
        self.llm = llm

    async def _ask(self, stage: str, prompt: str, images=None, max_tokens: int = 300) -> JSONReply:
        try:
            reply = await self.llm.send_prompt(prompt, images=images, max_tokens=max_tokens)
        except anthropic.APIError as e:
            logger.error(f"❌ {stage}: Anthropic API failure: {str(e)}")
            return JSONReply.empty()
        except Exception as e:
            logger.error(f"❌ {stage}: LLM call failed: {type(e).__name__}: {str(e)}")
            return JSONReply.empty()
        return parse_json_reply(reply)

    @staticmethod
    def _to_model(stage: str, reply: JSONReply, model: Type[T]) -> Optional[T]:
        if not reply.ok:
            logger.warning(f"⚠️  {stage}: no usable JSON in reply")
            return None
        try:
            return model.model_validate(reply.data)
        except ValidationError as e:
            logger.warning(f"⚠️  {stage}: reply has unexpected shape: {e.error_count()} error(s)")
            return None

    async def suggest_competitors(self, company_name: str, content: StructuredContent) -> List[CompetitorSuggestion]:
        """Up to 3 LLM-suggested competitors; empty list when nothing usable came back."""
        reply = await self._ask(
            "Competitor suggestion",
            get_competitor_prompt(company_name, content),
            max_tokens=settings.SUGGEST_MAX_TOKENS,
        )
        suggestions = self._to_model("Competitor suggestion", reply, CompetitorSuggestions)
        return suggestions.competitors if suggestions else []

    async def extract_messaging(self, company_name: str, content: StructuredContent) -> Optional[MessagingInference]:
        reply = await self._ask(
            f"Messaging ({company_name})",
            get_messaging_prompt(company_name, content),
            max_tokens=settings.MESSAGING_MAX_TOKENS,
        )
        return self._to_model(f"Messaging ({company_name})", reply, MessagingInference)

    async def extract_visuals(
        self, company_name: str, screenshot: Optional[str], content: Optional[StructuredContent] = None
    ) -> VisualInference:
        """
        Visual identity from the site screenshot.

        Without a screenshot the LLM is not called and the "Could not capture"
        sentinel is returned; an unusable reply gives the "Unknown" sentinel.
        """
        if not screenshot:
            return VisualInference.could_not_capture()

        reply = await self._ask(
            f"Visuals ({company_name})",
            get_visuals_prompt(company_name, content or StructuredContent()),
            images=[screenshot],
            max_tokens=settings.VISUALS_MAX_TOKENS,
        )
        return self._to_model(f"Visuals ({company_name})", reply, VisualInference) or VisualInference.unknown()

    async def analyze_first_impression(
        self,
        company_name: str,
        meta_title: str,
        meta_description: str,
        site_screenshot: Optional[str] = None,
        search_screenshot: Optional[str] = None,
    ) -> Optional[FirstImpression]:
        reply = await self._ask(
            f"First impression ({company_name})",
            get_first_impression_prompt(company_name, meta_title, meta_description),
            images=[search_screenshot, site_screenshot],
            max_tokens=settings.FIRST_IMPRESSION_MAX_TOKENS,
        )
        return self._to_model(f"First impression ({company_name})", reply, FirstImpression)

    async def compare_brands(self, company_name: str, brands) -> Optional[ComparisonResult]:
        """
        One holistic comparison across every brand.

        Args:
            company_name: Focal company
            brands: (name, MessagingInference, VisualInference) tuples, focal company first
        """
        summaries = [format_brand_summary(name, messaging, visuals) for name, messaging, visuals in brands]
        reply = await self._ask(
            "Comparison",
            get_comparison_prompt(company_name, summaries),
            max_tokens=settings.COMPARISON_MAX_TOKENS,
        )
        return self._to_model("Comparison", reply, ComparisonResult)

    async def generate_takeaways(
        self,
        company_name: str,
        messaging: MessagingInference,
        visuals: VisualInference,
        first_impression: FirstImpression,
        competitor_lines: List[str],
        comparison: ComparisonResult,
    ) -> Takeaways:
        """Prescriptive advice; empty lists when the reply is unusable."""
        reply = await self._ask(
            "Takeaways",
            get_takeaways_prompt(company_name, messaging, visuals, first_impression, competitor_lines, comparison),
            max_tokens=settings.TAKEAWAYS_MAX_TOKENS,
        )
        return self._to_model("Takeaways", reply, Takeaways) or Takeaways()
