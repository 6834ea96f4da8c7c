"""
Brand audit pipeline

Sequences collection, extraction and inference for one focal company plus
its competitors and assembles the AuditReport.

Collection (fetch + screenshots) runs concurrently for every brand. LLM calls
run strictly one after another, paced by CallPacer, focal company first.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from config import settings
from models import (
    AuditReport,
    AuditRequest,
    BrandProfile,
    Chart,
    ChartRow,
    ComparisonResult,
    CompetitorSuggestion,
    FirstImpression,
    FirstImpressionEntry,
    MessagingInference,
    Screenshot,
    StructuredContent,
    VisualInference,
)
from analyzer.extractor import BRIEF_TEXT_LIMIT, FULL_TEXT_LIMIT, extract_structured_content
from analyzer.prompts import format_competitor_line
from analyzer.stages import InferenceStages
from utils.clients.anthropic import CallPacer
from utils.urls import normalize_url

logger = logging.getLogger(__name__)

EMPTY_CELL = "—"


class AuditError(Exception):
    """Base class for errors surfaced to the caller as {"error": message}"""


class AuditInputError(AuditError):
    """Raised when required request fields are missing; no external calls were made"""


class AuditFailedError(AuditError):
    """Raised when a stage every later stage depends on produced nothing usable"""


@dataclass
class BrandData:
    """Everything collected and inferred for one brand during one audit."""

    profile: BrandProfile
    content: StructuredContent = field(default_factory=StructuredContent)
    screenshot: Optional[str] = None
    search_screenshot: Optional[str] = None
    messaging: Optional[MessagingInference] = None
    visuals: Optional[VisualInference] = None
    first_impression: Optional[FirstImpression] = None

    @property
    def name(self) -> str:
        return self.profile.name


def format_voice(messaging: Optional[MessagingInference]) -> str:
    """'adjective, adjective — summary' for the chart."""
    if messaging is None:
        return EMPTY_CELL
    adjectives = ", ".join(messaging.voice_adjectives)
    summary = messaging.voice_summary
    if adjectives:
        return f"{adjectives} — {summary}" if summary else adjectives
    return summary or EMPTY_CELL


def format_visual(visuals: Optional[VisualInference]) -> str:
    if visuals is None:
        return EMPTY_CELL
    parts = [visuals.colors, visuals.typography, visuals.visual_style]
    return " · ".join(p for p in parts if p) or EMPTY_CELL


def build_chart(brands: List[BrandData]) -> Chart:
    """Rows are categories, columns are brand names (focal company first)."""
    return Chart(
        columns=["Category"] + [b.name for b in brands],
        rows=[
            ChartRow(
                category="Positioning",
                values=[(b.messaging.positioning if b.messaging else "") or EMPTY_CELL for b in brands],
            ),
            ChartRow(category="Voice", values=[format_voice(b.messaging) for b in brands]),
            ChartRow(category="Visual Style", values=[format_visual(b.visuals) for b in brands]),
        ],
    )


class BrandAuditor:
    """
    Runs competitor suggestion and full audits against injected collaborators.

    Args:
        fetcher: ``async fetch(url) -> str | None``
        capturer: ``async capture_site(url)`` / ``async capture_search(name)`` -> base64 | None,
                  or None to skip screenshots entirely
        llm: ``async send_prompt(text, images, max_tokens) -> str``
        call_delay: Minimum seconds between LLM calls
        comparator_delay: Minimum seconds before the comparator call
        sleep: Awaitable sleep used for pacing (injectable for tests)
    """

    def __init__(
        self,
        fetcher,
        capturer,
        llm,
        call_delay: float = settings.LLM_CALL_DELAY,
        comparator_delay: float = settings.COMPARATOR_DELAY,
        sleep=asyncio.sleep,
    ):
        self.fetcher = fetcher
        self.capturer = capturer
        self.stages = InferenceStages(llm)
        self.call_delay = call_delay
        self.comparator_delay = comparator_delay
        self.sleep = sleep

    # ======================
    # Competitor suggestion
    # ======================

    async def suggest_competitors(self, company_name: str, company_url: str) -> List[CompetitorSuggestion]:
        company_name = (company_name or "").strip()
        company_url = (company_url or "").strip()
        if not company_name or not company_url:
            raise AuditInputError("Missing company URL or name")

        logger.info(f"🔍 Finding competitors for: {company_name}")
        html = await self.fetcher.fetch(company_url)
        content = extract_structured_content(html, text_limit=BRIEF_TEXT_LIMIT)
        competitors = await self.stages.suggest_competitors(company_name, content)
        logger.info(f"✅ Suggested competitors: {[c.name for c in competitors]}")
        return competitors

    # ======================
    # Full audit
    # ======================

    @staticmethod
    def _profiles(request: AuditRequest) -> List[BrandProfile]:
        company_name = request.company_name.strip()
        company_url = request.company_url.strip()
        competitors = [
            BrandProfile(name=c.name.strip(), url=c.url.strip()) for c in request.competitors
        ]
        if (
            not company_name
            or not company_url
            or not competitors
            or any(not c.name or not c.url for c in competitors)
        ):
            raise AuditInputError("Missing required fields")

        profiles = [BrandProfile(name=company_name, url=company_url)] + competitors
        names = [p.name for p in profiles]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            # Report maps are keyed by brand name; later entries overwrite earlier ones
            logger.warning(f"⚠️  Duplicate brand names in audit: {duplicates}")
        return profiles

    async def _collect(self, profile: BrandProfile) -> BrandData:
        async def no_capture():
            return None

        if self.capturer is not None:
            site = self.capturer.capture_site(profile.url)
            search = self.capturer.capture_search(profile.name)
        else:
            site, search = no_capture(), no_capture()

        html, screenshot, search_screenshot = await asyncio.gather(
            self.fetcher.fetch(profile.url), site, search
        )
        if html is None:
            logger.warning(f"⚠️  No HTML for {profile.name} ({profile.url})")

        return BrandData(
            profile=profile,
            content=extract_structured_content(html, text_limit=FULL_TEXT_LIMIT),
            screenshot=screenshot,
            search_screenshot=search_screenshot,
        )

    async def _paced(self, pacer: CallPacer, interval: float, call):
        await pacer.wait(interval)
        try:
            return await call
        finally:
            pacer.mark()

    async def _analyze_visuals_and_impression(self, pacer: CallPacer, brand: BrandData):
        logger.info(f"🎨 Analyzing {brand.name} visuals...")
        brand.visuals = await self._paced(
            pacer,
            self.call_delay,
            self.stages.extract_visuals(brand.name, brand.screenshot, brand.content),
        )

        logger.info(f"👀 Analyzing {brand.name} first impressions...")
        brand.first_impression = await self._paced(
            pacer,
            self.call_delay,
            self.stages.analyze_first_impression(
                brand.name,
                brand.content.meta_title,
                brand.content.meta_description,
                site_screenshot=brand.screenshot,
                search_screenshot=brand.search_screenshot,
            ),
        )

    async def run_audit(self, request: AuditRequest) -> AuditReport:
        """
        Run the full audit.

        Raises:
            AuditInputError: Required fields missing (raised before any external call)
            AuditFailedError: Focal messaging or the comparison produced nothing usable
        """
        profiles = self._profiles(request)
        focal_profile = profiles[0]
        logger.info(f"🚀 Starting audit for: {focal_profile.name}")
        logger.info(f"Competitors: {[p.name for p in profiles[1:]]}")

        # Step 1: fetch content and take screenshots for every brand at once
        logger.info("📡 Fetching websites and taking screenshots...")
        brands: List[BrandData] = list(await asyncio.gather(*(self._collect(p) for p in profiles)))
        focal, competitors = brands[0], brands[1:]

        pacer = CallPacer(sleep=self.sleep)

        # Step 2: focal company, messaging first since everything depends on it
        logger.info(f"💬 Analyzing {focal.name} messaging...")
        focal.messaging = await self._paced(
            pacer, self.call_delay, self.stages.extract_messaging(focal.name, focal.content)
        )
        if focal.messaging is None:
            logger.error(f"❌ Messaging analysis failed for {focal.name}, aborting audit")
            raise AuditFailedError("Could not analyze your website")

        await self._analyze_visuals_and_impression(pacer, focal)

        # Step 3: competitors, one at a time
        for brand in competitors:
            logger.info(f"💬 Analyzing {brand.name}...")
            brand.messaging = await self._paced(
                pacer, self.call_delay, self.stages.extract_messaging(brand.name, brand.content)
            )
            await self._analyze_visuals_and_impression(pacer, brand)

        # Step 4: compare all brands at once
        logger.info("⚖️  Comparing brands...")
        comparison = await self._paced(
            pacer,
            self.comparator_delay,
            self.stages.compare_brands(
                focal.name,
                [
                    (b.name, b.messaging or MessagingInference(), b.visuals or VisualInference())
                    for b in brands
                ],
            ),
        )
        if comparison is None:
            logger.error("❌ Brand comparison failed, aborting audit")
            raise AuditFailedError("Could not compare brands")

        # Step 5: takeaways for the focal company
        logger.info("📝 Generating takeaways...")
        takeaways = await self._paced(
            pacer,
            self.call_delay,
            self.stages.generate_takeaways(
                focal.name,
                focal.messaging,
                focal.visuals or VisualInference(),
                focal.first_impression or FirstImpression(),
                [
                    format_competitor_line(
                        b.name, b.messaging or MessagingInference(), b.visuals or VisualInference()
                    )
                    for b in competitors
                ],
                comparison,
            ),
        )

        logger.info(f"✅ Audit complete for {focal.name} (score {comparison.score})")
        return self._assemble(brands, comparison, takeaways)

    def _assemble(self, brands: List[BrandData], comparison: ComparisonResult, takeaways) -> AuditReport:
        screenshots: Optional[Dict[str, Screenshot]] = None
        google_screenshots: Optional[Dict[str, Optional[str]]] = None
        if self.capturer is not None:
            screenshots = {
                b.name: Screenshot(url=normalize_url(b.profile.url), image=b.screenshot) for b in brands
            }
            google_screenshots = {b.name: b.search_screenshot for b in brands}

        first_impressions = {}
        for b in brands:
            impression = b.first_impression or FirstImpression()
            first_impressions[b.name] = FirstImpressionEntry(
                first_impression=impression.first_impression,
                clarity=impression.clarity,
                appeal=impression.appeal,
                meta_title=b.content.meta_title,
                meta_description=b.content.meta_description,
            )

        return AuditReport(
            score=comparison.score,
            verdict=comparison.verdict,
            overlaps=comparison.overlaps,
            standouts=comparison.standouts,
            takeaways=takeaways,
            chart=build_chart(brands),
            screenshots=screenshots,
            google_screenshots=google_screenshots,
            first_impressions=first_impressions,
        )
