"""
Brand Audit Prompts for Claude API

One builder per inference stage. Every prompt asks for a bare JSON object;
replies are parsed with utils.parsing.json.parse_json_reply.
"""

from typing import List

from models import (
    COULD_NOT_CAPTURE,
    ComparisonResult,
    FirstImpression,
    MessagingInference,
    StructuredContent,
    VisualInference,
)
from analyzer.extractor import BRIEF_TEXT_LIMIT

CAPTCHA_NOTICE = (
    "IMPORTANT: If you see a CAPTCHA, bot protection, or Cloudflare challenge screen in the "
    "screenshot, IGNORE IT. That's just from automated scraping - real visitors don't see it."
)


def get_competitor_prompt(company_name: str, content: StructuredContent) -> str:
    return f"""Based on this company's website, suggest 3 direct competitors.

COMPANY: {company_name}
H1: "{content.h1}"
CONTENT: {content.text[:BRIEF_TEXT_LIMIT]}

Return JSON with 3 real competitors (not made up):
{{
  "competitors": [
    {{"name": "<competitor name>", "url": "<their domain, e.g. competitor.com>", "reason": "<why they compete, 5 words max>"}},
    {{"name": "<competitor name>", "url": "<their domain>", "reason": "<why>"}},
    {{"name": "<competitor name>", "url": "<their domain>", "reason": "<why>"}}
  ]
}}

Only suggest real companies that actually exist and compete in the same space.
Return ONLY JSON."""


def get_messaging_prompt(company_name: str, content: StructuredContent) -> str:
    return f"""You're a senior brand strategist. Extract {company_name}'s messaging essence.

H1: "{content.h1}"
SUBHEADLINE: "{content.subheadline}"

CONTENT:
{content.text}

Return JSON:
{{
  "positioning": "<10 words max: what they do + for whom>",
  "voiceAdjectives": ["<adjective>", "<adjective>", "<adjective>"],
  "voiceSummary": "<one short sentence capturing their tone>"
}}

Be sharp and brief.
Return ONLY JSON."""


def get_visuals_prompt(company_name: str, content: StructuredContent) -> str:
    hints = ""
    if content.colors or content.fonts:
        hints = (
            "\nStylesheet hints (may be incomplete, trust the screenshot first):\n"
            f"- CSS colors: {content.colors or 'none found'}\n"
            f"- CSS fonts: {content.fonts or 'none found'}\n"
        )

    return f"""You're a brand designer. Look at this screenshot of {company_name}'s website and describe their visual identity.
{hints}
Return JSON:
{{
  "colors": "<list the 2-4 main brand colors you see, e.g. 'navy blue, white, coral accent'>",
  "typography": "<describe the typography: e.g. 'bold geometric sans-serif', 'elegant serif', 'clean grotesque'>",
  "visualStyle": "<brief description of imagery/art direction: e.g. 'lifestyle photography, warm tones', 'abstract illustrations', 'type-focused, minimal'>"
}}

IMPORTANT: If you see a CAPTCHA, bot protection, or Cloudflare challenge screen, return "{COULD_NOT_CAPTURE}" for all fields - that's just from automated scraping, not the real site.
Otherwise describe the design that is actually visible.

Be specific about what you actually see. Keep each field under 10 words.
Return ONLY JSON."""


def get_first_impression_prompt(company_name: str, meta_title: str, meta_description: str) -> str:
    return f"""You're a potential customer researching {company_name}. Based on their Google search result and website homepage, what's your first impression?

GOOGLE SEARCH RESULT:
- Title: "{meta_title}"
- Description: "{meta_description}"

The screenshots above show the Google search results page and the website homepage, when they could be captured.

Return JSON:
{{
  "firstImpression": "<2-3 sentences: what would a customer think when they first encounter this brand?>",
  "clarity": "<one sentence: is it immediately clear what they do?>",
  "appeal": "<one sentence: would a customer want to learn more?>"
}}

{CAPTCHA_NOTICE} Base your analysis on the meta title/description and assume the website loads normally for humans.

Be honest and specific. Write like a real customer, not a marketer.
Return ONLY JSON."""


def format_voice_adjectives(messaging: MessagingInference) -> str:
    return ", ".join(messaging.voice_adjectives) or "unknown"


def get_comparison_prompt(company_name: str, brand_summaries: List[str]) -> str:
    """
    Args:
        company_name: Focal company
        brand_summaries: One line per brand, focal company first
    """
    brands = "\n".join(brand_summaries)
    return f"""You're a senior brand strategist giving a client a quick category overview.

BRANDS IN THIS SPACE:
{brands}

Return JSON:
{{
  "score": <0-100: how differentiated is {company_name}? 50 = average, 80+ = truly distinct>,
  "overlaps": [
    {{
      "category": "<'positioning' or 'voice' or 'visual'>",
      "pattern": "<the generic pattern you see, 5-10 words>",
      "who": ["<brand>", "<brand>"]
    }}
  ],
  "standouts": ["<one thing that makes {company_name} different, if anything>"],
  "verdict": "<one punchy sentence: the honest truth about {company_name}'s differentiation>"
}}

Be direct. Skip the fluff. What would you actually tell a client?
Return ONLY JSON."""


def format_brand_summary(name: str, messaging: MessagingInference, visuals: VisualInference) -> str:
    line = f'{name}: "{messaging.positioning}" | Voice: {format_voice_adjectives(messaging)}'
    if visuals.visual_style:
        line += f" | Visual: {visuals.visual_style}"
    return line


def get_takeaways_prompt(
    company_name: str,
    messaging: MessagingInference,
    visuals: VisualInference,
    first_impression: FirstImpression,
    competitor_lines: List[str],
    comparison: ComparisonResult,
) -> str:
    overlaps = ", ".join(o.pattern for o in comparison.overlaps if o.pattern) or "None"
    standouts = ", ".join(comparison.standouts) or "None"
    competitors = "\n".join(competitor_lines)

    return f"""You're a senior brand strategist giving actionable advice to {company_name} based on their competitive audit.

YOUR BRAND:
- Positioning: {messaging.positioning}
- Voice: {", ".join(messaging.voice_adjectives)}
- Visual: {visuals.colors}, {visuals.typography}, {visuals.visual_style}
- First Impression: {first_impression.first_impression}

COMPETITORS:
{competitors}

AUDIT FINDINGS:
- Score: {comparison.score}/100
- Overlaps: {overlaps}
- Standouts: {standouts}

Return JSON with actionable takeaways for {company_name}:
{{
  "keep": ["<what's working, don't change it>", "<another if relevant>"],
  "fix": ["<what's holding them back, be specific>", "<another if relevant>"],
  "explore": ["<white space competitors aren't claiming>", "<another if relevant>"],
  "watch": ["<threats or risks to be aware of>"]
}}

Be direct and specific. No fluff. Each bullet should be actionable.
Return ONLY JSON."""


def format_competitor_line(name: str, messaging: MessagingInference, visuals: VisualInference) -> str:
    return (
        f"- {name}: {messaging.positioning} | Voice: {', '.join(messaging.voice_adjectives)}"
        f" | Visual: {visuals.visual_style}"
    )
