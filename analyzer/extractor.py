"""
Structured content extraction for Brand Audit

Deterministic, regex-based summary of a page's HTML: meta tags, headings,
stylesheet color/font hints and cleaned body text. Used as LLM input, so
every field is length-capped.
"""

import re
from typing import List, Optional
from urllib.parse import parse_qs

from models import StructuredContent

# Field caps
TITLE_LIMIT = 200
DESCRIPTION_LIMIT = 300
H1_LIMIT = 200
SUBHEADLINE_LIMIT = 300
HINTS_LIMIT = 200
MAX_COLORS = 5
MAX_FONTS = 3

# Body text caps: full audit vs. competitor suggestion
FULL_TEXT_LIMIT = 1500
BRIEF_TEXT_LIMIT = 800

_FLAGS = re.IGNORECASE | re.DOTALL

TITLE_RE = re.compile(r"<title[^>]*>(.*?)</title>", _FLAGS)
META_DESCRIPTION_RES = (
    re.compile(r"""<meta[^>]*name=["']description["'][^>]*content=["']([^"']+)["']""", _FLAGS),
    re.compile(r"""<meta[^>]*content=["']([^"']+)["'][^>]*name=["']description["']""", _FLAGS),
)
H1_RE = re.compile(r"<h1\b[^>]*>(.*?)</h1>", _FLAGS)
H2_RE = re.compile(r"<h2\b[^>]*>(.*?)</h2>", _FLAGS)
HERO_P_RE = re.compile(
    r"""<p\b[^>]*class=["'][^"']*(?:hero|subtitle|lead|intro)[^"']*["'][^>]*>(.*?)</p>""",
    _FLAGS,
)
COLOR_RE = re.compile(
    r"(?:color|background|background-color)\s*:\s*(#[0-9a-fA-F]{3,6}|rgb\([^)]+\)|[a-z]+)",
    re.IGNORECASE,
)
FONT_RE = re.compile(r"""font-family\s*:\s*['"]?([^'";,}<>]+)""", re.IGNORECASE)
GOOGLE_FONTS_RE = re.compile(r"""fonts\.googleapis\.com/css2?\?([^"'\s>]+)""", re.IGNORECASE)
SCRIPT_RE = re.compile(r"<script\b[^>]*>.*?</script\s*>", _FLAGS)
STYLE_RE = re.compile(r"<style\b[^>]*>.*?</style\s*>", _FLAGS)
TAG_RE = re.compile(r"<[^>]+>")
WHITESPACE_RE = re.compile(r"\s+")

ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
)


def _first(pattern: re.Pattern, html: str) -> str:
    match = pattern.search(html)
    return match.group(1) if match else ""


def _strip_tags(fragment: str) -> str:
    return TAG_RE.sub("", fragment).strip()


def _unique(values: List[str]) -> List[str]:
    seen = []
    for value in values:
        if value and value not in seen:
            seen.append(value)
    return seen


def _extract_colors(html: str) -> List[str]:
    return _unique([m.strip() for m in COLOR_RE.findall(html)])[:MAX_COLORS]


def _google_fonts(html: str) -> List[str]:
    """Family names from a Google Fonts link (css and css2 forms), weights stripped."""
    match = GOOGLE_FONTS_RE.search(html)
    if not match:
        return []
    query = match.group(1).replace("&amp;", "&")
    families = []
    for value in parse_qs(query).get("family", []):
        for family in value.split("|"):
            name = family.split(":")[0].strip()
            if name:
                families.append(name)
    return families


def _extract_fonts(html: str) -> List[str]:
    declared = [m.strip().replace('"', "").replace("'", "") for m in FONT_RE.findall(html)]
    return _unique([f.strip() for f in declared] + _google_fonts(html))[:MAX_FONTS]


def clean_text(html: str, limit: int = FULL_TEXT_LIMIT) -> str:
    """Visible text of the page: no scripts/styles/tags, basic entities decoded, whitespace collapsed."""
    text = SCRIPT_RE.sub("", html)
    text = STYLE_RE.sub("", text)
    text = TAG_RE.sub(" ", text)
    for entity, replacement in ENTITIES:
        text = text.replace(entity, replacement)
    return WHITESPACE_RE.sub(" ", text).strip()[:limit]


def extract_structured_content(html: Optional[str], text_limit: int = FULL_TEXT_LIMIT) -> StructuredContent:
    """
    Summarize raw HTML into a StructuredContent record.

    Never raises; None or empty input gives the all-empty record.

    Args:
        html: Raw page HTML (or None when the fetch failed)
        text_limit: Body text cap, FULL_TEXT_LIMIT for audits or
                    BRIEF_TEXT_LIMIT for competitor suggestion

    Returns:
        StructuredContent with every field within its cap
    """
    if not html:
        return StructuredContent()

    meta_description = ""
    for pattern in META_DESCRIPTION_RES:
        meta_description = _first(pattern, html).strip()
        if meta_description:
            break

    subheadline = _strip_tags(_first(H2_RE, html))
    if not subheadline:
        subheadline = _strip_tags(_first(HERO_P_RE, html))

    return StructuredContent(
        meta_title=_first(TITLE_RE, html).strip()[:TITLE_LIMIT],
        meta_description=meta_description[:DESCRIPTION_LIMIT],
        h1=_strip_tags(_first(H1_RE, html))[:H1_LIMIT],
        subheadline=subheadline[:SUBHEADLINE_LIMIT],
        colors=", ".join(_extract_colors(html))[:HINTS_LIMIT],
        fonts=", ".join(_extract_fonts(html))[:HINTS_LIMIT],
        text=clean_text(html, text_limit),
    )
