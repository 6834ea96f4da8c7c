from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


COULD_NOT_CAPTURE = "Could not capture"
UNKNOWN = "Unknown"


def _as_text(value):
    """Coerce a reply field to text: None is blank, lists are comma-joined, other scalars use str()."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return ", ".join(str(item).strip() for item in value if item is not None and str(item).strip())
    return str(value)


def _clean_items(items):
    return [str(item).strip() for item in items if item is not None and str(item).strip()]


def _as_string_list(value):
    """LLM replies sometimes send a comma-joined string or nulls where a list is expected."""
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, list):
        return _clean_items(value)
    return _clean_items([value])


def _as_text_list(value):
    """Like _as_string_list, but a lone string is one entry: advice prose contains commas."""
    if value is None:
        return []
    if isinstance(value, list):
        return _clean_items(value)
    return _clean_items([value])


def _as_object_list(value, key):
    """List of dicts; a bare string (or scalar) item becomes ``{key: item}``, nulls are dropped."""
    if value is None:
        return []
    if not isinstance(value, list):
        value = [value]
    items = []
    for item in value:
        if item is None:
            continue
        items.append(item if isinstance(item, dict) else {key: str(item)})
    return items


class WireModel(BaseModel):
    """Base for models exchanged with callers or the LLM (camelCase on the wire)."""

    model_config = ConfigDict(populate_by_name=True)


# Brand identity
class BrandProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    url: str


class StructuredContent(BaseModel):
    meta_title: str = ""
    meta_description: str = ""
    h1: str = ""
    subheadline: str = ""
    colors: str = ""
    fonts: str = ""
    text: str = ""


# LLM inference models
class MessagingInference(WireModel):
    positioning: str = ""
    voice_adjectives: List[str] = Field(default_factory=list, alias="voiceAdjectives")
    voice_summary: str = Field(default="", alias="voiceSummary")

    @field_validator("positioning", "voice_summary", mode="before")
    @classmethod
    def blank_strings(cls, value):
        return _as_text(value)

    @field_validator("voice_adjectives", mode="before")
    @classmethod
    def adjective_list(cls, value):
        return _as_string_list(value)


class VisualInference(WireModel):
    colors: str = ""
    typography: str = ""
    visual_style: str = Field(default="", alias="visualStyle")

    @field_validator("colors", "typography", "visual_style", mode="before")
    @classmethod
    def blank_strings(cls, value):
        return _as_text(value)

    @classmethod
    def could_not_capture(cls) -> "VisualInference":
        return cls(colors=COULD_NOT_CAPTURE, typography=COULD_NOT_CAPTURE, visual_style=COULD_NOT_CAPTURE)

    @classmethod
    def unknown(cls) -> "VisualInference":
        return cls(colors=UNKNOWN, typography=UNKNOWN, visual_style=UNKNOWN)


class FirstImpression(WireModel):
    first_impression: str = Field(default="", alias="firstImpression")
    clarity: str = ""
    appeal: str = ""

    @field_validator("first_impression", "clarity", "appeal", mode="before")
    @classmethod
    def blank_strings(cls, value):
        return _as_text(value)


class Overlap(WireModel):
    category: str = ""
    pattern: str = ""
    who: List[str] = Field(default_factory=list)

    @field_validator("category", "pattern", mode="before")
    @classmethod
    def blank_strings(cls, value):
        return _as_text(value)

    @field_validator("who", mode="before")
    @classmethod
    def brand_list(cls, value):
        return _as_string_list(value)


class ComparisonResult(WireModel):
    score: int
    overlaps: List[Overlap] = Field(default_factory=list)
    standouts: List[str] = Field(default_factory=list)
    verdict: str = ""

    @field_validator("verdict", mode="before")
    @classmethod
    def blank_verdict(cls, value):
        return _as_text(value)

    @field_validator("standouts", mode="before")
    @classmethod
    def standout_list(cls, value):
        return _as_text_list(value)

    @field_validator("overlaps", mode="before")
    @classmethod
    def overlap_list(cls, value):
        return _as_object_list(value, "pattern")

    @field_validator("score", mode="before")
    @classmethod
    def clamp_score(cls, value):
        # Models occasionally answer "72/100" or 72.5
        if isinstance(value, bool):
            raise ValueError("score must be a number")
        if isinstance(value, str):
            value = value.strip().split("/")[0]
        try:
            score = round(float(value))
        except (TypeError, ValueError, OverflowError):
            raise ValueError(f"score is not numeric: {value!r}")
        return max(0, min(100, score))


class Takeaways(WireModel):
    keep: List[str] = Field(default_factory=list)
    fix: List[str] = Field(default_factory=list)
    explore: List[str] = Field(default_factory=list)
    watch: List[str] = Field(default_factory=list)

    @field_validator("keep", "fix", "explore", "watch", mode="before")
    @classmethod
    def advice_list(cls, value):
        return _as_text_list(value)


class CompetitorSuggestion(WireModel):
    name: str
    url: str = ""
    reason: str = ""

    @field_validator("name", "url", "reason", mode="before")
    @classmethod
    def blank_strings(cls, value):
        return _as_text(value)


class CompetitorSuggestions(WireModel):
    competitors: List[CompetitorSuggestion] = Field(default_factory=list)

    @field_validator("competitors", mode="before")
    @classmethod
    def keep_first_three(cls, value):
        # Unnamed entries are dropped
        if not isinstance(value, list):
            return []
        named = [c for c in value if isinstance(c, dict) and c.get("name")]
        return named[:3]


# Requests
class SuggestCompetitorsRequest(WireModel):
    company_url: str = Field(default="", alias="companyUrl")
    company_name: str = Field(default="", alias="companyName")

    @field_validator("company_url", "company_name", mode="before")
    @classmethod
    def blank_strings(cls, value):
        return _as_text(value)


class CompetitorInput(WireModel):
    name: str = ""
    url: str = ""

    @field_validator("name", "url", mode="before")
    @classmethod
    def blank_strings(cls, value):
        return _as_text(value)


class AuditRequest(WireModel):
    company_url: str = Field(default="", alias="companyUrl")
    company_name: str = Field(default="", alias="companyName")
    competitors: List[CompetitorInput] = Field(default_factory=list)

    @field_validator("company_url", "company_name", mode="before")
    @classmethod
    def blank_strings(cls, value):
        return _as_text(value)

    @field_validator("competitors", mode="before")
    @classmethod
    def competitor_list(cls, value):
        return [] if value is None else value


# Report
class ChartRow(WireModel):
    category: str
    values: List[str]


class Chart(WireModel):
    columns: List[str]
    rows: List[ChartRow]


class Screenshot(WireModel):
    url: str
    image: Optional[str] = None


class FirstImpressionEntry(FirstImpression):
    meta_title: str = Field(default="", alias="metaTitle")
    meta_description: str = Field(default="", alias="metaDescription")


class AuditReport(WireModel):
    score: int
    verdict: str
    overlaps: List[Overlap]
    standouts: List[str]
    takeaways: Takeaways
    chart: Chart
    screenshots: Optional[Dict[str, Screenshot]] = None
    google_screenshots: Optional[Dict[str, Optional[str]]] = Field(default=None, alias="googleScreenshots")
    first_impressions: Dict[str, FirstImpressionEntry] = Field(alias="firstImpressions")

    def to_response(self) -> dict:
        """Serialize with wire names, omitting the screenshot maps when capture was off."""
        body = self.model_dump(by_alias=True)
        for key in ("screenshots", "googleScreenshots"):
            if body.get(key) is None:
                body.pop(key, None)
        return body
