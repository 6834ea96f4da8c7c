import json
import logging
import re
from typing import Optional

import json5
import demjson3

logger = logging.getLogger(__name__)

# Greedy: first "{" through last "}" of the reply
_OBJECT_SPAN = re.compile(r"\{[\s\S]*\}")


class JSONReply:
    """
    Result of parsing an LLM reply: either a JSON object (ok) or empty.

    Callers branch on ``reply.ok`` instead of catching exceptions.
    """

    __slots__ = ("data",)

    def __init__(self, data: Optional[dict] = None):
        self.data = data

    @classmethod
    def empty(cls) -> "JSONReply":
        return cls(None)

    @property
    def ok(self) -> bool:
        return self.data is not None

    def __repr__(self):
        return f"JSONReply({self.data!r})" if self.ok else "JSONReply.empty()"


def extract_json_span(response_text: Optional[str]) -> Optional[str]:
    """Return the first-"{" to last-"}" span of the text, or None."""
    if not response_text:
        return None
    match = _OBJECT_SPAN.search(response_text)
    return match.group(0) if match else None


def _clean(text: str) -> str:
    # Trailing commas before closing braces/brackets
    cleaned = re.sub(r",(\s*[}\]])", r"\1", text)
    # Block comments (/* ... */); line comments are left alone, URLs contain "//"
    cleaned = re.sub(r"/\*.*?\*/", "", cleaned, flags=re.DOTALL)
    return cleaned


def repair_and_parse_json(span: str):
    """
    Multi-layered JSON parsing with auto-repair capabilities.

    Attempts, in order:
    1. Standard json.loads()
    2. json.loads() after cleaning trailing commas and block comments
    3. json5 parser (tolerates comments, single quotes, trailing commas)
    4. demjson3 parser (auto-repairs many errors)

    Raises:
        ValueError: If all parsing attempts fail
    """
    errors = []

    try:
        return json.loads(span)
    except json.JSONDecodeError as e:
        errors.append(f"Standard JSON: {e}")

    try:
        return json.loads(_clean(span))
    except json.JSONDecodeError as e:
        errors.append(f"Cleaned JSON: {e}")

    try:
        return json5.loads(span)
    except Exception as e:
        errors.append(f"JSON5: {e}")

    try:
        return demjson3.decode(span)
    except Exception as e:
        errors.append(f"DemJSON: {e}")

    raise ValueError(f"Failed to parse JSON after all attempts. Errors: {'; '.join(errors[:2])}")


def parse_json_reply(response_text: Optional[str]) -> JSONReply:
    """
    Find the JSON object in a free-text LLM reply and parse it.

    Never raises. Returns ``JSONReply.empty()`` when the reply has no
    ``{...}`` span, the span cannot be parsed, or it is not an object.
    """
    span = extract_json_span(response_text)
    if span is None:
        logger.warning("⚠️  No JSON object found in reply")
        return JSONReply.empty()

    try:
        data = repair_and_parse_json(span)
    except ValueError as e:
        logger.warning(f"⚠️  {e}. Reply preview: {span[:200]!r}")
        return JSONReply.empty()

    if not isinstance(data, dict):
        logger.warning(f"⚠️  Reply JSON is a {type(data).__name__}, expected an object")
        return JSONReply.empty()

    return JSONReply(data)
