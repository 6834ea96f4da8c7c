# Utils package - Utility modules organized by domain
# Import from subpackages for convenience

from .clients.anthropic import LLMClient, CallPacer
from .parsing.json import JSONReply, parse_json_reply
from .images.processor import encode_screenshot
from .urls import normalize_url

__all__ = [
    "LLMClient",
    "CallPacer",
    "JSONReply",
    "parse_json_reply",
    "encode_screenshot",
    "normalize_url",
]
