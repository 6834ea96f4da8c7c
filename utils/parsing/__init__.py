# Parsing subpackage - LLM reply parsing
from .json import JSONReply, parse_json_reply, repair_and_parse_json

__all__ = [
    "JSONReply",
    "parse_json_reply",
    "repair_and_parse_json",
]
