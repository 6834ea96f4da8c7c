# Clients subpackage - External API clients
from .anthropic import LLMClient, CallPacer, build_anthropic_client

__all__ = [
    "LLMClient",
    "CallPacer",
    "build_anthropic_client",
]
