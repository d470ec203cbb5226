"""Provider abstraction layer for the insight text generator.

Supports switching between the Gemini cloud API and a local
OpenAI-compatible server via configuration.
"""

from providers.llm.base import LLMProvider, LLMResponse
from providers.factory import get_llm_provider, reset_providers

__all__ = [
    "LLMProvider",
    "LLMResponse",
    "get_llm_provider",
    "reset_providers",
]
