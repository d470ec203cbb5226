"""LLM providers: Gemini, OpenAI-compatible."""

from providers.llm.base import LLMProvider, LLMResponse

__all__ = ["LLMProvider", "LLMResponse"]
