"""Provider factory for selecting the insight LLM provider based on config."""

import logging

from config import Settings, settings as default_settings
from providers.llm.base import LLMProvider

logger = logging.getLogger(__name__)

# Cache provider instance
_llm_provider: LLMProvider | None = None


def build_llm_provider(settings: Settings) -> LLMProvider:
    """Construct a provider from explicit settings, without caching.

    Supports:
    - gemini: Google Gemini REST API (default)
    - openai_compat: OpenAI-compatible API (vLLM, LM Studio, etc.)
    """
    provider_type = settings.llm_provider.lower()

    if provider_type == "openai_compat":
        from providers.llm.openai_compat import OpenAICompatProvider

        logger.info("Using OpenAI-compatible LLM provider: %s", settings.openai_compat_model)
        return OpenAICompatProvider(
            base_url=settings.openai_compat_base_url,
            model=settings.openai_compat_model,
            api_key=settings.openai_compat_api_key or None,
        )

    if provider_type != "gemini":
        logger.warning("Unknown llm_provider %r, falling back to gemini", settings.llm_provider)

    from providers.llm.gemini import GeminiProvider

    if not settings.gemini_api_key:
        # Not fatal: the insight box degrades to its fallback sentence
        logger.warning("GEMINI_API_KEY is not set; insight requests will fail over to the fallback")
    logger.info("Using Gemini LLM provider: %s", settings.gemini_model)
    return GeminiProvider(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        base_url=settings.gemini_base_url,
    )


def get_llm_provider(settings: Settings | None = None, force_new: bool = False) -> LLMProvider:
    """Get the configured LLM provider.

    Args:
        settings: Settings to build from. Defaults to the process-wide settings.
        force_new: If True, create a new instance instead of using cached.

    Returns:
        Configured LLMProvider instance.
    """
    global _llm_provider

    if _llm_provider is not None and not force_new:
        return _llm_provider

    _llm_provider = build_llm_provider(settings or default_settings)
    return _llm_provider


async def check_llm_provider(provider: LLMProvider | None = None) -> dict:
    """Run the health check on the LLM provider.

    Returns:
        Dictionary with the provider name and its health status.
    """
    try:
        llm = provider or get_llm_provider()
        return {"llm": await llm.health_check(), "llm_provider": llm.provider_name}
    except Exception as e:
        logger.error("LLM provider health check failed: %s", e)
        return {"llm": False, "llm_provider": None}


def reset_providers():
    """Reset the cached provider instance.

    Useful for testing or when configuration changes.
    """
    global _llm_provider
    _llm_provider = None
