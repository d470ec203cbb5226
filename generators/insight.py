"""Single-sentence growth strategy for the selected distribution channels."""

import logging
from collections.abc import Iterable

from models import InsightResult, InsightSource, get_channel, is_known_channel
from providers.llm.base import LLMProvider

logger = logging.getLogger(__name__)

NO_CHANNELS_MESSAGE = "Please select at least one distribution channel first."
EMPTY_RESPONSE_FALLBACK = (
    "Synchronize LinkedIn thought leadership with rapid-fire X threads "
    "for maximum multi-touch attribution."
)
ERROR_FALLBACK = (
    "Leverage short-form video hooks on Instagram to drive high-intent traffic "
    "to your LinkedIn lead magnets."
)

PROMPT_TEMPLATE = (
    "You are a world-class growth marketing strategist. "
    "Based on the selected distribution channels: {channels}, provide exactly one punchy, "
    "highly specific, and actionable single-sentence strategy to optimize cross-platform "
    "engagement and conversion for a B2B SaaS. Avoid generic advice."
)

DEFAULT_MAX_TOKENS = 80
DEFAULT_TEMPERATURE = 0.8


def channel_names(channel_ids: Iterable[str]) -> list[str]:
    """Display names in selection order. Unknown ids are dropped."""
    return [get_channel(cid).name for cid in channel_ids if is_known_channel(cid)]


def build_prompt(names: Iterable[str]) -> str:
    return PROMPT_TEMPLATE.format(channels=", ".join(names))


class InsightGenerator:
    """One-shot insight request against a text-generation provider.

    Never raises for provider problems: a failed call yields ERROR_FALLBACK and
    an empty answer yields EMPTY_RESPONSE_FALLBACK. There is no retry.
    """

    def __init__(
        self,
        provider: LLMProvider,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
    ):
        self.provider = provider
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def generate(self, selected_channels: Iterable[str]) -> InsightResult:
        selected = list(selected_channels)
        if not selected:
            return InsightResult(NO_CHANNELS_MESSAGE, InsightSource.VALIDATION)

        names = channel_names(selected)
        prompt = build_prompt(names)
        logger.info("Requesting insight from %s for: %s", self.provider.provider_name, ", ".join(names))

        try:
            response = await self.provider.complete(
                system_prompt="",
                user_prompt=prompt,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
            text = (response.text or "").strip()
        except Exception as e:
            logger.error("Insight generation failed: %s", e)
            return InsightResult(ERROR_FALLBACK, InsightSource.FALLBACK_ERROR)

        if not text:
            logger.warning("Insight provider %s returned empty text", response.provider)
            return InsightResult(EMPTY_RESPONSE_FALLBACK, InsightSource.FALLBACK_EMPTY)

        logger.info(
            "Insight generated (%d in / %d out tokens, %.0fms, $%.6f)",
            response.input_tokens, response.output_tokens, response.latency_ms, response.cost_usd,
        )
        return InsightResult(text, InsightSource.MODEL)
