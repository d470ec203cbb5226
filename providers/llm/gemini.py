"""Google Gemini LLM provider via the Generative Language REST API."""

import logging
import time

import httpx

from providers.llm.base import LLMProvider, LLMResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-3-flash-preview"
DEFAULT_TIMEOUT = 60

# Flash-tier ballpark, USD per million tokens
INPUT_COST_PER_M = 0.30
OUTPUT_COST_PER_M = 2.50


class GeminiProvider(LLMProvider):
    """Gemini provider for cloud text generation.

    The API key is passed in at construction; nothing is read from the
    environment at call time.

    Usage:
        provider = GeminiProvider(api_key="...", model="gemini-3-flash-preview")
        response = await provider.complete("", "Give me one tip.", max_tokens=80, temperature=0.8)
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def provider_name(self) -> str:
        return "gemini"

    def _get_headers(self) -> dict:
        return {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key,
        }

    def _build_payload(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        json_mode: bool,
        temperature: float | None,
    ) -> dict:
        generation_config: dict = {"maxOutputTokens": max_tokens}
        if temperature is not None:
            generation_config["temperature"] = temperature
        if json_mode:
            generation_config["responseMimeType"] = "application/json"

        payload: dict = {
            "contents": [{"role": "user", "parts": [{"text": user_prompt}]}],
            "generationConfig": generation_config,
        }
        if system_prompt:
            payload["systemInstruction"] = {"parts": [{"text": system_prompt}]}
        return payload

    @staticmethod
    def _extract_text(data: dict) -> str:
        candidates = data.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts)

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int = 4096,
        json_mode: bool = False,
        temperature: float | None = None,
    ) -> LLMResponse:
        """Generate a completion using models/{model}:generateContent."""
        start_ms = time.time() * 1000
        payload = self._build_payload(system_prompt, user_prompt, max_tokens, json_mode, temperature)

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.base_url}/models/{self.model}:generateContent",
                    headers=self._get_headers(),
                    json=payload,
                )
                response.raise_for_status()
                data = response.json()

            latency_ms = time.time() * 1000 - start_ms

            usage = data.get("usageMetadata", {})
            input_tokens = usage.get("promptTokenCount", 0)
            output_tokens = usage.get("candidatesTokenCount", 0)
            cost_usd = (input_tokens * INPUT_COST_PER_M + output_tokens * OUTPUT_COST_PER_M) / 1_000_000

            return LLMResponse(
                text=self._extract_text(data),
                input_tokens=input_tokens,
                output_tokens=output_tokens,
                model=self.model,
                provider=self.provider_name,
                latency_ms=latency_ms,
                cost_usd=cost_usd,
            )

        except httpx.HTTPStatusError as e:
            logger.error("Gemini API error %d: %s", e.response.status_code, e.response.text)
            raise
        except httpx.ConnectError:
            logger.error("Cannot connect to Gemini at %s", self.base_url)
            raise
        except Exception as e:
            logger.error("Gemini call failed: %s", e)
            raise

    async def health_check(self) -> bool:
        """Check the key is accepted and the configured model exists."""
        if not self.api_key:
            logger.warning("Gemini health check skipped: no API key configured")
            return False
        try:
            async with httpx.AsyncClient(timeout=10) as client:
                response = await client.get(
                    f"{self.base_url}/models/{self.model}",
                    headers=self._get_headers(),
                )
                response.raise_for_status()
                return True
        except Exception as e:
            logger.warning("Gemini health check failed: %s", e)
            return False
