"""OpenAI-compatible chat completions provider (vLLM, LM Studio, LocalAI, ...).

Lets the insight box run against a local model when no Gemini key is at hand.
"""

import logging
import time

import httpx

from providers.llm.base import LLMProvider, LLMResponse, build_messages

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 120


class OpenAICompatProvider(LLMProvider):
    """Any server implementing ``POST /v1/chat/completions``.

    Usage:
        provider = OpenAICompatProvider(base_url="http://localhost:8000/v1", model="qwen2.5-14b")
        response = await provider.complete("", "One growth tip for X and LinkedIn.", max_tokens=80)
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000/v1",
        model: str = "qwen2.5-14b",
        api_key: str | None = None,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.api_key = api_key
        self.timeout = timeout

    @property
    def provider_name(self) -> str:
        return "openai_compat"

    def _get_headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int = 4096,
        json_mode: bool = False,
        temperature: float | None = None,
    ) -> LLMResponse:
        start_ms = time.time() * 1000

        payload: dict = {
            "model": self.model,
            "messages": build_messages(system_prompt, user_prompt),
            "max_tokens": max_tokens,
            "stream": False,
        }
        if temperature is not None:
            payload["temperature"] = temperature
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    headers=self._get_headers(),
                    json=payload,
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error("OpenAI-compat API error %d: %s", e.response.status_code, e.response.text)
            raise
        except httpx.ConnectError:
            logger.error("Cannot connect to %s. Is the server running?", self.base_url)
            raise

        text = ""
        choices = data.get("choices") or []
        if choices:
            # Some servers send "content": null for refusals
            text = (choices[0].get("message") or {}).get("content") or ""
        usage = data.get("usage") or {}

        return LLMResponse(
            text=text,
            input_tokens=usage.get("prompt_tokens", 0),
            output_tokens=usage.get("completion_tokens", 0),
            model=self.model,
            provider=self.provider_name,
            latency_ms=time.time() * 1000 - start_ms,
            cost_usd=0.0,  # Local = free
        )

    async def health_check(self) -> bool:
        """The server answers ``GET /models``; the model list itself is advisory."""
        try:
            async with httpx.AsyncClient(timeout=10) as client:
                response = await client.get(f"{self.base_url}/models", headers=self._get_headers())
                response.raise_for_status()
                models = [m.get("id", "") for m in response.json().get("data", [])]
        except Exception as e:
            logger.warning("OpenAI-compat health check failed: %s", e)
            return False

        if models and self.model not in models:
            logger.info("Model %s not listed by server. Available: %s", self.model, ", ".join(models))
        return True
