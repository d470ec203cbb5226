"""Shared fixtures: a scripted LLM provider and an in-process app client."""

from __future__ import annotations

import asyncio
from pathlib import Path

import httpx
import pytest
import pytest_asyncio

from config import Settings
from providers.llm.base import LLMProvider, LLMResponse

REPO_DIR = Path(__file__).resolve().parent.parent


class StubProvider(LLMProvider):
    """Records every call and answers with a fixed text or raises a fixed error."""

    def __init__(self, text: str | None = "Test insight.", error: Exception | None = None, healthy: bool = True):
        self.text = text
        self.error = error
        self.healthy = healthy
        self.calls: list[dict] = []
        self.release: asyncio.Event | None = None  # set to hold calls until released

    @property
    def provider_name(self) -> str:
        return "stub"

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int = 4096,
        json_mode: bool = False,
        temperature: float | None = None,
    ) -> LLMResponse:
        self.calls.append({
            "system_prompt": system_prompt,
            "user_prompt": user_prompt,
            "max_tokens": max_tokens,
            "json_mode": json_mode,
            "temperature": temperature,
        })
        if self.release is not None:
            await self.release.wait()
        if self.error is not None:
            raise self.error
        return LLMResponse(
            text=self.text,
            input_tokens=42,
            output_tokens=17,
            model="stub-model",
            provider=self.provider_name,
            latency_ms=1.0,
            cost_usd=0.0,
        )

    async def health_check(self) -> bool:
        return self.healthy


def make_settings(**overrides) -> Settings:
    values = {
        "gemini_api_key": "test-key",
        "metrics_min_delay": 0.01,
        "metrics_max_delay": 0.02,
        "metrics_seed": 7,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture()
def stub_provider() -> StubProvider:
    return StubProvider(text="Pair X threads with LinkedIn carousels.")


@pytest.fixture()
def app(stub_provider):
    from main import create_app

    return create_app(make_settings(), provider=stub_provider)


@pytest_asyncio.fixture()
async def client(app):
    """Async httpx client bound to the app, with startup/shutdown run around it."""
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            yield c
