#!/usr/bin/env python3
"""Check that the insight provider is configured and answering.

    python scripts/test_local_setup.py

The script will:
1. Show which LLM provider is configured
2. Run its health check
3. Generate one insight for the default channel selection (X, LinkedIn)
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import settings
from generators.insight import InsightGenerator
from models import DEFAULT_CHANNELS, InsightSource
from providers.factory import get_llm_provider


async def check_llm_provider(provider) -> bool:
    print("\n" + "=" * 50)
    print("LLM PROVIDER CHECK")
    print("=" * 50)
    print(f"Configured provider: {settings.llm_provider}")

    if settings.llm_provider == "openai_compat":
        print(f"  Base URL: {settings.openai_compat_base_url}")
        print(f"  Model: {settings.openai_compat_model}")
    else:
        print(f"  Base URL: {settings.gemini_base_url}")
        print(f"  Model: {settings.gemini_model}")
        print(f"  API key: {'set' if settings.gemini_api_key else 'MISSING'}")

    print(f"\n  Provider instance: {provider.__class__.__name__}")
    print("  Running health check...", end=" ")
    healthy = await provider.health_check()
    print("✓ HEALTHY" if healthy else "✗ UNHEALTHY")
    return healthy


async def run_insight_test(provider) -> bool:
    print("\n" + "=" * 50)
    print("INSIGHT GENERATION TEST")
    print("=" * 50)

    generator = InsightGenerator(
        provider,
        max_tokens=settings.insight_max_tokens,
        temperature=settings.insight_temperature,
    )
    result = await generator.generate(DEFAULT_CHANNELS)
    print(f"  Source: {result.source.value}")
    print(f"  Insight: {result.text}")
    return result.source == InsightSource.MODEL


async def main():
    provider = get_llm_provider()

    results = {
        "health": await check_llm_provider(provider),
        "insight": await run_insight_test(provider),
    }

    print("\n" + "=" * 50)
    print("SUMMARY")
    print("=" * 50)
    for name, passed in results.items():
        print(f"  {name.upper()}: {'✓ PASS' if passed else '✗ FAIL'}")

    if all(results.values()):
        print("\n✓ Insight provider configured correctly!")
        return 0

    print("\nTroubleshooting:")
    if settings.llm_provider == "openai_compat":
        print("  - OpenAI-compat: Is the server running at the configured URL?")
    else:
        print("  - Gemini: Check GEMINI_API_KEY in .env and the model name")
    return 1


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
