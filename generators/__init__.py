"""Content generators backed by the configured LLM provider."""

from generators.insight import InsightGenerator, build_prompt

__all__ = ["InsightGenerator", "build_prompt"]
