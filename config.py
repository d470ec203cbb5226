"""Configuration via pydantic-settings. Reads from .env or environment."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # ===== PROVIDER SELECTION =====
    llm_provider: str = "gemini"  # gemini | openai_compat

    # ===== GOOGLE GEMINI (Cloud LLM) =====
    gemini_api_key: str = ""
    gemini_model: str = "gemini-3-flash-preview"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"

    # ===== OPENAI-COMPATIBLE (vLLM, LM Studio, etc.) =====
    openai_compat_base_url: str = "http://localhost:8000/v1"
    openai_compat_model: str = "qwen2.5-14b"
    openai_compat_api_key: str = ""  # Optional, if server requires auth

    # ===== INSIGHT GENERATION =====
    insight_max_tokens: int = 80
    insight_temperature: float = 0.8

    # ===== METRICS SIMULATION (seconds) =====
    metrics_min_delay: float = 2.0
    metrics_max_delay: float = 4.0
    metrics_seed: int | None = None  # Fix for reproducible jitter

    # ===== SYSTEM =====
    log_level: str = "INFO"
    port: int = 8001


settings = Settings()
