"""Application configuration settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Lesson Quizzer"
    debug: bool = False
    log_level: str = "INFO"

    # AI providers
    llm_provider: Literal["openai", "anthropic"] = "openai"
    openai_api_key: str | None = None
    openai_base_url: str | None = None
    openai_model: str = "gpt-4o-mini"
    anthropic_api_key: str | None = None
    anthropic_model: str = "claude-3-haiku-20240307"

    # Generation settings
    temperature: float = 0.3
    max_tokens: int = 4000
    request_timeout_seconds: float = 120.0
    min_text_length: int = 100  # relay rejects anything shorter
    short_text_warning_length: int = 200  # extracted text below this is suspicious

    # Relay server
    cors_allow_origins: list[str] = ["*"]
    host: str = "127.0.0.1"
    port: int = 8000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
