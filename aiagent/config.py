"""Centralized configuration for AI Agent using Pydantic Settings."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from aiagent.version import __version__


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables with the
    AIAGENT_ prefix. For example:
        AIAGENT_OLLAMA_MODEL=llama3.2
        AIAGENT_ROUTING_MODE=delegate
    """

    model_config = SettingsConfigDict(
        env_prefix="AIAGENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def version(self) -> str:
        return __version__

    # LLM Settings
    ollama_url: str = "http://localhost:11434/api/generate"
    ollama_model: str = "mistral"
    ollama_timeout: int = 120
    max_json_retries: int = 2
    max_tokens: int = 2048
    num_ctx: int = 8192

    # Routing
    # "delegate" hands every request to the general assistant prompt,
    # "classify" asks the model to pick an action first.
    routing_mode: Literal["delegate", "classify"] = "classify"

    # Scraper Settings
    scrape_max_chars: int = 1000
    scrape_timeout: int = 30
    scrape_retries: int = 1
    user_agent: str = "Mozilla/5.0 (compatible; AIAgent/1.0)"

    # Input limits
    max_input_chars: int = 10000

    # Server Settings
    server_host: str = "127.0.0.1"
    server_port: int = 8000
    session_timeout: int = 3600  # 1 hour


def get_settings() -> Settings:
    """Get settings instance.

    Creates a new instance each time to pick up .env changes.
    For performance-critical code, cache the result yourself.
    """
    return Settings()


# Default settings instance (loaded at import time)
settings = get_settings()
