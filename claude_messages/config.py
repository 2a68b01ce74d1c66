"""
Configuration Management Module

Configures client parameters via environment variables or .env file.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Client Configuration Class

    All configuration items can be overridden by environment variables, with names matching fields (uppercase).
    """

    # API Config
    # API key sent in the x-api-key header; required by MessagesClient.from_env()
    ANTHROPIC_API_KEY: Optional[str] = None
    # Base URL of the API, "/v1/messages" is appended when building the endpoint
    ANTHROPIC_BASE_URL: str = "https://api.anthropic.com"
    # Value of the anthropic-version header
    ANTHROPIC_VERSION: str = "2023-06-01"

    # HTTP Client Config
    # Request timeout (seconds)
    CLAUDE_MESSAGES_HTTP_TIMEOUT: int = 600

    # Logging Config
    CLAUDE_MESSAGES_DEBUG: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get client configuration (Singleton)

    Uses lru_cache to ensure configuration is loaded only once.

    Returns:
        Settings: Client configuration instance
    """
    return Settings()
