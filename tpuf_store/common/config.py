"""Configuration management for the turbopuffer adapter.

This module centralizes environment-driven configuration. It builds on
``pydantic_settings.BaseSettings`` so values can come from environment
variables, a ``.env`` file, or explicit keyword arguments.

Highlights
- The API key is held as a ``SecretStr`` so it never shows up in reprs or logs
- The environment is only one source: callers may pass a fully explicit
  ``TurbopufferConfig(turbopuffer_api_key=...)`` instead

Usage
- ``config = TurbopufferConfig()`` reads ``TURBOPUFFER_API_KEY`` and friends
- ``TurbopufferVectorStore(embeddings, settings=config)`` injects it
"""

from typing import Any, Dict, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_ENDPOINT = "https://api.turbopuffer.com/v1"
DEFAULT_NAMESPACE = "default"


class TurbopufferConfig(BaseSettings):
    """Settings for talking to the turbopuffer API.

    Field names double as (case-insensitive) environment variable names, so
    ``turbopuffer_api_key`` is read from ``TURBOPUFFER_API_KEY``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Remote service
    turbopuffer_api_key: Optional[SecretStr] = Field(default=None)
    turbopuffer_api_endpoint: str = Field(default=DEFAULT_API_ENDPOINT)

    # Logging
    tpuf_log_level: str = Field(default="INFO")
    tpuf_log_format: str = Field(default="json")

    def api_key_value(self) -> Optional[str]:
        """Return the raw API key, or ``None`` when unset or blank."""
        if self.turbopuffer_api_key is None:
            return None
        return self.turbopuffer_api_key.get_secret_value() or None


def public_settings(config: TurbopufferConfig) -> Dict[str, Any]:
    """Return settings without secrets for safe logging/inspection."""
    return config.model_dump(exclude={"turbopuffer_api_key"}, exclude_none=True)


__all__ = [
    "DEFAULT_API_ENDPOINT",
    "DEFAULT_NAMESPACE",
    "TurbopufferConfig",
    "public_settings",
]
