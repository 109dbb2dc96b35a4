"""Configuration for the auto-api client."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api1.auto-api.com"
DEFAULT_API_VERSION = "v2"
DEFAULT_TIMEOUT = 30.0


@dataclass
class ClientConfig:
    """Connection settings held by a client."""

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")


class Settings(BaseSettings):
    """Client configuration loaded from environment variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="AUTO_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    key: str = Field(default="")
    base_url: str = Field(default=DEFAULT_BASE_URL)
    version: str = Field(default=DEFAULT_API_VERSION)
    timeout: float = Field(default=DEFAULT_TIMEOUT)

    def validate_settings(self) -> list[str]:
        """Validate configuration. Returns list of errors."""
        errors = []
        if not self.key:
            errors.append("AUTO_API_KEY is required")
        if not self.base_url:
            errors.append("AUTO_API_BASE_URL must not be empty")
        if self.timeout <= 0:
            errors.append("AUTO_API_TIMEOUT must be positive")
        return errors

    def to_client_config(self) -> ClientConfig:
        return ClientConfig(
            api_key=self.key,
            base_url=self.base_url,
            api_version=self.version,
            timeout=self.timeout,
        )
