"""Configuration management for the Exercism API client."""

from typing import Literal, Optional

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .client import Credentials
from .retry import RetryConfig

DEFAULT_V1_API_BASE_URL = "https://api.exercism.io/v1"
DEFAULT_V2_API_BASE_URL = "https://exercism.org/api/v2"
DEFAULT_WEBSITE_API_BASE_URL = "https://exercism.org/api/v2"

DEFAULT_USER_AGENT = "exercism-api-python/0.1.0"


class Settings(BaseSettings):
    """Client configuration loaded from ``EXERCISM_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="EXERCISM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Credentials
    api_token: Optional[SecretStr] = None

    # API base URLs
    v1_api_base_url: str = DEFAULT_V1_API_BASE_URL
    v2_api_base_url: str = DEFAULT_V2_API_BASE_URL
    website_api_base_url: str = DEFAULT_WEBSITE_API_BASE_URL

    # Retry settings
    max_retries: int = 5
    min_retry_delay: float = 1.0  # seconds
    max_retry_delay: float = 60.0  # seconds
    retry_jitter: bool = True

    # HTTP settings
    timeout: float = 30.0  # seconds
    user_agent: str = DEFAULT_USER_AGENT

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    def retry_config(self) -> RetryConfig:
        """Build the retry policy described by these settings."""
        return RetryConfig(
            max_retries=self.max_retries,
            min_delay=self.min_retry_delay,
            max_delay=self.max_retry_delay,
            jitter=self.retry_jitter,
        )

    def credentials(self) -> Optional[Credentials]:
        """Credentials from ``EXERCISM_API_TOKEN``, if set and not blank."""
        if self.api_token is None:
            return None
        token = self.api_token.get_secret_value().strip()
        return Credentials(token) if token else None


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
