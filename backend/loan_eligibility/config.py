"""Application configuration using pydantic-settings."""

import logging
from typing import Any, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_ANNUAL_INTEREST_PERCENT = 20.0


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Upstream dependencies (required per request, no defaults)
    SALARY_API_URL: Optional[str] = None
    CREDIT_API_URL: Optional[str] = None

    # Decision policy
    ANNUAL_INTEREST_PERCENT: float = DEFAULT_ANNUAL_INTEREST_PERCENT

    # Upstream call behaviour
    UPSTREAM_TIMEOUT_SECONDS: float = 5.0
    UPSTREAM_RETRY_ATTEMPTS: int = 3
    UPSTREAM_RETRY_DELAY_SECONDS: float = 0.25

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("SALARY_API_URL", "CREDIT_API_URL", mode="before")
    @classmethod
    def normalize_url(cls, v: Any) -> Optional[str]:
        """Treat blank URLs as unset and strip trailing slashes."""
        if v is None:
            return None
        v = str(v).strip().rstrip("/")
        return v or None

    @field_validator("ANNUAL_INTEREST_PERCENT", mode="before")
    @classmethod
    def parse_interest(cls, v: Any) -> float:
        """Fall back to the default rate when the value does not parse."""
        if v is None or v == "":
            return DEFAULT_ANNUAL_INTEREST_PERCENT
        try:
            return float(v)
        except (TypeError, ValueError):
            logger.warning(
                f"Ignoring invalid ANNUAL_INTEREST_PERCENT={v!r}, "
                f"using {DEFAULT_ANNUAL_INTEREST_PERCENT}"
            )
            return DEFAULT_ANNUAL_INTEREST_PERCENT

    @property
    def upstreams_configured(self) -> bool:
        """Whether both upstream base URLs are set."""
        return bool(self.SALARY_API_URL and self.CREDIT_API_URL)


def get_settings() -> Settings:
    """
    Load settings from the environment.

    Resolved on every request so that a missing upstream URL surfaces as a
    per-request configuration error rather than a startup failure.
    """
    return Settings()
