"""Variant specification service settings loaded from environment variables."""

from enum import StrEnum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(StrEnum):
    """Deployment environment."""

    DEV = "dev"
    STAGING = "staging"
    PROD = "prod"


class LogLevel(StrEnum):
    """Supported log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Application-wide settings loaded from environment variables / .env file.

    All secrets and deployment-specific values live here. Never hardcode them.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- KDP ---
    KDP_BASE_URL: str = Field(
        default="",
        description="Base URL of the KDP API gateway.",
    )
    KDP_HOST: str = Field(
        default="",
        description="Host header expected by the KDP gateway.",
    )
    KDP_ORIGINATING_SYSTEM: str = Field(
        default="",
        description="Caller identification sent as originatingSystem on every KDP request.",
    )
    KDP_VARIANT_SPECIFICATION_USER_KEY: str = Field(
        default="",
        description="API user key for the variant specification endpoints.",
    )
    KDP_PRODUCT_SPECIFICATION_USER_KEY: str = Field(
        default="",
        description="API user key for the product specification endpoint.",
    )
    KDP_TIMEOUT_S: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for a single KDP request, in seconds.",
    )

    # --- Logging ---
    LOG_LEVEL: LogLevel = Field(
        default=LogLevel.INFO,
        description="Application log level.",
    )

    # --- Environment ---
    ENVIRONMENT: Environment = Field(
        default=Environment.DEV,
        description="Deployment environment (dev/staging/prod).",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.ENVIRONMENT == Environment.PROD

    def require_kdp_settings(self, *, product_specification: bool = False) -> None:
        """Fail fast when KDP settings needed for outbound calls are blank.

        The product specification user key is only checked when
        ``product_specification`` is set.

        Raises:
            ValueError: Naming every missing setting.
        """
        required = {
            "KDP_BASE_URL": self.KDP_BASE_URL,
            "KDP_HOST": self.KDP_HOST,
            "KDP_ORIGINATING_SYSTEM": self.KDP_ORIGINATING_SYSTEM,
            "KDP_VARIANT_SPECIFICATION_USER_KEY": self.KDP_VARIANT_SPECIFICATION_USER_KEY,
        }
        if product_specification:
            required["KDP_PRODUCT_SPECIFICATION_USER_KEY"] = self.KDP_PRODUCT_SPECIFICATION_USER_KEY
        missing = [name for name, value in required.items() if not value.strip()]
        if missing:
            msg = f"Missing required configuration value(s): {', '.join(missing)}"
            raise ValueError(msg)


def get_settings() -> Settings:
    """Factory function for dependency injection."""
    return Settings()
