"""Configuration loading for the cart builder.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Cart defaults
    anonymous_customer_name: str = Field(
        default="Anonymous",
        description="Customer name given to carts of customers without a contact",
    )
    default_cart_name: str = Field(
        default="default",
        description="Cart name used when the caller does not supply one",
    )
    default_currency: str = Field(
        default="USD",
        description="ISO 4217 currency used when the caller does not supply one",
    )
    default_language: str = Field(
        default="en-US",
        description="Culture name used when the caller does not supply one",
    )

    # Validation behavior
    rollback_on_unknown_method: bool = Field(
        default=False,
        description="Detach shipments/payments whose method fails to resolve",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    @field_validator("anonymous_customer_name", "default_cart_name")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Ensure names are not blank."""
        if not v.strip():
            raise ValueError("must be a non-empty string")
        return v

    @field_validator("default_currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        """Ensure the currency is a three-letter code, upper-cased."""
        if len(v) != 3 or not v.isalpha():
            raise ValueError("default_currency must be a three-letter currency code")
        return v.upper()


def load_settings(env_file: str | None = None) -> Settings:
    """Load application settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["Settings", "load_settings"]
