"""
Configuration module for the Okta Mock Server.

This module provides environment variable configuration and settings management
using Pydantic Settings for type-safe configuration.
"""
from typing import Optional

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MockServerSettings(BaseSettings):
    """
    Configuration settings for the Okta Mock Server.

    All settings are loaded from environment variables (or a local .env file)
    with validation. Field names match the variable names case-insensitively,
    so ``OKTA_API_TOKEN`` populates ``okta_api_token``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    port: int = Field(
        8080,
        description="TCP port the HTTP server listens on"
    )

    host: str = Field(
        "0.0.0.0",
        description="Interface the HTTP server binds to"
    )

    okta_api_token: str = Field(
        "test-api-token-12345",
        description="API token clients must present on /api/v1 routes (SSWS or Bearer scheme)"
    )

    jwt_secret: str = Field(
        "your-secret-key",
        description="HMAC secret used to sign tokens issued by the OAuth2 token endpoint"
    )

    okta_domain: str = Field(
        "localhost:8080",
        description="Host (and optional port) interpolated into self-links and discovery URLs"
    )

    token_expiration: int = Field(
        3600,
        description="Lifetime of issued access tokens, in seconds"
    )

    log_level: str = Field(
        "INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level is one of the standard Python logging levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {', '.join(valid_levels)}")
        return v.upper()

    @field_validator("okta_api_token", "jwt_secret")
    @classmethod
    def validate_secrets(cls, v, info: ValidationInfo):
        """Validate secrets are not empty."""
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} cannot be empty")
        return v.strip()

    @field_validator("okta_domain")
    @classmethod
    def validate_okta_domain(cls, v):
        """Strip any scheme and trailing slash; links are always built as http://<domain>."""
        domain = v.strip()
        for prefix in ("http://", "https://"):
            if domain.startswith(prefix):
                domain = domain[len(prefix):]
        domain = domain.rstrip("/")
        if not domain:
            raise ValueError("OKTA_DOMAIN cannot be empty")
        return domain

    @field_validator("token_expiration")
    @classmethod
    def validate_token_expiration(cls, v):
        if v <= 0:
            raise ValueError("TOKEN_EXPIRATION must be a positive number of seconds")
        return v

    @property
    def base_url(self) -> str:
        """
        Base URL used in generated links.

        Returns:
            str: ``http://<okta_domain>``
        """
        return f"http://{self.okta_domain}"

    @property
    def masked_api_token(self) -> str:
        """API token with everything but the first four characters hidden, for logs."""
        return f"{self.okta_api_token[:4]}{'*' * 8}"


# Global settings instance
settings: Optional[MockServerSettings] = None


def get_settings() -> MockServerSettings:
    """
    Get the global settings instance, creating it if necessary.

    Avoids re-reading environment variables every time an application is built.

    Returns:
        MockServerSettings: The global settings instance

    Raises:
        ValueError: If environment variables are invalid
    """
    global settings
    if settings is None:
        settings = MockServerSettings()
    return settings


def reload_settings() -> MockServerSettings:
    """
    Force reload settings from environment variables.

    This is useful for testing or when environment variables change.

    Returns:
        MockServerSettings: New settings instance
    """
    global settings
    settings = MockServerSettings()
    return settings
