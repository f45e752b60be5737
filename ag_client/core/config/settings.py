# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Client configuration settings using Pydantic Settings.

Settings are loaded from environment variables (and an optional ``.env``
file) with defaults suited to a local development server.

The Settings class is the main entry point and aggregates all subsettings.
A singleton instance is provided via get_settings().

Example:
    >>> from ag_client.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> print(settings.api.base_url)
    'http://localhost:9000/api/'
"""

from functools import lru_cache
from typing import Literal, Self

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class APISettings(BaseSettings):
    """Autograder API connection configuration.

    Attributes:
        base_url: Base URL every resource path is resolved against.
        timeout: Request timeout in seconds.
        auth_token: API token, sent as ``Authorization: Token <token>``.
        username_cookie: Username for development servers that use fake
            cookie authentication.
    """

    model_config = SettingsConfigDict(
        env_prefix="AG_CLIENT_API_",
        extra="ignore",
    )

    base_url: str = "http://localhost:9000/api/"
    timeout: float = 30.0
    auth_token: SecretStr = SecretStr("")
    username_cookie: str | None = None

    @property
    def auth_headers(self) -> dict[str, str]:
        """Build default headers for API requests."""
        headers = {"Accept": "application/json"}
        token = self.auth_token.get_secret_value()
        if token:
            headers["Authorization"] = f"Token {token}"
        if self.username_cookie:
            headers["Cookie"] = f"username={self.username_cookie}"
        return headers


class Settings(BaseSettings):
    """Main client settings aggregating all subsettings.

    Use get_settings() to obtain a cached singleton instance.

    Attributes:
        environment: Current environment (development, staging, production).
        debug: Enable debug mode.
        log_level: Logging level.
        api: API connection settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="AG_CLIENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    api: APISettings = Field(default_factory=APISettings)

    @model_validator(mode="after")
    def validate_production_settings(self) -> Self:
        """Validate that production settings are properly configured.

        Raises:
            ValueError: If running in production against a plain-HTTP server.
        """
        if self.environment == "production" and not self.api.base_url.startswith("https://"):
            raise ValueError(
                "API base URL must use https in production. "
                "Set AG_CLIENT_API_BASE_URL environment variable."
            )
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Call clear_settings_cache() if you need to reload settings.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Useful for testing or after changing environment variables.
    """
    get_settings.cache_clear()
