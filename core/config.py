"""
Configuration Management Module

This module handles loading, validating, and providing access to client configuration
from environment variables (.env file).

Uses Pydantic Settings for automatic validation and type conversion.

Key Features:
- Loads configuration from .env file
- Keeps the API secret wrapped in SecretStr so it never shows up in reprs or logs
- Validates the base URL, API prefix, timeout and log level
- Builds a Credentials object when both key and secret are configured

The request dispatcher itself never reads the environment. Only
KucoinAPIClient.from_settings() and the probe script consult these settings.

Usage:
    from core.config import settings

    print(settings.kucoin_base_url)
    if settings.has_credentials:
        creds = settings.credentials
"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, SecretStr

from core.schemas import Credentials


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """
    Client Settings

    Values are automatically loaded from environment variables or .env file.

    Attributes:
        kucoin_base_url: Base URL of the KuCoin REST API
        kucoin_api_prefix: Version prefix prepended to every endpoint path
        kucoin_api_key: API key identifier (optional for public endpoints)
        kucoin_api_secret: API secret (optional for public endpoints)
        request_timeout: Total HTTP timeout in seconds, handed to aiohttp
        log_level: Logging level
    """

    # ============================================
    # KuCoin API Configuration
    # ============================================

    kucoin_base_url: str = Field(
        default="https://api.kucoin.com",
        description="KuCoin REST API base URL"
    )

    kucoin_api_prefix: str = Field(
        default="/v1",
        description="API version prefix for every endpoint path"
    )

    kucoin_api_key: str = Field(
        default="",
        description="KuCoin API key (optional for public endpoints)"
    )

    kucoin_api_secret: SecretStr = Field(
        default=SecretStr(""),
        description="KuCoin API secret (optional for public endpoints)"
    )

    # ============================================
    # Transport & Application Configuration
    # ============================================

    request_timeout: float = Field(
        default=30,
        description="HTTP request timeout in seconds (enforced by aiohttp)"
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    # ============================================
    # Pydantic Settings Configuration
    # ============================================

    model_config = SettingsConfigDict(
        # Look for .env file in the project root
        env_file=".env",
        # Ignore extra fields in .env that aren't defined here
        extra="ignore",
        # Case-insensitive environment variable matching
        case_sensitive=False
    )

    # ============================================
    # Properties
    # ============================================

    @property
    def has_credentials(self) -> bool:
        """
        Check if both API key and secret are configured.

        Returns:
            True if signed endpoints can be used, False otherwise
        """
        return bool(self.kucoin_api_key) and bool(self.kucoin_api_secret.get_secret_value())

    @property
    def credentials(self) -> Optional[Credentials]:
        """
        Build the credential pair for signed requests.

        Returns:
            Credentials if both key and secret are set, otherwise None
        """
        if not self.has_credentials:
            return None
        return Credentials(api_key=self.kucoin_api_key, api_secret=self.kucoin_api_secret)


# ============================================
# Global Settings Instance
# ============================================

# Loaded once and reused
settings = Settings()


# ============================================
# Configuration Validation
# ============================================

def validate_configuration(config: Optional[Settings] = None) -> None:
    """
    Validate client configuration.

    Args:
        config: Settings to validate (defaults to the global settings)

    Raises:
        ValueError: If a setting is missing or invalid
    """
    # logging.py imports config.py, so the logger is imported lazily
    from core.logging import logger

    config = config or settings

    if not config.kucoin_base_url.startswith(("http://", "https://")):
        raise ValueError(
            f"Invalid KUCOIN_BASE_URL: '{config.kucoin_base_url}'. "
            f"Must start with http:// or https://"
        )

    if config.kucoin_base_url.endswith("/"):
        raise ValueError("KUCOIN_BASE_URL must not end with '/'")

    prefix = config.kucoin_api_prefix
    if not prefix.startswith("/") or prefix.endswith("/"):
        raise ValueError(
            f"Invalid KUCOIN_API_PREFIX: '{prefix}'. "
            f"Must start with '/' and must not end with '/' (e.g. '/v1')"
        )

    if config.request_timeout <= 0:
        raise ValueError(f"Invalid REQUEST_TIMEOUT: {config.request_timeout}. Must be positive")

    if config.log_level.upper() not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid LOG_LEVEL: '{config.log_level}'. "
            f"Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    if bool(config.kucoin_api_key) != bool(config.kucoin_api_secret.get_secret_value()):
        raise ValueError("KUCOIN_API_KEY and KUCOIN_API_SECRET must be set together")

    logger.info("Configuration validated successfully")
    logger.info(f"KuCoin API: {config.kucoin_base_url}{prefix}")
    logger.info(f"Signed endpoints: {'enabled' if config.has_credentials else 'disabled'}")
    logger.info(f"Log level: {config.log_level.upper()}")
