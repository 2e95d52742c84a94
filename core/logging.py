"""
Unified Logging Configuration

This module sets up a centralized logging system for the client library.
All modules should import and use the logger from this module instead of
using print() statements.

Usage:
    from core.logging import get_logger

    logger = get_logger(__name__)
    logger.debug("Detailed debugging information")
    logger.info("General informational messages")

Log Levels used by the client:
    DEBUG    - Outbound request and response lines (method, path, params, status, timing)
    WARNING  - Requests rejected by the exchange (success: false)
    ERROR    - Transport failures (connection errors, timeouts, malformed bodies)

Credentials:
    Nothing in this module logs headers. The API key, API secret and
    request signature never reach a log record.

Configuration:
    Importing this module leaves the root logger untouched; the "kucoin"
    logger only gets a NullHandler. Entry points call setup_logging(),
    passing the LOG_LEVEL setting from .env.
"""

import logging
import sys
from typing import Optional


ROOT_LOGGER_NAME = "kucoin"


def setup_logging(
    log_level: str = "INFO",
    log_format: Optional[str] = None,
    include_timestamp: bool = True,
    include_module: bool = True
) -> logging.Logger:
    """
    Configure and return the library logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Custom log format string (uses default if None)
        include_timestamp: Include timestamp in log messages
        include_module: Include module name in log messages

    Returns:
        logging.Logger: Configured logger instance

    Example:
        >>> logger = setup_logging(log_level="DEBUG")
        >>> logger.info("Client started")
        2024-01-01 12:00:00 [INFO] kucoin Client started
    """
    if log_format is None:
        format_parts = []

        if include_timestamp:
            format_parts.append("%(asctime)s")

        format_parts.append("[%(levelname)s]")

        if include_module:
            format_parts.append("%(name)s")

        format_parts.append("%(message)s")

        log_format = " ".join(format_parts)

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True  # Override any existing configuration
    )

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    return logger


# ============================================
# Library Logger
# ============================================

# Handlers belong to the application; see setup_logging()
logger = logging.getLogger(ROOT_LOGGER_NAME)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# ============================================
# Convenience Functions
# ============================================

def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module or component.

    Args:
        name: Name for the logger (typically __name__)

    Returns:
        logging.Logger: Logger instance for the specified name

    Example:
        # In exchanges/kucoin/api_client.py:
        logger = get_logger(__name__)  # "kucoin.exchanges.kucoin.api_client"
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def set_log_level(level: str) -> None:
    """
    Change the level of the "kucoin" logger at runtime.

    Args:
        level: New log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))


# ============================================
# Log Helper Functions
# ============================================

def log_api_request(exchange: str, endpoint: str, params: dict = None) -> None:
    """
    Log an API request with consistent formatting.

    Args:
        exchange: Exchange name (e.g., "kucoin")
        endpoint: Method and path being called (e.g., "GET /v1/market/open/symbols")
        params: Query parameters (optional)

    Example:
        >>> log_api_request("kucoin", "GET /v1/KCS-BTC/open/tick")
        [DEBUG] API Request: kucoin GET /v1/KCS-BTC/open/tick
    """
    if params:
        logger.debug(f"API Request: {exchange} {endpoint} | Params: {params}")
    else:
        logger.debug(f"API Request: {exchange} {endpoint}")


def log_api_response(exchange: str, endpoint: str, status: int, response_time: float = None) -> None:
    """
    Log an API response with status and timing information.

    Args:
        exchange: Exchange name
        endpoint: Method and path
        status: HTTP status code
        response_time: Response time in seconds (optional)

    Example:
        >>> log_api_response("kucoin", "GET /v1/user/info", 200, 0.342)
        [DEBUG] API Response: kucoin GET /v1/user/info | Status: 200 | Time: 0.342s
    """
    time_str = f" | Time: {response_time:.3f}s" if response_time else ""
    logger.debug(f"API Response: {exchange} {endpoint} | Status: {status}{time_str}")
