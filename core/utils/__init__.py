"""
Core Utilities Package

This package contains utility functions and helpers used throughout the client.

Modules:
    - time: Nonce generation and timestamp normalization utilities
"""

from core.utils.time import to_utc_datetime, get_nonce

__all__ = ["to_utc_datetime", "get_nonce"]
