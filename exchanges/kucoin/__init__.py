"""
KuCoin Exchange Connector

Async client for the KuCoin v1 REST API.

API Documentation:
    https://kucoinapidocs.docs.apiary.io/

Structure:
    exchanges/kucoin/
    ├── __init__.py          # This file (public exports)
    ├── api_client.py        # KucoinAPIClient: session lifecycle + request dispatcher
    ├── endpoints.py         # ENDPOINTS table: verb, path template, signing, param mapping
    └── signing.py           # Canonical query string + HMAC signature

Example:
    from exchanges.kucoin import KucoinAPIClient

    async with KucoinAPIClient() as client:
        ticker = await client.get_ticker(pair="KCS-BTC")
"""

from core.exceptions import APIError, KucoinError, TransportError
from core.schemas import Envelope
from .api_client import KucoinAPIClient
from .endpoints import ENDPOINTS, EndpointDef
from .signing import canonical_query_string, get_signature

__all__ = [
    "KucoinAPIClient",
    "ENDPOINTS",
    "EndpointDef",
    "Envelope",
    "KucoinError",
    "TransportError",
    "APIError",
    "canonical_query_string",
    "get_signature",
]
