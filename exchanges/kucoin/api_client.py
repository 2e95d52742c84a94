"""
KuCoin REST API Client

This module provides an async HTTP client for the KuCoin v1 REST API.
It handles:
- Canonical query strings and HMAC request signing
- One generic dispatcher shared by every endpoint
- Classification of failures into TransportError and APIError
- Endpoint methods generated from the ENDPOINTS table

API Documentation:
    https://kucoinapidocs.docs.apiary.io/

Request Format:
    - Every path is prefixed with /v1
    - Parameters always travel in the query string, for GET and POST alike
    - POST requests carry an empty JSON object as body
    - Signed requests add KC-API-KEY, KC-API-NONCE and KC-API-SIGNATURE headers

Retries:
    None. A failed call raises immediately; retry and backoff policy is left
    to the caller. Timeouts are enforced by the aiohttp session.

Usage:
    async with KucoinAPIClient(api_key, api_secret) as client:
        symbols = await client.get_trading_symbols()
        balance = await client.get_balance(symbol="KCS")
        print(balance.data)
"""

import aiohttp
import asyncio
import json
import time
from typing import Any, Dict, Mapping, Optional, Union
from pydantic import ValidationError
from yarl import URL

from core.config import Settings, settings
from core.exceptions import APIError, TransportError
from core.logging import get_logger, log_api_request, log_api_response
from core.schemas import Credentials, Envelope, RequestDescriptor
from core.utils.time import get_nonce
from .endpoints import ENDPOINTS, get_endpoint
from .signing import build_headers, canonical_query_string


class KucoinAPIClient:
    """
    Async HTTP client for the KuCoin REST API

    Every endpoint method returns the full response Envelope. The payload is
    on `envelope.data`.

    Attributes:
        BASE_URL: KuCoin API base URL
        PATH_PREFIX: API version prefix
        credentials: API key/secret pair, or None for a public-only client
        session: aiohttp ClientSession for HTTP requests
        logger: Logger instance for debugging

    Example:
        >>> async with KucoinAPIClient("my-key", "my-secret") as client:
        ...     book = await client.get_order_books(pair="KCS-BTC", type="BUY", limit=10)
        ...     print(book.data)

    Notes:
        - Uses context manager for automatic session cleanup
        - A session passed to the constructor is used as-is and never closed here
        - Safe to call concurrently; each call builds its own request and nonce
    """

    BASE_URL = "https://api.kucoin.com"
    PATH_PREFIX = "/v1"
    EXCHANGE = "kucoin"

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_secret: Optional[Union[str, bytes]] = None,
        *,
        base_url: Optional[str] = None,
        path_prefix: Optional[str] = None,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: Optional[float] = None
    ):
        """
        Initialize the KuCoin API client.

        Args:
            api_key: KuCoin API key (not needed for public endpoints)
            api_secret: KuCoin API secret (not needed for public endpoints)
            base_url: Override for BASE_URL
            path_prefix: Override for PATH_PREFIX
            session: Existing aiohttp session to use instead of creating one
            timeout: Total request timeout in seconds for the session this client creates

        Raises:
            ValueError: If only one of api_key / api_secret is given
        """
        if bool(api_key) != bool(api_secret):
            raise ValueError("api_key and api_secret must be provided together")

        self.credentials: Optional[Credentials] = (
            Credentials(api_key=api_key, api_secret=api_secret) if api_key else None
        )
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.path_prefix = self.PATH_PREFIX if path_prefix is None else path_prefix
        self.timeout = timeout
        self.logger = get_logger(__name__)
        self.session: Optional[aiohttp.ClientSession] = session
        self._owns_session = session is None

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None, **kwargs: Any) -> "KucoinAPIClient":
        """
        Build a client from application settings (.env / environment).

        Args:
            config: Settings instance (defaults to the global settings)
            **kwargs: Extra constructor arguments (e.g., session)

        Returns:
            Configured KucoinAPIClient
        """
        config = config or settings
        creds = config.credentials
        return cls(
            api_key=creds.api_key if creds else None,
            api_secret=creds.secret_bytes if creds else None,
            base_url=config.kucoin_base_url,
            path_prefix=config.kucoin_api_prefix,
            timeout=config.request_timeout,
            **kwargs
        )

    # ============================================
    # Context Manager for Session Management
    # ============================================

    async def __aenter__(self):
        """
        Enter async context - creates HTTP session unless one was injected.

        Returns:
            Self for use in async with statement
        """
        if self.session is None:
            if self.timeout:
                self.session = aiohttp.ClientSession(
                    timeout=aiohttp.ClientTimeout(total=self.timeout)
                )
            else:
                self.session = aiohttp.ClientSession()
            self._owns_session = True
            self.logger.debug("KucoinAPIClient session created")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """
        Exit async context - closes the HTTP session this client created.
        """
        if self.session and self._owns_session:
            await self.session.close()
            self.session = None
            self.logger.debug("KucoinAPIClient session closed")

    # ============================================
    # Request Dispatcher
    # ============================================

    async def dispatch(
        self,
        method: str,
        path: str,
        signed: bool = False,
        params: Optional[Mapping[str, Any]] = None
    ) -> Envelope:
        """
        Send one request to the KuCoin API.

        Args:
            method: "GET" or "POST"
            path: Endpoint path below the version prefix (e.g., "/market/open/symbols")
            signed: Attach authentication headers
            params: Query parameters

        Returns:
            The full response Envelope (success, code, msg, timestamp, data)

        Raises:
            RuntimeError: If the session is not initialized
            ValueError: If the request is malformed or signing lacks credentials
            TransportError: Connection failure, timeout, HTTP error status or malformed body
            APIError: The exchange answered with success: false
        """
        request = RequestDescriptor(
            method=method,
            path=path,
            signed=signed,
            params=dict(params) if params else {}
        )
        return await self._send(request)

    async def public_request(
        self, method: str, path: str, params: Optional[Mapping[str, Any]] = None
    ) -> Envelope:
        """Dispatch an unsigned request."""
        return await self.dispatch(method, path, signed=False, params=params)

    async def signed_request(
        self, method: str, path: str, params: Optional[Mapping[str, Any]] = None
    ) -> Envelope:
        """Dispatch a signed request."""
        return await self.dispatch(method, path, signed=True, params=params)

    async def call_endpoint(
        self, name: str, params: Optional[Mapping[str, Any]] = None, **kwargs: Any
    ) -> Envelope:
        """
        Call a registered endpoint by name.

        Args:
            name: Key in ENDPOINTS (e.g., "get_balance")
            params: Caller parameters as a mapping
            **kwargs: Caller parameters as keywords (override params)

        Returns:
            The full response Envelope

        Example:
            >>> await client.call_endpoint("get_ticker", pair="KCS-BTC")
        """
        merged: Dict[str, Any] = dict(params or {})
        merged.update(kwargs)
        request = get_endpoint(name).build_request(merged)
        return await self._send(request)

    async def _send(self, request: RequestDescriptor) -> Envelope:
        if not self.session:
            raise RuntimeError("Client session not initialized. Use 'async with' statement.")

        query_string = canonical_query_string(request.params)
        endpoint_path = f"{self.path_prefix}{request.path}"
        request_path = f"{endpoint_path}?{query_string}" if query_string else endpoint_path

        if request.signed:
            if self.credentials is None:
                raise ValueError(f"{request.method} {request.path} requires API credentials")
            headers = build_headers(endpoint_path, query_string, self.credentials, get_nonce())
        else:
            headers = build_headers(endpoint_path, query_string)

        # Already encoded: the bytes on the wire must match the signed query string
        url = URL(f"{self.base_url}{request_path}", encoded=True)
        label = f"{request.method} {endpoint_path}"

        log_api_request(self.EXCHANGE, label, request.params)
        started = time.monotonic()

        try:
            if request.method == "POST":
                response_cm = self.session.post(url, headers=headers, json={})
            else:
                response_cm = self.session.get(url, headers=headers)

            async with response_cm as resp:
                status = resp.status
                raw = await resp.read()

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.error(f"Request failed on {label}: {e!r}")
            raise TransportError(f"Request failed on {label}: {e!r}", original=e) from e

        log_api_response(self.EXCHANGE, label, status, time.monotonic() - started)
        return self._parse_envelope(label, status, raw)

    def _parse_envelope(self, label: str, status: int, raw: bytes) -> Envelope:
        """
        Decode a response body and classify the outcome.

        A body that is not UTF-8 JSON is a TransportError. An HTTP error
        status is a TransportError unless the body is itself a KuCoin
        envelope, in which case the exchange's own rejection is raised as
        APIError.
        """
        preview = raw[:200].decode("utf-8", errors="replace")
        try:
            # UnicodeDecodeError is a ValueError
            text = raw.decode("utf-8")
            body = json.loads(text) if text else None
        except ValueError as e:
            if status >= 400:
                self.logger.error(f"HTTP {status} on {label}: {preview}")
                raise TransportError(f"HTTP {status} on {label}", original=e, status=status) from e
            self.logger.error(f"Malformed body on {label}: {preview}")
            raise TransportError(f"Malformed JSON body on {label}", original=e, status=status) from e

        is_envelope = isinstance(body, dict) and "success" in body

        if status >= 400 and not is_envelope:
            self.logger.error(f"HTTP {status} on {label}: {preview}")
            raise TransportError(f"HTTP {status} on {label}", status=status)

        if not isinstance(body, dict):
            self.logger.error(f"Unexpected response body on {label}: {type(body).__name__}")
            raise TransportError(
                f"Unexpected response body on {label}: expected a JSON object",
                status=status
            )

        try:
            envelope = Envelope.model_validate(body)
        except ValidationError as e:
            self.logger.error(f"Malformed envelope on {label}: {e}")
            raise TransportError(f"Malformed envelope on {label}", original=e, status=status) from e

        if not envelope.success:
            self.logger.warning(f"{label} rejected: {envelope.code} {envelope.msg}")
            raise APIError(envelope)

        self.logger.debug(f"{label} - Success ({envelope.code})")
        return envelope


# ============================================
# Endpoint Methods
# ============================================

def endpoint_method(name: str):
    """
    Build the coroutine method for one ENDPOINTS entry.

    The generated method accepts parameters either as a mapping or as
    keywords: `client.get_balance({"symbol": "KCS"})` and
    `client.get_balance(symbol="KCS")` are equivalent.
    """
    endpoint = get_endpoint(name)

    async def method(self, params: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Envelope:
        return await self.call_endpoint(name, params, **kwargs)

    access = "signed" if endpoint.signed else "public"
    method.__name__ = name
    method.__qualname__ = f"KucoinAPIClient.{name}"
    method.__doc__ = f"{endpoint.description}\n\n{endpoint.method} {endpoint.path} ({access})"
    return method


for _name in ENDPOINTS:
    setattr(KucoinAPIClient, _name, endpoint_method(_name))
