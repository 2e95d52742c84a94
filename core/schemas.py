"""
Request and Response Schemas

This module defines the Pydantic models that flow through the request dispatcher.

Models:
    - Credentials: API key identifier + secret, held read-only by a client
    - RequestDescriptor: One outbound call (method, path, signed flag, parameters)
    - Envelope: KuCoin's uniform JSON response wrapper

Lifecycle:
    Credentials live as long as the client that owns them. A RequestDescriptor
    is built per call and discarded once the call completes. An Envelope is
    decoded from the response body and handed straight to the caller, either
    as the return value or inside an APIError.
"""

from datetime import datetime
from typing import Any, Dict, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, SecretBytes, SecretStr, field_validator

from core.utils.time import to_utc_datetime


# ============================================
# Credentials Schema
# ============================================

class Credentials(BaseModel):
    """
    API credential pair used to sign private requests.

    The secret is stored as SecretBytes, so repr(), str() and model_dump()
    show '**********' instead of the value. A str secret is encoded as UTF-8;
    a bytes secret is kept exactly as given, so any key material (not only
    valid UTF-8) can be used for HMAC. `secret_bytes` returns the raw key.

    Example:
        >>> creds = Credentials(api_key="5a1b...", api_secret="f0e1...")
        >>> creds
        Credentials(api_key='5a1b...', api_secret=SecretBytes(b'**********'))
    """

    api_key: str = Field(
        ...,
        min_length=1,
        description="API key identifier sent in the KC-API-KEY header"
    )

    api_secret: SecretBytes = Field(
        ...,
        description="API secret used as the HMAC key"
    )

    model_config = ConfigDict(frozen=True)

    @field_validator('api_secret', mode='before')
    @classmethod
    def encode_secret(cls, v: Any) -> Any:
        """Accept the secret as str, SecretStr or bytes"""
        if isinstance(v, SecretStr):
            v = v.get_secret_value()
        if isinstance(v, str):
            return v.encode("utf-8")
        if isinstance(v, bytearray):
            return bytes(v)
        return v

    @field_validator('api_secret')
    @classmethod
    def validate_secret(cls, v: SecretBytes) -> SecretBytes:
        """Reject an empty secret"""
        if not v.get_secret_value():
            raise ValueError("api_secret must not be empty")
        return v

    @property
    def secret_bytes(self) -> bytes:
        """Raw secret bytes, for use as an HMAC key"""
        return self.api_secret.get_secret_value()


# ============================================
# Request Descriptor Schema
# ============================================

class RequestDescriptor(BaseModel):
    """
    A single outbound request, before serialization.

    Attributes:
        method: HTTP verb, "GET" or "POST" (lower case input is accepted)
        path: Endpoint path below the version prefix, e.g. "/market/open/symbols"
        signed: Whether authentication headers are attached
        params: Query parameters; insertion order is irrelevant

    Example:
        >>> RequestDescriptor(method="get", path="/KCS-BTC/open/tick")
        RequestDescriptor(method='GET', path='/KCS-BTC/open/tick', signed=False, params={})
    """

    method: Literal["GET", "POST"]
    path: str = Field(..., min_length=1)
    signed: bool = False
    params: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @field_validator('method', mode='before')
    @classmethod
    def normalize_method(cls, v: Any) -> Any:
        """Ensure method is uppercase"""
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator('path')
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Ensure path is rooted"""
        if not v.startswith("/"):
            raise ValueError(f"path must start with '/': {v!r}")
        return v

    @field_validator('params', mode='before')
    @classmethod
    def default_params(cls, v: Any) -> Any:
        """Treat a missing mapping as empty"""
        return {} if v is None else v


# ============================================
# Response Envelope Schema
# ============================================

class Envelope(BaseModel):
    """
    KuCoin Response Envelope

    Every v1 endpoint wraps its payload the same way:

        {
          "success": true,
          "code": "OK",
          "msg": "Operation succeeded.",
          "timestamp": 1509592077557,
          "data": {...}
        }

    Attributes:
        success: Whether the exchange accepted the request (missing → False)
        code: Exchange status code (e.g., "OK", "UNAUTH", "ERROR")
        msg: Human-readable status message
        timestamp: Server time in milliseconds
        data: Endpoint-specific payload, passed through untouched

    Notes:
        - Unknown top-level fields are kept (extra="allow")
        - The full envelope is what callers receive; read `.data` for the payload
    """

    success: bool = False
    code: Optional[str] = None
    msg: Optional[str] = None
    timestamp: Optional[int] = None
    data: Any = None

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "success": True,
                "code": "OK",
                "msg": "Operation succeeded.",
                "timestamp": 1509592077557,
                "data": {"coinType": "KCS", "balance": 1.5}
            }
        }
    )

    @field_validator('code', mode='before')
    @classmethod
    def stringify_code(cls, v: Any) -> Any:
        """Some endpoints return numeric codes"""
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @property
    def message(self) -> Optional[str]:
        """Alias for `msg`"""
        return self.msg

    @property
    def timestamp_dt(self) -> Optional[datetime]:
        """Server timestamp as a UTC datetime, or None if absent"""
        if self.timestamp is None:
            return None
        return to_utc_datetime(self.timestamp)
