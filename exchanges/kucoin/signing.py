"""
KuCoin Request Signing

Pure helpers shared by the dispatcher and its tests:

- canonical_query_string: Deterministic `key=value&...` serialization
- get_signature: The KuCoin v1 HMAC signature
- build_headers: Header set for signed and unsigned requests

Signature Algorithm:
    1. str_for_sign = "{endpoint_path}/{nonce}/{query_string}"
       (endpoint_path includes the /v1 prefix, never the query string)
    2. base64-encode the UTF-8 bytes of str_for_sign
    3. HMAC-SHA256 of that base64 text, keyed by the API secret
    4. lowercase hex digest

    The base64 step comes before hashing. The HMAC is computed over the
    base64 text, not over str_for_sign itself.
"""

import base64
import hashlib
import hmac
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Union

from core.schemas import Credentials


CONTENT_TYPE = "application/json"

HEADER_API_KEY = "KC-API-KEY"
HEADER_NONCE = "KC-API-NONCE"
HEADER_SIGNATURE = "KC-API-SIGNATURE"


def _plain_number(value: Any) -> str:
    """Fixed-point text for a float or Decimal, never scientific notation."""
    if isinstance(value, float):
        value = Decimal(repr(value))
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_param_value(value: Any) -> str:
    """
    Format one parameter value for the query string.

    - bool → "true" / "false"
    - list / tuple → comma-joined elements
    - float / Decimal → plain decimal text (0.00005, not 5e-05)
    - anything else → str(value)

    Values are not percent-encoded; the query string is sent exactly as signed.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(format_param_value(item) for item in value)
    if isinstance(value, (float, Decimal)):
        return _plain_number(value)
    return str(value)


def canonical_query_string(params: Optional[Mapping[str, Any]] = None) -> str:
    """
    Serialize parameters into the canonical query string.

    Each entry becomes `key=value`; the strings are sorted and joined with `&`.
    Entries whose value is None are skipped.

    Args:
        params: Parameter mapping (insertion order is irrelevant)

    Returns:
        Canonical query string, "" for an empty or missing mapping

    Example:
        >>> canonical_query_string({"b": 2, "a": 1})
        'a=1&b=2'
    """
    if not params:
        return ""

    pairs = [
        f"{key}={format_param_value(value)}"
        for key, value in params.items()
        if value is not None
    ]
    pairs.sort()
    return "&".join(pairs)


def get_signature(
    path: str,
    query_string: str,
    nonce: Union[int, str],
    secret: Union[str, bytes]
) -> str:
    """
    Compute the KuCoin request signature.

    Args:
        path: Endpoint path including the version prefix (e.g., "/v1/user/info")
        query_string: Canonical query string ("" when there are no parameters)
        nonce: Epoch milliseconds used for this request
        secret: API secret

    Returns:
        Lowercase hex HMAC-SHA256 digest

    Example:
        >>> get_signature("/v1/user/info", "", 1509592077557, "secret")  # doctest: +SKIP
        '3c5e...'
    """
    str_for_sign = f"{path}/{nonce}/{query_string}"
    signature_str = base64.b64encode(str_for_sign.encode("utf-8"))

    key = secret.encode("utf-8") if isinstance(secret, str) else secret
    return hmac.new(key, signature_str, hashlib.sha256).hexdigest()


def build_headers(
    path: str,
    query_string: str,
    credentials: Optional[Credentials] = None,
    nonce: Optional[int] = None
) -> Dict[str, str]:
    """
    Build the header set for one request.

    Unsigned requests (no credentials) carry only Content-Type. Signed
    requests add the API key, the nonce and the signature computed with
    that same nonce.

    Args:
        path: Endpoint path including the version prefix
        query_string: Canonical query string
        credentials: Credential pair, or None for an unsigned request
        nonce: Nonce to sign with (required when credentials are given)

    Returns:
        Header dictionary
    """
    headers = {"Content-Type": CONTENT_TYPE}

    if credentials is None:
        return headers

    if nonce is None:
        raise ValueError("A nonce is required to sign a request")

    headers[HEADER_API_KEY] = credentials.api_key
    headers[HEADER_NONCE] = str(nonce)
    headers[HEADER_SIGNATURE] = get_signature(
        path, query_string, nonce, credentials.secret_bytes
    )
    return headers
