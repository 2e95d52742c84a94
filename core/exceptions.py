"""
Client Exceptions

Every failed call surfaces as one of two kinds, both rooted at KucoinError:

    TransportError  The request never produced a usable envelope: connection
                    refused, DNS failure, timeout, HTTP error status, or a body
                    that is not a JSON object. The underlying exception is kept
                    on `.original` and chained as `__cause__`.

    APIError        The exchange answered with a well-formed envelope whose
                    `success` field is false. The full envelope is kept on
                    `.envelope`; `.code` and `.message` are shortcuts.

Neither is retried by the client. Policy belongs to the caller.
"""

from typing import Optional

from core.schemas import Envelope


class KucoinError(Exception):
    """Base class for all errors raised by the KuCoin client"""


class TransportError(KucoinError):
    """
    The HTTP round trip failed before a usable envelope was decoded.

    Attributes:
        original: The transport exception (aiohttp, asyncio, JSON decoding), if any
        status: HTTP status code, when a response was received
    """

    def __init__(
        self,
        message: str,
        original: Optional[BaseException] = None,
        status: Optional[int] = None
    ):
        super().__init__(message)
        self.original = original
        self.status = status


class APIError(KucoinError):
    """
    The exchange rejected the request (`success: false`).

    Attributes:
        envelope: The decoded response envelope
        code: Exchange status code (e.g., "UNAUTH")
        message: Exchange status message
    """

    def __init__(self, envelope: Envelope):
        self.envelope = envelope
        super().__init__(f"KuCoin API error {envelope.code}: {envelope.msg}")

    @property
    def code(self) -> Optional[str]:
        return self.envelope.code

    @property
    def message(self) -> Optional[str]:
        return self.envelope.msg
