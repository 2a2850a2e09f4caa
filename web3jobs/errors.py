"""
Error taxonomy for upstream fetches.

Every failure that leaves the fetch pipeline is a ClassifiedError with one of
a closed set of kinds, so callers can render an actionable message without
knowing anything about aiohttp.
"""

from __future__ import annotations

import asyncio
import json
from enum import Enum
from typing import Optional

import aiohttp


class ErrorKind(str, Enum):
    """Closed set of failure classes."""
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    RATE_LIMITED = "rate_limited"
    UPSTREAM_SERVER_ERROR = "upstream_server_error"
    UPSTREAM_CLIENT_ERROR = "upstream_client_error"
    NETWORK_UNREACHABLE = "network_unreachable"
    MALFORMED_RESPONSE = "malformed_response"
    UNKNOWN = "unknown"


# Kinds that are worth another attempt
TRANSIENT_KINDS = frozenset({
    ErrorKind.RATE_LIMITED,
    ErrorKind.UPSTREAM_SERVER_ERROR,
    ErrorKind.NETWORK_UNREACHABLE,
})


class HttpStatusError(Exception):
    """Raised by the fetcher when the upstream answers with status >= 400."""

    def __init__(self, status: int, reason: str = ""):
        self.status = status
        self.reason = reason
        super().__init__(f"HTTP {status} {reason}".strip())


class ClassifiedError(Exception):
    """A failure mapped onto ErrorKind, with optional status code and message."""

    def __init__(self, kind: ErrorKind, message: str = "", status: Optional[int] = None):
        self.kind = kind
        self.status = status
        self.message = message
        super().__init__(message or kind.value)

    @property
    def transient(self) -> bool:
        return self.kind in TRANSIENT_KINDS

    def __repr__(self) -> str:
        return f"ClassifiedError(kind={self.kind.value!r}, status={self.status!r}, message={self.message!r})"


def kind_for_status(status: int) -> ErrorKind:
    """Map an HTTP error status to its ErrorKind."""
    if status == 401:
        return ErrorKind.UNAUTHORIZED
    if status == 403:
        return ErrorKind.FORBIDDEN
    if status == 429:
        return ErrorKind.RATE_LIMITED
    if status >= 500:
        return ErrorKind.UPSTREAM_SERVER_ERROR
    if status >= 400:
        return ErrorKind.UPSTREAM_CLIENT_ERROR
    return ErrorKind.UNKNOWN


def classify(exc: BaseException) -> ClassifiedError:
    """
    Map a raw transport/HTTP failure onto the error taxonomy.

    Args:
        exc: Exception raised while fetching or decoding a response

    Returns:
        ClassifiedError (the same object if exc is already classified)
    """
    if isinstance(exc, ClassifiedError):
        return exc

    if isinstance(exc, HttpStatusError):
        return ClassifiedError(kind_for_status(exc.status), str(exc), status=exc.status)

    # Undecodable body; ContentTypeError must be checked before ClientResponseError (its subclass)
    if isinstance(exc, (aiohttp.ContentTypeError, json.JSONDecodeError, UnicodeDecodeError)):
        return ClassifiedError(
            ErrorKind.MALFORMED_RESPONSE,
            f"Response body is not valid JSON: {exc}",
            status=getattr(exc, "status", None),
        )

    if isinstance(exc, aiohttp.ClientResponseError):
        return ClassifiedError(kind_for_status(exc.status), exc.message or str(exc), status=exc.status)

    # Request went out, no usable response came back
    if isinstance(exc, (asyncio.TimeoutError, aiohttp.ClientConnectionError, aiohttp.ClientPayloadError)):
        return ClassifiedError(
            ErrorKind.NETWORK_UNREACHABLE,
            str(exc) or type(exc).__name__,
        )

    return ClassifiedError(ErrorKind.UNKNOWN, str(exc) or type(exc).__name__)
