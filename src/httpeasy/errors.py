# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from collections.abc import Iterator
from enum import Enum

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    PROTOCOL_ERROR = "PROTOCOL_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


class HttpEasyError(Exception):
    """Base exception for all httpeasy errors."""


class ConfigurationError(HttpEasyError):
    """Required request configuration is missing at dispatch time."""


class TransportError(HttpEasyError):
    """The underlying HTTP exchange failed.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR) -> None:
        super().__init__(message)
        self.category = category

    @property
    def reason(self) -> str:
        return error_category_to_reason(self.category)


class InterruptionError(HttpEasyError, KeyboardInterrupt):
    """The blocked exchange was interrupted before a response arrived."""


class FormatError(HttpEasyError):
    """Response body does not look like JSON."""


def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
    # httpx wraps httpcore errors, which in turn wrap the socket/ssl failure.
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (httpx.ConnectError, httpx.NetworkError, httpx.ProxyError)):
        for cause in _exception_chain(exc):
            if isinstance(cause, (ssl_module.SSLError, ssl_module.CertificateError)):
                return ErrorCategory.SSL_ERROR
            if isinstance(cause, (socket.gaierror, socket.herror)):
                return ErrorCategory.DNS_ERROR
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (httpx.RemoteProtocolError, httpx.LocalProtocolError, httpx.TooManyRedirects)):
        return ErrorCategory.PROTOCOL_ERROR

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (socket.timeout, TimeoutError)):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, ConnectionError):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout during request",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.PROTOCOL_ERROR: "Malformed or unexpected HTTP exchange",
        ErrorCategory.UNKNOWN_ERROR: "Network error during request",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Request failed due to network error")


__all__ = [
    "ConfigurationError",
    "ErrorCategory",
    "FormatError",
    "HttpEasyError",
    "InterruptionError",
    "TransportError",
    "categorize_exception",
    "error_category_to_reason",
]
