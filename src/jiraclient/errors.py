# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class JiraClientError(Exception):
    """Base class for every error raised by jiraclient."""


class InvalidURL(JiraClientError, ValueError):
    """A base URI, path or query parameter produced an unusable URL."""


class TransportError(JiraClientError):
    """The HTTP transport failed before a response was received."""

    def __init__(self, message: str, category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR):
        super().__init__(message)
        self.category = category

    @classmethod
    def from_exception(cls, exc: Exception) -> TransportError:
        category = categorize_exception(exc)
        return cls(f"{error_category_to_reason(category)}: {exc}", category)


class RestError(JiraClientError):
    """
    The remote service answered with a status code of 300 or above.

    The response body is kept verbatim so callers can inspect Jira's
    ``errorMessages`` / ``errors`` payloads.
    """

    def __init__(self, reason: str, status: int, body: str):
        super().__init__(f"{status} {reason}")
        self.reason = reason
        self.status = status
        self.body = body

    def __str__(self) -> str:
        message = f"{self.status} {self.reason}"
        return f"{message}: {self.body}" if self.body else message


class ParseError(JiraClientError, ValueError):
    """A non-empty response body was not valid JSON."""

    def __init__(self, message: str, body: str = ""):
        super().__init__(message)
        self.body = body


class EncodingError(JiraClientError):
    """A request payload could not be encoded as UTF-8."""


class FieldError(JiraClientError):
    """Base class for resource hydration failures."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field

    def __str__(self) -> str:
        return str(self.args[0])


class FieldMissing(FieldError, KeyError):
    """A required key is absent from a resource payload."""

    def __init__(self, field: str):
        super().__init__(field, f"Required field '{field}' is missing")


class FieldTypeError(FieldError, TypeError):
    """A key is present but its value has the wrong shape."""


def categorize_exception(exc: Exception) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    cause = exc.__cause__ or exc.__context__
    if isinstance(exc, ssl_module.SSLError) or isinstance(cause, ssl_module.SSLError):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)) or isinstance(cause, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.UNKNOWN_ERROR: "Transport error",
        None: "",
    }
    return mapping.get(category, "Request failed due to network error")


__all__ = [
    "EncodingError",
    "ErrorCategory",
    "FieldError",
    "FieldMissing",
    "FieldTypeError",
    "InvalidURL",
    "JiraClientError",
    "ParseError",
    "RestError",
    "TransportError",
    "categorize_exception",
    "error_category_to_reason",
]
