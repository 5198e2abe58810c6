# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
jiraclient package entrypoint.

A small JSON-over-HTTP client for Jira. Transport is abstracted behind an
injectable HttpClient protocol (httpx by default), credentials are pluggable
providers, and remote objects are hydrated into typed resources that keep a
reference to the RestClient for follow-up calls.
"""

from .config import HttpSettings, load_http_settings
from .credentials import BasicCredentials, CookieCredentials, Credentials, TokenCredentials
from .errors import (
    EncodingError,
    ErrorCategory,
    FieldError,
    FieldMissing,
    FieldTypeError,
    InvalidURL,
    JiraClientError,
    ParseError,
    RestError,
    TransportError,
)
from .greenhopper import Sprint, SprintState
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .resource import Resource
from .rest import RestClient
from .version import __version__

__all__ = [
    "BasicCredentials",
    "CookieCredentials",
    "Credentials",
    "EncodingError",
    "ErrorCategory",
    "FieldError",
    "FieldMissing",
    "FieldTypeError",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "InvalidURL",
    "JiraClientError",
    "ParseError",
    "Resource",
    "RestClient",
    "RestError",
    "Sprint",
    "SprintState",
    "StubHttpClient",
    "TokenCredentials",
    "TransportError",
    "__version__",
    "create_default_http_client",
    "load_http_settings",
    "setup_logging",
]
