# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import StubHttpClient
from .client import HttpClient, create_default_http_client
from .headers import content_type_charset, header_value, normalize_headers
from .httpx_client import HttpxClient
from .models import Files, Headers, HttpRequest, HttpResponse

__all__ = [
    "Files",
    "Headers",
    "HttpClient",
    "HttpxClient",
    "HttpRequest",
    "HttpResponse",
    "StubHttpClient",
    "content_type_charset",
    "create_default_http_client",
    "header_value",
    "normalize_headers",
]
