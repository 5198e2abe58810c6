# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models exchanged with HttpClient implementations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import IO

Headers = dict[str, str]

# name -> (filename, file object) as accepted by httpx's ``files=`` argument
Files = dict[str, tuple[str, IO[bytes]]]


@dataclass
class HttpRequest:
    """
    Normalized request representation consumed by HttpClient implementations.

    Credential providers mutate ``headers`` in place before dispatch, so the
    mapping is always a fresh dict owned by the request.
    """

    url: str
    method: str = "GET"
    headers: Headers = field(default_factory=dict)
    body: bytes | str | None = None
    files: Files | None = None
    timeout: float | None = None
    allow_redirects: bool | None = None


@dataclass
class HttpResponse:
    """Fully buffered HTTP response."""

    status_code: int
    reason: str = ""
    headers: Headers = field(default_factory=dict)
    content: bytes = b""
    url: str | None = None
