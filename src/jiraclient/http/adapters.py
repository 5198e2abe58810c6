# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory HttpClient implementations."""

from __future__ import annotations

from .client import HttpClient
from .models import HttpRequest, HttpResponse


class StubHttpClient(HttpClient):
    """
    Deterministic, programmable HttpClient for tests.

    Responses are looked up by ``(METHOD, url)`` first, then by ``url``.
    Unmatched requests get a 404 so callers see a RestError rather than a hang.
    """

    def __init__(self, responses: dict[str | tuple[str, str], HttpResponse] | None = None):
        self._responses = responses or {}
        self.requests: list[HttpRequest] = []
        self.released: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, response: HttpResponse, *, method: str | None = None) -> None:
        key: str | tuple[str, str] = (method.upper(), url) if method else url
        self._responses[key] = response

    def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        response = self._responses.get((request.method.upper(), request.url))
        if response is None:
            response = self._responses.get(request.url)
        if response is not None:
            return response
        return HttpResponse(status_code=404, reason="Not Found", url=request.url)

    def release_connection(self, request: HttpRequest) -> None:
        self.released.append(request)

    def close(self) -> None:
        self.closed = True

    @property
    def last_request(self) -> HttpRequest:
        if not self.requests:
            raise AssertionError("No requests recorded")
        return self.requests[-1]
