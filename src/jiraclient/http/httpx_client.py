# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging
import threading

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import TransportError
from .client import HttpClient
from .headers import normalize_headers
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class HttpxClient(HttpClient):
    """
    Synchronous httpx client wrapper.

    Responses are sent with ``stream=True`` and fully buffered, but the
    underlying connection stays checked out until ``release_connection`` is
    called for the same request object.
    """

    def __init__(self, settings: HttpSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )
        self._open: dict[int, httpx.Response] = {}
        self._lock = threading.Lock()

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers)
        headers.setdefault("User-Agent", self.settings.user_agent)
        timeout = request.timeout if request.timeout is not None else self.settings.timeout
        follow_redirects = request.allow_redirects if request.allow_redirects is not None else self.settings.allow_redirects

        try:
            outbound = self._client.build_request(
                request.method,
                request.url,
                headers=headers,
                content=request.body,
                files=request.files,
                timeout=timeout,
            )
            resp = self._client.send(outbound, stream=True, follow_redirects=follow_redirects)
        except httpx.HTTPError as exc:
            raise TransportError.from_exception(exc) from exc

        with self._lock:
            self._open[id(request)] = resp

        try:
            content = resp.read()
        except httpx.HTTPError as exc:
            self.release_connection(request)
            raise TransportError.from_exception(exc) from exc

        return HttpResponse(
            status_code=resp.status_code,
            reason=resp.reason_phrase,
            headers=normalize_headers(resp.headers),
            content=content,
            url=str(resp.url),
        )

    def release_connection(self, request: HttpRequest) -> None:
        with self._lock:
            resp = self._open.pop(id(request), None)
        if resp is not None:
            resp.close()

    def close(self) -> None:
        with self._lock:
            pending = list(self._open.values())
            self._open.clear()
        if pending:
            logger.debug("Closing %d unreleased response(s)", len(pending))
        for resp in pending:
            resp.close()
        self._client.close()
