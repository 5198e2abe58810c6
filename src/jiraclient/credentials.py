# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Credential providers that decorate outbound requests."""

from __future__ import annotations

import base64
from typing import Protocol

from .http.headers import header_value
from .http.models import HttpRequest


class Credentials(Protocol):
    """Anything able to authenticate an HttpRequest in place."""

    def authenticate(self, request: HttpRequest) -> None: ...

    @property
    def logon_name(self) -> str | None: ...


def _set_header(request: HttpRequest, name: str, value: str) -> None:
    for key in list(request.headers):
        if key.lower() == name.lower():
            del request.headers[key]
    request.headers[name] = value


class BasicCredentials:
    """HTTP basic authentication (username + password or API token)."""

    def __init__(self, username: str, password: str):
        self._username = username
        self._password = password

    @property
    def logon_name(self) -> str | None:
        return self._username

    def authenticate(self, request: HttpRequest) -> None:
        raw = f"{self._username}:{self._password}".encode()
        _set_header(request, "Authorization", "Basic " + base64.b64encode(raw).decode("ascii"))

    def __repr__(self) -> str:
        return f"BasicCredentials(username={self._username!r})"


class TokenCredentials:
    """Bearer token authentication (personal access tokens)."""

    def __init__(self, token: str, username: str | None = None):
        self._token = token
        self._username = username

    @property
    def logon_name(self) -> str | None:
        return self._username

    def authenticate(self, request: HttpRequest) -> None:
        _set_header(request, "Authorization", f"Bearer {self._token}")

    def __repr__(self) -> str:
        return f"TokenCredentials(username={self._username!r})"


class CookieCredentials:
    """Session cookie authentication, e.g. ``JSESSIONID`` from a prior login."""

    def __init__(self, value: str, name: str = "JSESSIONID", username: str | None = None):
        self._name = name
        self._value = value
        self._username = username

    @property
    def logon_name(self) -> str | None:
        return self._username

    def authenticate(self, request: HttpRequest) -> None:
        cookie = f"{self._name}={self._value}"
        existing = header_value(request.headers, "Cookie")
        _set_header(request, "Cookie", f"{existing}; {cookie}" if existing else cookie)

    def __repr__(self) -> str:
        return f"CookieCredentials(name={self._name!r}, username={self._username!r})"


__all__ = ["BasicCredentials", "CookieCredentials", "Credentials", "TokenCredentials"]
