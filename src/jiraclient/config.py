# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for jiraclient."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"jiraclient/{__version__} (+python-httpx)"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _optional_str_env(name: str, default: str | None) -> str | None:
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip()
    return value or default


@dataclass
class HttpSettings:
    """HTTP client defaults."""

    timeout: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True
    server_locale: str | None = None

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            timeout=_float_env("JIRACLIENT_HTTP_TIMEOUT", cls.timeout),
            user_agent=os.getenv("JIRACLIENT_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("JIRACLIENT_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("JIRACLIENT_HTTP_VERIFY_SSL", cls.verify_ssl),
            server_locale=_optional_str_env("JIRACLIENT_SERVER_LOCALE", cls.server_locale),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()
