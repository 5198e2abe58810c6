# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Typed accessors used when hydrating resources from decoded JSON."""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Any, TypeVar

from .errors import FieldMissing, FieldTypeError

E = TypeVar("E", bound=Enum)

# GreenHopper renders dates for display as "dd/MMM/yy h:mm a", e.g. "14/Jan/13 10:00 AM"
_DISPLAY_DATE = re.compile(
    r"^(?P<day>\d{1,2})/(?P<month>[^\W\d_]+)/(?P<year>\d{2}) (?P<hour>\d{1,2}):(?P<minute>\d{2}) (?P<ampm>[AaPp][Mm])$"
)
_ISO_OFFSET = re.compile(r"([+-]\d{2})(\d{2})$")
_ENGLISH_MONTHS = {
    name: index
    for index, name in enumerate(
        ("jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec"),
        start=1,
    )
}


def _require(data: Mapping[str, Any], key: str) -> Any:
    if key not in data or data[key] is None:
        raise FieldMissing(key)
    return data[key]


def get_int(data: Mapping[str, Any], key: str) -> int:
    """Return a required integer field; numeric strings are accepted."""
    value = _require(data, key)
    if isinstance(value, bool):
        raise FieldTypeError(key, f"Field '{key}' must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise FieldTypeError(key, f"Field '{key}' must be an integer, got {value!r}")


def get_string(data: Mapping[str, Any], key: str) -> str:
    value = _require(data, key)
    if isinstance(value, (dict, list)):
        raise FieldTypeError(key, f"Field '{key}' must be a string, got {type(value).__name__}")
    return str(value)


def opt_string(data: Mapping[str, Any], key: str, default: str | None = None) -> str | None:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, (dict, list)):
        raise FieldTypeError(key, f"Field '{key}' must be a string, got {type(value).__name__}")
    return str(value)


def get_enum(enum_cls: type[E], value: str, key: str) -> E:
    """Map a string onto an Enum member by name, raising FieldTypeError for unknown names."""
    try:
        return enum_cls[value]
    except KeyError:
        allowed = ", ".join(member.name for member in enum_cls)
        raise FieldTypeError(key, f"Field '{key}' has unknown value {value!r} (expected one of {allowed})") from None


def _parse_iso(value: str) -> datetime | None:
    try:
        return datetime.fromisoformat(_ISO_OFFSET.sub(r"\1:\2", value))
    except ValueError:
        return None


def _parse_display(value: str, server_locale: str) -> datetime | None:
    match = _DISPLAY_DATE.match(value)
    if not match:
        return None
    language = server_locale.replace("-", "_").split("_")[0].lower()
    if language != "en":
        return None
    month = _ENGLISH_MONTHS.get(match["month"][:3].lower())
    hour = int(match["hour"])
    if month is None or not 1 <= hour <= 12:
        return None
    hour = hour % 12 + (12 if match["ampm"].lower() == "pm" else 0)
    try:
        return datetime(2000 + int(match["year"]), month, int(match["day"]), hour, int(match["minute"]))
    except ValueError:
        return None


def get_datetime(value: Any, server_locale: str, key: str = "") -> datetime | None:
    """
    Parse a server date string.

    Accepts ISO-8601 (``2013-01-14T10:00:00.000+0000`` or ``+00:00``) and the
    GreenHopper display format, whose month names follow ``server_locale``.
    Missing values return None.
    """
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise FieldTypeError(key, f"Field '{key}' must be a date string, got {type(value).__name__}")

    text = value.strip()
    parsed = _parse_iso(text) or _parse_display(text, server_locale)
    if parsed is None:
        raise FieldTypeError(key, f"Field '{key}' is not a recognised date for locale {server_locale}: {value!r}")
    return parsed


__all__ = ["get_datetime", "get_enum", "get_int", "get_string", "opt_string"]
