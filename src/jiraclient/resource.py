# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Base class for domain objects hydrated from JSON payloads."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .errors import FieldTypeError
from .fields import opt_string

if TYPE_CHECKING:
    from .rest import RestClient


class Resource:
    """
    A remote object backed by a JSON payload.

    Subclasses override ``_deserialise`` to populate typed attributes. The
    RestClient reference is kept for follow-up requests; the resource does not
    own it.
    """

    def __init__(self, restclient: RestClient, json: Mapping[str, Any] | None = None):
        self.restclient = restclient
        self.id: int | str | None = None
        self.url: str | None = None

        if json is not None:
            if not isinstance(json, Mapping):
                raise FieldTypeError("", f"{type(self).__name__} payload must be a JSON object, got {type(json).__name__}")
            self.url = opt_string(json, "self")
            self._deserialise(json)

    def _deserialise(self, json: Mapping[str, Any]) -> None:
        self.id = json.get("id")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"


__all__ = ["Resource"]
