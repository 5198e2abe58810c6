# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""GreenHopper sprints."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

from ..errors import FieldTypeError
from ..fields import get_datetime, get_enum, get_int, get_string, opt_string
from .resource import RESOURCE_URI, GreenHopperResource

if TYPE_CHECKING:
    from ..rest import RestClient


class SprintState(str, Enum):
    ACTIVE = "ACTIVE"
    CLOSED = "CLOSED"


class Sprint(GreenHopperResource):
    """Represents a GreenHopper sprint."""

    def __init__(self, restclient: RestClient, json: Mapping[str, Any] | None = None):
        self.name: str | None = None
        self.state: SprintState | None = None
        self.start_date: datetime | None = None
        self.end_date: datetime | None = None
        self.complete_date: datetime | None = None
        super().__init__(restclient, json)

    def _deserialise(self, json: Mapping[str, Any]) -> None:
        locale = self.restclient.server_locale
        self.id = get_int(json, "id")
        self.name = get_string(json, "name")
        self.state = get_enum(SprintState, opt_string(json, "state", SprintState.CLOSED.value), "state")
        self.start_date = get_datetime(json.get("startDate"), locale, "startDate")
        self.end_date = get_datetime(json.get("endDate"), locale, "endDate")
        self.complete_date = get_datetime(json.get("completeDate"), locale, "completeDate")

    @property
    def is_closed(self) -> bool:
        return self.state is SprintState.CLOSED

    @classmethod
    def get_all(cls, restclient: RestClient, rapid_view_id: int) -> list[Sprint]:
        """Retrieve every sprint on a rapid board."""
        result = restclient.get(f"{RESOURCE_URI}sprintquery/{rapid_view_id}")
        if not isinstance(result, Mapping) or not isinstance(result.get("sprints"), list):
            raise FieldTypeError("sprints", f"Sprint query for rapid view {rapid_view_id} returned no sprint list")
        return [cls(restclient, item) for item in result["sprints"]]

    def __str__(self) -> str:
        return self.name or ""
