# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Shared base for GreenHopper (agile board) resources."""

from __future__ import annotations

from ..resource import Resource

RESOURCE_URI = "/rest/greenhopper/1.0/"


class GreenHopperResource(Resource):
    """A GreenHopper object; ids are always integers on this API."""

    id: int | None
