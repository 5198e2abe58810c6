# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""GreenHopper (agile) resources."""

from .resource import RESOURCE_URI, GreenHopperResource
from .sprint import Sprint, SprintState

__all__ = ["RESOURCE_URI", "GreenHopperResource", "Sprint", "SprintState"]
