# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json
from datetime import datetime, timedelta, timezone

import pytest

from jiraclient.errors import FieldMissing, FieldTypeError
from jiraclient.greenhopper import RESOURCE_URI, Sprint, SprintState
from jiraclient.http.adapters import StubHttpClient
from jiraclient.http.models import HttpResponse
from jiraclient.rest import RestClient

SPRINT_JSON = {
    "id": 42,
    "name": "S1",
    "state": "CLOSED",
    "startDate": "2013-01-01T00:00:00.000+00:00",
    "endDate": "2013-01-14T00:00:00.000+00:00",
    "completeDate": "2013-01-14T10:00:00.000+00:00",
}


@pytest.fixture
def stub():
    return StubHttpClient()


@pytest.fixture
def client(stub):
    return RestClient(stub, "https://jira.example", server_locale="en_US")


def test_sprint_hydration(client):
    sprint = Sprint(client, SPRINT_JSON)

    assert sprint.id == 42
    assert sprint.name == "S1"
    assert str(sprint) == "S1"
    assert sprint.state is SprintState.CLOSED
    assert sprint.is_closed is True
    assert sprint.start_date == datetime(2013, 1, 1, tzinfo=timezone.utc)
    assert sprint.end_date == datetime(2013, 1, 14, tzinfo=timezone.utc)
    assert sprint.complete_date == datetime(2013, 1, 14, 10, 0, tzinfo=timezone.utc)
    assert sprint.restclient is client


def test_active_sprint_with_missing_dates(client):
    sprint = Sprint(client, {"id": "7", "name": "Next", "state": "ACTIVE", "startDate": "2013-02-01T09:30:00.000+0100"})

    assert sprint.id == 7
    assert sprint.is_closed is False
    assert sprint.start_date == datetime(2013, 2, 1, 9, 30, tzinfo=timezone(timedelta(hours=1)))
    assert sprint.end_date is None
    assert sprint.complete_date is None


def test_missing_state_defaults_to_closed(client):
    sprint = Sprint(client, {"id": 1, "name": "Old"})
    assert sprint.state is SprintState.CLOSED
    assert sprint.is_closed is True


def test_sprint_without_payload_is_empty(client):
    sprint = Sprint(client)
    assert sprint.id is None
    assert sprint.name is None
    assert sprint.start_date is None
    assert sprint.is_closed is False
    assert str(sprint) == ""


@pytest.mark.parametrize("missing", ["id", "name"])
def test_required_fields(client, missing):
    payload = {k: v for k, v in SPRINT_JSON.items() if k != missing}
    with pytest.raises(FieldMissing) as excinfo:
        Sprint(client, payload)
    assert excinfo.value.field == missing
    assert missing in str(excinfo.value)


def test_unknown_state_is_rejected(client):
    with pytest.raises(FieldTypeError) as excinfo:
        Sprint(client, {**SPRINT_JSON, "state": "FUTURE"})
    assert excinfo.value.field == "state"


def test_non_integer_id_is_rejected(client):
    with pytest.raises(FieldTypeError):
        Sprint(client, {**SPRINT_JSON, "id": "forty-two"})


def test_non_object_payload_is_rejected(client):
    with pytest.raises(FieldTypeError):
        Sprint(client, ["not", "an", "object"])


def test_display_dates_use_server_locale(stub):
    payload = {**SPRINT_JSON, "startDate": "01/Jan/13 9:05 AM", "endDate": "14/Jan/13 5:30 PM", "completeDate": None}

    sprint = Sprint(RestClient(stub, "https://jira.example", server_locale="en_GB"), payload)
    assert sprint.start_date == datetime(2013, 1, 1, 9, 5)
    assert sprint.end_date == datetime(2013, 1, 14, 17, 30)
    assert sprint.complete_date is None

    with pytest.raises(FieldTypeError) as excinfo:
        Sprint(RestClient(stub, "https://jira.example", server_locale="de_DE"), payload)
    assert excinfo.value.field == "startDate"


def test_garbage_date_is_rejected(client):
    with pytest.raises(FieldTypeError):
        Sprint(client, {**SPRINT_JSON, "endDate": "next tuesday"})


def test_get_all_hydrates_sprint_query(stub, client):
    body = {"sprints": [SPRINT_JSON, {"id": 43, "name": "S2", "state": "ACTIVE"}], "rapidViewId": 3}
    stub.add(
        f"https://jira.example{RESOURCE_URI}sprintquery/3",
        HttpResponse(status_code=200, reason="OK", content=json.dumps(body).encode()),
    )

    sprints = Sprint.get_all(client, 3)

    assert [s.name for s in sprints] == ["S1", "S2"]
    assert [s.is_closed for s in sprints] == [True, False]
    assert all(s.restclient is client for s in sprints)
    assert stub.last_request.url == "https://jira.example/rest/greenhopper/1.0/sprintquery/3"


def test_get_all_rejects_unexpected_shape(stub, client):
    stub.add(
        f"https://jira.example{RESOURCE_URI}sprintquery/3",
        HttpResponse(status_code=200, reason="OK", content=b'{"rapidViewId":3}'),
    )
    with pytest.raises(FieldTypeError):
        Sprint.get_all(client, 3)
