"""
Tests for building form-encoded Sync API requests.
"""
import json
import math

import pytest

from todoist_sync.api import SyncEndpoints, TodoistSyncClient
from todoist_sync.commands import AddProject, ReorderProjects, ReorderedItem
from todoist_sync.errors import BuildRequestError
from todoist_sync.types import Command


def test_commands_round_trip_through_form(client):
    """The commands field decodes back to the exact commands that were submitted."""
    commands = [
        Command.from_args(AddProject(name="Groceries", color="red", temp_id="tmp-1"), uuid="uuid-1"),
        Command(type="project_reorder", args={"projects": [{"id": "2", "child_order": 1}]}, uuid="uuid-2",
                temp_id="tmp-2"),
    ]

    request = client.new_request(None, ["projects"], commands)
    decoded = json.loads(request.decoded_form()["commands"])

    assert decoded == [command.to_dict() for command in commands]
    assert decoded[0] == {
        "type": "project_add",
        "args": {"name": "Groceries", "color": "red"},
        "uuid": "uuid-1",
        "temp_id": "tmp-1",
    }
    assert decoded[1]["args"] == {"projects": [{"id": "2", "child_order": 1}]}


def test_nested_command_args_are_serialized(client):
    command = Command.from_args(ReorderProjects(projects=[ReorderedItem(id="7", child_order=3)]))

    decoded = json.loads(client.new_request(None, None, [command]).decoded_form()["commands"])

    assert decoded[0]["args"] == {"projects": [{"id": "7", "child_order": 3}]}


@pytest.mark.parametrize("resource_types", [None, [], ()])
def test_resource_types_default_to_all(client, resource_types):
    request = client.new_request(None, resource_types)
    assert json.loads(request.decoded_form()["resource_types"]) == ["all"]


def test_resource_types_are_passed_verbatim(client):
    request = client.new_request(None, ["projects", "sections"])
    assert request.decoded_form()["resource_types"] == '["projects", "sections"]'
    assert json.loads(request.decoded_form()["resource_types"]) == ["projects", "sections"]


@pytest.mark.parametrize("sync_token", [None, ""])
def test_sync_token_defaults_to_full_sync(client, sync_token):
    request = client.new_request(sync_token)
    assert request.decoded_form()["sync_token"] == "*"
    assert "sync_token=%2A" in request.body


def test_sync_token_is_passed_through(client):
    request = client.new_request("aLGJg_2qwBE_kE3j9_Gn6uoKQtvQeyjm7UEz_aVwF8KdriDxw7e_InFZK61h")
    assert request.decoded_form()["sync_token"] == "aLGJg_2qwBE_kE3j9_Gn6uoKQtvQeyjm7UEz_aVwF8KdriDxw7e_InFZK61h"


def test_token_is_always_present(client):
    assert client.new_request().decoded_form()["token"] == "test-token"


@pytest.mark.parametrize("commands", [None, []])
def test_commands_field_omitted_without_commands(client, commands):
    request = client.new_request(None, ["projects"], commands)
    assert "commands" not in request.decoded_form()
    assert request.get_field("commands") is None


def test_unserializable_command_args_raise_build_error(client):
    command = Command(type="project_add", args={"name": object()}, uuid="u", temp_id="t")
    with pytest.raises(BuildRequestError, match="commands unable to be serialized"):
        client.new_request(None, None, [command])


def test_nan_in_command_args_raises_build_error(client):
    command = Command(type="item_update", args={"id": "1", "priority": math.nan}, uuid="u", temp_id="t")
    with pytest.raises(BuildRequestError):
        client.new_request(None, None, [command])


def test_unserializable_resource_types_raise_build_error(client):
    with pytest.raises(BuildRequestError, match="resource_types"):
        client.new_request(None, [object()])


@pytest.mark.parametrize("base_url", ["not a url", "ftp://api.todoist.com/sync", "https://", ""])
def test_malformed_base_url_raises_build_error(session, base_url):
    with TodoistSyncClient("token", session=session, base_url=base_url) as sync_client:
        with pytest.raises(BuildRequestError, match="invalid base URL"):
            sync_client.new_request()


def test_headers(client):
    request = client.new_request()
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert request.headers["User-Agent"].startswith("todoist-sync/")


def test_empty_user_agent_omits_header(session):
    with TodoistSyncClient("token", session=session, user_agent="") as sync_client:
        assert "User-Agent" not in sync_client.new_request().headers


def test_request_targets_configured_base_url(session):
    with TodoistSyncClient("token", session=session, base_url="http://localhost:8080/sync/v9/sync") as sync_client:
        request = sync_client.new_request()
    assert request.endpoint.url == "http://localhost:8080/sync/v9/sync"
    assert request.endpoint.method == "POST"


def test_auxiliary_endpoint_and_extra_fields(client):
    request = client.new_request(
        None, endpoint=SyncEndpoints.GET_PROJECT_DATA, extra_fields={"project_id": "2203306141"}
    )
    assert request.endpoint.url == "https://api.todoist.com/sync/v9/projects/get_data"
    assert request.decoded_form()["project_id"] == "2203306141"
    assert request.decoded_form()["token"] == "test-token"


def test_building_does_no_io(client, session):
    client.new_request("*", ["projects"], [Command.from_args(AddProject(name="x"))])
    session.request.assert_not_called()
