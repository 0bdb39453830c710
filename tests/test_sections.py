"""
Tests for the sections service.
"""
import json

import pytest

from todoist_sync.api import CallContext
from todoist_sync.commands import (
    AddSection,
    ArchiveSection,
    DeleteSection,
    MoveSection,
    ReorderSections,
    ReorderedSection,
    UnarchiveSection,
    UpdateSection,
)
from todoist_sync.errors import ResourceNotFoundError

SECTIONS = {
    "sync_token": "token-1",
    "sections": [
        {"id": "s1", "name": "Groceries", "project_id": "p1", "section_order": 1},
        {"id": "s2", "name": "Backlog", "project_id": "p1", "section_order": 2},
        {"id": "s3", "name": "Backlog", "project_id": "p2", "section_order": 1},
    ],
}


@pytest.fixture
def ctx():
    return CallContext.background()


def test_list(client, respond, last_form, ctx):
    respond(200, SECTIONS)

    sections, envelope = client.sections.list(ctx)

    assert [section.id for section in sections] == ["s1", "s2", "s3"]
    assert envelope.sync_token == "token-1"
    assert last_form()["resource_types"] == '["sections"]'


def test_get_by_id(client, respond, ctx):
    respond(200, SECTIONS)
    assert client.sections.get_by_id(ctx, "s2").name == "Backlog"


def test_get_by_name_returns_first_match(client, respond, ctx):
    respond(200, SECTIONS)
    assert client.sections.get_by_name(ctx, "Backlog").id == "s2"


def test_get_by_name_within_project(client, respond, ctx):
    respond(200, SECTIONS)
    assert client.sections.get_by_name(ctx, "Backlog", project_id="p2").id == "s3"


def test_get_by_name_not_found(client, respond, ctx):
    respond(200, SECTIONS)
    with pytest.raises(ResourceNotFoundError):
        client.sections.get_by_name(ctx, "Groceries", project_id="p2")


def test_get_by_id_on_empty_listing(client, respond, ctx):
    respond(200, {"sections": []})
    with pytest.raises(ResourceNotFoundError):
        client.sections.get_by_id(ctx, "s1")


@pytest.mark.parametrize("method, args, command_type, expected_args", [
    ("add", AddSection(name="Groceries", project_id="p1"), "section_add", {"name": "Groceries", "project_id": "p1"}),
    ("update", UpdateSection(id="s1", collapsed=True), "section_update", {"id": "s1", "collapsed": True}),
    ("move", MoveSection(id="s1", project_id="p2"), "section_move", {"id": "s1", "project_id": "p2"}),
    ("reorder", ReorderSections(sections=[ReorderedSection(id="s1", section_order=2)]), "section_reorder",
     {"sections": [{"id": "s1", "section_order": 2}]}),
    ("delete", DeleteSection(id="s1"), "section_delete", {"id": "s1"}),
    ("archive", ArchiveSection(id="s1"), "section_archive", {"id": "s1"}),
    ("unarchive", UnarchiveSection(id="s1"), "section_unarchive", {"id": "s1"}),
])
def test_commands(client, respond, last_form, ctx, method, args, command_type, expected_args):
    respond(200, {"sync_status": {}, "sections": []})

    getattr(client.sections, method)(ctx, args)

    (command,) = json.loads(last_form()["commands"])
    assert command["type"] == command_type
    assert command["args"] == expected_args
    assert last_form()["resource_types"] == '["sections"]'


def test_add_resolves_temp_id(client, respond, ctx):
    respond(200, {"sync_status": {}, "temp_id_mapping": {"new-section": "s9"}, "sections": []})

    _, response = client.sections.add(ctx, AddSection(name="Groceries", project_id="p1", temp_id="new-section"))

    assert response.resolve_temp_id("new-section") == "s9"
