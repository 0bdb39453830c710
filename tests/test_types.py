"""
Tests for resource entries, envelopes and command args in todoist_sync.types and todoist_sync.commands.
"""
import pytest

from todoist_sync.commands import (
    AddProject,
    AddSection,
    AddTask,
    CompleteTask,
    MoveProject,
    MoveTask,
    ReorderSections,
    ReorderedSection,
    UpdateTask,
)
from todoist_sync.constants import CommandType
from todoist_sync.types import (
    ArchivedProjects,
    Command,
    CommandResponse,
    Pagination,
    Project,
    ProjectData,
    ReadResponse,
    Section,
    Task,
    find_first,
)


def test_project_entry_creation():
    """Test Project dataclass creation and string representation."""
    project = Project(id="2203306141", name="Inbox", inbox_project=True)

    assert project.id == "2203306141"
    assert project.parent_id is None
    assert project.child_order == 0
    assert str(project) == "Project Inbox"
    assert repr(project) == "Project Inbox"
    assert project.new_api_kwargs is None


def test_section_and_task_repr():
    assert str(Section(id="1", name="Groceries")) == "Section Groceries"
    assert repr(Task(id="1", content="Buy milk")) == "Task Buy milk"


def test_task_defaults():
    task = Task(id="1", content="Buy milk")
    assert task.priority == 1
    assert task.labels == []
    assert task.due is None
    assert task.checked is False


def test_read_response_populates_only_present_keys():
    envelope = ReadResponse(sync_token="old", full_sync=True)

    envelope.populate({"projects": [{"id": "1", "name": "Inbox"}]})

    assert envelope.sync_token == "old"
    assert envelope.full_sync is True
    assert envelope.projects == [Project(id="1", name="Inbox", new_api_kwargs={})]
    assert envelope.sections == []
    assert envelope.raw == {"projects": [{"id": "1", "name": "Inbox"}]}


def test_read_response_keeps_unknown_fields():
    envelope = ReadResponse.from_json({"items": [{"id": "1", "content": "x", "v2_id": "abc"}]})
    assert envelope.items[0].new_api_kwargs == {"v2_id": "abc"}


def test_read_response_rejects_non_object():
    with pytest.raises(ValueError):
        ReadResponse.from_json(["not", "an", "object"])


def test_read_response_rejects_non_list_collection():
    with pytest.raises(ValueError, match="expected a list"):
        ReadResponse.from_json({"sections": {"id": "1"}})


def test_resolve_temp_id():
    envelope = ReadResponse.from_json({"temp_id_mapping": {"tmp-1": "6X7rM8997g3RQmvh"}})
    assert envelope.resolve_temp_id("tmp-1") == "6X7rM8997g3RQmvh"
    assert envelope.resolve_temp_id("tmp-2") is None


def test_command_response_failed_commands():
    error = {"error": "Item not found", "error_tag": "ITEM_NOT_FOUND", "http_code": 404}
    envelope = CommandResponse.from_json({"sync_status": {"u1": "ok", "u2": error}})

    assert envelope.sync_status == {"u1": "ok", "u2": error}
    assert envelope.failed_commands == {"u2": error}


def test_project_data_and_archived_projects():
    data = ProjectData()
    data.populate({
        "project": {"id": "1", "name": "Inbox"},
        "sections": [{"id": "s1", "name": "A"}],
        "items": [],
        "project_notes": [{"id": "n1"}],
    })
    assert data.project.name == "Inbox"
    assert data.sections[0].name == "A"
    assert data.project_notes == [{"id": "n1"}]

    archived = ArchivedProjects()
    archived.populate([{"id": "9", "name": "Old"}])
    assert [project.id for project in archived.projects] == ["9"]


def test_command_from_args_generates_ids():
    command = Command.from_args(AddProject(name="Shopping List"))

    assert command.type == "project_add"
    assert command.correlation_id == command.uuid
    assert command.temp_id
    assert command.temp_id != command.uuid


def test_command_from_args_prefers_explicit_ids():
    command = Command.from_args(AddProject(name="X", temp_id="from-args"), uuid="u1")
    assert command.uuid == "u1"
    assert command.temp_id == "from-args"

    command = Command.from_args(AddProject(name="X", temp_id="from-args"), temp_id="explicit")
    assert command.temp_id == "explicit"


def test_command_to_dict():
    command = Command.from_args(AddSection(name="Groceries", project_id="9"), uuid="u1", temp_id="t1")
    assert command.to_dict() == {
        "type": "section_add",
        "args": {"name": "Groceries", "project_id": "9"},
        "uuid": "u1",
        "temp_id": "t1",
    }


def test_command_with_plain_args():
    command = Command(type="note_add", args={"item_id": "1", "content": "hi"}, uuid="u", temp_id="t")
    assert command.to_dict()["args"] == {"item_id": "1", "content": "hi"}


def test_to_args_omits_unset_fields():
    assert UpdateTask(id="1", priority=4).to_args() == {"id": "1", "priority": 4}
    assert AddTask(content="Buy milk", due={"string": "tomorrow"}).to_args() == {
        "content": "Buy milk",
        "due": {"string": "tomorrow"},
    }


def test_to_args_keeps_explicit_null_parent():
    assert MoveProject(id="1").to_args() == {"id": "1", "parent_id": None}


def test_to_args_renders_nested_dataclasses():
    args = ReorderSections(sections=[
        ReorderedSection(id="1", section_order=2),
        ReorderedSection(id="2", section_order=1),
    ])
    assert args.to_args() == {"sections": [{"id": "1", "section_order": 2}, {"id": "2", "section_order": 1}]}


def test_command_types():
    assert CompleteTask.command_type is CommandType.ITEM_COMPLETE
    assert CompleteTask(id="1", date_completed="2024-01-01T00:00:00Z").to_args()["date_completed"]


@pytest.mark.parametrize("kwargs", [
    {},
    {"parent_id": "1", "section_id": "2"},
    {"parent_id": "1", "section_id": "2", "project_id": "3"},
])
def test_move_task_needs_exactly_one_target(kwargs):
    with pytest.raises(ValueError, match="exactly one"):
        MoveTask(id="1", **kwargs)


def test_move_task_single_target():
    assert MoveTask(id="1", section_id="2").to_args() == {"id": "1", "section_id": "2"}


@pytest.mark.parametrize("limit, offset", [(0, 0), (501, 0), (10, -1)])
def test_pagination_bounds(limit, offset):
    with pytest.raises(ValueError):
        Pagination(limit=limit, offset=offset)


def test_pagination_as_form():
    assert Pagination().as_form() == {"limit": "500", "offset": "0"}


def test_find_first():
    assert find_first([1, 2, 3, 4], lambda n: n % 2 == 0) == 2
    assert find_first([], lambda n: True) is None
