"""
Command argument variants for the Todoist Sync API.

Every mutating operation is described by a frozen dataclass that knows its
``command_type`` and how to render itself as the ``args`` object of a command.
Fields left as ``None`` are omitted from the wire payload unless they are
marked with ``KEEP_NONE`` (e.g. ``parent_id=None`` on a move means "to root").
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, is_dataclass
from typing import Any, ClassVar

from todoist_sync.constants import CommandType

KEEP_NONE = {'keep_none': True}


def _to_wire(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    if isinstance(value, (list, tuple)):
        return [_to_wire(v) for v in value]
    return value


@dataclass(frozen=True, kw_only=True)
class CommandArgs:
    command_type: ClassVar[CommandType]

    # Client-side placeholder id; never serialized into ``args``.
    temp_id: str | None = field(default=None, compare=False)

    def to_args(self) -> dict[str, Any]:
        args: dict[str, Any] = {}
        for f in fields(self):
            if f.name == 'temp_id':
                continue
            value = getattr(self, f.name)
            if value is None and not f.metadata.get('keep_none', False):
                continue
            args[f.name] = _to_wire(value)
        return args


@dataclass(frozen=True)
class ReorderedItem:
    id: str
    child_order: int


@dataclass(frozen=True)
class ReorderedSection:
    id: str
    section_order: int


# Projects

@dataclass(frozen=True, kw_only=True)
class AddProject(CommandArgs):
    command_type = CommandType.PROJECT_ADD

    name: str
    color: str | None = None
    parent_id: str | None = None
    child_order: int | None = None
    is_favorite: bool | None = None
    view_style: str | None = None


@dataclass(frozen=True, kw_only=True)
class UpdateProject(CommandArgs):
    command_type = CommandType.PROJECT_UPDATE

    id: str
    name: str | None = None
    color: str | None = None
    collapsed: bool | None = None
    is_favorite: bool | None = None
    view_style: str | None = None


@dataclass(frozen=True, kw_only=True)
class MoveProject(CommandArgs):
    command_type = CommandType.PROJECT_MOVE

    id: str
    parent_id: str | None = field(default=None, metadata=KEEP_NONE)


@dataclass(frozen=True, kw_only=True)
class DeleteProject(CommandArgs):
    command_type = CommandType.PROJECT_DELETE

    id: str


@dataclass(frozen=True, kw_only=True)
class ArchiveProject(CommandArgs):
    command_type = CommandType.PROJECT_ARCHIVE

    id: str


@dataclass(frozen=True, kw_only=True)
class UnarchiveProject(CommandArgs):
    """Unarchived projects lose their parent and go to the end of the root list."""

    command_type = CommandType.PROJECT_UNARCHIVE

    id: str


@dataclass(frozen=True, kw_only=True)
class ReorderProjects(CommandArgs):
    command_type = CommandType.PROJECT_REORDER

    projects: list[ReorderedItem]


# Sections

@dataclass(frozen=True, kw_only=True)
class AddSection(CommandArgs):
    command_type = CommandType.SECTION_ADD

    name: str
    project_id: str
    section_order: int | None = None


@dataclass(frozen=True, kw_only=True)
class UpdateSection(CommandArgs):
    command_type = CommandType.SECTION_UPDATE

    id: str
    name: str | None = None
    collapsed: bool | None = None


@dataclass(frozen=True, kw_only=True)
class MoveSection(CommandArgs):
    command_type = CommandType.SECTION_MOVE

    id: str
    project_id: str


@dataclass(frozen=True, kw_only=True)
class ReorderSections(CommandArgs):
    command_type = CommandType.SECTION_REORDER

    sections: list[ReorderedSection]


@dataclass(frozen=True, kw_only=True)
class DeleteSection(CommandArgs):
    command_type = CommandType.SECTION_DELETE

    id: str


@dataclass(frozen=True, kw_only=True)
class ArchiveSection(CommandArgs):
    command_type = CommandType.SECTION_ARCHIVE

    id: str


@dataclass(frozen=True, kw_only=True)
class UnarchiveSection(CommandArgs):
    command_type = CommandType.SECTION_UNARCHIVE

    id: str


# Tasks (``items`` in the Sync API)

@dataclass(frozen=True, kw_only=True)
class AddTask(CommandArgs):
    command_type = CommandType.ITEM_ADD

    content: str
    description: str | None = None
    project_id: str | None = None
    section_id: str | None = None
    parent_id: str | None = None
    child_order: int | None = None
    labels: list[str] | None = None
    priority: int | None = None
    due: dict[str, Any] | None = None
    responsible_uid: str | None = None
    collapsed: bool | None = None


@dataclass(frozen=True, kw_only=True)
class UpdateTask(CommandArgs):
    command_type = CommandType.ITEM_UPDATE

    id: str
    content: str | None = None
    description: str | None = None
    labels: list[str] | None = None
    priority: int | None = None
    due: dict[str, Any] | None = None
    responsible_uid: str | None = None
    collapsed: bool | None = None


@dataclass(frozen=True, kw_only=True)
class MoveTask(CommandArgs):
    """Only one of ``parent_id``, ``section_id`` or ``project_id`` should be set."""

    command_type = CommandType.ITEM_MOVE

    id: str
    parent_id: str | None = None
    section_id: str | None = None
    project_id: str | None = None

    def __post_init__(self):
        targets = [t for t in (self.parent_id, self.section_id, self.project_id) if t is not None]
        if len(targets) != 1:
            raise ValueError('MoveTask needs exactly one of parent_id, section_id, project_id')


@dataclass(frozen=True, kw_only=True)
class DeleteTask(CommandArgs):
    command_type = CommandType.ITEM_DELETE

    id: str


@dataclass(frozen=True, kw_only=True)
class CloseTask(CommandArgs):
    command_type = CommandType.ITEM_CLOSE

    id: str


@dataclass(frozen=True, kw_only=True)
class CompleteTask(CommandArgs):
    command_type = CommandType.ITEM_COMPLETE

    id: str
    date_completed: str | None = None


@dataclass(frozen=True, kw_only=True)
class UncompleteTask(CommandArgs):
    command_type = CommandType.ITEM_UNCOMPLETE

    id: str


@dataclass(frozen=True, kw_only=True)
class ReorderTasks(CommandArgs):
    command_type = CommandType.ITEM_REORDER

    items: list[ReorderedItem]
