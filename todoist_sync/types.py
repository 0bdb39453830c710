from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from todoist_sync.commands import CommandArgs
from todoist_sync.constants import SYNC_STATUS_OK
from todoist_sync.utils import new_uuid, safe_instantiate_entry

ResourceId = str | int


@dataclass
class _Project_Sync_API:
    id: ResourceId
    name: str
    color: str | int | None = None
    parent_id: ResourceId | None = None
    child_order: int = 0
    collapsed: bool | int = False
    shared: bool = False
    is_deleted: bool | int = False
    is_archived: bool | int = False
    is_favorite: bool | int = False
    sync_id: ResourceId | None = None
    inbox_project: bool | None = None
    team_inbox: bool | None = None
    view_style: str | None = None
    new_api_kwargs: dict[str, Any] | None = None

    def __repr__(self):
        return f'Project {self.name}'

    def __str__(self):
        return f'Project {self.name}'


@dataclass
class _Section_Sync_API:
    id: ResourceId
    name: str
    project_id: ResourceId | None = None
    section_order: int = 0
    collapsed: bool = False
    sync_id: ResourceId | None = None
    is_deleted: bool = False
    is_archived: bool = False
    archived_at: str | None = None
    added_at: str | None = None
    new_api_kwargs: dict[str, Any] | None = None

    def __repr__(self):
        return f'Section {self.name}'

    def __str__(self):
        return f'Section {self.name}'


@dataclass
class _Task_Sync_API:
    id: ResourceId
    content: str
    description: str = ''
    project_id: ResourceId | None = None
    section_id: ResourceId | None = None
    parent_id: ResourceId | None = None
    user_id: ResourceId | None = None
    due: dict[str, Any] | None = None
    priority: int = 1
    child_order: int = 0
    day_order: int | None = None
    collapsed: bool | int = False
    labels: list[Any] = field(default_factory=list)
    added_by_uid: ResourceId | None = None
    assigned_by_uid: ResourceId | None = None
    responsible_uid: ResourceId | None = None
    checked: bool | int = False
    is_deleted: bool | int = False
    sync_id: ResourceId | None = None
    completed_at: str | None = None
    added_at: str | None = None
    new_api_kwargs: dict[str, Any] | None = None

    def __repr__(self):
        return f'Task {self.content}'

    def __str__(self):
        return f'Task {self.content}'


Project = _Project_Sync_API
Section = _Section_Sync_API
Task = _Task_Sync_API


def _entries(cls, raw: Any) -> list:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValueError(f'expected a list of {cls.__name__} objects, got {type(raw).__name__}')
    return [safe_instantiate_entry(cls, **entry) for entry in raw]


def _entry(cls, raw: Any):
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise ValueError(f'expected a {cls.__name__} object, got {type(raw).__name__}')
    return safe_instantiate_entry(cls, **raw)


def _require_mapping(payload: Any, shape: str) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValueError(f'{shape} must be a JSON object, got {type(payload).__name__}')
    return payload


@dataclass(frozen=True, slots=True)
class Command:
    """A single mutating operation; ``uuid`` correlates it with its ``sync_status`` entry."""

    type: str
    args: Any
    uuid: str
    temp_id: str

    @property
    def correlation_id(self) -> str:
        return self.uuid

    @classmethod
    def from_args(cls, args: CommandArgs, *, uuid: str | None = None, temp_id: str | None = None) -> Command:
        return cls(
            type=args.command_type.value,
            args=args,
            uuid=uuid or new_uuid(),
            temp_id=temp_id or args.temp_id or new_uuid(),
        )

    def to_dict(self) -> dict[str, Any]:
        args = self.args.to_args() if isinstance(self.args, CommandArgs) else self.args
        return {'type': str(self.type), 'args': args, 'uuid': self.uuid, 'temp_id': self.temp_id}


@dataclass
class ReadResponse:
    """Envelope of a read-only sync call. Only keys present in the payload are populated."""

    sync_token: str | None = None
    full_sync: bool | None = None
    temp_id_mapping: dict[str, ResourceId] = field(default_factory=dict)
    projects: list[Project] = field(default_factory=list)
    sections: list[Section] = field(default_factory=list)
    items: list[Task] = field(default_factory=list)
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    def populate(self, payload: Any) -> None:
        payload = _require_mapping(payload, type(self).__name__)
        self.raw = dict(payload)
        if 'sync_token' in payload:
            self.sync_token = payload['sync_token']
        if 'full_sync' in payload:
            self.full_sync = payload['full_sync']
        if payload.get('temp_id_mapping') is not None:
            self.temp_id_mapping = dict(_require_mapping(payload['temp_id_mapping'], 'temp_id_mapping'))
        if 'projects' in payload:
            self.projects = _entries(Project, payload['projects'])
        if 'sections' in payload:
            self.sections = _entries(Section, payload['sections'])
        if 'items' in payload:
            self.items = _entries(Task, payload['items'])

    @classmethod
    def from_json(cls, payload: Any):
        response = cls()
        response.populate(payload)
        return response

    def resolve_temp_id(self, temp_id: str) -> ResourceId | None:
        return self.temp_id_mapping.get(temp_id)


@dataclass
class CommandResponse(ReadResponse):
    """Envelope of a command batch; ``sync_status`` maps each command uuid to ``"ok"`` or an error payload."""

    sync_status: dict[str, Any] = field(default_factory=dict)

    def populate(self, payload: Any) -> None:
        super().populate(payload)
        if payload.get('sync_status') is not None:
            self.sync_status = dict(_require_mapping(payload['sync_status'], 'sync_status'))

    @property
    def failed_commands(self) -> dict[str, Any]:
        return {uuid: status for uuid, status in self.sync_status.items() if status != SYNC_STATUS_OK}


@dataclass
class ProjectInfo:
    project: Project | None = None
    notes: list[dict[str, Any]] = field(default_factory=list)

    def populate(self, payload: Any) -> None:
        payload = _require_mapping(payload, 'ProjectInfo')
        if 'project' in payload:
            self.project = _entry(Project, payload['project'])
        if 'notes' in payload:
            self.notes = list(payload['notes'] or [])


@dataclass
class ProjectData:
    project: Project | None = None
    project_notes: list[dict[str, Any]] = field(default_factory=list)
    sections: list[Section] = field(default_factory=list)
    items: list[Task] = field(default_factory=list)

    def populate(self, payload: Any) -> None:
        payload = _require_mapping(payload, 'ProjectData')
        if 'project' in payload:
            self.project = _entry(Project, payload['project'])
        if 'project_notes' in payload:
            self.project_notes = list(payload['project_notes'] or [])
        if 'sections' in payload:
            self.sections = _entries(Section, payload['sections'])
        if 'items' in payload:
            self.items = _entries(Task, payload['items'])


@dataclass
class ArchivedProjects:
    projects: list[Project] = field(default_factory=list)

    def populate(self, payload: Any) -> None:
        self.projects = _entries(Project, payload)


@dataclass(frozen=True, slots=True)
class Pagination:
    limit: int = 500
    offset: int = 0

    def __post_init__(self):
        if not 1 <= self.limit <= 500:
            raise ValueError(f'limit must be between 1 and 500, got {self.limit}')
        if self.offset < 0:
            raise ValueError(f'offset must be non-negative, got {self.offset}')

    def as_form(self) -> dict[str, str]:
        return {'limit': str(self.limit), 'offset': str(self.offset)}


def find_first(entries: Iterable[Any], predicate) -> Any | None:
    for entry in entries:
        if predicate(entry):
            return entry
    return None
