from __future__ import annotations

from typing import TYPE_CHECKING

from todoist_sync.commands import (
    AddSection,
    ArchiveSection,
    DeleteSection,
    MoveSection,
    ReorderSections,
    UnarchiveSection,
    UpdateSection,
)
from todoist_sync.constants import ResourceType
from todoist_sync.types import CommandResponse, ReadResponse, ResourceId, Section

from .base import SyncService, same_id

if TYPE_CHECKING:
    from todoist_sync.api.context import CallContext


class SectionsService(SyncService):
    """
    Section related methods of the Todoist Sync API.

    Todoist API docs: https://developer.todoist.com/sync/v9/#sections
    """

    resource_type = ResourceType.SECTIONS
    collection = 'sections'

    def list(self, ctx: 'CallContext', sync_token: str | None = None) -> tuple[list[Section], ReadResponse]:
        return self._list(ctx, sync_token, 'Sections.List')

    def get_by_id(self, ctx: 'CallContext', section_id: ResourceId, sync_token: str | None = None) -> Section:
        return self._find(ctx, sync_token, 'id', section_id,
                          lambda section: same_id(section.id, section_id), 'Sections.GetByID')

    def get_by_name(self, ctx: 'CallContext', name: str, project_id: ResourceId | None = None,
                    sync_token: str | None = None) -> Section:
        """Section names are only unique within a project; narrow with ``project_id`` when needed."""
        return self._find(
            ctx, sync_token, 'name', name,
            lambda section: section.name == name and (project_id is None or same_id(section.project_id, project_id)),
            'Sections.GetByName',
        )

    def add(self, ctx: 'CallContext', args: AddSection,
            sync_token: str | None = None) -> tuple[list[Section], CommandResponse]:
        return self._execute(ctx, sync_token, args, 'Sections.Add')

    def update(self, ctx: 'CallContext', args: UpdateSection,
               sync_token: str | None = None) -> tuple[list[Section], CommandResponse]:
        return self._execute(ctx, sync_token, args, 'Sections.Update')

    def move(self, ctx: 'CallContext', args: MoveSection,
             sync_token: str | None = None) -> tuple[list[Section], CommandResponse]:
        return self._execute(ctx, sync_token, args, 'Sections.Move')

    def reorder(self, ctx: 'CallContext', args: ReorderSections,
                sync_token: str | None = None) -> tuple[list[Section], CommandResponse]:
        return self._execute(ctx, sync_token, args, 'Sections.Reorder')

    def delete(self, ctx: 'CallContext', args: DeleteSection,
               sync_token: str | None = None) -> tuple[list[Section], CommandResponse]:
        """Delete a section and all the tasks in it."""
        return self._execute(ctx, sync_token, args, 'Sections.Delete')

    def archive(self, ctx: 'CallContext', args: ArchiveSection,
                sync_token: str | None = None) -> tuple[list[Section], CommandResponse]:
        return self._execute(ctx, sync_token, args, 'Sections.Archive')

    def unarchive(self, ctx: 'CallContext', args: UnarchiveSection,
                  sync_token: str | None = None) -> tuple[list[Section], CommandResponse]:
        return self._execute(ctx, sync_token, args, 'Sections.Unarchive')
