from __future__ import annotations

from typing import TYPE_CHECKING

from todoist_sync.commands import (
    AddTask,
    CloseTask,
    CompleteTask,
    DeleteTask,
    MoveTask,
    ReorderTasks,
    UncompleteTask,
    UpdateTask,
)
from todoist_sync.constants import ResourceType
from todoist_sync.types import CommandResponse, ReadResponse, ResourceId, Task

from .base import SyncService, same_id

if TYPE_CHECKING:
    from todoist_sync.api.context import CallContext


class TasksService(SyncService):
    """
    Task related methods of the Todoist Sync API (tasks are called ``items`` there).

    Todoist API docs: https://developer.todoist.com/sync/v9/#items
    """

    resource_type = ResourceType.ITEMS
    collection = 'items'

    def list(self, ctx: 'CallContext', sync_token: str | None = None) -> tuple[list[Task], ReadResponse]:
        return self._list(ctx, sync_token, 'Tasks.List')

    def get_by_id(self, ctx: 'CallContext', task_id: ResourceId, sync_token: str | None = None) -> Task:
        return self._find(ctx, sync_token, 'id', task_id,
                          lambda task: same_id(task.id, task_id), 'Tasks.GetByID')

    def get_by_content(self, ctx: 'CallContext', content: str, sync_token: str | None = None) -> Task:
        return self._find(ctx, sync_token, 'content', content,
                          lambda task: task.content == content, 'Tasks.GetByContent')

    def add(self, ctx: 'CallContext', args: AddTask,
            sync_token: str | None = None) -> tuple[list[Task], CommandResponse]:
        return self._execute(ctx, sync_token, args, 'Tasks.Add')

    def update(self, ctx: 'CallContext', args: UpdateTask,
               sync_token: str | None = None) -> tuple[list[Task], CommandResponse]:
        return self._execute(ctx, sync_token, args, 'Tasks.Update')

    def move(self, ctx: 'CallContext', args: MoveTask,
             sync_token: str | None = None) -> tuple[list[Task], CommandResponse]:
        return self._execute(ctx, sync_token, args, 'Tasks.Move')

    def delete(self, ctx: 'CallContext', args: DeleteTask,
               sync_token: str | None = None) -> tuple[list[Task], CommandResponse]:
        return self._execute(ctx, sync_token, args, 'Tasks.Delete')

    def close(self, ctx: 'CallContext', args: CloseTask,
              sync_token: str | None = None) -> tuple[list[Task], CommandResponse]:
        """Complete a task the way the official clients do (recurring tasks move to the next date)."""
        return self._execute(ctx, sync_token, args, 'Tasks.Close')

    def complete(self, ctx: 'CallContext', args: CompleteTask,
                 sync_token: str | None = None) -> tuple[list[Task], CommandResponse]:
        return self._execute(ctx, sync_token, args, 'Tasks.Complete')

    def uncomplete(self, ctx: 'CallContext', args: UncompleteTask,
                   sync_token: str | None = None) -> tuple[list[Task], CommandResponse]:
        return self._execute(ctx, sync_token, args, 'Tasks.Uncomplete')

    def reorder(self, ctx: 'CallContext', args: ReorderTasks,
                sync_token: str | None = None) -> tuple[list[Task], CommandResponse]:
        return self._execute(ctx, sync_token, args, 'Tasks.Reorder')
