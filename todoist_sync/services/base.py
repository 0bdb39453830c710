from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, TypeVar

from loguru import logger

from todoist_sync.commands import CommandArgs
from todoist_sync.errors import ResourceNotFoundError
from todoist_sync.types import Command, CommandResponse, ReadResponse, ResourceId, find_first

if TYPE_CHECKING:
    from todoist_sync.api.client import TodoistSyncClient
    from todoist_sync.api.context import CallContext

R = TypeVar('R')


def same_id(left: ResourceId | None, right: ResourceId | None) -> bool:
    """Ids come back as strings from v9 and as ints from older payloads; compare them loosely."""
    if left is None or right is None:
        return False
    return str(left) == str(right)


class SyncService:
    """Shared plumbing for the per-resource services: one command per call, one resource collection back."""

    resource_type: str = ''
    collection: str = ''

    def __init__(self, client: 'TodoistSyncClient'):
        self._client = client

    def _collection_of(self, envelope: ReadResponse) -> list:
        return list(getattr(envelope, self.collection))

    def _list(self, ctx: 'CallContext', sync_token: str | None, operation: str) -> tuple[list, ReadResponse]:
        self._client.log(f'---------- {operation}')
        request = self._client.new_request(sync_token, [self.resource_type])
        envelope = ReadResponse()
        self._client.do(ctx, request, envelope)
        return self._collection_of(envelope), envelope

    def _execute(self, ctx: 'CallContext', sync_token: str | None, args: CommandArgs,
                 operation: str) -> tuple[list, CommandResponse]:
        self._client.log(f'---------- {operation}')
        command = Command.from_args(args)
        logger.debug(f'{operation}: sending {command.type}', command=command.uuid, temp_id=command.temp_id)

        request = self._client.new_request(sync_token, [self.resource_type], [command])
        envelope = CommandResponse()
        self._client.do(ctx, request, envelope)
        return self._collection_of(envelope), envelope

    def _find(self, ctx: 'CallContext', sync_token: str | None, key: str, value: Any,
              predicate: Callable[[Any], bool], operation: str):
        """Scan the whole listing; not-found only once no entry matched."""
        entries, _ = self._list(ctx, sync_token, operation)
        match = find_first(entries, predicate)
        if match is None:
            raise ResourceNotFoundError(self.resource_type, key, value)
        return match
