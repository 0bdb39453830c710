"""Client library for the Todoist Sync API."""

from todoist_sync.api import CallContext, TimeoutSettings, TodoistSyncClient
from todoist_sync.types import Command, CommandResponse, ReadResponse

__all__ = [
    "CallContext",
    "Command",
    "CommandResponse",
    "ReadResponse",
    "TimeoutSettings",
    "TodoistSyncClient",
]
