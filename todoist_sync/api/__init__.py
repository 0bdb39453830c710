"""Todoist Sync API client utilities."""

from .classifier import classify_response
from .client import (
    DEFAULT_BASE_URL,
    DEFAULT_USER_AGENT,
    SyncHTTPResponse,
    SyncRequest,
    TimeoutSettings,
    TodoistSyncClient,
)
from .context import CallContext
from .endpoints import Endpoint, SyncEndpoints

__all__ = [
    "CallContext",
    "DEFAULT_BASE_URL",
    "DEFAULT_USER_AGENT",
    "Endpoint",
    "SyncEndpoints",
    "SyncHTTPResponse",
    "SyncRequest",
    "TimeoutSettings",
    "TodoistSyncClient",
    "classify_response",
]
