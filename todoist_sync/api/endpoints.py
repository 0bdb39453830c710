"""Definitions for Todoist Sync API endpoints."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Endpoint:
    """A strongly typed definition of an API endpoint."""

    name: str
    method: str
    url: str

    def relative_to(self, base_url: str) -> "Endpoint":
        """Return a new endpoint whose ``url`` is resolved against the ``sync`` base URL."""

        return Endpoint(name=self.name, method=self.method, url=f"{sync_root(base_url)}{self.url}")


def sync_root(base_url: str) -> str:
    """Strip the trailing ``/sync`` segment so auxiliary endpoints can be addressed."""

    root = base_url.rstrip("/")
    if root.endswith("/sync"):
        root = root[: -len("/sync")]
    return root


class SyncEndpoints:
    """Central registry of Todoist Sync HTTP endpoints. URLs are relative to the API root."""

    DEFAULT_BASE_URL = "https://api.todoist.com/sync/v9/sync"

    SYNC = Endpoint("sync", "POST", "/sync")

    # Projects
    GET_PROJECT_INFO = Endpoint("get_project_info", "POST", "/projects/get")
    GET_PROJECT_DATA = Endpoint("get_project_data", "POST", "/projects/get_data")
    LIST_ARCHIVED_PROJECTS = Endpoint("list_archived_projects", "POST", "/projects/get_archived")
