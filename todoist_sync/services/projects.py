from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from todoist_sync.api.endpoints import SyncEndpoints
from todoist_sync.commands import (
    AddProject,
    ArchiveProject,
    DeleteProject,
    MoveProject,
    ReorderProjects,
    UnarchiveProject,
    UpdateProject,
)
from todoist_sync.constants import ResourceType
from todoist_sync.types import ArchivedProjects, CommandResponse, Pagination, Project, ProjectData, ProjectInfo, \
    ReadResponse, ResourceId

from .base import SyncService, same_id

if TYPE_CHECKING:
    from todoist_sync.api.context import CallContext


class ProjectsService(SyncService):
    """
    Project related methods of the Todoist Sync API.

    Todoist API docs: https://developer.todoist.com/sync/v9/#projects
    """

    resource_type = ResourceType.PROJECTS
    collection = 'projects'

    def list(self, ctx: 'CallContext', sync_token: str | None = None) -> tuple[list[Project], ReadResponse]:
        """List the projects for a user."""
        return self._list(ctx, sync_token, 'Projects.List')

    def get_by_id(self, ctx: 'CallContext', project_id: ResourceId, sync_token: str | None = None) -> Project:
        return self._find(ctx, sync_token, 'id', project_id,
                          lambda project: same_id(project.id, project_id), 'Projects.GetByID')

    def get_by_name(self, ctx: 'CallContext', name: str, sync_token: str | None = None) -> Project:
        return self._find(ctx, sync_token, 'name', name,
                          lambda project: project.name == name, 'Projects.GetByName')

    def add(self, ctx: 'CallContext', args: AddProject,
            sync_token: str | None = None) -> tuple[list[Project], CommandResponse]:
        """
        Add a new project.

        Pass ``temp_id`` on ``args`` to look up the real id afterwards via
        ``response.temp_id_mapping[temp_id]``; a random one is used otherwise.
        """
        return self._execute(ctx, sync_token, args, 'Projects.Add')

    def update(self, ctx: 'CallContext', args: UpdateProject,
               sync_token: str | None = None) -> tuple[list[Project], CommandResponse]:
        return self._execute(ctx, sync_token, args, 'Projects.Update')

    def move(self, ctx: 'CallContext', args: MoveProject,
             sync_token: str | None = None) -> tuple[list[Project], CommandResponse]:
        """Update parent project relationships of the project."""
        return self._execute(ctx, sync_token, args, 'Projects.Move')

    def delete(self, ctx: 'CallContext', args: DeleteProject,
               sync_token: str | None = None) -> tuple[list[Project], CommandResponse]:
        """Delete an existing project and all its descendants."""
        return self._execute(ctx, sync_token, args, 'Projects.Delete')

    def archive(self, ctx: 'CallContext', args: ArchiveProject,
                sync_token: str | None = None) -> tuple[list[Project], CommandResponse]:
        """Archive a project and its descendants."""
        return self._execute(ctx, sync_token, args, 'Projects.Archive')

    def unarchive(self, ctx: 'CallContext', args: UnarchiveProject,
                  sync_token: str | None = None) -> tuple[list[Project], CommandResponse]:
        return self._execute(ctx, sync_token, args, 'Projects.Unarchive')

    def reorder(self, ctx: 'CallContext', args: ReorderProjects,
                sync_token: str | None = None) -> tuple[list[Project], CommandResponse]:
        """Update ``child_order`` of sibling projects in bulk."""
        return self._execute(ctx, sync_token, args, 'Projects.Reorder')

    def get_info(self, ctx: 'CallContext', project_id: ResourceId, all_data: bool = True,
                 sync_token: str | None = None) -> ProjectInfo:
        """
        Get a project together with its notes.

        The initial sync only returns the last 10 notes of a project; this
        call returns all of them.
        """
        self._client.log('---------- Projects.GetProjectInfo')
        request = self._client.new_request(
            sync_token,
            endpoint=SyncEndpoints.GET_PROJECT_INFO,
            extra_fields={'project_id': str(project_id), 'all_data': str(all_data).lower()},
        )
        info = ProjectInfo()
        self._client.do(ctx, request, info)
        return info

    def get_data(self, ctx: 'CallContext', project_id: ResourceId, sync_token: str | None = None) -> ProjectData:
        """Get a project with its notes, sections and uncompleted items."""
        self._client.log('---------- Projects.GetProjectData')
        request = self._client.new_request(
            sync_token,
            endpoint=SyncEndpoints.GET_PROJECT_DATA,
            extra_fields={'project_id': str(project_id)},
        )
        data = ProjectData()
        self._client.do(ctx, request, data)
        return data

    def get_archived(self, ctx: 'CallContext', pagination: Pagination | None = None,
                     sync_token: str | None = None) -> list[Project]:
        """Get the user's archived projects. Limit and offset are only sent when ``pagination`` is given."""
        self._client.log('---------- Projects.GetArchivedProjects')
        request = self._client.new_request(
            sync_token,
            endpoint=SyncEndpoints.LIST_ARCHIVED_PROJECTS,
            extra_fields=pagination.as_form() if pagination is not None else None,
        )
        archived = ArchivedProjects()
        self._client.do(ctx, request, archived)
        logger.debug(f'Fetched {len(archived.projects)} archived projects')
        return archived.projects
