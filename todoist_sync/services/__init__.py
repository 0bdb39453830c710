"""Per-resource wrappers around the Sync API transport."""

from .projects import ProjectsService
from .sections import SectionsService
from .tasks import TasksService

__all__ = [
    "ProjectsService",
    "SectionsService",
    "TasksService",
]
