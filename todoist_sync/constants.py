"""Centralized Todoist Sync API constant definitions."""

from enum import StrEnum

FULL_SYNC_TOKEN = "*"
SYNC_STATUS_OK = "ok"
DEFAULT_RESOURCE_TYPES: tuple[str, ...] = ("all",)
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class ResourceType(StrEnum):
    ALL = "all"
    PROJECTS = "projects"
    SECTIONS = "sections"
    ITEMS = "items"
    NOTES = "notes"
    LABELS = "labels"


class CommandType(StrEnum):
    PROJECT_ADD = "project_add"
    PROJECT_UPDATE = "project_update"
    PROJECT_MOVE = "project_move"
    PROJECT_DELETE = "project_delete"
    PROJECT_ARCHIVE = "project_archive"
    PROJECT_UNARCHIVE = "project_unarchive"
    PROJECT_REORDER = "project_reorder"

    SECTION_ADD = "section_add"
    SECTION_UPDATE = "section_update"
    SECTION_MOVE = "section_move"
    SECTION_REORDER = "section_reorder"
    SECTION_DELETE = "section_delete"
    SECTION_ARCHIVE = "section_archive"
    SECTION_UNARCHIVE = "section_unarchive"

    ITEM_ADD = "item_add"
    ITEM_UPDATE = "item_update"
    ITEM_MOVE = "item_move"
    ITEM_DELETE = "item_delete"
    ITEM_CLOSE = "item_close"
    ITEM_COMPLETE = "item_complete"
    ITEM_UNCOMPLETE = "item_uncomplete"
    ITEM_REORDER = "item_reorder"


class ErrorKind(StrEnum):
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    TOO_MANY_REQUESTS = "too_many_requests"
    INTERNAL = "internal"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"
    SYNC = "sync"


class ErrorField(StrEnum):
    TAG = "error_tag"
    CODE = "error_code"
    MESSAGE = "error"
    HTTP_CODE = "http_code"
    EXTRA = "error_extra"
