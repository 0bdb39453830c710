"""Exception hierarchy for the Todoist Sync client."""

from __future__ import annotations

from functools import partial
from typing import Any, Mapping

from todoist_sync.constants import ErrorField, ErrorKind

UNKNOWN_ERROR_TAG = "UNKNOWN_ERROR"
UNKNOWN_ERROR_MESSAGE = "Unknown error occurred."


class TodoistSyncError(Exception):
    """Base class for every error raised by this package."""


class RequiredTokenError(TodoistSyncError, ValueError):
    """Raised when a client is constructed without an API token."""

    def __init__(self, message: str = "must provide an API token"):
        super().__init__(message)


class BuildRequestError(TodoistSyncError):
    """The request could not be assembled (bad configuration or unserializable payload)."""


class TransportError(TodoistSyncError):
    """The HTTP call itself failed (connection, TLS, read timeout...)."""


class ContextDoneError(TodoistSyncError):
    """The call context finished before the response arrived."""


class CallCancelledError(ContextDoneError):
    def __init__(self, message: str = "context canceled"):
        super().__init__(message)


class DeadlineExceededError(ContextDoneError):
    def __init__(self, message: str = "context deadline exceeded"):
        super().__init__(message)


class ResponseDecodeError(TodoistSyncError):
    """The server answered but the body is not valid JSON for the expected shape."""

    def __init__(self, message: str, *, status_code: int | None = None, body: bytes = b""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ResourceNotFoundError(TodoistSyncError, LookupError):
    """A convenience lookup (by id or name) found no matching resource."""

    def __init__(self, resource: str, key: str, value: Any):
        super().__init__(f"{resource} with {key}={value!r} not found")
        self.resource = resource
        self.key = key
        self.value = value

    def __reduce__(self):
        return (type(self), (self.resource, self.key, self.value))


class SyncAPIError(TodoistSyncError):
    """
    Error reported by the Todoist Sync API.

    A single error shape is used for every HTTP status and for per-command
    ``sync_status`` failures; ``kind`` tells them apart. The subclasses below
    exist so callers may also ``except`` on a specific kind.
    """

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(
        self,
        *,
        tag: str | None = None,
        code: int | None = None,
        message: str | None = None,
        http_code: int | None = None,
        extra: Mapping[str, Any] | None = None,
        correlation_id: str | None = None,
        kind: ErrorKind | None = None,
    ):
        if kind is not None:
            self.kind = kind
        self.tag = tag
        self.code = code
        self.message = message
        self.http_code = http_code
        self.extra: dict[str, Any] = dict(extra or {})
        self.correlation_id = correlation_id
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"({self.http_code}) {self.tag}: {self.message}"

    def __reduce__(self):
        rebuild = partial(type(self), tag=self.tag, code=self.code, message=self.message, http_code=self.http_code,
                          extra=dict(self.extra), correlation_id=self.correlation_id, kind=self.kind)
        return (rebuild, ())

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(kind={self.kind.value!r}, tag={self.tag!r}, code={self.code!r}, "
                f"http_code={self.http_code!r}, correlation_id={self.correlation_id!r})")

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, Any],
        *,
        http_code: int | None = None,
        correlation_id: str | None = None,
    ) -> "SyncAPIError":
        """Build the error from the wire fields ``error_tag``, ``error_code``, ``error``, ``http_code``, ``error_extra``."""
        extra = payload.get(ErrorField.EXTRA)
        return cls(
            tag=payload.get(ErrorField.TAG),
            code=payload.get(ErrorField.CODE),
            message=payload.get(ErrorField.MESSAGE),
            http_code=payload.get(ErrorField.HTTP_CODE, http_code),
            extra=extra if isinstance(extra, Mapping) else {},
            correlation_id=correlation_id,
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            ErrorField.TAG.value: self.tag,
            ErrorField.CODE.value: self.code,
            ErrorField.MESSAGE.value: self.message,
            ErrorField.HTTP_CODE.value: self.http_code,
            ErrorField.EXTRA.value: dict(self.extra),
        }


class BadRequestError(SyncAPIError):
    kind = ErrorKind.BAD_REQUEST


class UnauthorizedError(SyncAPIError):
    kind = ErrorKind.UNAUTHORIZED


class ForbiddenError(SyncAPIError):
    kind = ErrorKind.FORBIDDEN


class NotFoundError(SyncAPIError):
    kind = ErrorKind.NOT_FOUND


class TooManyRequestsError(SyncAPIError):
    kind = ErrorKind.TOO_MANY_REQUESTS


class InternalServerError(SyncAPIError):
    kind = ErrorKind.INTERNAL


class ServiceUnavailableError(SyncAPIError):
    kind = ErrorKind.UNAVAILABLE


class UnknownAPIError(SyncAPIError):
    kind = ErrorKind.UNKNOWN


class SyncError(SyncAPIError):
    """A command inside an HTTP 200 batch failed; ``correlation_id`` names the command."""

    kind = ErrorKind.SYNC


ERROR_CLASS_BY_KIND: dict[ErrorKind, type[SyncAPIError]] = {
    cls.kind: cls
    for cls in (
        BadRequestError,
        UnauthorizedError,
        ForbiddenError,
        NotFoundError,
        TooManyRequestsError,
        InternalServerError,
        ServiceUnavailableError,
        UnknownAPIError,
        SyncError,
    )
}
