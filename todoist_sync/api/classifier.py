"""
Classification of Todoist Sync API responses.

The Sync API reports transport level success with HTTP 200 even when some
commands of a batch failed: per-command outcomes live in ``sync_status``.
``classify_response`` therefore inspects both the status code and the body
and returns the matching ``SyncAPIError`` (or ``None`` on success). It never
raises for API errors; it does raise ``ResponseDecodeError`` when the body it
has to read is not valid JSON, so callers can tell a garbled response apart
from an error the server reported.
"""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any, Mapping, cast

from loguru import logger

from todoist_sync.constants import ErrorKind, SYNC_STATUS_OK
from todoist_sync.errors import (
    ERROR_CLASS_BY_KIND,
    ResponseDecodeError,
    SyncAPIError,
    SyncError,
    UNKNOWN_ERROR_MESSAGE,
    UNKNOWN_ERROR_TAG,
    UnknownAPIError,
)

STATUS_TO_KIND: dict[int, ErrorKind] = {
    HTTPStatus.BAD_REQUEST: ErrorKind.BAD_REQUEST,
    HTTPStatus.UNAUTHORIZED: ErrorKind.UNAUTHORIZED,
    HTTPStatus.FORBIDDEN: ErrorKind.FORBIDDEN,
    HTTPStatus.NOT_FOUND: ErrorKind.NOT_FOUND,
    HTTPStatus.TOO_MANY_REQUESTS: ErrorKind.TOO_MANY_REQUESTS,
    HTTPStatus.INTERNAL_SERVER_ERROR: ErrorKind.INTERNAL,
    HTTPStatus.SERVICE_UNAVAILABLE: ErrorKind.UNAVAILABLE,
}


def decode_json(body: bytes, *, status_code: int) -> Any:
    """Decode a response body; an empty body decodes to ``None``."""
    if not body or not body.strip():
        return None
    try:
        return json.loads(body)
    except (UnicodeDecodeError, ValueError) as exc:
        raise ResponseDecodeError(
            f"invalid JSON in HTTP {status_code} response: {exc}", status_code=status_code, body=body
        ) from exc


def _error_payload(decoded: Any, *, status_code: int, body: bytes) -> Mapping[str, Any]:
    if decoded is None:
        raise ResponseDecodeError(f"empty body in HTTP {status_code} response", status_code=status_code, body=body)
    if not isinstance(decoded, Mapping):
        raise ResponseDecodeError(
            f"expected an error object in HTTP {status_code} response, got {type(decoded).__name__}",
            status_code=status_code,
            body=body,
        )
    return decoded


def find_sync_error(sync_status: Mapping[str, Any]) -> SyncError | None:
    """
    Return the first command outcome that is not the literal ``"ok"``.

    Which failing command is reported when several failed is not defined.
    Anything other than the exact string counts as a failure, including
    objects and arrays.
    """
    for correlation_id, outcome in sync_status.items():
        if isinstance(outcome, str) and outcome == SYNC_STATUS_OK:
            continue
        if isinstance(outcome, Mapping):
            return cast(SyncError, SyncError.from_payload(outcome, correlation_id=correlation_id))
        logger.warning("Unrecognised sync_status entry", command=correlation_id, outcome=outcome)
        return SyncError(message=f"unexpected command outcome: {outcome!r}", correlation_id=correlation_id)
    return None


def classify_response(status_code: int, body: bytes) -> SyncAPIError | None:
    """Decide whether a response is a success, a failed command batch, or an HTTP error."""
    if status_code == HTTPStatus.OK:
        decoded = decode_json(body, status_code=status_code)
        if decoded is None:
            return None
        if not isinstance(decoded, Mapping):
            # Read endpoints such as projects/get_archived answer with a bare list.
            return None
        sync_status = decoded.get("sync_status")
        if not isinstance(sync_status, Mapping):
            return None
        return find_sync_error(sync_status)

    kind = STATUS_TO_KIND.get(status_code)
    if kind is None:
        return UnknownAPIError(
            tag=UNKNOWN_ERROR_TAG,
            code=None,
            message=UNKNOWN_ERROR_MESSAGE,
            http_code=status_code,
            extra={},
        )

    payload = _error_payload(decode_json(body, status_code=status_code), status_code=status_code, body=body)
    return ERROR_CLASS_BY_KIND[kind].from_payload(payload, http_code=status_code)
