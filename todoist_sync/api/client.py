"""HTTP client for the Todoist Sync API: request building, transport and response decoding."""

from __future__ import annotations

import json
from concurrent.futures import Future
from dataclasses import dataclass, field
from threading import Event, Lock, Thread
from time import perf_counter
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional, Sequence
from urllib.parse import parse_qsl, urlencode, urlsplit

import requests
from loguru import logger

from todoist_sync.constants import DEFAULT_RESOURCE_TYPES, FORM_CONTENT_TYPE, FULL_SYNC_TOKEN
from todoist_sync.errors import (
    BuildRequestError,
    DeadlineExceededError,
    RequiredTokenError,
    ResponseDecodeError,
    TransportError,
)
from todoist_sync.types import Command, CommandResponse
from todoist_sync.utils import redact_token
from todoist_sync.version import default_user_agent

from .classifier import classify_response, decode_json
from .context import CallContext
from .endpoints import Endpoint, SyncEndpoints

if TYPE_CHECKING:
    from todoist_sync.config import Settings

DEFAULT_BASE_URL = SyncEndpoints.DEFAULT_BASE_URL
DEFAULT_USER_AGENT = default_user_agent()


@dataclass(frozen=True, slots=True)
class TimeoutSettings:
    """Pair of connect/read timeouts for HTTP requests."""

    connect: float = 5.0
    read: float = 30.0

    def as_tuple(self) -> tuple[float, float]:
        """Return the timeout as ``(connect, read)`` tuple."""

        return (self.connect, self.read)

    def bounded_by(self, remaining: float | None) -> "TimeoutSettings":
        """Shrink both timeouts so neither outlives a context deadline."""

        if remaining is None:
            return self
        return TimeoutSettings(connect=min(self.connect, remaining), read=min(self.read, remaining))


@dataclass(frozen=True, slots=True)
class SyncRequest:
    """A fully built, form-encoded Sync API call. Building it performs no I/O."""

    endpoint: Endpoint
    headers: Mapping[str, str]
    body: str
    form: tuple[tuple[str, str], ...] = field(repr=False, default=())

    def get_field(self, name: str) -> str | None:
        for key, value in self.form:
            if key == name:
                return value
        return None

    def decoded_form(self) -> dict[str, str]:
        """Parse ``body`` back into fields, exactly as the server would."""

        return dict(parse_qsl(self.body, keep_blank_values=True))


@dataclass(slots=True)
class SyncHTTPResponse:
    """Structured response metadata for a Sync API call."""

    endpoint: Endpoint
    status_code: int
    headers: Mapping[str, str]
    content: bytes
    elapsed: float

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


class TodoistSyncClient:
    """
    Client for the Todoist Sync API.

    The configuration (token, base URL, user agent, timeouts, debug flag) is
    fixed at construction, so one client can serve concurrent calls from
    several threads. Each call builds its own request and response objects.
    """

    def __init__(
        self,
        api_token: str,
        *,
        session: requests.Session | None = None,
        debug: bool = False,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: TimeoutSettings | None = None,
    ) -> None:
        if not api_token:
            raise RequiredTokenError()

        self._api_token = api_token
        self._debug = debug
        self._base_url = base_url
        self._user_agent = user_agent
        self._timeout = timeout or TimeoutSettings()

        self._session = session
        self._open_sessions: set[requests.Session] = set()
        self._sessions_lock = Lock()

        # pylint: disable-next=import-outside-toplevel
        from todoist_sync.services import ProjectsService, SectionsService, TasksService

        self.projects = ProjectsService(self)
        self.sections = SectionsService(self)
        self.tasks = TasksService(self)

    @classmethod
    def from_settings(cls, settings: "Settings", *, session: requests.Session | None = None) -> "TodoistSyncClient":
        return cls(
            settings.api_token,
            session=session,
            debug=settings.debug,
            base_url=settings.base_url,
            user_agent=settings.user_agent,
            timeout=TimeoutSettings(connect=settings.connect_timeout, read=settings.read_timeout),
        )

    @property
    def api_token(self) -> str:
        return self._api_token

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def user_agent(self) -> str:
        return self._user_agent

    @property
    def debug(self) -> bool:
        return self._debug

    @property
    def timeout(self) -> TimeoutSettings:
        return self._timeout

    def log(self, message: str, **context: Any) -> None:
        """Emit a debug trace only when the client runs in debug mode."""

        if self._debug:
            logger.debug(message, **context)

    def close(self) -> None:
        """Close the sessions of calls still in flight. A session passed by the caller is left open."""

        with self._sessions_lock:
            sessions, self._open_sessions = self._open_sessions, set()
        for session in sessions:
            session.close()

    def __enter__(self) -> "TodoistSyncClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # Request building

    def endpoint_url(self, endpoint: Endpoint | None = None) -> Endpoint:
        """Resolve ``endpoint`` against the configured base URL, validating it."""

        parts = urlsplit(self._base_url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise BuildRequestError(f"invalid base URL: {self._base_url!r}")
        if endpoint is None or endpoint == SyncEndpoints.SYNC:
            return Endpoint(SyncEndpoints.SYNC.name, SyncEndpoints.SYNC.method, self._base_url)
        return endpoint.relative_to(self._base_url)

    def new_request(
        self,
        sync_token: str | None = None,
        resource_types: Sequence[str] | None = None,
        commands: Iterable[Command] | None = None,
        *,
        endpoint: Endpoint | None = None,
        extra_fields: Mapping[str, str] | None = None,
    ) -> SyncRequest:
        """
        Build a form-encoded POST request.

        ``sync_token`` falls back to ``"*"`` (full sync) and ``resource_types``
        to ``["all"]``. The ``commands`` field is left out entirely when there
        are no commands. Serialization problems and a malformed base URL raise
        ``BuildRequestError``.
        """
        resolved = self.endpoint_url(endpoint)

        types = list(resource_types) if resource_types else list(DEFAULT_RESOURCE_TYPES)
        try:
            resource_types_json = json.dumps(types, allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise BuildRequestError(f"resource_types unable to be serialized: {types!r}") from exc

        command_list = list(commands or [])
        commands_json: str | None = None
        if command_list:
            try:
                commands_json = json.dumps([command.to_dict() for command in command_list], allow_nan=False)
            except (TypeError, ValueError, AttributeError) as exc:
                raise BuildRequestError(f"commands unable to be serialized: {command_list!r}") from exc

        form: list[tuple[str, str]] = [
            ("token", self._api_token),
            ("sync_token", sync_token or FULL_SYNC_TOKEN),
            ("resource_types", resource_types_json),
        ]
        if commands_json is not None:
            form.append(("commands", commands_json))
        for key, value in (extra_fields or {}).items():
            form.append((key, str(value)))

        self.log(
            "Built sync request",
            endpoint=resolved.name,
            token=redact_token(self._api_token),
            sync_token=sync_token or FULL_SYNC_TOKEN,
            resource_types=resource_types_json,
            commands=commands_json,
            extra_fields=dict(extra_fields or {}),
        )

        headers = {"Content-Type": FORM_CONTENT_TYPE}
        if self._user_agent:
            headers["User-Agent"] = self._user_agent

        return SyncRequest(endpoint=resolved, headers=headers, body=urlencode(form), form=tuple(form))

    # Transport

    def do(self, ctx: CallContext, request: SyncRequest, target: Any = None) -> SyncHTTPResponse:
        """
        Send ``request`` and decode the response into ``target``.

        ``target`` may be ``None`` (nothing is decoded), a raw sink with a
        ``write`` method (the body is copied verbatim), or an envelope with a
        ``populate`` method (the JSON body is decoded into it). API errors are
        raised as ``SyncAPIError`` and leave ``target`` untouched. If the send
        fails after ``ctx`` was cancelled or timed out, the context error is
        raised instead of the transport error.
        """
        if ctx is None:
            raise ValueError("context must be non-nil")

        ctx_err = ctx.err()
        if ctx_err is not None:
            logger.debug("Context already done, not sending", endpoint=request.endpoint.name, reason=str(ctx_err))
            raise ctx_err

        timeout = self._timeout.bounded_by(ctx.remaining())
        logger.debug(
            "Calling Todoist endpoint",
            endpoint=request.endpoint.name,
            method=request.endpoint.method,
            url=request.endpoint.url,
        )
        start = perf_counter()
        session = self._open_session()
        response = self._wait(ctx, request, session, self._submit(request, timeout, session))
        elapsed = perf_counter() - start
        logger.debug(
            "Received response",
            endpoint=request.endpoint.name,
            status=response.status_code,
            elapsed=f"{elapsed:.3f}s",
        )

        content = response.content or b""
        error = classify_response(response.status_code, content)
        if error is not None:
            logger.error(
                "Todoist endpoint returned error",
                endpoint=request.endpoint.name,
                status=response.status_code,
                kind=error.kind.value,
                tag=error.tag,
                command=error.correlation_id,
            )
            raise error

        if target is not None:
            self._decode_into(target, content, response.status_code, request.endpoint)

        return SyncHTTPResponse(
            endpoint=request.endpoint,
            status_code=response.status_code,
            headers=dict(response.headers),
            content=content,
            elapsed=elapsed,
        )

    def sync(
        self,
        ctx: CallContext,
        *,
        sync_token: str | None = None,
        resource_types: Sequence[str] | None = None,
        commands: Iterable[Command] | None = None,
    ) -> CommandResponse:
        """Send one batch (reads and/or commands) to the ``sync`` endpoint and return the decoded envelope."""

        request = self.new_request(sync_token, resource_types, commands)
        envelope = CommandResponse()
        self.do(ctx, request, envelope)
        return envelope

    def _submit(self, request: SyncRequest, timeout: TimeoutSettings,
                session: requests.Session) -> "Future[requests.Response]":
        """Run the send on a thread of its own, so an abandoned call never delays the next one."""

        future: "Future[requests.Response]" = Future()

        def _run() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                try:
                    response = self._send(request, timeout, session)
                finally:
                    self._release_session(session)
            except Exception as exc:  # pylint: disable=broad-except
                future.set_exception(exc)
            else:
                future.set_result(response)

        Thread(target=_run, name=f"todoist-sync-{request.endpoint.name}", daemon=True).start()
        return future

    def _wait(self, ctx: CallContext, request: SyncRequest, session: requests.Session,
              future: "Future[requests.Response]") -> requests.Response:
        wake = Event()
        future.add_done_callback(lambda _: wake.set())
        unregister = ctx.on_cancel(wake.set)
        try:
            wake.wait(ctx.remaining())
        finally:
            unregister()

        if not future.done():
            future.cancel()
            self._release_session(session)
            ctx_err = ctx.err() or DeadlineExceededError()
            logger.warning("Call abandoned", endpoint=request.endpoint.name, reason=str(ctx_err))
            raise ctx_err

        try:
            return future.result()
        except requests.Timeout as exc:
            ctx_err = ctx.err()
            if ctx_err is not None:
                raise ctx_err from exc
            logger.warning(
                "Request timeout",
                endpoint=request.endpoint.name,
                url=request.endpoint.url,
                timeout=self._timeout.as_tuple(),
            )
            raise TransportError(f"Timeout calling {request.endpoint.name}") from exc
        except requests.RequestException as exc:
            ctx_err = ctx.err()
            if ctx_err is not None:
                raise ctx_err from exc
            logger.error(
                "Request error",
                endpoint=request.endpoint.name,
                url=request.endpoint.url,
                error=str(exc),
            )
            raise TransportError(f"HTTP error calling {request.endpoint.name}: {exc}") from exc

    def _send(self, request: SyncRequest, timeout: TimeoutSettings, session: requests.Session) -> requests.Response:
        # A None value drops the session's default User-Agent when none is configured.
        headers: dict[str, Optional[str]] = {"User-Agent": None}
        headers.update(request.headers)
        response = session.request(
            method=request.endpoint.method,
            url=request.endpoint.url,
            data=request.body,
            headers=headers,
            timeout=timeout.as_tuple(),
        )
        # Read the body on the worker so the caller's only wait is in ``_wait``.
        _ = response.content
        return response

    @staticmethod
    def _decode_into(target: Any, content: bytes, status_code: int, endpoint: Endpoint) -> None:
        if hasattr(target, "write"):
            target.write(content)
            return
        if not hasattr(target, "populate"):
            raise TypeError(f"cannot decode into {type(target).__name__}: expected write() or populate()")

        decoded = decode_json(content, status_code=status_code)
        if decoded is None:
            return
        try:
            target.populate(decoded)
        except (TypeError, ValueError, KeyError) as exc:
            logger.error(
                "Failed to decode JSON response",
                endpoint=endpoint.name,
                body=content[:500].decode("utf-8", errors="replace"),
            )
            raise ResponseDecodeError(
                f"response of {endpoint.name} does not match {type(target).__name__}: {exc}",
                status_code=status_code,
                body=content,
            ) from exc

    def _open_session(self) -> requests.Session:
        """The caller's session when one was given, otherwise a fresh one owned by this call."""

        if self._session is not None:
            return self._session
        session = requests.Session()
        with self._sessions_lock:
            self._open_sessions.add(session)
        return session

    def _release_session(self, session: requests.Session) -> None:
        if session is self._session:
            return
        with self._sessions_lock:
            self._open_sessions.discard(session)
        session.close()
