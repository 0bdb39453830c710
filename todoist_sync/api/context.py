"""Cooperative cancellation and deadlines for a single API call."""

from __future__ import annotations

from threading import Event, Lock
from time import monotonic
from typing import Callable

from todoist_sync.errors import CallCancelledError, ContextDoneError, DeadlineExceededError


class CallContext:
    """
    Cancellation token with an optional deadline.

    A context may be shared by several calls and cancelled from any thread.
    ``err()`` returns the error describing why the context is done, or
    ``None`` while it is still live. Cancellation wins over an expired
    deadline if both happened.
    """

    def __init__(self, *, timeout: float | None = None, deadline: float | None = None) -> None:
        if timeout is not None and deadline is not None:
            raise ValueError("pass either timeout or deadline, not both")
        if timeout is not None:
            deadline = monotonic() + timeout
        self._deadline = deadline
        self._cancelled = Event()
        self._lock = Lock()
        self._callbacks: list[Callable[[], None]] = []

    @classmethod
    def background(cls) -> "CallContext":
        """A context that is never done unless explicitly cancelled."""

        return cls()

    @classmethod
    def with_timeout(cls, seconds: float) -> "CallContext":
        return cls(timeout=seconds)

    @property
    def deadline(self) -> float | None:
        """Deadline on the ``time.monotonic`` clock."""

        return self._deadline

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def remaining(self) -> float | None:
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - monotonic())

    def cancel(self) -> None:
        with self._lock:
            if self._cancelled.is_set():
                return
            self._cancelled.set()
            callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    def on_cancel(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register ``callback`` to run on cancellation; returns a function that unregisters it."""

        with self._lock:
            if not self._cancelled.is_set():
                self._callbacks.append(callback)
                return lambda: self._discard(callback)
        callback()
        return lambda: None

    def _discard(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def done(self) -> bool:
        return self.err() is not None

    def err(self) -> ContextDoneError | None:
        if self._cancelled.is_set():
            return CallCancelledError()
        if self._deadline is not None and monotonic() >= self._deadline:
            return DeadlineExceededError()
        return None
