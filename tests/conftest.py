"""
Fixtures shared by the test-suite. Every test gets its own fake session and client.
"""
import json
from typing import Any, Callable
from unittest.mock import MagicMock
from urllib.parse import parse_qsl

import pytest
import requests

from todoist_sync.api import TodoistSyncClient


def _make_response(status_code: int, payload: Any = None, *, raw: bytes | None = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    if raw is not None:
        response._content = raw  # pylint: disable=protected-access
    elif payload is not None:
        response._content = json.dumps(payload).encode('utf-8')  # pylint: disable=protected-access
    else:
        response._content = b''  # pylint: disable=protected-access
    response.headers['Content-Type'] = 'application/json'
    return response


@pytest.fixture
def make_response() -> Callable[..., requests.Response]:
    return _make_response


@pytest.fixture
def session():
    """A stand-in for requests.Session; tests decide what ``request`` returns."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def respond(session) -> Callable[..., None]:
    def _respond(status_code: int = 200, payload: Any = None, *, raw: bytes | None = None) -> None:
        session.request.return_value = _make_response(status_code, payload, raw=raw)
    return _respond


@pytest.fixture
def client(session):
    sync_client = TodoistSyncClient('test-token', session=session)
    yield sync_client
    sync_client.close()


@pytest.fixture
def last_form(session) -> Callable[[], dict[str, str]]:
    """Decode the form body of the last request made through the fake session."""
    def _last_form() -> dict[str, str]:
        body = session.request.call_args.kwargs['data']
        return dict(parse_qsl(body, keep_blank_values=True))
    return _last_form
