# tests/conftest.py

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import httpx
import pytest

from odoo_timer.core.state import AppState
from odoo_timer.odoo.client import RemoteSessionClient
from odoo_timer.odoo.models import ConnectionConfig, Outcome, SessionIdentity, WorkItem


class FakeOdooServer:
    """
    In-process stand-in for an Odoo /jsonrpc endpoint (via httpx.MockTransport).

    - Records every decoded request payload for assertions
    - Answers `common` calls with `login_body`, everything else with `tasks_body`
    - Bodies may be dicts (sent as JSON) or raw str/bytes (sent verbatim)
    """

    def __init__(self) -> None:
        self.requests: list[dict[str, Any]] = []
        self.urls: list[str] = []
        self.headers: list[httpx.Headers] = []
        self.login_body: Any = {"jsonrpc": "2.0", "id": 1, "result": 7}
        self.tasks_body: Any = {
            "jsonrpc": "2.0",
            "id": 2,
            "result": [{"id": 5, "name": "Fix bug", "project_id": [3, "Website"]}],
        }
        self.status_code = 200
        self.refuse_connections = False

    def handler(self, request: httpx.Request) -> httpx.Response:
        if self.refuse_connections:
            raise httpx.ConnectError("Connection refused", request=request)

        payload = json.loads(request.content)
        self.requests.append(payload)
        self.urls.append(str(request.url))
        self.headers.append(request.headers)

        body = self.login_body if payload["params"]["service"] == "common" else self.tasks_body
        if isinstance(body, (str, bytes)):
            return httpx.Response(self.status_code, content=body)
        return httpx.Response(self.status_code, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class FakeSession:
    """
    Synchronous SessionPort for front-end tests: callbacks fire immediately,
    outcomes are scripted per call.
    """

    def __init__(self) -> None:
        self.login_outcomes: list[Outcome[Any]] = []
        self.fetch_outcomes: list[Outcome[Any]] = []
        self.logins: list[ConnectionConfig] = []
        self.fetch_calls = 0

    def login(self, config: ConnectionConfig, callback: Callable[[Outcome[Any]], None] | None = None) -> None:
        self.logins.append(config)
        outcome = self.login_outcomes.pop(0)
        if callback is not None:
            callback(outcome)

    def fetch_tasks(self, callback: Callable[[Outcome[Any]], None] | None = None) -> None:
        self.fetch_calls += 1
        outcome = self.fetch_outcomes.pop(0) if self.fetch_outcomes else Outcome(value=[])
        if callback is not None:
            callback(outcome)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object; we use a SimpleNamespace rather than importing
    real config to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="Odoo Timer",
        log_level="WARNING",
        data_dir=tmp_path,
        connect_timeout_seconds=1.0,
        read_timeout_seconds=1.0,
        default_url="",
        default_db="",
        default_username="",
    )


@pytest.fixture()
def odoo() -> FakeOdooServer:
    return FakeOdooServer()


@pytest.fixture()
def make_client(odoo: FakeOdooServer, settings: SimpleNamespace) -> Callable[[], RemoteSessionClient]:
    def factory() -> RemoteSessionClient:
        return RemoteSessionClient(settings, transport=odoo.transport)

    return factory


@pytest.fixture()
def config() -> ConnectionConfig:
    return ConnectionConfig(
        base_url="https://odoo.example.com",
        database="prod",
        username="alice@example.com",
        api_token="secret-token",
    )


@pytest.fixture()
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture()
def state(settings: SimpleNamespace, fake_session: FakeSession) -> AppState:
    return AppState(settings=settings, session=fake_session)


@pytest.fixture()
def logged_in_state(state: AppState) -> AppState:
    state.identity = SessionIdentity(user_id=7)
    state.tasks = [WorkItem(id=5, name="Fix bug", project_name="Website")]
    return state
