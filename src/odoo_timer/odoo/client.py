# src/odoo_timer/odoo/client.py

"""
Remote-session client for the Odoo JSON-RPC endpoint.

Holds the connection parameters and the identity returned by `common.login`,
and lists project tasks through `object.execute_kw`. The stored session
(config + endpoint + identity) is one immutable snapshot that only the login
continuation replaces; readers take the reference once and never see a
half-updated state.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Any

import httpx

from .errors import LoginFailed, NotAuthenticated, OdooClientError, ProtocolError, RemoteError, TransportError
from .models import ConnectionConfig, JsonRpcRequest, SessionIdentity, TaskPage, WorkItem
from .protocol import (
    build_endpoint,
    build_fetch_tasks_request,
    build_login_request,
    decode_login_result,
    decode_result,
    decode_task_page,
)

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


@dataclass(frozen=True, slots=True)
class _Session:
    config: ConnectionConfig
    endpoint: httpx.URL
    identity: SessionIdentity


def _make_timeout(settings: Any) -> httpx.Timeout:
    connect_s = float(getattr(settings, "connect_timeout_seconds", 5.0))
    read_s = float(getattr(settings, "read_timeout_seconds", 30.0))
    return httpx.Timeout(connect=connect_s, read=read_s, write=10.0, pool=connect_s)


class RemoteSessionClient:
    """
    Async client. Use as `async with RemoteSessionClient(...) as client:` or
    call `aclose()` when done.

    `transport` is forwarded to httpx (tests pass an httpx.MockTransport).
    """

    def __init__(
        self,
        settings: Any = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if http_client is None:
            http_client = httpx.AsyncClient(timeout=_make_timeout(settings), transport=transport)
        self._http = http_client
        self._session: _Session | None = None
        self._login_lock = asyncio.Lock()

    async def __aenter__(self) -> RemoteSessionClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    @property
    def identity(self) -> SessionIdentity | None:
        session = self._session
        return None if session is None else session.identity

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    async def _call(self, endpoint: httpx.URL, request: JsonRpcRequest) -> Any:
        try:
            response = await self._http.post(endpoint, json=request.to_payload(), headers=JSON_HEADERS)
        except httpx.HTTPError as e:
            raise TransportError(f"Network error: {e.__class__.__name__}: {e}") from e

        try:
            return decode_result(response.content)
        except RemoteError:
            raise
        except ProtocolError as e:
            # A non-JSON error page is more usefully reported as the HTTP status.
            if response.is_error:
                raise TransportError(f"HTTP {response.status_code} from {endpoint}") from e
            raise

    async def login(self, config: ConnectionConfig) -> SessionIdentity:
        """
        Authenticate and remember the identity.

        Raises MalformedEndpoint (no request is sent) or LoginFailed. On failure
        any identity from an earlier login stays in place.
        """
        endpoint = build_endpoint(config.base_url)
        snapshot = replace(config)

        logger.info("Logging in to %s (db=%s) as %s", endpoint, snapshot.database, snapshot.username)

        async with self._login_lock:
            try:
                result = await self._call(endpoint, build_login_request(snapshot))
                identity = decode_login_result(result)
            except OdooClientError as e:
                logger.warning("Login failed: %s: %s", e.__class__.__name__, e)
                raise LoginFailed("Login failed") from e

            self._session = _Session(config=snapshot, endpoint=endpoint, identity=identity)

        logger.info("Login OK (uid=%s)", identity.user_id)
        return identity

    async def fetch_task_page(self) -> TaskPage:
        session = self._session
        if session is None:
            raise NotAuthenticated("Not logged in")

        request = build_fetch_tasks_request(session.config, session.identity)
        result = await self._call(session.endpoint, request)
        page = decode_task_page(result)

        if page.skipped:
            logger.info("Skipped %d malformed task record(s)", page.skipped)
        logger.debug("Fetched %d task(s)", len(page.items))
        return page

    async def fetch_tasks(self) -> list[WorkItem]:
        """List up to 100 tasks visible to the logged-in user."""
        page = await self.fetch_task_page()
        return page.items
