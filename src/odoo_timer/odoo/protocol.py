# src/odoo_timer/odoo/protocol.py

"""
JSON-RPC request templates and response decoding for the Odoo external API.

Requests are explicit JsonRpcRequest records. Decoding fails closed: any shape
mismatch in the envelope raises ProtocolError. The only lenient spot is the
per-record parse of search_read rows, where bad rows are counted and dropped.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from .errors import MalformedEndpoint, ProtocolError, RemoteError
from .models import ConnectionConfig, JsonRpcRequest, SessionIdentity, TaskPage, WorkItem

logger = logging.getLogger(__name__)

JSONRPC_PATH = "/jsonrpc"

LOGIN_REQUEST_ID = 1
FETCH_TASKS_REQUEST_ID = 2

TASK_MODEL = "project.task"
TASK_FIELDS = ["name", "project_id"]
TASK_LIMIT = 100


def build_endpoint(base_url: str) -> httpx.URL:
    """Return `{base_url}/jsonrpc`, or raise MalformedEndpoint."""
    raw = (base_url or "").strip().rstrip("/")
    if not raw:
        raise MalformedEndpoint("Invalid URL")
    # httpx decodes the host lazily; IDNA errors surface on `url.host` as ValueError.
    try:
        url = httpx.URL(raw + JSONRPC_PATH)
        usable = url.scheme in ("http", "https") and bool(url.host)
        port = url.port
    except (httpx.InvalidURL, TypeError, ValueError) as e:
        raise MalformedEndpoint("Invalid URL") from e
    if not usable or (port is not None and not 1 <= port <= 65535):
        raise MalformedEndpoint("Invalid URL")
    return url


def build_login_request(config: ConnectionConfig) -> JsonRpcRequest:
    return JsonRpcRequest(
        id=LOGIN_REQUEST_ID,
        service="common",
        method="login",
        args=[config.database, config.username, config.api_token],
    )


def build_fetch_tasks_request(config: ConnectionConfig, identity: SessionIdentity) -> JsonRpcRequest:
    return JsonRpcRequest(
        id=FETCH_TASKS_REQUEST_ID,
        service="object",
        method="execute_kw",
        args=[
            config.database,
            identity.user_id,
            config.api_token,
            TASK_MODEL,
            "search_read",
            [],
            {"fields": list(TASK_FIELDS), "limit": TASK_LIMIT},
        ],
    )


def _remote_error(err: Any) -> RemoteError:
    # Odoo puts the useful text in error.data.message; error.message is usually
    # a generic "Odoo Server Error".
    if not isinstance(err, dict):
        return RemoteError(str(err) or "Remote error")
    data = err.get("data")
    message = None
    if isinstance(data, dict):
        message = data.get("message")
    if not message:
        message = err.get("message")
    code = err.get("code")
    return RemoteError(
        str(message or "Remote error"),
        code=code if isinstance(code, int) else None,
        data=data,
    )


def decode_result(body: bytes | str) -> Any:
    """Parse a JSON-RPC response body and return its `result` member."""
    try:
        envelope = json.loads(body)
    except ValueError as e:
        raise ProtocolError("Response is not valid JSON") from e

    if not isinstance(envelope, dict):
        raise ProtocolError("Response is not a JSON object")

    if envelope.get("error") is not None:
        raise _remote_error(envelope["error"])

    if "result" not in envelope:
        raise ProtocolError("Response has no result")

    return envelope["result"]


def decode_login_result(result: Any) -> SessionIdentity:
    # bool is an int subclass; Odoo answers `false` for bad credentials.
    if isinstance(result, bool) or not isinstance(result, int):
        raise ProtocolError(f"Unexpected login result type: {type(result).__name__}")
    return SessionIdentity(user_id=result)


def parse_work_item(record: Any) -> WorkItem | None:
    if not isinstance(record, dict):
        return None

    task_id = record.get("id")
    name = record.get("name")
    project = record.get("project_id")

    if isinstance(task_id, bool) or not isinstance(task_id, int):
        return None
    if not isinstance(name, str):
        return None
    # many2one fields come back as [id, display_name], or false when empty
    if not isinstance(project, list) or not project or not isinstance(project[-1], str):
        return None

    return WorkItem(id=task_id, name=name, project_name=project[-1])


def decode_task_page(result: Any) -> TaskPage:
    if not isinstance(result, list):
        raise ProtocolError(f"Unexpected search_read result type: {type(result).__name__}")

    items: list[WorkItem] = []
    skipped = 0
    for record in result:
        item = parse_work_item(record)
        if item is None:
            skipped += 1
            continue
        items.append(item)

    return TaskPage(items=items, skipped=skipped)
