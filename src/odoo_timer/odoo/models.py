# src/odoo_timer/odoo/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from .errors import OdooClientError

T = TypeVar("T")


@dataclass(slots=True)
class ConnectionConfig:
    """
    Connection parameters entered by the user.

    Mutable on purpose: the front end fills it field by field.
    The client snapshots it on a successful login.
    """

    base_url: str
    database: str
    username: str
    api_token: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class SessionIdentity:
    user_id: int
    session_token: str | None = None


@dataclass(frozen=True, slots=True)
class WorkItem:
    id: int
    name: str
    project_name: str

    @property
    def label(self) -> str:
        return f"{self.project_name}: {self.name}"


@dataclass(frozen=True, slots=True)
class TaskPage:
    """Decoded search_read result. `skipped` counts records that failed to parse."""

    items: list[WorkItem]
    skipped: int = 0


@dataclass(frozen=True, slots=True)
class JsonRpcRequest:
    """One JSON-RPC 2.0 "call" envelope addressed to an Odoo service."""

    id: int
    service: str
    method: str
    args: list[Any]

    def to_payload(self) -> dict[str, Any]:
        return {
            "jsonrpc": "2.0",
            "method": "call",
            "id": self.id,
            "params": {
                "service": self.service,
                "method": self.method,
                "args": list(self.args),
            },
        }


@dataclass(frozen=True, slots=True)
class Outcome(Generic[T]):
    """What the callback API delivers: either a value or an error."""

    value: T | None = None
    error: OdooClientError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        if self.error is None:
            return ""
        return str(self.error) or self.error.__class__.__name__
