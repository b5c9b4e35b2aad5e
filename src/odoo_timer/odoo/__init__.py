# src/odoo_timer/odoo/__init__.py

from __future__ import annotations

from .client import RemoteSessionClient
from .errors import (
    LoginFailed,
    MalformedEndpoint,
    NotAuthenticated,
    OdooClientError,
    ProtocolError,
    RemoteError,
    TransportError,
)
from .models import ConnectionConfig, Outcome, SessionIdentity, WorkItem
from .runner import SessionRunner

__all__ = [
    "ConnectionConfig",
    "LoginFailed",
    "MalformedEndpoint",
    "NotAuthenticated",
    "OdooClientError",
    "Outcome",
    "ProtocolError",
    "RemoteError",
    "RemoteSessionClient",
    "SessionIdentity",
    "SessionRunner",
    "TransportError",
    "WorkItem",
]
