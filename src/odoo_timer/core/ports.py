# src/odoo_timer/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the front end.

The console depends on this Protocol instead of SessionRunner directly,
which keeps tests free of threads and sockets.
"""

from collections.abc import Callable
from typing import Any, Protocol

from ..odoo.models import ConnectionConfig, Outcome, SessionIdentity, WorkItem


class SessionPort(Protocol):
    """Callback-style session API: every call completes exactly once via `callback`."""

    def login(
            self,
            config: ConnectionConfig,
            callback: Callable[[Outcome[SessionIdentity]], None] | None = None,
    ) -> Any: ...

    def fetch_tasks(
            self,
            callback: Callable[[Outcome[list[WorkItem]]], None] | None = None,
    ) -> Any: ...
