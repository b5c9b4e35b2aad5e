# src/odoo_timer/core/state.py

from __future__ import annotations

import queue
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..odoo.models import Outcome, SessionIdentity, WorkItem
from .ports import SessionPort


@dataclass
class AppState:
    settings: Any
    session: SessionPort

    identity: SessionIdentity | None = None
    tasks: list[WorkItem] = field(default_factory=list)

    def wait_for(self, submit: Callable[[Callable[[Outcome[Any]], None]], object]) -> Outcome[Any]:
        """
        Run `submit(callback)` and block the calling (UI) thread until the
        callback fires. The outcome crosses threads through a queue, so
        nothing from the worker side touches UI state directly.
        """
        inbox: queue.Queue[Outcome[Any]] = queue.Queue(maxsize=1)
        submit(inbox.put)
        return inbox.get()
