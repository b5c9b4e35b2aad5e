# src/odoo_timer/cli/session_flow.py

"""
Login and task-list flows shared by the console loop and slash commands.

Everything here runs on the UI (main) thread; client calls go through
AppState.wait_for so results are handed over via a queue.
"""

from __future__ import annotations

import getpass
import logging
from collections.abc import Callable
from typing import Any

from ..core.state import AppState
from ..odoo.models import ConnectionConfig, Outcome

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]


def _ask(input_fn: InputFn, label: str, default: str = "") -> str:
    prompt = f"{label} [{default}]: " if default else f"{label}: "
    value = input_fn(prompt).strip()
    return value or default


def prompt_connection_config(
    settings: Any,
    *,
    input_fn: InputFn = input,
    secret_fn: InputFn = getpass.getpass,
) -> ConnectionConfig:
    """Ask for URL, database, username and API token. EOFError/KeyboardInterrupt propagate."""
    base_url = _ask(input_fn, "URL (e.g. https://mycompany.odoo.com)", getattr(settings, "default_url", "") or "")
    database = _ask(input_fn, "Database", getattr(settings, "default_db", "") or "")
    username = _ask(input_fn, "Username", getattr(settings, "default_username", "") or "")
    api_token = secret_fn("API token: ").strip()
    return ConnectionConfig(base_url=base_url, database=database, username=username, api_token=api_token)


def do_login(state: AppState, config: ConnectionConfig) -> Outcome[Any]:
    outcome = state.wait_for(lambda cb: state.session.login(config, cb))
    if outcome.ok:
        state.identity = outcome.value
    else:
        logger.info("Login outcome: %s", outcome.message)
    return outcome


def do_fetch_tasks(state: AppState) -> Outcome[Any]:
    outcome = state.wait_for(state.session.fetch_tasks)
    if outcome.ok:
        state.tasks = list(outcome.value or [])
    return outcome
