# src/odoo_timer/cli/console.py

from __future__ import annotations

import getpass
import logging
from collections.abc import Callable

from ..core.state import AppState
from .commands import registry as command_registry
from .menu import render_menu
from .session_flow import InputFn, do_fetch_tasks, do_login, prompt_connection_config

logger = logging.getLogger(__name__)

PrintFn = Callable[[str], None]


def _login_until_ok(state: AppState, input_fn: InputFn, secret_fn: InputFn, out: PrintFn) -> bool:
    """Prompt and log in until it works. False if the user gave up (EOF / Ctrl+C)."""
    while True:
        try:
            config = prompt_connection_config(state.settings, input_fn=input_fn, secret_fn=secret_fn)
        except (EOFError, KeyboardInterrupt):
            out("")
            return False

        outcome = do_login(state, config)
        if outcome.ok:
            out(f"Logged in (uid={outcome.value.user_id}).")
            return True
        out(f"Error: {outcome.message}")


def _show_tasks(state: AppState, out: PrintFn) -> None:
    for line in render_menu(do_fetch_tasks(state)):
        out(line)


def run_console_loop(
    state: AppState,
    *,
    input_fn: InputFn = input,
    secret_fn: InputFn = getpass.getpass,
    out: PrintFn = print,
) -> None:
    app_name = str(getattr(state.settings, "app_name", "Odoo Timer"))
    logger.info("Console started.")
    out(f"{app_name} - log in to list your tasks. Use /help for commands.")

    if not _login_until_ok(state, input_fn, secret_fn, out):
        logger.info("Login aborted, exiting.")
        return

    _show_tasks(state, out)

    while True:
        try:
            line = input_fn("> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            out("")
            break

        if not line:
            continue

        if line.lower() in ("/quit", "/exit", "/q"):
            logger.info("Console exit command received.")
            break

        if line.lower() == "/login":
            if _login_until_ok(state, input_fn, secret_fn, out):
                _show_tasks(state, out)
            continue

        try:
            reply = command_registry.handle(state, line)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is None:
            reply = "Unknown input. Use /help to list available commands."
        out(reply)

    logger.info("Console finished.")
