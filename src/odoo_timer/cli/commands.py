# src/odoo_timer/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.state import AppState
from .menu import render_menu
from .session_flow import do_fetch_tasks

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)

# Handled by the console loop itself (they need the terminal).
BUILTIN_HELP = {
    "login": "Log in again with new credentials.",
    "quit": "Exit.",
}


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /tasks, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args)

    def help_text(self) -> str:
        entries = dict(self._help)
        entries.update(BUILTIN_HELP)
        lines = ["Available commands:"]
        for name in sorted(entries):
            lines.append(f"  /{name} - {entries[name]}")
        return "\n".join(lines)


registry = CommandRegistry()


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.help_text()


def cmd_tasks(state: AppState, args: list[str]) -> str:
    outcome = do_fetch_tasks(state)
    return "\n".join(render_menu(outcome))


def cmd_whoami(state: AppState, args: list[str]) -> str:
    if state.identity is None:
        return "Not logged in."
    return f"Logged in as uid={state.identity.user_id}"


registry.register("help", cmd_help, "Show this help.", aliases=["h", "?"])
registry.register("tasks", cmd_tasks, "Reload the task list.", aliases=["t", "refresh"])
registry.register("whoami", cmd_whoami, "Show the current user id.")
