# src/odoo_timer/cli/menu.py

from __future__ import annotations

from typing import Any

from ..odoo.models import Outcome, WorkItem

SEPARATOR = "-" * 24
QUIT_LINE = "Quit (/quit)"


def render_menu(outcome: Outcome[Any]) -> list[str]:
    """
    Turn a fetch_tasks outcome into menu lines.

    Success: one "<project>: <task>" line per item, then a separator.
    Failure: a single "Error: ..." line. Both end with the quit entry.
    """
    lines: list[str] = []
    if outcome.ok:
        items: list[WorkItem] = list(outcome.value or [])
        if not items:
            lines.append("(no tasks)")
        for item in items:
            lines.append(item.label)
        lines.append(SEPARATOR)
    else:
        lines.append(f"Error: {outcome.message}")
    lines.append(QUIT_LINE)
    return lines
