# src/odoo_timer/cli/main.py

"""
CLI entrypoint.

Initializes logging, starts the session runner (client on a background event
loop) and hands the main thread to the console.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..logging_setup import level_from_name, setup_logging
from ..odoo.client import RemoteSessionClient
from ..odoo.runner import SessionRunner
from .console import run_console_loop

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    console_level = level_from_name(getattr(settings, "log_level", None))
    log_file = setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s (log file: %s)...", settings.app_name, log_file)

    runner = SessionRunner(RemoteSessionClient(settings)).start()
    state = AppState(settings=settings, session=runner)

    try:
        run_console_loop(state)
    finally:
        runner.stop()
        logger.info("Bye.")


if __name__ == "__main__":
    main()
