# src/odoo_timer/odoo/runner.py

"""
Callback-style facade over RemoteSessionClient.

The client is async; front ends are usually not. SessionRunner owns one event
loop in a daemon thread and runs every client coroutine there, so all access
to the stored identity happens on that single loop. Each call returns a
concurrent.futures.Future right away and invokes the callback exactly once
with an Outcome, on the runner thread. Marshaling onto a UI thread is the
caller's job.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import contextlib
import logging
import threading
from collections.abc import Awaitable, Callable
from typing import Any

from .client import RemoteSessionClient
from .errors import OdooClientError
from .models import ConnectionConfig, Outcome, SessionIdentity, WorkItem

logger = logging.getLogger(__name__)

OutcomeCallback = Callable[[Outcome[Any]], None]


async def _as_outcome(aw: Awaitable[Any]) -> Outcome[Any]:
    try:
        return Outcome(value=await aw)
    except OdooClientError as e:
        return Outcome(error=e)
    except Exception as e:
        logger.exception("Unexpected error in client call")
        err = OdooClientError("Unexpected error")
        err.__cause__ = e
        return Outcome(error=err)


class SessionRunner:
    def __init__(self, client: RemoteSessionClient) -> None:
        self.client = client
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> SessionRunner:
        if self.running:
            return self

        ready = threading.Event()
        holder: dict[str, asyncio.AbstractEventLoop] = {}

        def runner() -> None:
            loop = asyncio.new_event_loop()
            asyncio.set_event_loop(loop)
            holder["loop"] = loop
            ready.set()
            try:
                loop.run_forever()
            finally:
                with contextlib.suppress(Exception):
                    loop.close()

        t = threading.Thread(target=runner, name="odoo-session", daemon=True)
        t.start()

        if not ready.wait(timeout=5.0) or "loop" not in holder:
            raise RuntimeError("Session runner thread did not initialize properly.")

        self._loop = holder["loop"]
        self._thread = t
        logger.debug("Session runner started.")
        return self

    def stop(self, timeout: float | None = 10.0) -> None:
        loop, thread = self._loop, self._thread
        if loop is None or thread is None:
            return

        try:
            asyncio.run_coroutine_threadsafe(self.client.aclose(), loop).result(timeout=timeout)
        except Exception:
            logger.debug("Failed to close HTTP client.", exc_info=True)

        with contextlib.suppress(RuntimeError):
            loop.call_soon_threadsafe(loop.stop)
        thread.join(timeout=timeout)

        self._loop = None
        self._thread = None
        logger.debug("Session runner stopped.")

    def _submit(
        self,
        aw_factory: Callable[[], Awaitable[Any]],
        callback: OutcomeCallback | None,
    ) -> concurrent.futures.Future[Outcome[Any]]:
        loop = self._loop
        if loop is None:
            raise RuntimeError("SessionRunner is not started.")

        # The callback is invoked from inside the coroutine, never via
        # Future.add_done_callback, which would run it on the caller's thread
        # if the call had already finished.
        async def run() -> Outcome[Any]:
            outcome = await _as_outcome(aw_factory())
            if callback is not None:
                try:
                    callback(outcome)
                except Exception:
                    logger.exception("Outcome callback failed")
            return outcome

        return asyncio.run_coroutine_threadsafe(run(), loop)

    def login(
        self,
        config: ConnectionConfig,
        callback: Callable[[Outcome[SessionIdentity]], None] | None = None,
    ) -> concurrent.futures.Future[Outcome[Any]]:
        return self._submit(lambda: self.client.login(config), callback)

    def fetch_tasks(
        self,
        callback: Callable[[Outcome[list[WorkItem]]], None] | None = None,
    ) -> concurrent.futures.Future[Outcome[Any]]:
        return self._submit(self.client.fetch_tasks, callback)
