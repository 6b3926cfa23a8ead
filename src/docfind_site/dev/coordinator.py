"""Single-flight rebuilds for the development server."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable, Sized

LOGGER = logging.getLogger(__name__)

BuildFn = Callable[[], Awaitable[Sized]]


class RebuildCoordinator:
    """Runs at most one build at a time and coalesces requests made meanwhile.

    Any number of requests arriving while a build is in flight collapse into a
    single trailing build.
    """

    def __init__(self, build: BuildFn) -> None:
        self._build = build
        self.building = False
        self.pending = False
        self.builds_started = 0
        self._tasks: set[asyncio.Task[None]] = set()

    async def request_rebuild(self) -> None:
        if self.building:
            self.pending = True
            return

        self.building = True
        try:
            while True:
                self.pending = False
                await self._run_once()
                if not self.pending:
                    break
        finally:
            self.building = False

    def notify(self) -> None:
        """Schedule a rebuild request on the running loop without awaiting it."""
        if self.building:
            self.pending = True
            return
        task = asyncio.get_running_loop().create_task(self.request_rebuild())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def wait_idle(self) -> None:
        """Wait for scheduled rebuilds to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def reset(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()
        self.building = False
        self.pending = False

    async def _run_once(self) -> None:
        self.builds_started += 1
        started = time.perf_counter()
        try:
            documents = await self._build()
        except Exception:
            LOGGER.exception("docfind index rebuild failed")
            return
        LOGGER.info(
            "docfind index rebuilt (%d documents, %.2fs)",
            len(documents),
            time.perf_counter() - started,
        )
