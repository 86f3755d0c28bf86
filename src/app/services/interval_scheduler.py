"""Interval scheduler for background jobs that must never overlap themselves."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class IntervalScheduler:
    """
    Runs a coroutine function every `interval_seconds` as an asyncio task.

    At most one run is in flight: a tick (or run_once call) arriving while a
    run is still going is skipped. A failing run is logged and the loop keeps
    going on the next tick.
    """

    def __init__(
        self,
        job: Callable[[], Awaitable[object]],
        interval_seconds: float,
        name: str = "job",
        run_on_start: bool = False,
    ):
        self.job = job
        self.interval_seconds = interval_seconds
        self.name = name
        self.run_on_start = run_on_start
        self._task: Optional[asyncio.Task] = None
        self._running = False
        self._in_flight = asyncio.Lock()

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self):
        """Start the scheduler loop as an asyncio background task."""
        if self._running:
            return
        self._running = True
        self._task = asyncio.create_task(self._loop(), name=f"scheduler:{self.name}")
        logger.info(f"Scheduler '{self.name}' started (every {self.interval_seconds}s)")

    async def stop(self):
        """Stop the scheduler loop, cancelling a run in progress."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info(f"Scheduler '{self.name}' stopped")

    async def run_once(self) -> bool:
        """
        Run the job now unless a run is already in flight.

        Returns:
            True if the job ran, False if the tick was skipped
        """
        if self._in_flight.locked():
            logger.warning(f"Scheduler '{self.name}': previous run still in progress, skipping tick")
            return False
        async with self._in_flight:
            await self.job()
        return True

    async def _loop(self):
        if not self.run_on_start:
            await asyncio.sleep(self.interval_seconds)

        while self._running:
            try:
                await self.run_once()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception(f"Scheduler '{self.name}': run failed")

            await asyncio.sleep(self.interval_seconds)
