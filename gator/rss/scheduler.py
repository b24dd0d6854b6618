# -*- coding: utf-8 -*-
"""
RSS polling scheduler

Features:
- Fetch one feed per cycle: the one fetched least recently, never-fetched first
- Sleep a fixed interval between cycles until cancelled

Public API:
- `FeedScheduler`
- `run_scheduler`

Internal:
- `FeedScheduler._run_scheduler`

Notes:
- A cycle is Idle -> Fetching -> Idle. Fetch, parse and reconcile run strictly
  in sequence on a single worker thread so the event loop stays free to react
  to cancellation.
- The in-flight slot admits one cycle at a time; a cycle that finds it taken
  does nothing.
"""

from __future__ import annotations

import asyncio
import signal
import threading
import uuid
from concurrent.futures import ThreadPoolExecutor

import httpx
from loguru import logger
from sqlalchemy import Engine

from gator.database import get_db, get_engine, utcnow
from .config import rss_config
from .dao import FeedDAO
from .schemas import CycleOutcome
from .service import refresh_feed


class FeedScheduler:
    """Polls feeds one at a time."""

    def __init__(
        self,
        engine: Engine | None = None,
        *,
        client: httpx.Client | None = None,
        retry_transient: bool | None = None,
    ) -> None:
        self.engine = engine
        self.client = client
        self.retry_transient = (
            rss_config.rss_retry_transient_errors
            if retry_transient is None
            else retry_transient
        )
        self.is_running = False
        self.scheduler_task: asyncio.Task | None = None
        self.executor: ThreadPoolExecutor | None = None
        self.cycles_completed = 0
        self._in_flight_lock = threading.Lock()
        self._in_flight: uuid.UUID | None = None

    @property
    def in_flight(self) -> uuid.UUID | None:
        """Feed currently being fetched, if any."""
        return self._in_flight

    def run_cycle(self) -> CycleOutcome:
        """Run one select -> fetch -> parse -> reconcile pass."""
        if not self._in_flight_lock.acquire(blocking=False):
            logger.warning("cycle skipped, feed still in flight: feed_id={}", self._in_flight)
            return CycleOutcome(status="idle")
        try:
            with get_db(self.engine) as db:
                feed = FeedDAO(db).get_next_to_fetch()
                if feed is None:
                    logger.debug("no feeds registered, staying idle")
                    return CycleOutcome(status="idle")
                self._in_flight = feed.id
                logger.info("fetching feed: name={}, url={}", feed.name, feed.url)
                return refresh_feed(
                    db,
                    feed.id,
                    client=self.client,
                    retry_transient=self.retry_transient,
                )
        except Exception as exc:
            logger.exception("scheduler cycle failed: feed_id={}", self._in_flight)
            return CycleOutcome(
                status="error",
                feed_id=self._in_flight,
                finished_at=utcnow(),
                error_message=str(exc),
            )
        finally:
            self._in_flight = None
            self._in_flight_lock.release()

    async def start(self, interval: float, *, max_cycles: int | None = None) -> None:
        """Start the polling loop as a task on the running event loop."""
        if self.is_running:
            logger.warning("scheduler already running")
            return

        self.is_running = True
        self.executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="gator-fetch")
        logger.info("collecting feeds every {:g}s", interval)
        self.scheduler_task = asyncio.create_task(
            self._run_scheduler(interval, max_cycles)
        )

    async def stop(self) -> None:
        """Cancel the loop and wait for the cycle in flight to finish."""
        self.is_running = False
        if self.scheduler_task and not self.scheduler_task.done():
            self.scheduler_task.cancel()
            try:
                await self.scheduler_task
            except asyncio.CancelledError:
                pass
        if self.executor:
            self.executor.shutdown(wait=True)
            self.executor = None
        logger.info("scheduler stopped after {} cycles", self.cycles_completed)

    async def wait(self) -> None:
        if not self.scheduler_task:
            return
        try:
            await self.scheduler_task
        except asyncio.CancelledError:
            if not self.scheduler_task.cancelled():
                raise

    async def _run_scheduler(self, interval: float, max_cycles: int | None) -> None:
        """Main loop"""
        loop = asyncio.get_running_loop()
        while self.is_running:
            try:
                await loop.run_in_executor(self.executor, self.run_cycle)
                self.cycles_completed += 1
                if max_cycles is not None and self.cycles_completed >= max_cycles:
                    break
                await asyncio.sleep(interval)
            except asyncio.CancelledError:
                logger.info("scheduler task cancelled")
                break
        self.is_running = False


async def _serve(scheduler: FeedScheduler, interval: float, max_cycles: int | None) -> None:
    loop = asyncio.get_running_loop()
    await scheduler.start(interval, max_cycles=max_cycles)
    handled = []
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, scheduler.scheduler_task.cancel)
            handled.append(sig)
        except (NotImplementedError, RuntimeError):
            # Not available on Windows or outside the main thread.
            pass
    try:
        await scheduler.wait()
    finally:
        for sig in handled:
            loop.remove_signal_handler(sig)
        await scheduler.stop()


def run_scheduler(
    interval: float,
    *,
    engine: Engine | None = None,
    max_cycles: int | None = None,
) -> FeedScheduler:
    """Block running the polling loop until SIGINT/SIGTERM or `max_cycles`."""
    scheduler = FeedScheduler(engine or get_engine())
    asyncio.run(_serve(scheduler, interval, max_cycles))
    return scheduler
