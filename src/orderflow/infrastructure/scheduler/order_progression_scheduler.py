"""Order Progression Scheduler.

APScheduler-based async scheduler that moves orders through the early
lifecycle stages on a fixed cadence:
- every ``pending_interval`` seconds: PENDING -> CONFIRMED
- every ``confirmed_interval`` seconds: CONFIRMED -> PROCESSING

Stopping halts future scans but lets a scan already in flight finish.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

import structlog
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from orderflow.application.progress_orders import ProgressOrdersHandler

logger = structlog.get_logger(__name__)


class OrderProgressionScheduler:

    def __init__(
        self,
        handler: ProgressOrdersHandler,
        pending_interval: float = 30.0,
        confirmed_interval: float = 60.0,
        enabled: bool = True,
    ) -> None:
        """Initialize scheduler.

        Args:
            handler: Use case that performs one scan.
            pending_interval: Seconds between PENDING scans.
            confirmed_interval: Seconds between CONFIRMED scans.
            enabled: Whether ``start()`` actually schedules anything.
        """
        self._handler = handler
        self.pending_interval = pending_interval
        self.confirmed_interval = confirmed_interval
        self.enabled = enabled

        self._scheduler: AsyncIOScheduler | None = None
        self._is_running = False
        self._in_flight: set[asyncio.Task] = set()
        self._stopping = False

    @property
    def is_running(self) -> bool:
        return self._is_running

    async def start(self) -> None:
        """Start the recurring scans."""
        if not self.enabled:
            logger.info("Order progression scheduler is disabled, skipping start")
            return

        if self._is_running:
            logger.warning("Order progression scheduler already running")
            return

        self._stopping = False
        scheduler = AsyncIOScheduler(event_loop=asyncio.get_running_loop())

        scheduler.add_job(
            self.run_pending_scan,
            IntervalTrigger(seconds=self.pending_interval),
            id="confirm_pending_orders",
            name="Confirm pending orders",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        scheduler.add_job(
            self.run_confirmed_scan,
            IntervalTrigger(seconds=self.confirmed_interval),
            id="process_confirmed_orders",
            name="Start processing confirmed orders",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )

        scheduler.start()
        self._scheduler = scheduler
        self._is_running = True
        logger.info(
            "Order progression scheduler started",
            pending_interval=self.pending_interval,
            confirmed_interval=self.confirmed_interval,
        )

    async def stop(self) -> None:
        """Stop scheduling new scans and wait for running ones. Safe to call twice."""
        if not self._is_running or self._scheduler is None:
            return

        scheduler = self._scheduler
        self._scheduler = None
        self._is_running = False
        self._stopping = True

        scheduler.pause()
        running = self._in_flight - {asyncio.current_task()}
        if running:
            logger.info("Waiting for in-flight order scans", count=len(running))
            await asyncio.gather(*running, return_exceptions=True)
        scheduler.shutdown(wait=False)
        logger.info("Order progression scheduler stopped")

    async def run_pending_scan(self) -> int:
        return await self._track("pending", self._handler.confirm_pending)

    async def run_confirmed_scan(self) -> int:
        return await self._track("confirmed", self._handler.start_processing_confirmed)

    async def run_once(self) -> tuple[int, int]:
        """Run both scans back to back, outside the schedule."""
        confirmed = await self.run_pending_scan()
        processing = await self.run_confirmed_scan()
        return confirmed, processing

    async def _track(self, scan: str, work: Callable[[], Awaitable[int]]) -> int:
        if self._stopping:
            logger.info("Scheduler stopping, skipping order scan", scan=scan)
            return 0
        task = asyncio.current_task()
        if task is not None:
            self._in_flight.add(task)
        try:
            return await work()
        except Exception:
            logger.exception("Order scan failed", scan=scan)
            return 0
        finally:
            if task is not None:
                self._in_flight.discard(task)
