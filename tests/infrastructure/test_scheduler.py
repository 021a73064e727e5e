"""Tests for the APScheduler-driven order progression scheduler."""

import asyncio
from datetime import timedelta

import pytest

from orderflow.application.progress_orders import ProgressOrdersHandler
from orderflow.domain.model.order_status import OrderStatus
from orderflow.infrastructure.scheduler.order_progression_scheduler import (
    OrderProgressionScheduler,
)
from tests.fakes import FakeOrderRepository, make_order

pytestmark = pytest.mark.asyncio


class SlowHandler:
    """Stands in for ProgressOrdersHandler; the pending scan blocks until released."""

    def __init__(self):
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def confirm_pending(self):
        self.started.set()
        await self.release.wait()
        return 3

    async def start_processing_confirmed(self):
        return 0


class CountingHandler:

    def __init__(self):
        self.calls = 0

    async def confirm_pending(self):
        self.calls += 1
        return 1

    async def start_processing_confirmed(self):
        self.calls += 1
        return 1


class FailingHandler:

    async def confirm_pending(self):
        raise RuntimeError("storage offline")

    async def start_processing_confirmed(self):
        return 2


def _scheduler(handler, enabled=True):
    return OrderProgressionScheduler(
        handler, pending_interval=3600, confirmed_interval=3600, enabled=enabled
    )


class TestLifecycle:

    async def test_start_and_stop(self):
        scheduler = _scheduler(SlowHandler())
        await scheduler.start()
        assert scheduler.is_running
        await scheduler.stop()
        assert not scheduler.is_running

    async def test_start_twice_is_harmless(self):
        scheduler = _scheduler(SlowHandler())
        await scheduler.start()
        await scheduler.start()
        assert scheduler.is_running
        await scheduler.stop()

    async def test_stop_is_idempotent(self):
        scheduler = _scheduler(SlowHandler())
        await scheduler.stop()
        await scheduler.start()
        await scheduler.stop()
        await scheduler.stop()
        assert not scheduler.is_running

    async def test_disabled_scheduler_does_not_start(self):
        scheduler = _scheduler(SlowHandler(), enabled=False)
        await scheduler.start()
        assert not scheduler.is_running

    async def test_stop_waits_for_scan_in_flight(self):
        handler = SlowHandler()
        scheduler = _scheduler(handler)
        await scheduler.start()

        scan = asyncio.create_task(scheduler.run_pending_scan())
        await handler.started.wait()

        stopper = asyncio.create_task(scheduler.stop())
        await asyncio.sleep(0.01)
        assert not stopper.done()

        handler.release.set()
        await stopper
        assert scan.done()
        assert scan.result() == 3


    async def test_scan_that_starts_after_stop_is_skipped(self):
        handler = CountingHandler()
        scheduler = _scheduler(handler)
        await scheduler.start()
        await scheduler.stop()

        assert await scheduler.run_pending_scan() == 0
        assert await scheduler.run_confirmed_scan() == 0
        assert handler.calls == 0

    async def test_restart_resumes_scans(self):
        handler = CountingHandler()
        scheduler = _scheduler(handler)
        await scheduler.start()
        await scheduler.stop()
        await scheduler.start()

        assert await scheduler.run_pending_scan() == 1
        await scheduler.stop()


class TestScans:

    async def test_failed_scan_is_logged_and_counts_zero(self):
        scheduler = _scheduler(FailingHandler())
        assert await scheduler.run_once() == (0, 2)

    async def test_run_once_advances_orders(self):
        order = make_order()
        handler = ProgressOrdersHandler(FakeOrderRepository([order]), pending_dwell=timedelta(0))
        scheduler = _scheduler(handler)

        confirmed, _ = await scheduler.run_once()
        assert confirmed == 1
        assert order.status.value == OrderStatus.CONFIRMED
