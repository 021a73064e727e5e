"""Application service: automatic order progression.

Advances orders through the early lifecycle stages without an explicit
status update call.  Designed to be triggered periodically by the
scheduler in the infrastructure layer, but independent of any timing:
``now`` is a parameter so a scan can be replayed deterministically.

Each scan is tolerant of partial failure: an order that cannot be
advanced or saved is logged and skipped, and the rest of the scan goes on.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import structlog

from orderflow.application.ports import EventPublisher
from orderflow.application.publishing import publish_pending_events
from orderflow.domain.model.order import Order
from orderflow.domain.model.order_status import OrderStatus
from orderflow.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)

DEFAULT_PENDING_DWELL = timedelta(seconds=5)
DEFAULT_CONFIRMED_DWELL = timedelta(seconds=10)


class ProgressOrdersHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        publisher: EventPublisher | None = None,
        pending_dwell: timedelta = DEFAULT_PENDING_DWELL,
        confirmed_dwell: timedelta = DEFAULT_CONFIRMED_DWELL,
    ) -> None:
        self._order_repo = order_repo
        self._publisher = publisher
        self._pending_dwell = pending_dwell
        self._confirmed_dwell = confirmed_dwell

    async def confirm_pending(self, now: datetime | None = None) -> int:
        """PENDING -> CONFIRMED for orders older than the pending dwell time."""
        return await self._advance(
            OrderStatus.PENDING,
            OrderStatus.CONFIRMED,
            min_dwell=self._pending_dwell,
            reference=lambda order: order.created_at,
            now=now,
        )

    async def start_processing_confirmed(self, now: datetime | None = None) -> int:
        """CONFIRMED -> PROCESSING for orders untouched for the confirmed dwell time."""
        return await self._advance(
            OrderStatus.CONFIRMED,
            OrderStatus.PROCESSING,
            min_dwell=self._confirmed_dwell,
            reference=lambda order: order.updated_at,
            now=now,
        )

    # --- Internal helpers -----------------------------------------------------

    async def _advance(
        self,
        current: OrderStatus,
        target: OrderStatus,
        min_dwell: timedelta,
        reference: Callable[[Order], datetime],
        now: datetime | None,
    ) -> int:
        now = now or datetime.now(timezone.utc)
        orders = await self._load(current)
        eligible = [order for order in orders if now - reference(order) >= min_dwell]

        if not eligible:
            return 0

        logger.info(
            "Advancing orders",
            from_status=str(current),
            to_status=str(target),
            count=len(eligible),
        )

        advanced = 0
        for order in eligible:
            try:
                order.change_status(target)
                await self._order_repo.save(order)
            except Exception:
                logger.exception(
                    "Failed to advance order",
                    order_id=order.id,
                    from_status=str(current),
                    to_status=str(target),
                )
                continue

            advanced += 1
            await self._publish(order)

        logger.info(
            "Order scan finished",
            from_status=str(current),
            to_status=str(target),
            advanced=advanced,
            failed=len(eligible) - advanced,
        )
        return advanced

    async def _load(self, status: OrderStatus) -> list[Order]:
        """Load the orders in ``status`` one by one, skipping any that fail to load."""
        orders = []
        for order_id in await self._order_repo.find_ids_by_status(status):
            try:
                order = await self._order_repo.find_by_id(order_id)
            except Exception:
                logger.exception("Failed to load order", order_id=order_id, status=str(status))
                continue
            # Moved on or deleted since the ID scan.
            if order is not None and order.status.value == status:
                orders.append(order)
        return orders

    async def _publish(self, order: Order) -> None:
        if self._publisher is None:
            order.clear_domain_events()
            return
        try:
            await publish_pending_events(self._publisher, order)
        except Exception:
            logger.exception("Failed to publish progression events", order_id=order.id)
