"""Application service: Update Order Status use case.

The Order aggregate decides whether the transition is legal; this
handler only loads, persists, and fans out the side effects.
"""

from __future__ import annotations

import structlog

from orderflow.application.dto import OrderDTO, order_to_dto
from orderflow.application.ports import EventPublisher, Notifier
from orderflow.application.publishing import publish_pending_events
from orderflow.domain.exceptions import OrderNotFoundError
from orderflow.domain.model.order_status import OrderStatus, parse_status
from orderflow.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        publisher: EventPublisher,
        notifier: Notifier,
    ) -> None:
        self._order_repo = order_repo
        self._publisher = publisher
        self._notifier = notifier

    async def handle(self, order_id: str, new_status: str | OrderStatus) -> OrderDTO:
        target = parse_status(new_status)

        order = await self._order_repo.find_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(f"Order with ID {order_id} not found")

        previous = order.status
        order.change_status(target)

        saved = await self._order_repo.save(order)
        await publish_pending_events(self._publisher, order)
        await self._notifier.send_order_status_update(
            str(saved.user.email), saved.id, str(saved.status)
        )

        logger.info(
            "Order status updated",
            order_id=saved.id,
            old_status=str(previous),
            new_status=str(saved.status),
        )
        return order_to_dto(saved)
