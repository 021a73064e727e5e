"""Application service: Cancel Order use case.

Only PENDING and CONFIRMED orders can be cancelled.  No stock was
reserved at creation, so cancelling releases nothing; the customer is
sent a cancellation notice instead of a generic status update.
"""

from __future__ import annotations

import structlog

from orderflow.application.dto import OrderDTO, order_to_dto
from orderflow.application.ports import EventPublisher, Notifier
from orderflow.application.publishing import publish_pending_events
from orderflow.domain.exceptions import OrderNotFoundError
from orderflow.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class CancelOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        publisher: EventPublisher,
        notifier: Notifier,
    ) -> None:
        self._order_repo = order_repo
        self._publisher = publisher
        self._notifier = notifier

    async def handle(self, order_id: str) -> OrderDTO:
        order = await self._order_repo.find_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(f"Order with ID {order_id} not found")

        order.cancel()

        saved = await self._order_repo.save(order)
        await publish_pending_events(self._publisher, order)
        await self._notifier.send_order_cancellation(str(saved.user.email), saved.id)

        logger.info("Order cancelled", order_id=saved.id)
        return order_to_dto(saved)
