"""Default subscribers for order events."""

from __future__ import annotations

import structlog

from orderflow.domain.events import OrderCreated, OrderStatusChanged
from orderflow.domain.model.order_status import OrderStatus
from orderflow.infrastructure.messaging.event_publisher import InProcessEventPublisher

logger = structlog.get_logger(__name__)

_STATUS_MESSAGES = {
    OrderStatus.SHIPPED: "Order shipped",
    OrderStatus.DELIVERED: "Order delivered",
    OrderStatus.CANCELLED: "Order cancelled",
    OrderStatus.REFUNDED: "Order refunded",
}


async def on_order_created(event: OrderCreated) -> None:
    logger.info(
        "Order created event",
        order_id=event.order_id,
        user_id=event.user_id,
        total=str(event.total_amount),
    )


async def on_order_status_changed(event: OrderStatusChanged) -> None:
    logger.info(
        _STATUS_MESSAGES.get(event.new_status, "Order status changed"),
        order_id=event.order_id,
        old_status=str(event.old_status),
        new_status=str(event.new_status),
    )


def register_default_handlers(publisher: InProcessEventPublisher) -> None:
    publisher.subscribe(OrderCreated, on_order_created)
    publisher.subscribe(OrderStatusChanged, on_order_status_changed)
