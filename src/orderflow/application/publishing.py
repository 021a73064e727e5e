"""Publish-then-clear protocol shared by the write use cases."""

from __future__ import annotations

from orderflow.application.ports import EventPublisher
from orderflow.domain.exceptions import EventPublishError
from orderflow.domain.model.order import Order


async def publish_pending_events(publisher: EventPublisher, order: Order) -> None:
    """Publish the order's buffered events, then clear them.

    Events stay buffered when publication fails, so the caller may retry.
    The order is already persisted at this point; failures are reported,
    not rolled back.
    """
    events = order.domain_events
    if not events:
        return
    try:
        await publisher.publish_many(events)
    except EventPublishError as exc:
        if exc.order_id is None:
            exc.order_id = order.id
        raise
    order.clear_domain_events()
