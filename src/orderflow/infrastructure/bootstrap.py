"""Composition root: builds the concrete repositories, publisher, notifier and scheduler.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from datetime import timedelta

from orderflow.application.progress_orders import ProgressOrdersHandler
from orderflow.infrastructure.config import Settings
from orderflow.infrastructure.messaging.event_handlers import register_default_handlers
from orderflow.infrastructure.messaging.event_publisher import InProcessEventPublisher
from orderflow.infrastructure.messaging.notifier import LoggingNotifier
from orderflow.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from orderflow.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from orderflow.infrastructure.persistence.json_user_repository import (
    JsonUserRepository,
)
from orderflow.infrastructure.scheduler.order_progression_scheduler import (
    OrderProgressionScheduler,
)


def user_repository(settings: Settings) -> JsonUserRepository:
    return JsonUserRepository(settings.data_dir / "users.json")


def product_repository(settings: Settings) -> JsonProductRepository:
    return JsonProductRepository(settings.data_dir / "products.json")


def order_repository(
    settings: Settings,
    user_repo: JsonUserRepository | None = None,
    product_repo: JsonProductRepository | None = None,
) -> JsonOrderRepository:
    return JsonOrderRepository(
        settings.data_dir / "orders.json",
        user_repo=user_repo or user_repository(settings),
        product_repo=product_repo or product_repository(settings),
    )


def event_publisher() -> InProcessEventPublisher:
    publisher = InProcessEventPublisher()
    register_default_handlers(publisher)
    return publisher


def notifier(settings: Settings) -> LoggingNotifier:
    return LoggingNotifier(latency=settings.notification_latency_seconds)


def progression_scheduler(
    settings: Settings,
    order_repo: JsonOrderRepository | None = None,
) -> OrderProgressionScheduler:
    """Build the scheduler; pass ``order_repo`` to share its file locks with request handlers."""
    handler = ProgressOrdersHandler(
        order_repo or order_repository(settings),
        publisher=event_publisher(),
        pending_dwell=timedelta(seconds=settings.pending_min_dwell_seconds),
        confirmed_dwell=timedelta(seconds=settings.confirmed_min_dwell_seconds),
    )
    return OrderProgressionScheduler(
        handler,
        pending_interval=settings.pending_scan_interval_seconds,
        confirmed_interval=settings.confirmed_scan_interval_seconds,
        enabled=settings.scheduler_enabled,
    )
