"""Domain events raised by the Order aggregate.

Events are immutable facts named in the past tense.  The set is closed:
publishers and subscribers dispatch on the concrete class.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Union

from orderflow.domain.model.order_status import OrderStatus
from orderflow.domain.model.value_objects import Money


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_event_id() -> str:
    return str(uuid.uuid4())


class DomainEvent:
    """Base class for all domain events."""

    @property
    def event_type(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class OrderCreated(DomainEvent):
    order_id: str
    user_id: str
    total_amount: Money
    occurred_at: datetime = field(default_factory=_utcnow)
    event_id: str = field(default_factory=_new_event_id)

    @property
    def aggregate_id(self) -> str:
        return self.order_id


@dataclass(frozen=True)
class OrderStatusChanged(DomainEvent):
    order_id: str
    old_status: OrderStatus
    new_status: OrderStatus
    user_id: str | None = None
    occurred_at: datetime = field(default_factory=_utcnow)
    event_id: str = field(default_factory=_new_event_id)

    @property
    def aggregate_id(self) -> str:
        return self.order_id


OrderEvent = Union[OrderCreated, OrderStatusChanged]
