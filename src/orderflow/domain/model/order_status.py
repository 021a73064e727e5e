"""Order lifecycle states and the legal transition graph."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from orderflow.domain.exceptions import StatusParseError


class OrderStatus(Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PROCESSING = "PROCESSING"
    PAID = "PAID"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"

    def __str__(self) -> str:
        return self.value


TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.PAID, OrderStatus.CANCELLED}),
    OrderStatus.PAID: frozenset({OrderStatus.SHIPPED, OrderStatus.REFUNDED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.REFUNDED}),
    OrderStatus.DELIVERED: frozenset({OrderStatus.REFUNDED}),
    OrderStatus.CANCELLED: frozenset(),
    OrderStatus.REFUNDED: frozenset(),
}

CANCELLABLE = frozenset({OrderStatus.PENDING, OrderStatus.CONFIRMED})


def parse_status(raw: str | OrderStatus) -> OrderStatus:
    """Turn user input into an OrderStatus, case-insensitively.

    Raises StatusParseError for anything that is not a known status name.
    """
    if isinstance(raw, OrderStatus):
        return raw
    if not isinstance(raw, str):
        raise StatusParseError(f"Invalid order status: {raw!r}")
    try:
        return OrderStatus(raw.strip().upper())
    except ValueError:
        valid = ", ".join(s.value for s in OrderStatus)
        raise StatusParseError(
            f"Invalid order status: {raw!r}. Valid statuses are: {valid}"
        ) from None


@dataclass(frozen=True)
class OrderStatusVO:
    """Wraps one OrderStatus; equality and string form are value based."""

    value: OrderStatus = OrderStatus.PENDING

    def __post_init__(self) -> None:
        if not isinstance(self.value, OrderStatus):
            raise StatusParseError(f"Invalid order status: {self.value!r}")

    @classmethod
    def from_string(cls, raw: str) -> OrderStatusVO:
        return cls(parse_status(raw))

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in TRANSITIONS[self.value]

    @property
    def is_terminal(self) -> bool:
        return not TRANSITIONS[self.value]

    def __str__(self) -> str:
        return self.value.value
