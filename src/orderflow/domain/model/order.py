"""Order aggregate and its line items.

The Order is an aggregate root that owns its line items and its status.
All business invariants are enforced here, on construction and on every
mutation.  User and Product are held by reference only.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from orderflow.domain.events import DomainEvent, OrderCreated, OrderStatusChanged
from orderflow.domain.exceptions import (
    InvalidOrderError,
    InvalidQuantityError,
    InvalidTransitionError,
    ItemNotFoundError,
    StatusParseError,
    ValidationError,
)
from orderflow.domain.model.order_status import CANCELLABLE, OrderStatus, OrderStatusVO
from orderflow.domain.model.product import Product
from orderflow.domain.model.user import User
from orderflow.domain.model.value_objects import Money


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class OrderItem:
    """A priced line of an order.

    Immutable: changing the quantity means building a replacement item
    with ``with_quantity()``.
    """

    id: str
    product: Product
    quantity: int
    unit_price: Money

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationError("Order item ID is required")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise InvalidQuantityError(
                f"Quantity must be an integer, got {type(self.quantity).__name__}"
            )
        if self.quantity <= 0:
            raise InvalidQuantityError("Quantity must be positive")
        if self.unit_price.amount <= 0:
            raise ValidationError("Unit price must be greater than zero")
        if self.unit_price.currency != self.product.price.currency:
            raise InvalidOrderError(
                f"Unit price currency {self.unit_price.currency} does not match "
                f"product price currency {self.product.price.currency}"
            )

    @staticmethod
    def create(product: Product, quantity: int, unit_price: Money) -> OrderItem:
        return OrderItem(
            id=str(uuid.uuid4()),
            product=product,
            quantity=quantity,
            unit_price=unit_price,
        )

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity

    def with_quantity(self, quantity: int) -> OrderItem:
        return OrderItem(
            id=self.id,
            product=self.product,
            quantity=quantity,
            unit_price=self.unit_price,
        )


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MIN_LINE_ITEMS = 1
MAX_LINE_ITEMS = 50
MAX_ORDER_TOTAL = Decimal("1000000")


@dataclass(eq=False)
class Order:
    """Aggregate root for purchase orders.

    Use the ``Order.create()`` factory for new orders; it assigns the
    identifier and records ``OrderCreated``.  The constructor is what the
    repository uses to reconstitute persisted orders; it validates the
    same invariants but raises no events.
    """

    id: str
    user: User
    items: list[OrderItem]
    status: OrderStatusVO = field(default_factory=OrderStatusVO)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
    _events: list[DomainEvent] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.id:
            raise InvalidOrderError("Order ID is required")
        if not isinstance(self.user, User):
            raise InvalidOrderError("Order user is required")
        if isinstance(self.status, OrderStatus):
            self.status = OrderStatusVO(self.status)
        elif isinstance(self.status, str):
            try:
                self.status = OrderStatusVO.from_string(self.status)
            except StatusParseError as exc:
                raise InvalidOrderError(str(exc)) from exc
        if not isinstance(self.status, OrderStatusVO):
            raise InvalidOrderError(f"Invalid order status: {self.status!r}")
        self.items = list(self.items or [])
        self._validate_items(self.items)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(user: User, items: list[OrderItem]) -> Order:
        """Create a new PENDING order, enforcing all invariants."""
        order = Order(id=str(uuid.uuid4()), user=user, items=items)
        order._record(
            OrderCreated(
                order_id=order.id,
                user_id=user.id,
                total_amount=order.total,
            )
        )
        return order

    # --- State transitions ----------------------------------------------------

    def can_transition_to(self, new_status: OrderStatus) -> bool:
        return self.status.can_transition_to(new_status)

    def change_status(self, new_status: OrderStatus) -> None:
        """Move to ``new_status`` if the transition graph allows it.

        All-or-nothing: on failure status, ``updated_at`` and the event
        buffer are untouched.
        """
        if not isinstance(new_status, OrderStatus):
            raise InvalidTransitionError(self.status.value, new_status)
        if not self.status.can_transition_to(new_status):
            raise InvalidTransitionError(self.status.value, new_status)

        old_status = self.status.value
        now = _utcnow()
        event = OrderStatusChanged(
            order_id=self.id,
            old_status=old_status,
            new_status=new_status,
            user_id=self.user.id,
            occurred_at=now,
        )
        self.status = OrderStatusVO(new_status)
        self.updated_at = now
        self._record(event)

    def can_be_cancelled(self) -> bool:
        return self.status.value in CANCELLABLE

    def cancel(self) -> None:
        """Transition PENDING|CONFIRMED -> CANCELLED."""
        if not self.can_be_cancelled():
            raise InvalidTransitionError(
                self.status.value,
                OrderStatus.CANCELLED,
                f"Order cannot be cancelled in {self.status} status",
            )
        self.change_status(OrderStatus.CANCELLED)

    # --- Item management ------------------------------------------------------

    def add_item(self, item: OrderItem) -> None:
        """Append a line, or merge its quantity into the line for the same product."""
        items = list(self.items)
        index = self._index_of(item.product.id)
        if index is None:
            items.append(item)
        else:
            existing = items[index]
            items[index] = existing.with_quantity(existing.quantity + item.quantity)
        self._replace_items(items)

    def remove_item(self, product_id: str) -> None:
        index = self._require_index(product_id)
        items = list(self.items)
        del items[index]
        self._replace_items(items)

    def update_item_quantity(self, product_id: str, quantity: int) -> None:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidQuantityError("Quantity must be positive")
        index = self._require_index(product_id)
        items = list(self.items)
        items[index] = items[index].with_quantity(quantity)
        self._replace_items(items)

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        """Sum of line subtotals, recomputed on every access."""
        if not self.items:
            return Money.zero()
        result = Money.zero(self.items[0].unit_price.currency)
        for item in self.items:
            result = result + item.subtotal
        return result

    @property
    def currency(self) -> str:
        return self.total.currency

    # --- Domain events --------------------------------------------------------

    @property
    def domain_events(self) -> list[DomainEvent]:
        return list(self._events)

    def clear_domain_events(self) -> None:
        self._events.clear()

    # --- Internal helpers -----------------------------------------------------

    def _record(self, event: DomainEvent) -> None:
        self._events.append(event)

    def _replace_items(self, items: list[OrderItem]) -> None:
        self._validate_items(items)
        self.items = items
        self.updated_at = _utcnow()

    def _index_of(self, product_id: str) -> int | None:
        for index, item in enumerate(self.items):
            if item.product.id == product_id:
                return index
        return None

    def _require_index(self, product_id: str) -> int:
        index = self._index_of(product_id)
        if index is None:
            raise ItemNotFoundError(
                f"Item with product ID {product_id} not found in order {self.id}"
            )
        return index

    @staticmethod
    def _validate_items(items: list[OrderItem]) -> None:
        if len(items) < MIN_LINE_ITEMS:
            raise InvalidOrderError("Order must have at least one item")
        if len(items) > MAX_LINE_ITEMS:
            raise InvalidOrderError(f"Order cannot have more than {MAX_LINE_ITEMS} items")

        currencies = {item.unit_price.currency for item in items}
        if len(currencies) > 1:
            raise InvalidOrderError("All order items must have the same currency")

        total = Decimal("0")
        for item in items:
            total += item.unit_price.amount * item.quantity
        if total > MAX_ORDER_TOTAL:
            raise InvalidOrderError("Order total amount cannot exceed 1,000,000")
