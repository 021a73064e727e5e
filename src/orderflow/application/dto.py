"""Data Transfer Objects: the plain containers handed to and returned by use cases.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Amounts are rendered
as two-decimal strings; the currency travels alongside.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from orderflow.domain.model.order import Order
from orderflow.domain.model.product import Product
from orderflow.domain.model.user import User

# --- Requests -----------------------------------------------------------------


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: one requested line (product, quantity, agreed unit price)."""

    product_id: str
    quantity: int
    unit_price: Decimal | str
    currency: str = "USD"


@dataclass(frozen=True)
class CreateOrderRequest:
    user_id: str
    items: list[OrderItemSpec] = field(default_factory=list)


# --- Responses ----------------------------------------------------------------


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the user."""

    product_id: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "15.00"
    subtotal: str
    currency: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    user_id: str
    customer_name: str
    customer_email: str
    status: str
    items: list[OrderLineItemDTO]
    total_amount: str
    currency: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class OrderListDTO:
    orders: list[OrderDTO]
    total: int
    limit: int
    offset: int


@dataclass(frozen=True)
class UserDTO:
    id: str
    name: str
    email: str
    created_at: datetime


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    description: str
    price: str
    currency: str
    sku: str
    stock: int
    created_at: datetime
    updated_at: datetime


# --- Mapping ------------------------------------------------------------------


def order_to_dto(order: Order) -> OrderDTO:
    total = order.total
    return OrderDTO(
        id=order.id,
        user_id=order.user.id,
        customer_name=order.user.name,
        customer_email=str(order.user.email),
        status=str(order.status),
        items=[
            OrderLineItemDTO(
                product_id=item.product.id,
                product_name=item.product.name,
                quantity=item.quantity,
                unit_price=item.unit_price.format_amount(),
                subtotal=item.subtotal.format_amount(),
                currency=item.unit_price.currency,
            )
            for item in order.items
        ],
        total_amount=total.format_amount(),
        currency=total.currency,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def user_to_dto(user: User) -> UserDTO:
    return UserDTO(
        id=user.id,
        name=user.name,
        email=str(user.email),
        created_at=user.created_at,
    )


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price.format_amount(),
        currency=product.price.currency,
        sku=product.sku,
        stock=product.stock,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )
