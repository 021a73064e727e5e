"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
stock goes up and down, products are added and removed from the catalog.
Orders only hold a read-only reference to them.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from orderflow.domain.exceptions import InsufficientStockError, ValidationError
from orderflow.domain.model.value_objects import Money

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 255
MAX_DESCRIPTION_LENGTH = 1000
MIN_SKU_LENGTH = 3
MAX_SKU_LENGTH = 50


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Product:
    """A product in the catalog.

    Stock is the only mutable field; every stock change refreshes
    ``updated_at``.
    """

    id: str
    name: str
    description: str
    price: Money
    sku: str
    stock: int
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationError("Product ID is required")

        name = (self.name or "").strip()
        if len(name) < MIN_NAME_LENGTH:
            raise ValidationError(
                f"Product name must be at least {MIN_NAME_LENGTH} characters long"
            )
        if len(name) > MAX_NAME_LENGTH:
            raise ValidationError(
                f"Product name must not exceed {MAX_NAME_LENGTH} characters"
            )

        description = (self.description or "").strip()
        if not description:
            raise ValidationError("Product description is required")
        if len(description) > MAX_DESCRIPTION_LENGTH:
            raise ValidationError(
                f"Product description must not exceed {MAX_DESCRIPTION_LENGTH} characters"
            )

        if not isinstance(self.price, Money):
            raise ValidationError("Product price is required")

        sku = (self.sku or "").strip()
        if len(sku) < MIN_SKU_LENGTH:
            raise ValidationError(
                f"Product SKU must be at least {MIN_SKU_LENGTH} characters long"
            )
        if len(sku) > MAX_SKU_LENGTH:
            raise ValidationError(
                f"Product SKU must not exceed {MAX_SKU_LENGTH} characters"
            )

        if isinstance(self.stock, bool) or not isinstance(self.stock, int):
            raise ValidationError("Product stock must be an integer")
        if self.stock < 0:
            raise ValidationError("Product stock cannot be negative")

    @staticmethod
    def create(
        name: str,
        description: str,
        price: Money,
        sku: str,
        stock: int,
    ) -> Product:
        return Product(
            id=str(uuid.uuid4()),
            name=name.strip(),
            description=description.strip(),
            price=price,
            sku=sku.strip(),
            stock=stock,
        )

    # --- Stock ----------------------------------------------------------------

    def is_available(self) -> bool:
        return self.stock > 0

    def has_stock(self, quantity: int) -> bool:
        return self.stock >= quantity

    def reduce_stock(self, quantity: int) -> None:
        if quantity <= 0:
            raise ValidationError("Quantity must be positive")
        if self.stock < quantity:
            raise InsufficientStockError(self.name, self.stock, quantity)
        self.stock -= quantity
        self.updated_at = _utcnow()

    def increase_stock(self, quantity: int) -> None:
        if quantity <= 0:
            raise ValidationError("Quantity must be positive")
        self.stock += quantity
        self.updated_at = _utcnow()
