"""Application service: Add Product use case."""

from __future__ import annotations

from decimal import Decimal

from orderflow.application.dto import ProductDTO, product_to_dto
from orderflow.domain.exceptions import ConflictError, ValidationError
from orderflow.domain.model.product import Product
from orderflow.domain.model.value_objects import Money
from orderflow.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def handle(
        self,
        name: str,
        description: str,
        price: str | Decimal,
        currency: str,
        sku: str,
        stock: int,
    ) -> ProductDTO:
        """Add a new product to the catalog; SKUs are unique."""
        if not sku or not sku.strip():
            raise ValidationError("Product SKU is required")

        existing = await self._product_repo.find_by_sku(sku.strip())
        if existing is not None:
            raise ConflictError(f"Product with SKU {sku.strip()} already exists")

        product = Product.create(
            name=name,
            description=description,
            price=Money.of(price, currency),
            sku=sku,
            stock=stock,
        )
        product = await self._product_repo.save(product)
        return product_to_dto(product)
