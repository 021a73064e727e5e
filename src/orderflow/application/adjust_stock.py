"""Application service: Adjust Stock use case.

Positive deltas restock a product, negative deltas take units out.
Existing orders are unaffected; they keep their own price snapshot and
never reserved stock.
"""

from __future__ import annotations

from orderflow.application.dto import ProductDTO, product_to_dto
from orderflow.domain.exceptions import ProductNotFoundError, ValidationError
from orderflow.domain.repository.product_repository import ProductRepository


class AdjustStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def handle(self, product_id: str, delta: int) -> ProductDTO:
        if delta == 0:
            raise ValidationError("Stock adjustment cannot be zero")

        product = await self._product_repo.find_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(f"Product with ID {product_id} not found")

        if delta > 0:
            product.increase_stock(delta)
        else:
            product.reduce_stock(-delta)

        product = await self._product_repo.save(product)
        return product_to_dto(product)
