"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from orderflow.domain.exceptions import ProductNotFoundError
from orderflow.domain.model.product import Product
from orderflow.domain.model.value_objects import Money
from orderflow.domain.repository.product_repository import ProductRepository
from orderflow.infrastructure.persistence.json_store import JsonFileStore


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonFileStore(file_path)

    # --- ProductRepository interface ------------------------------------------

    async def save(self, product: Product) -> Product:
        async with self._store.lock:
            records = await self._store.load()
            records = [raw for raw in records if raw["id"] != product.id]
            records.append(self._to_raw(product))
            await self._store.persist(records)
        return product

    async def find_by_id(self, product_id: str) -> Product | None:
        for raw in await self._store.load():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    async def find_by_sku(self, sku: str) -> Product | None:
        for raw in await self._store.load():
            if raw["sku"] == sku:
                return self._to_domain(raw)
        return None

    async def find_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in await self._store.load()]

    async def find_by_availability(self, available: bool) -> list[Product]:
        return [p for p in await self.find_all() if p.is_available() == available]

    async def exists(self, product_id: str) -> bool:
        return await self.find_by_id(product_id) is not None

    async def delete(self, product_id: str) -> None:
        async with self._store.lock:
            records = await self._store.load()
            remaining = [raw for raw in records if raw["id"] != product_id]
            if len(remaining) == len(records):
                raise ProductNotFoundError(f"Product with ID {product_id} not found")
            await self._store.persist(remaining)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "sku": product.sku,
            "stock": product.stock,
            "created_at": product.created_at.isoformat(),
            "updated_at": product.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            description=raw["description"],
            price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
            sku=raw["sku"],
            stock=raw["stock"],
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
