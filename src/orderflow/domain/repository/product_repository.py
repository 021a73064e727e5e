"""Abstract repository for the Product aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderflow.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    async def save(self, product: Product) -> Product:
        """Persist a new or updated product and return the stored version."""

    @abstractmethod
    async def find_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    async def find_by_sku(self, sku: str) -> Product | None:
        """Return the product with this SKU, or None."""

    @abstractmethod
    async def find_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    async def find_by_availability(self, available: bool) -> list[Product]:
        """Return products that are in stock (True) or sold out (False)."""

    @abstractmethod
    async def exists(self, product_id: str) -> bool:
        """True if a product with this ID is stored."""

    @abstractmethod
    async def delete(self, product_id: str) -> None:
        """Remove a product; raises ProductNotFoundError if absent."""
