"""JSON-file-backed implementation of OrderRepository.

Orders are stored with ``user_id`` / ``product_id`` references and
re-materialised through the user and product repositories, so every
order handed back carries full User and Product objects.  The computed
total is stored alongside for reporting; it is never read back, the
aggregate recomputes it from the items.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from orderflow.domain.exceptions import (
    OrderNotFoundError,
    ProductNotFoundError,
    UserNotFoundError,
)
from orderflow.domain.model.order import Order, OrderItem
from orderflow.domain.model.order_status import OrderStatus, OrderStatusVO
from orderflow.domain.model.value_objects import Money
from orderflow.domain.repository.order_repository import OrderRepository
from orderflow.domain.repository.product_repository import ProductRepository
from orderflow.domain.repository.user_repository import UserRepository
from orderflow.infrastructure.persistence.json_store import JsonFileStore


class JsonOrderRepository(OrderRepository):

    def __init__(
        self,
        file_path: Path,
        user_repo: UserRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._store = JsonFileStore(file_path)
        self._user_repo = user_repo
        self._product_repo = product_repo

    # --- OrderRepository interface --------------------------------------------

    async def save(self, order: Order) -> Order:
        async with self._store.lock:
            records = await self._store.load()

            # Upsert: replace if exists, otherwise append
            replaced = False
            for i, raw in enumerate(records):
                if raw["id"] == order.id:
                    records[i] = self._to_raw(order)
                    replaced = True
                    break
            if not replaced:
                records.append(self._to_raw(order))

            await self._store.persist(records)

        reloaded = await self.find_by_id(order.id)
        if reloaded is None:
            raise OrderNotFoundError(f"Failed to reload saved order {order.id}")
        return reloaded

    async def find_by_id(self, order_id: str) -> Order | None:
        for raw in await self._store.load():
            if raw["id"] == order_id:
                return await self._to_domain(raw)
        return None

    async def find_by_user_id(self, user_id: str) -> list[Order]:
        return await self._find(lambda raw: raw["user_id"] == user_id)

    async def find_by_status(self, status: OrderStatus) -> list[Order]:
        return await self._find(lambda raw: raw["status"] == status.value)

    async def find_ids_by_status(self, status: OrderStatus) -> list[str]:
        matching = [raw for raw in await self._store.load() if raw["status"] == status.value]
        matching.sort(key=lambda raw: raw["created_at"], reverse=True)
        return [raw["id"] for raw in matching]

    async def find_all(self) -> list[Order]:
        return await self._find(lambda raw: True)

    async def exists(self, order_id: str) -> bool:
        return any(raw["id"] == order_id for raw in await self._store.load())

    async def delete(self, order_id: str) -> None:
        async with self._store.lock:
            records = await self._store.load()
            remaining = [raw for raw in records if raw["id"] != order_id]
            if len(remaining) == len(records):
                raise OrderNotFoundError(f"Order with ID {order_id} not found")
            await self._store.persist(remaining)

    # --- Serialization --------------------------------------------------------

    async def _find(self, predicate) -> list[Order]:
        matching = [raw for raw in await self._store.load() if predicate(raw)]
        matching.sort(key=lambda raw: raw["created_at"], reverse=True)
        return [await self._to_domain(raw) for raw in matching]

    @staticmethod
    def _to_raw(order: Order) -> dict:
        total = order.total
        return {
            "id": order.id,
            "user_id": order.user.id,
            "status": order.status.value.value,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            "total_amount": str(total.amount),
            "currency": total.currency,
            "items": [
                {
                    "id": item.id,
                    "product_id": item.product.id,
                    "quantity": item.quantity,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                }
                for item in order.items
            ],
        }

    async def _to_domain(self, raw: dict) -> Order:
        user = await self._user_repo.find_by_id(raw["user_id"])
        if user is None:
            raise UserNotFoundError(
                f"User {raw['user_id']} referenced by order {raw['id']} not found"
            )

        items = []
        for i in raw["items"]:
            product = await self._product_repo.find_by_id(i["product_id"])
            if product is None:
                raise ProductNotFoundError(
                    f"Product {i['product_id']} referenced by order {raw['id']} not found"
                )
            items.append(
                OrderItem(
                    id=i["id"],
                    product=product,
                    quantity=i["quantity"],
                    unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "USD")),
                )
            )

        return Order(
            id=raw["id"],
            user=user,
            items=items,
            status=OrderStatusVO(OrderStatus(raw["status"])),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
