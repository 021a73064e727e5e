"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderflow.domain.model.order import Order
from orderflow.domain.model.order_status import OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    async def save(self, order: Order) -> Order:
        """Persist a new or updated order.

        Returns the stored order with its user and item products fully
        resolved.  Pending domain events are not part of the stored state.
        """

    @abstractmethod
    async def find_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    async def find_by_user_id(self, user_id: str) -> list[Order]:
        """Return the user's orders, newest first."""

    @abstractmethod
    async def find_by_status(self, status: OrderStatus) -> list[Order]:
        """Return orders currently in ``status``, newest first."""

    @abstractmethod
    async def find_ids_by_status(self, status: OrderStatus) -> list[str]:
        """Return the IDs of orders currently in ``status``, newest first.

        Reads only the stored records; nothing is resolved, so one order
        with a dangling reference cannot hide the others.
        """

    @abstractmethod
    async def find_all(self) -> list[Order]:
        """Return every order, newest first."""

    @abstractmethod
    async def exists(self, order_id: str) -> bool:
        """True if an order with this ID is stored."""

    @abstractmethod
    async def delete(self, order_id: str) -> None:
        """Remove an order; raises OrderNotFoundError if absent."""
