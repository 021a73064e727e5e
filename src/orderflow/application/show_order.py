"""Application service: Show Order use case (query)."""

from __future__ import annotations

from orderflow.application.dto import OrderDTO, order_to_dto
from orderflow.domain.exceptions import OrderNotFoundError
from orderflow.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    async def handle(self, order_id: str) -> OrderDTO:
        order = await self._order_repo.find_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(f"Order with ID {order_id} not found")
        return order_to_dto(order)
