"""Application service: List Orders use case (query)."""

from __future__ import annotations

from orderflow.application.dto import OrderListDTO, order_to_dto
from orderflow.domain.exceptions import ValidationError
from orderflow.domain.model.order_status import OrderStatus, parse_status
from orderflow.domain.repository.order_repository import OrderRepository

DEFAULT_LIMIT = 10


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    async def handle(
        self,
        user_id: str | None = None,
        status: str | OrderStatus | None = None,
        limit: int = DEFAULT_LIMIT,
        offset: int = 0,
    ) -> OrderListDTO:
        """List orders, newest first.

        ``user_id`` takes precedence over ``status``; with neither, every
        order is listed.
        """
        if limit < 1:
            raise ValidationError("Limit must be at least 1")
        if offset < 0:
            raise ValidationError("Offset cannot be negative")

        if user_id:
            orders = await self._order_repo.find_by_user_id(user_id)
        elif status is not None:
            orders = await self._order_repo.find_by_status(parse_status(status))
        else:
            orders = await self._order_repo.find_all()

        page = orders[offset:offset + limit]
        return OrderListDTO(
            orders=[order_to_dto(order) for order in page],
            total=len(orders),
            limit=limit,
            offset=offset,
        )
