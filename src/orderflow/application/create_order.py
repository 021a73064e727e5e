"""Application service: Create Order use case.

Orchestrates the flow between repositories, the Order aggregate, and the
post-persistence side effects.  Steps run strictly in sequence and a
failure in any lookup or validation step aborts before anything is
written.

Stock is checked but NOT reserved or decremented here; inventory is
committed by a later fulfilment step that this service does not model.
"""

from __future__ import annotations

import asyncio

import structlog

from orderflow.application.dto import (
    CreateOrderRequest,
    OrderDTO,
    OrderItemSpec,
    order_to_dto,
)
from orderflow.application.ports import EventPublisher, Notifier
from orderflow.application.publishing import publish_pending_events
from orderflow.domain.exceptions import (
    InsufficientStockError,
    InvalidQuantityError,
    ProductNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from orderflow.domain.model.order import Order, OrderItem
from orderflow.domain.model.user import User
from orderflow.domain.model.value_objects import Money
from orderflow.domain.repository.order_repository import OrderRepository
from orderflow.domain.repository.product_repository import ProductRepository
from orderflow.domain.repository.user_repository import UserRepository

logger = structlog.get_logger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        user_repo: UserRepository,
        product_repo: ProductRepository,
        publisher: EventPublisher,
        notifier: Notifier,
    ) -> None:
        self._order_repo = order_repo
        self._user_repo = user_repo
        self._product_repo = product_repo
        self._publisher = publisher
        self._notifier = notifier

    async def handle(self, request: CreateOrderRequest) -> OrderDTO:
        """Create a new purchase order.

        Steps:
        1. Resolve the user (fail if not found).
        2. Resolve and stock-check every product, build priced OrderItems.
           All lines must succeed or no order is created.
        3. Re-resolve the user and let the Order aggregate validate all
           business rules.
        4. Persist; continue with the order the repository returns.
        5. Publish the buffered events, then clear them.
        6. Send the confirmation notification.
        7. Return a DTO.
        """
        self._validate_request(request)

        await self._require_user(request.user_id)
        items = await self._build_items(request.items)

        user = await self._require_user(request.user_id)
        order = Order.create(user=user, items=items)

        saved = await self._order_repo.save(order)

        # Events live on the aggregate we mutated, not on the reloaded copy.
        await publish_pending_events(self._publisher, order)

        await self._notifier.send_order_confirmation(str(saved.user.email), saved.id)

        logger.info(
            "Order created",
            order_id=saved.id,
            user_id=saved.user.id,
            total=str(saved.total),
            item_count=len(saved.items),
        )
        return order_to_dto(saved)

    # --- Steps ----------------------------------------------------------------

    @staticmethod
    def _validate_request(request: CreateOrderRequest) -> None:
        if not request.user_id:
            raise ValidationError("User ID is required")
        if not request.items:
            raise ValidationError("Order must have at least one item")
        for spec in request.items:
            if isinstance(spec.quantity, bool) or not isinstance(spec.quantity, int):
                raise InvalidQuantityError(
                    f"Quantity for product {spec.product_id} must be an integer"
                )
            if spec.quantity <= 0:
                raise InvalidQuantityError(
                    f"Quantity for product {spec.product_id} must be positive"
                )

    async def _require_user(self, user_id: str) -> User:
        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(f"User with ID {user_id} not found")
        return user

    async def _build_items(self, specs: list[OrderItemSpec]) -> list[OrderItem]:
        # Lookups are independent; the first failure in request order wins.
        results = await asyncio.gather(
            *(self._build_item(spec) for spec in specs),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return list(results)

    async def _build_item(self, spec: OrderItemSpec) -> OrderItem:
        product = await self._product_repo.find_by_id(spec.product_id)
        if product is None:
            raise ProductNotFoundError(f"Product with ID {spec.product_id} not found")

        if not product.has_stock(spec.quantity):
            raise InsufficientStockError(product.name, product.stock, spec.quantity)

        unit_price = Money.of(spec.unit_price, spec.currency)
        return OrderItem.create(product, spec.quantity, unit_price)
