"""Integration tests for automatic order progression."""

from datetime import datetime, timedelta, timezone

import pytest

from orderflow.application.progress_orders import ProgressOrdersHandler
from orderflow.domain.model.order_status import OrderStatus
from orderflow.infrastructure.persistence.json_order_repository import JsonOrderRepository
from orderflow.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from orderflow.infrastructure.persistence.json_user_repository import JsonUserRepository
from tests.fakes import (
    FakeOrderRepository,
    RecordingEventPublisher,
    make_order,
    make_product,
    make_user,
)

pytestmark = pytest.mark.asyncio

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def _pending(age_seconds):
    order = make_order()
    order.created_at = NOW - timedelta(seconds=age_seconds)
    order.updated_at = order.created_at
    order.clear_domain_events()
    return order


def _confirmed(idle_seconds):
    order = _pending(3600)
    order.change_status(OrderStatus.CONFIRMED)
    order.updated_at = NOW - timedelta(seconds=idle_seconds)
    order.clear_domain_events()
    return order


class TestConfirmPending:

    async def test_confirms_only_orders_past_dwell(self):
        old, fresh = _pending(6), _pending(2)
        publisher = RecordingEventPublisher()
        handler = ProgressOrdersHandler(FakeOrderRepository([old, fresh]), publisher)

        assert await handler.confirm_pending(now=NOW) == 1
        assert old.status.value == OrderStatus.CONFIRMED
        assert fresh.status.value == OrderStatus.PENDING
        [event] = publisher.published
        assert event.order_id == old.id
        assert old.domain_events == []

    async def test_dwell_boundary_is_inclusive(self):
        order = _pending(5)
        handler = ProgressOrdersHandler(FakeOrderRepository([order]))
        assert await handler.confirm_pending(now=NOW) == 1

    async def test_nothing_to_do(self):
        handler = ProgressOrdersHandler(FakeOrderRepository())
        assert await handler.confirm_pending(now=NOW) == 0

    async def test_without_publisher_events_are_dropped(self):
        order = _pending(60)
        handler = ProgressOrdersHandler(FakeOrderRepository([order]))
        await handler.confirm_pending(now=NOW)
        assert order.domain_events == []

    async def test_one_failing_save_does_not_stop_the_scan(self):
        first, second = _pending(60), _pending(30)
        repo = FakeOrderRepository([first, second])
        repo.fail_on_save.add(first.id)
        handler = ProgressOrdersHandler(repo, RecordingEventPublisher())

        assert await handler.confirm_pending(now=NOW) == 1
        assert repo.saved == [second.id]

    async def test_publish_failure_is_logged_not_raised(self):
        order = _pending(60)
        handler = ProgressOrdersHandler(
            FakeOrderRepository([order]), RecordingEventPublisher(fail=True)
        )
        assert await handler.confirm_pending(now=NOW) == 1
        assert len(order.domain_events) == 1


class TestStartProcessingConfirmed:

    async def test_uses_time_since_last_update(self):
        idle, busy = _confirmed(11), _confirmed(3)
        handler = ProgressOrdersHandler(FakeOrderRepository([idle, busy]))

        assert await handler.start_processing_confirmed(now=NOW) == 1
        assert idle.status.value == OrderStatus.PROCESSING
        assert busy.status.value == OrderStatus.CONFIRMED

    async def test_custom_dwell(self):
        order = _confirmed(3)
        handler = ProgressOrdersHandler(
            FakeOrderRepository([order]), confirmed_dwell=timedelta(seconds=1)
        )
        assert await handler.start_processing_confirmed(now=NOW) == 1

    async def test_pending_orders_are_ignored(self):
        order = _pending(3600)
        handler = ProgressOrdersHandler(FakeOrderRepository([order]))
        assert await handler.start_processing_confirmed(now=NOW) == 0


class TestUnloadableOrders:

    async def _stored_pending(self, tmp_path, count):
        users = JsonUserRepository(tmp_path / "users.json")
        products = JsonProductRepository(tmp_path / "products.json")
        orders = JsonOrderRepository(tmp_path / "orders.json", users, products)
        user = make_user()
        await users.save(user)
        stored = []
        for i in range(count):
            product = make_product(name=f"Item{i}")
            await products.save(product)
            order = make_order(user=user, product=product)
            order.created_at = NOW - timedelta(minutes=10 + i)
            await orders.save(order)
            stored.append((order.id, product.id))
        return orders, products, stored

    async def test_order_with_deleted_product_does_not_stop_the_scan(self, tmp_path):
        orders, products, [(broken_id, broken_product), (healthy_id, _)] = (
            await self._stored_pending(tmp_path, 2)
        )
        await products.delete(broken_product)

        handler = ProgressOrdersHandler(orders)
        assert await handler.confirm_pending(now=NOW) == 1

        healthy = await orders.find_by_id(healthy_id)
        assert healthy.status.value == OrderStatus.CONFIRMED
        assert await orders.find_ids_by_status(OrderStatus.PENDING) == [broken_id]

    async def test_ids_by_status_are_newest_first(self, tmp_path):
        orders, _, stored = await self._stored_pending(tmp_path, 3)
        assert await orders.find_ids_by_status(OrderStatus.PENDING) == [oid for oid, _ in stored]
