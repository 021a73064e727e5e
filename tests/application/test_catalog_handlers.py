"""Integration tests for the user and product catalog use cases."""

import pytest

from orderflow.application.add_product import AddProductHandler
from orderflow.application.adjust_stock import AdjustStockHandler
from orderflow.application.create_user import CreateUserHandler
from orderflow.domain.exceptions import (
    ConflictError,
    InsufficientStockError,
    ProductNotFoundError,
    ValidationError,
)
from tests.fakes import FakeProductRepository, FakeUserRepository, make_product

pytestmark = pytest.mark.asyncio


class TestCreateUser:

    async def test_creates_user(self):
        repo = FakeUserRepository()
        dto = await CreateUserHandler(repo).handle("Alice Smith", " alice@example.com ")
        assert dto.email == "alice@example.com"
        assert await repo.exists(dto.id)

    async def test_duplicate_email_rejected(self):
        repo = FakeUserRepository()
        handler = CreateUserHandler(repo)
        await handler.handle("Alice Smith", "alice@example.com")
        with pytest.raises(ConflictError, match="already exists"):
            await handler.handle("Alice Other", "ALICE@example.com")

    async def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError):
            await CreateUserHandler(FakeUserRepository()).handle("Alice", "not-an-email")


class TestAddProduct:

    async def test_adds_product(self):
        repo = FakeProductRepository()
        dto = await AddProductHandler(repo).handle(
            name="Widget",
            description="A widget",
            price="10",
            currency="USD",
            sku="WID-001",
            stock=3,
        )
        assert dto.price == "10.00"
        assert dto.stock == 3
        assert await repo.find_by_sku("WID-001") is not None

    async def test_duplicate_sku_rejected(self):
        repo = FakeProductRepository([make_product(sku="WID-001")])
        with pytest.raises(ConflictError, match="WID-001"):
            await AddProductHandler(repo).handle("Widget", "A widget", "10", "USD", "WID-001", 3)

    async def test_blank_sku_rejected(self):
        with pytest.raises(ValidationError, match="SKU is required"):
            await AddProductHandler(FakeProductRepository()).handle(
                "Widget", "A widget", "10", "USD", "  ", 3
            )

    async def test_bad_price_rejected(self):
        with pytest.raises(ValidationError):
            await AddProductHandler(FakeProductRepository()).handle(
                "Widget", "A widget", "-1", "USD", "WID-001", 3
            )


class TestAdjustStock:

    async def test_restock(self):
        product = make_product(stock=2)
        dto = await AdjustStockHandler(FakeProductRepository([product])).handle(product.id, 5)
        assert dto.stock == 7

    async def test_take_out(self):
        product = make_product(stock=2)
        dto = await AdjustStockHandler(FakeProductRepository([product])).handle(product.id, -2)
        assert dto.stock == 0

    async def test_take_out_too_many(self):
        product = make_product(stock=2)
        with pytest.raises(InsufficientStockError):
            await AdjustStockHandler(FakeProductRepository([product])).handle(product.id, -3)
        assert product.stock == 2

    async def test_zero_delta_rejected(self):
        with pytest.raises(ValidationError, match="cannot be zero"):
            await AdjustStockHandler(FakeProductRepository()).handle("any", 0)

    async def test_unknown_product(self):
        with pytest.raises(ProductNotFoundError):
            await AdjustStockHandler(FakeProductRepository()).handle("nope", 1)
