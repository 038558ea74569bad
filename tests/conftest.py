import os
import uuid

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import logging
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from order_service.api.routes import get_database
from order_service.data.database import init_db
from order_service.data.models import Address, Item, Order, Product
from order_service.data.repository import RelationalDatabase
from order_service.main import app
from order_service.services.orders import OrderService, calculate_total


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'orders.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def database(engine) -> RelationalDatabase:
    return RelationalDatabase(async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession))


@pytest.fixture
def service(database) -> OrderService:
    return OrderService(database, logging.getLogger("tests.service"))


@pytest_asyncio.fixture
async def products(database):
    """Seed two products: WIDGET (10 in stock) and GADGET (1 in stock)."""
    async with database.session_factory() as session:
        async with session.begin():
            session.add_all([
                Product(id="WIDGET", name="Widget", quantity=10, price=2.5),
                Product(id="GADGET", name="Gadget", quantity=1, price=40.0),
            ])
    return {"WIDGET": 10, "GADGET": 1}


@pytest.fixture
def customer_id() -> uuid.UUID:
    return uuid.UUID("a1b2c3d4-e5f6-7890-1234-567890abcdef")


@pytest.fixture
def make_order(customer_id):
    def _make(items, customer=None, phone="+1-555-0100"):
        records = [Item(product_id=p, quantity=q, price=price) for p, q, price in items]
        return Order(
            customer_id=customer or customer_id,
            items=records,
            address=Address(
                address_line1="123 Main St",
                address_line2="Apt 4",
                city="Springfield",
                state="IL",
                zip="62701",
                country="US",
            ),
            phone=phone,
            total_price=calculate_total(records),
        )
    return _make


@pytest.fixture
def stock(database):
    async def _stock(product_id: str) -> int:
        rows = await database.query_by_condition(Product, {"id": product_id})
        return rows[0].quantity
    return _stock


@pytest_asyncio.fixture
async def client(database):
    app.dependency_overrides[get_database] = lambda: database
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
