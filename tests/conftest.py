import uuid
from datetime import datetime, timezone
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from delivery_admin.main import app
from delivery_admin.core.database import Base, get_db
from delivery_admin.api.orders import get_clock
from delivery_admin.models.order import Customer, Order, OrderItem, OrderStatus
from delivery_admin.repositories.order import OrderRepository


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

FIXED_NOW = datetime(2024, 5, 10, 15, 30, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def db_session():
    # one shared connection keeps the in-memory database alive for the whole test
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False
    )
    test_async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with test_async_session_maker() as session:
        yield session

    await test_engine.dispose()


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest_asyncio.fixture
async def client(db_session, fixed_now):
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: (lambda: fixed_now)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def make_order(db_session):
    repository = OrderRepository(db_session)

    async def _make_order(
        status: OrderStatus | str = OrderStatus.PENDING,
        total: str = "10.00",
        created_at: datetime = FIXED_NOW,
        customer_name: str | None = "Maria Silva",
        items: list[tuple[str, int, str]] | None = None,
    ) -> Order:
        order_id = str(uuid.uuid4())
        customer = None
        if customer_name is not None:
            customer = Customer(
                id=str(uuid.uuid4()),
                name=customer_name,
                phone="+55 11 99999-0000",
                address="Rua das Flores, 123"
            )

        if items is None:
            items = [("Pizza Margherita", 1, total)]

        order_items = [
            OrderItem(
                position=position,
                product_name=name,
                quantity=quantity,
                unit_price=Decimal(price),
                total_price=Decimal(price) * quantity
            )
            for position, (name, quantity, price) in enumerate(items)
        ]

        order = Order(
            id=order_id,
            customer=customer,
            status=status.value if isinstance(status, OrderStatus) else status,
            subtotal=Decimal(total),
            total=Decimal(total),
            payment_method="pix",
            delivery_address="Rua das Flores, 123",
            created_at=created_at,
            updated_at=created_at,
            items=order_items
        )
        return await repository.create(order)

    return _make_order
