from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from costume_rental.core.database import get_db
from costume_rental.core.security import get_password_hash
from costume_rental.main import app
from costume_rental.models import (
    AdminUser,
    Base,
    Category,
    CategoryType,
    Item,
    ItemStatus,
    ItemType,
)

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct-horse"


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/test.db")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as http_client:
        yield http_client
    app.dependency_overrides = {}


@pytest.fixture
async def admin_user(db):
    admin = AdminUser(
        email=ADMIN_EMAIL,
        hashed_password=get_password_hash(ADMIN_PASSWORD),
        first_name="Ada",
        last_name="Admin",
    )
    db.add(admin)
    await db.commit()
    return admin


@pytest.fixture
async def admin_client(client, admin_user):
    response = await client.post(
        "/api/admin/auth/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return client


@pytest.fixture
async def costume_category(db):
    category = Category(
        name="Festival Costumes",
        description="Costumes for various festivals",
        type=CategoryType.COSTUME,
    )
    db.add(category)
    await db.commit()
    return category


@pytest.fixture
def make_item(db):
    async def _make_item(
        name="Krishna Costume",
        item_type=ItemType.COSTUME,
        price="500.00",
        status=ItemStatus.AVAILABLE,
        **fields,
    ):
        item = Item(
            name=name,
            item_type=item_type,
            price_per_day=Decimal(price),
            status=status,
            **fields,
        )
        db.add(item)
        await db.commit()
        return item

    return _make_item
