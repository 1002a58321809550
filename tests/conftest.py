"""
Pytest configuration and fixtures for tests.

Provides a throwaway SQLite database per test, a small fixed catalog, cart
services wired to either repository backend, and an HTTP client bound to the
application with its database dependency overridden.
"""
from decimal import Decimal
from typing import Optional
from uuid import UUID

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app import app
from app.core.config import Config
from app.core.dependencies import get_db
from app.db.database import init_db
from app.models import Category, Product
from app.repositories import (
    InMemoryCartItemRepository,
    InMemoryCartRepository,
    InMemoryProductRepository,
    InMemoryStore,
    SqlCartItemRepository,
    SqlCartRepository,
    SqlProductRepository,
)
from app.services import CartLockRegistry, CartService


GADGETS_ID = UUID("10000000-0000-0000-0000-000000000001")
BOOKS_ID = UUID("10000000-0000-0000-0000-000000000002")

# stock 5, price 10.00
LAMP_ID = UUID("20000000-0000-0000-0000-000000000001")
# price 10, plenty of stock
MUG_ID = UUID("20000000-0000-0000-0000-000000000002")
# price 20, plenty of stock
NOVEL_ID = UUID("20000000-0000-0000-0000-000000000003")
# out of stock
POSTER_ID = UUID("20000000-0000-0000-0000-000000000004")

MISSING_ID = UUID("99999999-9999-9999-9999-999999999999")


def build_catalog():
    """Fresh, unattached catalog entities; each backend gets its own copies."""
    categories = [
        Category(id=GADGETS_ID, name="Gadgets", description="Small devices"),
        Category(id=BOOKS_ID, name="Books", description=None),
    ]
    products = [
        Product(id=LAMP_ID, name="Desk Lamp", description="LED desk lamp", price=Decimal("10.00"), stock=5, category_id=GADGETS_ID),
        Product(id=MUG_ID, name="Mug", description=None, price=Decimal("10.00"), stock=100, category_id=GADGETS_ID),
        Product(id=NOVEL_ID, name="Novel", description="Paperback", price=Decimal("20.00"), stock=100, category_id=BOOKS_ID),
        Product(id=POSTER_ID, name="Poster", description="Sold out", price=Decimal("5.50"), stock=0, category_id=GADGETS_ID),
    ]
    return categories, products


def load_catalog(store: InMemoryStore) -> InMemoryStore:
    categories, products = build_catalog()
    for category in categories:
        store.add_category(category)
    for product in products:
        store.add_product(product)
    return store


async def seed_test_catalog(factory) -> None:
    categories, products = build_catalog()
    async with factory() as session:
        session.add_all(categories)
        session.add_all(products)
        await session.commit()


def sql_service_for(session: AsyncSession, locks: Optional[CartLockRegistry] = None) -> CartService:
    return CartService(
        SqlCartRepository(session),
        SqlCartItemRepository(session),
        SqlProductRepository(session),
        locks=locks,
    )


def memory_service_for(store: InMemoryStore, locks: Optional[CartLockRegistry] = None) -> CartService:
    return CartService(
        InMemoryCartRepository(store),
        InMemoryCartItemRepository(store),
        InMemoryProductRepository(store),
        locks=locks,
    )


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def test_engine(tmp_path):
    """Create a test database engine backed by a temporary SQLite file."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    await init_db(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine):
    factory = async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)
    await seed_test_catalog(factory)
    return factory


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


# ============================================================================
# Service Fixtures
# ============================================================================

@pytest.fixture
def memory_store():
    return load_catalog(InMemoryStore())


@pytest.fixture
def memory_cart_service(memory_store):
    return memory_service_for(memory_store)


@pytest.fixture
def sql_cart_service(db_session):
    return sql_service_for(db_session)


@pytest_asyncio.fixture(params=["memory", "sql"])
async def cart_service(request, tmp_path):
    """The same cart service contract exercised against both repository backends."""
    if request.param == "memory":
        yield memory_service_for(load_catalog(InMemoryStore()))
        return

    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'service.db'}", echo=False)
    await init_db(engine)
    factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    await seed_test_catalog(factory)

    async with factory() as session:
        yield sql_service_for(session)

    await engine.dispose()


@pytest_asyncio.fixture(params=["memory", "sql"])
async def request_services(request, tmp_path):
    """
    Builds cart services the way the API does for concurrent requests.

    Each call returns a service with its own database session (or its own
    repositories over one shared store), all sharing one lock registry.
    """
    locks = CartLockRegistry()

    if request.param == "memory":
        store = load_catalog(InMemoryStore())
        yield lambda: memory_service_for(store, locks)
        return

    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'requests.db'}", echo=False)
    await init_db(engine)
    factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    await seed_test_catalog(factory)
    sessions = []

    def build():
        session = factory()
        sessions.append(session)
        return sql_service_for(session, locks)

    yield build

    for session in sessions:
        await session.close()
    await engine.dispose()


# ============================================================================
# HTTP Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def client(session_factory, monkeypatch):
    """HTTP client talking to the app in-process, one database session per request."""
    monkeypatch.setattr(Config, "REPOSITORY_BACKEND", "sql")

    async def override_get_db():
        async with session_factory() as db:
            yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
