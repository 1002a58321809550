from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import AsyncGenerator

from ..core.config import Config
from ..db.database import AsyncSessionLocal
from ..repositories import (
    CartItemRepository,
    CartRepository,
    CategoryRepository,
    InMemoryCartItemRepository,
    InMemoryCartRepository,
    InMemoryCategoryRepository,
    InMemoryProductRepository,
    InMemoryStore,
    ProductRepository,
    SqlCartItemRepository,
    SqlCartRepository,
    SqlCategoryRepository,
    SqlProductRepository,
)
from ..services import CartService, CategoryService, ProductService, cart_locks


# process wide store behind REPOSITORY_BACKEND=memory
memory_store = InMemoryStore()


def use_memory_backend() -> bool:
    return Config.REPOSITORY_BACKEND == "memory"


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Asynchronous dependency that provides a database session for FastAPI routes.

    Yields:
        AsyncSession: An instance of the asynchronous database session.

    Usage:
        Use as a dependency in FastAPI endpoints to access the database session.
        The session is shared by every repository of a request and closed after
        the request is processed.
    """

    async with AsyncSessionLocal() as db:
        yield db


def get_product_repository(db: AsyncSession = Depends(get_db)) -> ProductRepository:
    if use_memory_backend():
        return InMemoryProductRepository(memory_store)
    return SqlProductRepository(db)


def get_category_repository(db: AsyncSession = Depends(get_db)) -> CategoryRepository:
    if use_memory_backend():
        return InMemoryCategoryRepository(memory_store)
    return SqlCategoryRepository(db)


def get_cart_repository(db: AsyncSession = Depends(get_db)) -> CartRepository:
    if use_memory_backend():
        return InMemoryCartRepository(memory_store)
    return SqlCartRepository(db)


def get_cart_item_repository(db: AsyncSession = Depends(get_db)) -> CartItemRepository:
    if use_memory_backend():
        return InMemoryCartItemRepository(memory_store)
    return SqlCartItemRepository(db)


async def get_cart_service(
    carts: CartRepository = Depends(get_cart_repository),
    cart_items: CartItemRepository = Depends(get_cart_item_repository),
    products: ProductRepository = Depends(get_product_repository),
) -> CartService:
    return CartService(carts, cart_items, products, locks=cart_locks)


async def get_product_service(products: ProductRepository = Depends(get_product_repository)) -> ProductService:
    return ProductService(products)


async def get_category_service(categories: CategoryRepository = Depends(get_category_repository)) -> CategoryService:
    return CategoryService(categories)
