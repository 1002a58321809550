from .base import CartItemRepository, CartRepository, CategoryRepository, ProductRepository
from .memory import (
    InMemoryCartItemRepository,
    InMemoryCartRepository,
    InMemoryCategoryRepository,
    InMemoryProductRepository,
    InMemoryStore,
)
from .sql import SqlCartItemRepository, SqlCartRepository, SqlCategoryRepository, SqlProductRepository


__all__ = [
    # contracts
    "CartItemRepository",
    "CartRepository",
    "CategoryRepository",
    "ProductRepository",

    # in-memory backend
    "InMemoryCartItemRepository",
    "InMemoryCartRepository",
    "InMemoryCategoryRepository",
    "InMemoryProductRepository",
    "InMemoryStore",

    # sqlalchemy backend
    "SqlCartItemRepository",
    "SqlCartRepository",
    "SqlCategoryRepository",
    "SqlProductRepository",
]
