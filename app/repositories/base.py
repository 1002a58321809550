"""
Persistence contracts consumed by the services.

Services receive concrete repositories through their constructors, so any
implementation of these classes (SQL, in-memory, ...) can back the API
without changes to the business logic. Carts are always returned hydrated
with ``items -> product -> category`` so they can be mapped without further
lookups.
"""
from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from ..models import Cart, CartItem, Category, Product


class ProductRepository(ABC):

    @abstractmethod
    async def get_all(self) -> List[Product]:
        ...

    @abstractmethod
    async def get_by_id(self, product_id: UUID) -> Optional[Product]:
        ...


class CategoryRepository(ABC):

    @abstractmethod
    async def get_all(self) -> List[Category]:
        """Return every category with its ``products`` collection loaded."""

    @abstractmethod
    async def get_by_id(self, category_id: UUID) -> Optional[Category]:
        ...


class CartRepository(ABC):

    @abstractmethod
    async def get_by_session_id(self, session_id: str) -> Optional[Cart]:
        ...

    @abstractmethod
    async def get_by_id(self, cart_id: UUID) -> Optional[Cart]:
        ...

    @abstractmethod
    async def create(self, cart: Cart) -> Cart:
        """
        Persist a new cart, stamping ``created_at`` and ``updated_at``.

        When another writer already stored a cart for the same session id, that
        cart is returned instead.
        """

    @abstractmethod
    async def update(self, cart: Cart) -> Cart:
        """Persist the cart and refresh ``updated_at``."""

    @abstractmethod
    async def delete_by_session_id(self, session_id: str) -> bool:
        ...


class CartItemRepository(ABC):

    @abstractmethod
    async def get_by_id(self, item_id: UUID) -> Optional[CartItem]:
        ...

    @abstractmethod
    async def get_by_cart_and_product(self, cart_id: UUID, product_id: UUID) -> Optional[CartItem]:
        ...

    @abstractmethod
    async def get_by_cart_id(self, cart_id: UUID) -> List[CartItem]:
        ...

    @abstractmethod
    async def create(self, item: CartItem) -> CartItem:
        """
        Persist a new cart line, stamping ``added_at``.

        Raises:
            DuplicateCartItemException: the cart already holds a line for the product.
        """

    @abstractmethod
    async def update(self, item: CartItem) -> CartItem:
        ...

    @abstractmethod
    async def delete_by_id(self, item_id: UUID) -> bool:
        ...

    @abstractmethod
    async def delete_by_cart_id(self, cart_id: UUID) -> int:
        """Delete every line of a cart and return how many were removed."""
