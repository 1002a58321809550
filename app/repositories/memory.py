"""
Dictionary backed repositories.

Entities are plain (transient) ORM instances kept in an ``InMemoryStore``;
relationships are re-attached on every read so callers see the same hydrated
shape the SQL repositories return.
"""
import uuid
from typing import Dict, List, Optional
from uuid import UUID

from ..exceptions import DuplicateCartItemException
from ..models import Cart, CartItem, Category, Product
from ..models.base import utcnow
from .base import CartItemRepository, CartRepository, CategoryRepository, ProductRepository


class InMemoryStore:
    def __init__(self):
        self.categories: Dict[UUID, Category] = {}
        self.products: Dict[UUID, Product] = {}
        self.carts: Dict[UUID, Cart] = {}
        self.cart_items: Dict[UUID, CartItem] = {}


    def clear(self) -> None:
        self.categories.clear()
        self.products.clear()
        self.carts.clear()
        self.cart_items.clear()


    def add_category(self, category: Category) -> Category:
        if category.id is None:
            category.id = uuid.uuid4()
        self.categories[category.id] = category
        return category


    def add_product(self, product: Product) -> Product:
        if product.id is None:
            product.id = uuid.uuid4()
        self.products[product.id] = product
        return product


    def hydrate_product(self, product: Product) -> Product:
        product.category = self.categories.get(product.category_id)
        return product


    def hydrate_item(self, item: CartItem) -> CartItem:
        product = self.products.get(item.product_id)
        item.product = self.hydrate_product(product) if product else None
        return item


    def hydrate_cart(self, cart: Cart) -> Cart:
        cart.items = [
            self.hydrate_item(item)
            for item in self.cart_items.values()
            if item.cart_id == cart.id
        ]
        return cart


class InMemoryProductRepository(ProductRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store


    async def get_all(self) -> List[Product]:
        products = sorted(self.store.products.values(), key=lambda p: p.name)
        return [self.store.hydrate_product(product) for product in products]


    async def get_by_id(self, product_id: UUID) -> Optional[Product]:
        product = self.store.products.get(product_id)
        return self.store.hydrate_product(product) if product else None


class InMemoryCategoryRepository(CategoryRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store


    def _with_products(self, category: Category) -> Category:
        category.products = [
            product for product in self.store.products.values()
            if product.category_id == category.id
        ]
        return category


    async def get_all(self) -> List[Category]:
        categories = sorted(self.store.categories.values(), key=lambda c: c.name)
        return [self._with_products(category) for category in categories]


    async def get_by_id(self, category_id: UUID) -> Optional[Category]:
        category = self.store.categories.get(category_id)
        return self._with_products(category) if category else None


class InMemoryCartRepository(CartRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store


    async def get_by_session_id(self, session_id: str) -> Optional[Cart]:
        for cart in self.store.carts.values():
            if cart.session_id == session_id:
                return self.store.hydrate_cart(cart)
        return None


    async def get_by_id(self, cart_id: UUID) -> Optional[Cart]:
        cart = self.store.carts.get(cart_id)
        return self.store.hydrate_cart(cart) if cart else None


    async def create(self, cart: Cart) -> Cart:
        existing = await self.get_by_session_id(cart.session_id)
        if existing:
            return existing

        if cart.id is None:
            cart.id = uuid.uuid4()

        now = utcnow()
        cart.created_at = now
        cart.updated_at = now

        self.store.carts[cart.id] = cart
        return await self.get_by_id(cart.id)


    async def update(self, cart: Cart) -> Cart:
        cart.updated_at = utcnow()

        self.store.carts[cart.id] = cart
        return await self.get_by_id(cart.id)


    async def delete_by_session_id(self, session_id: str) -> bool:
        cart = await self.get_by_session_id(session_id)
        if not cart:
            return False

        # the cart owns its lines
        for item_id in [item.id for item in cart.items]:
            self.store.cart_items.pop(item_id, None)
        del self.store.carts[cart.id]
        return True


class InMemoryCartItemRepository(CartItemRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store


    async def get_by_id(self, item_id: UUID) -> Optional[CartItem]:
        item = self.store.cart_items.get(item_id)
        return self.store.hydrate_item(item) if item else None


    async def get_by_cart_and_product(self, cart_id: UUID, product_id: UUID) -> Optional[CartItem]:
        for item in self.store.cart_items.values():
            if item.cart_id == cart_id and item.product_id == product_id:
                return self.store.hydrate_item(item)
        return None


    async def get_by_cart_id(self, cart_id: UUID) -> List[CartItem]:
        return [
            self.store.hydrate_item(item)
            for item in self.store.cart_items.values()
            if item.cart_id == cart_id
        ]


    async def create(self, item: CartItem) -> CartItem:
        if item.id is None:
            item.id = uuid.uuid4()

        if await self.get_by_cart_and_product(item.cart_id, item.product_id):
            raise DuplicateCartItemException()

        item.added_at = utcnow()
        self.store.cart_items[item.id] = item
        return await self.get_by_id(item.id)


    async def update(self, item: CartItem) -> CartItem:
        self.store.cart_items[item.id] = item
        return await self.get_by_id(item.id)


    async def delete_by_id(self, item_id: UUID) -> bool:
        return self.store.cart_items.pop(item_id, None) is not None


    async def delete_by_cart_id(self, cart_id: UUID) -> int:
        item_ids = [item_id for item_id, item in self.store.cart_items.items() if item.cart_id == cart_id]
        for item_id in item_ids:
            del self.store.cart_items[item_id]
        return len(item_ids)
