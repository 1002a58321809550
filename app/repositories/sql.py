from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..core.logging import get_logger
from ..exceptions import DuplicateCartItemException
from ..models import Cart, CartItem, Category, Product
from ..models.base import utcnow
from .base import CartItemRepository, CartRepository, CategoryRepository, ProductRepository

logger = get_logger(__name__)


def _hydrated_cart_query():
    # populate_existing so a reload after a write replaces stale collections in the identity map
    return (
        select(Cart)
        .options(selectinload(Cart.items).selectinload(CartItem.product).selectinload(Product.category))
        .execution_options(populate_existing=True)
    )


def _hydrated_item_query():
    return (
        select(CartItem)
        .options(selectinload(CartItem.product).selectinload(Product.category))
        .execution_options(populate_existing=True)
    )


class SqlProductRepository(ProductRepository):
    def __init__(self, db: AsyncSession):
        self.db = db


    async def get_all(self) -> List[Product]:
        query = select(Product).options(selectinload(Product.category)).order_by(Product.name)
        result = await self.db.execute(query)
        return list(result.scalars().all())


    async def get_by_id(self, product_id: UUID) -> Optional[Product]:
        query = (
            select(Product)
            .options(selectinload(Product.category))
            .where(Product.id == product_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(query)
        return result.scalars().first()


class SqlCategoryRepository(CategoryRepository):
    def __init__(self, db: AsyncSession):
        self.db = db


    async def get_all(self) -> List[Category]:
        query = select(Category).options(selectinload(Category.products)).order_by(Category.name)
        result = await self.db.execute(query)
        return list(result.scalars().all())


    async def get_by_id(self, category_id: UUID) -> Optional[Category]:
        query = select(Category).options(selectinload(Category.products)).where(Category.id == category_id)
        result = await self.db.execute(query)
        return result.scalars().first()


class SqlCartRepository(CartRepository):
    def __init__(self, db: AsyncSession):
        self.db = db


    async def get_by_session_id(self, session_id: str) -> Optional[Cart]:
        result = await self.db.execute(_hydrated_cart_query().where(Cart.session_id == session_id))
        return result.scalars().first()


    async def get_by_id(self, cart_id: UUID) -> Optional[Cart]:
        result = await self.db.execute(_hydrated_cart_query().where(Cart.id == cart_id))
        return result.scalars().first()


    async def create(self, cart: Cart) -> Cart:
        cart_id, session_id = cart.id, cart.session_id

        now = utcnow()
        cart.created_at = now
        cart.updated_at = now

        self.db.add(cart)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()

            # another worker created the cart for this session first
            existing = await self.get_by_session_id(session_id)
            if not existing:
                raise

            logger.info(f"Cart for session {session_id} already exists, using {existing.id}")
            return existing

        return await self.get_by_id(cart_id)


    async def update(self, cart: Cart) -> Cart:
        # statement level so a cart holding just-deleted lines is not cascaded back into the session
        await self.db.execute(
            update(Cart).where(Cart.id == cart.id).values(updated_at=utcnow())
        )
        await self.db.commit()

        return await self.get_by_id(cart.id)


    async def delete_by_session_id(self, session_id: str) -> bool:
        cart = await self.get_by_session_id(session_id)
        if not cart:
            return False

        await self.db.delete(cart)
        await self.db.commit()
        return True


class SqlCartItemRepository(CartItemRepository):
    def __init__(self, db: AsyncSession):
        self.db = db


    async def get_by_id(self, item_id: UUID) -> Optional[CartItem]:
        result = await self.db.execute(_hydrated_item_query().where(CartItem.id == item_id))
        return result.scalars().first()


    async def get_by_cart_and_product(self, cart_id: UUID, product_id: UUID) -> Optional[CartItem]:
        query = _hydrated_item_query().where(
            CartItem.cart_id == cart_id,
            CartItem.product_id == product_id,
        )
        result = await self.db.execute(query)
        return result.scalars().first()


    async def get_by_cart_id(self, cart_id: UUID) -> List[CartItem]:
        result = await self.db.execute(_hydrated_item_query().where(CartItem.cart_id == cart_id))
        return list(result.scalars().all())


    async def create(self, item: CartItem) -> CartItem:
        item_id, cart_id, product_id = item.id, item.cart_id, item.product_id
        item.added_at = utcnow()

        self.db.add(item)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()

            if not await self.get_by_cart_and_product(cart_id, product_id):
                raise

            raise DuplicateCartItemException()

        return await self.get_by_id(item_id)


    async def update(self, item: CartItem) -> CartItem:
        # items handed out by this repository are already attached to the session
        await self.db.commit()

        return await self.get_by_id(item.id)


    async def delete_by_id(self, item_id: UUID) -> bool:
        item = await self.db.get(CartItem, item_id)
        if not item:
            return False

        await self.db.delete(item)
        await self.db.commit()
        return True


    async def delete_by_cart_id(self, cart_id: UUID) -> int:
        count = await self.db.scalar(
            select(func.count()).select_from(CartItem).where(CartItem.cart_id == cart_id)
        )

        await self.db.execute(delete(CartItem).where(CartItem.cart_id == cart_id))
        await self.db.commit()

        return count or 0
