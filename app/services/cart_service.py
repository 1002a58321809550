import uuid
from typing import Optional
from uuid import UUID

from ..core.logging import get_logger
from ..exceptions import (
    CartItemNotFoundException,
    CartNotFoundException,
    DuplicateCartItemException,
    InsufficientStockException,
    InvalidQuantityException,
    ProductNotFoundException,
)
from ..models import Cart, CartItem, Product
from ..repositories.base import CartItemRepository, CartRepository, ProductRepository
from ..schemas.cart import CartResponse, CartSummaryResponse
from .cart_mapper import build_cart_response, build_cart_summary
from .lock_service import CartLockRegistry

logger = get_logger(__name__)


class CartService:
    """
    Session scoped shopping cart.

    Every operation resolves the cart from an opaque session id, validates the
    request against the current product stock before writing anything, and
    returns a freshly reloaded cart view. Stock is only a ceiling, adding to a
    cart never decrements it.
    """

    def __init__(
        self,
        carts: CartRepository,
        cart_items: CartItemRepository,
        products: ProductRepository,
        locks: Optional[CartLockRegistry] = None,
    ):
        self.carts = carts
        self.cart_items = cart_items
        self.products = products
        self.locks = locks if locks is not None else CartLockRegistry()


    async def _get_or_create(self, session_id: str) -> Cart:
        cart = await self.carts.get_by_session_id(session_id)

        if not cart:
            cart = await self.carts.create(Cart(id=uuid.uuid4(), session_id=session_id))
            logger.info(f"Created cart {cart.id} for session {session_id}")

        return cart


    async def _reload(self, session_id: str) -> CartResponse:
        cart = await self.carts.get_by_session_id(session_id)
        return build_cart_response(cart)


    async def _get_owned_item(self, cart: Cart, cart_item_id: UUID) -> CartItem:
        item = await self.cart_items.get_by_id(cart_item_id)

        # an id from another session's cart is reported exactly like a missing one
        if not item or item.cart_id != cart.id:
            logger.warning(f"Cart item {cart_item_id} not found in cart {cart.id}")
            raise CartItemNotFoundException()

        return item


    async def _merge_into(self, item: CartItem, product: Product, quantity: int) -> None:
        new_quantity = item.quantity + quantity

        if new_quantity > product.stock:
            logger.warning(
                f"Rejected merging {quantity} of product {product.id} into cart {item.cart_id}: "
                f"total {new_quantity} exceeds stock {product.stock}"
            )
            raise InsufficientStockException(
                available=product.stock,
                requested=quantity,
                total=new_quantity,
            )

        item.quantity = new_quantity
        await self.cart_items.update(item)
        logger.info(f"Increased product {product.id} in cart {item.cart_id} to {new_quantity}")


    async def get_or_create_cart(self, session_id: str) -> CartResponse:
        """Return the session's cart, creating an empty one on first use."""
        async with self.locks.lock_for(session_id):
            cart = await self._get_or_create(session_id)
            return build_cart_response(cart)


    async def add_item(self, session_id: str, product_id: UUID, quantity: int) -> CartResponse:
        """
        Add ``quantity`` units of a product to the session's cart.

        A product already in the cart has its line increased instead of getting a
        second line; the increased total must still fit in the current stock.
        Every read happens under the session lock, so a request queued behind
        another one sees that request's committed cart and lines.

        Raises:
            ProductNotFoundException: the product does not exist.
            InvalidQuantityException: quantity is zero or negative.
            InsufficientStockException: the quantity, or the merged total, exceeds stock.
        """
        async with self.locks.lock_for(session_id):
            product = await self.products.get_by_id(product_id)
            if not product:
                raise ProductNotFoundException(product_id)

            if quantity <= 0:
                raise InvalidQuantityException()

            if quantity > product.stock:
                logger.warning(f"Rejected adding {quantity} of product {product_id}, only {product.stock} in stock")
                raise InsufficientStockException(available=product.stock)

            cart = await self._get_or_create(session_id)

            existing_item = await self.cart_items.get_by_cart_and_product(cart.id, product_id)

            if existing_item:
                await self._merge_into(existing_item, product, quantity)
            else:
                try:
                    await self.cart_items.create(
                        CartItem(
                            id=uuid.uuid4(),
                            cart_id=cart.id,
                            product_id=product_id,
                            quantity=quantity,
                        )
                    )
                    logger.info(f"Added {quantity} of product {product_id} to cart {cart.id}")
                except DuplicateCartItemException:
                    # a writer outside this process inserted the line first
                    logger.warning(f"Product {product_id} appeared in cart for session {session_id}, merging")
                    cart = await self.carts.get_by_session_id(session_id)
                    product = await self.products.get_by_id(product_id)
                    existing_item = await self.cart_items.get_by_cart_and_product(cart.id, product_id)
                    await self._merge_into(existing_item, product, quantity)

            await self.carts.update(cart)
            return await self._reload(session_id)


    async def update_item_quantity(self, session_id: str, cart_item_id: UUID, quantity: int) -> CartResponse:
        """Set the quantity of one cart line, bounded by the product's current stock."""
        if quantity <= 0:
            raise InvalidQuantityException()

        async with self.locks.lock_for(session_id):
            cart = await self.carts.get_by_session_id(session_id)
            if not cart:
                raise CartNotFoundException()

            item = await self._get_owned_item(cart, cart_item_id)

            product = await self.products.get_by_id(item.product_id)
            if not product:
                raise ProductNotFoundException()

            if quantity > product.stock:
                logger.warning(f"Rejected setting item {cart_item_id} to {quantity}, only {product.stock} in stock")
                raise InsufficientStockException(available=product.stock)

            item.quantity = quantity
            await self.cart_items.update(item)
            await self.carts.update(cart)

            logger.info(f"Set item {cart_item_id} in cart {cart.id} to {quantity}")
            return await self._reload(session_id)


    async def remove_item(self, session_id: str, cart_item_id: UUID) -> CartResponse:
        async with self.locks.lock_for(session_id):
            cart = await self.carts.get_by_session_id(session_id)
            if not cart:
                raise CartNotFoundException()

            await self._get_owned_item(cart, cart_item_id)

            await self.cart_items.delete_by_id(cart_item_id)
            await self.carts.update(cart)

            logger.info(f"Removed item {cart_item_id} from cart {cart.id}")
            return await self._reload(session_id)


    async def clear_cart(self, session_id: str) -> bool:
        """Remove every line from the session's cart. Returns False when the session has no cart."""
        async with self.locks.lock_for(session_id):
            cart = await self.carts.get_by_session_id(session_id)
            if not cart:
                return False

            deleted = await self.cart_items.delete_by_cart_id(cart.id)
            await self.carts.update(cart)

            logger.info(f"Cleared cart {cart.id}, {deleted} item(s) removed")
            return True


    async def get_cart_summary(self, session_id: str) -> CartSummaryResponse:
        # computed live on every call
        cart = await self.carts.get_by_session_id(session_id)
        if not cart or not cart.items:
            return CartSummaryResponse()

        return build_cart_summary(cart.items)
