from .cart_service import CartService
from .category_service import CategoryService
from .lock_service import CartLockRegistry, cart_locks
from .product_service import ProductService


__all__ = [
    "CartLockRegistry",
    "CartService",
    "CategoryService",
    "ProductService",
    "cart_locks",
]
