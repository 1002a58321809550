from .category import Category
from .product import Product
from .cart import Cart
from .cart_item import CartItem


__all__ = [
    "Category",
    "Product",
    "Cart",
    "CartItem",
]
