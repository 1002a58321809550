from .cart import (
    AddToCartRequest,
    CartItemResponse,
    CartResponse,
    CartSummaryResponse,
    UpdateCartItemRequest,
)
from .category import CategoryResponse
from .product import ProductResponse


__all__ = [
    # cart schemas
    "AddToCartRequest",
    "CartItemResponse",
    "CartResponse",
    "CartSummaryResponse",
    "UpdateCartItemRequest",

    # catalog schemas
    "CategoryResponse",
    "ProductResponse",
]
