from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from .base import CamelModel, Money


class AddToCartRequest(CamelModel):
    """Schema for adding a product to a cart"""
    product_id: UUID
    # validated by the cart service so a zero quantity maps to a 400, not a 422
    quantity: int = Field(default=1, description="Number of units to add")


class UpdateCartItemRequest(CamelModel):
    """Schema for changing the quantity of a cart line"""
    quantity: int


class CartItemResponse(CamelModel):
    """Schema for cart item responses"""
    id: UUID
    product_id: UUID
    product_name: str
    product_description: Optional[str] = None
    product_price: Money
    category_name: str
    quantity: int
    subtotal: Money
    available_stock: int
    added_at: datetime


class CartResponse(CamelModel):
    """Schema for cart responses"""
    id: UUID
    session_id: str
    items: List[CartItemResponse] = []
    total_items: int = 0
    total_price: Money = Decimal("0")
    created_at: datetime
    updated_at: datetime


class CartSummaryResponse(CamelModel):
    """Schema for the cart badge: item count and price total only"""
    total_items: int = 0
    total_price: Money = Decimal("0")
