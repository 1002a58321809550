"""
Pure mapping from hydrated cart entities to cart views.

Totals are recomputed from the current quantities and the current product
prices on every call, nothing here reads a stored aggregate.
"""
from decimal import Decimal
from typing import Iterable

from ..models import Cart, CartItem
from ..schemas.cart import CartItemResponse, CartResponse, CartSummaryResponse
from .catalog_mapper import as_decimal, category_name_for


def line_subtotal(item: CartItem) -> Decimal:
    return as_decimal(item.product.price) * item.quantity


def build_cart_item_response(item: CartItem) -> CartItemResponse:
    product = item.product

    return CartItemResponse(
        id=item.id,
        product_id=item.product_id,
        product_name=product.name,
        product_description=product.description,
        product_price=as_decimal(product.price),
        category_name=category_name_for(product),
        quantity=item.quantity,
        subtotal=line_subtotal(item),
        available_stock=product.stock,
        added_at=item.added_at,
    )


def build_cart_summary(items: Iterable[CartItem]) -> CartSummaryResponse:
    total_items = 0
    total_price = Decimal("0")

    for item in items:
        total_items += item.quantity
        total_price += line_subtotal(item)

    return CartSummaryResponse(total_items=total_items, total_price=total_price)


def build_cart_response(cart: Cart) -> CartResponse:
    items = [build_cart_item_response(item) for item in cart.items]

    return CartResponse(
        id=cart.id,
        session_id=cart.session_id,
        items=items,
        total_items=sum(i.quantity for i in items),
        total_price=sum((i.subtotal for i in items), Decimal("0")),
        created_at=cart.created_at,
        updated_at=cart.updated_at,
    )
