from fastapi import APIRouter, Depends, Path, Response, status
from uuid import UUID

from ..core.dependencies import get_cart_service
from ..schemas.cart import AddToCartRequest, CartResponse, CartSummaryResponse, UpdateCartItemRequest
from ..services.cart_service import CartService


router = APIRouter()


@router.get("/{session_id}", response_model=CartResponse)
async def get_cart(
    session_id: str = Path(..., description="Client generated cart session id"),
    service: CartService = Depends(get_cart_service),
):
    """Get the session's cart, creating an empty one on first access"""
    return await service.get_or_create_cart(session_id)


@router.get("/{session_id}/summary", response_model=CartSummaryResponse)
async def get_cart_summary(
    session_id: str = Path(..., description="Client generated cart session id"),
    service: CartService = Depends(get_cart_service),
):
    """Item count and price total of the session's cart"""
    return await service.get_cart_summary(session_id)


@router.post("/{session_id}/items", response_model=CartResponse)
async def add_item(
    item: AddToCartRequest,
    session_id: str = Path(..., description="Client generated cart session id"),
    service: CartService = Depends(get_cart_service),
):
    """
    **Add Product To Cart**

    Adds the product to the cart, or increases its quantity when it is already there.

    **Errors:**
    - **404**: product does not exist
    - **400**: quantity is not positive, or the resulting quantity exceeds the stock
    """
    return await service.add_item(session_id, item.product_id, item.quantity)


@router.put("/{session_id}/items/{cart_item_id}", response_model=CartResponse)
async def update_item_quantity(
    data: UpdateCartItemRequest,
    session_id: str = Path(..., description="Client generated cart session id"),
    cart_item_id: UUID = Path(..., description="ID of the cart item"),
    service: CartService = Depends(get_cart_service),
):
    """Set the quantity of a cart item"""
    return await service.update_item_quantity(session_id, cart_item_id, data.quantity)


@router.delete("/{session_id}/items/{cart_item_id}", response_model=CartResponse)
async def remove_item(
    session_id: str = Path(..., description="Client generated cart session id"),
    cart_item_id: UUID = Path(..., description="ID of the cart item"),
    service: CartService = Depends(get_cart_service),
):
    """Remove an item from the cart"""
    return await service.remove_item(session_id, cart_item_id)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def clear_cart(
    session_id: str = Path(..., description="Client generated cart session id"),
    service: CartService = Depends(get_cart_service),
):
    """Clear all items from the cart"""
    await service.clear_cart(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
