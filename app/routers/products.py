from fastapi import APIRouter, Depends, Path
from typing import List
from uuid import UUID

from ..core.dependencies import get_product_service
from ..schemas.product import ProductResponse
from ..services.product_service import ProductService


router = APIRouter()


@router.get("", response_model=List[ProductResponse])
async def get_all_products(service: ProductService = Depends(get_product_service)):
    return await service.list_products()


@router.get("/{id}", response_model=ProductResponse)
async def get_product_by_id(
    id: UUID = Path(..., description="ID of the product"),
    service: ProductService = Depends(get_product_service),
):
    return await service.get_product(id)
