from fastapi import APIRouter, Depends, Path
from typing import List
from uuid import UUID

from ..core.dependencies import get_category_service
from ..schemas.category import CategoryResponse
from ..services.category_service import CategoryService


router = APIRouter()


@router.get("", response_model=List[CategoryResponse])
async def get_all_categories(service: CategoryService = Depends(get_category_service)):
    """List categories with their product counts"""
    return await service.list_categories()


@router.get("/{id}", response_model=CategoryResponse)
async def get_category_by_id(
    id: UUID = Path(..., description="ID of the category"),
    service: CategoryService = Depends(get_category_service),
):
    return await service.get_category(id)
