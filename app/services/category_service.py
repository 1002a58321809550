from typing import List
from uuid import UUID

from ..exceptions import CategoryNotFoundException
from ..repositories.base import CategoryRepository
from ..schemas.category import CategoryResponse
from .catalog_mapper import build_category_response


class CategoryService:
    def __init__(self, categories: CategoryRepository):
        self.categories = categories


    async def list_categories(self) -> List[CategoryResponse]:
        """All categories with the number of products filed under each."""
        categories = await self.categories.get_all()
        return [build_category_response(category) for category in categories]


    async def get_category(self, category_id: UUID) -> CategoryResponse:
        category = await self.categories.get_by_id(category_id)

        if not category:
            raise CategoryNotFoundException(category_id)

        return build_category_response(category)
