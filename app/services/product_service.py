from typing import List
from uuid import UUID

from ..exceptions import ProductNotFoundException
from ..repositories.base import ProductRepository
from ..schemas.product import ProductResponse
from .catalog_mapper import build_product_response


class ProductService:
    def __init__(self, products: ProductRepository):
        self.products = products


    async def list_products(self) -> List[ProductResponse]:
        products = await self.products.get_all()
        return [build_product_response(product) for product in products]


    async def get_product(self, product_id: UUID) -> ProductResponse:
        product = await self.products.get_by_id(product_id)

        if not product:
            raise ProductNotFoundException(product_id)

        return build_product_response(product)
