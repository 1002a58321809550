"""Mapping from catalog entities to product and category views."""
from decimal import Decimal

from ..models import Category, Product
from ..schemas.category import CategoryResponse
from ..schemas.product import ProductResponse


UNCATEGORIZED = "Uncategorized"


def as_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def category_name_for(product: Product) -> str:
    """Name of the product's category, or the fallback label when the link is missing."""
    if product.category is None:
        return UNCATEGORIZED
    return product.category.name


def build_product_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=product.id,
        name=product.name,
        description=product.description,
        price=as_decimal(product.price),
        stock=product.stock,
        category_id=product.category_id,
        category_name=category_name_for(product),
    )


def build_category_response(category: Category) -> CategoryResponse:
    return CategoryResponse(
        id=category.id,
        name=category.name,
        description=category.description,
        product_count=len(category.products or []),
    )
