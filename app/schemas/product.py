from typing import Optional
from uuid import UUID

from .base import CamelModel, Money


class ProductResponse(CamelModel):
    id: UUID
    name: str
    description: Optional[str] = None
    price: Money
    stock: int
    category_id: UUID
    category_name: str
