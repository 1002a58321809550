from typing import Optional
from uuid import UUID

from .base import CamelModel

class CategoryResponse(CamelModel):
    id: UUID
    name: str
    description: Optional[str] = None
    product_count: int = 0
