import uuid

from sqlalchemy import Column, String, Uuid
from sqlalchemy.orm import relationship

from ..db.base import Base
from app.models.base import TimeStampMixin

class Category(Base, TimeStampMixin):
    __tablename__ = "categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    description = Column(String(500), nullable=True)

    # Relationships
    products = relationship("Product", back_populates="category", cascade="all, delete-orphan")


    def __repr__(self):
        return f'<Category(id={self.id}, name={self.name})>'
