import uuid

from sqlalchemy import Column, String, Uuid
from sqlalchemy.orm import relationship

from ..db.base import Base
from ..models.base import TimeStampMixin

class Cart(Base, TimeStampMixin):
    __tablename__ = "carts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    session_id = Column(String(200), nullable=False, unique=True, index=True)

    # Relationships
    items = relationship("CartItem", back_populates="cart", cascade="all, delete-orphan", passive_deletes=True)


    def __repr__(self):
        return f'<Cart(id={self.id}, session_id={self.session_id})>'
