import uuid

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, String, Uuid
from sqlalchemy.orm import relationship

from ..db.base import Base
from ..models.base import TimeStampMixin



class Product(Base, TimeStampMixin):
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    description = Column(String(1000), nullable=True)
    price = Column(Numeric(18, 2, asdecimal=True), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    category_id = Column(Uuid, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True)

    # Relationships
    category = relationship("Category", back_populates="products")


    def __repr__(self):
        return f"<Product(id={self.id}, name={self.name}, price={self.price}, stock={self.stock})>"
