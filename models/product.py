from datetime import datetime

from pydantic import BaseModel
from sqlalchemy import Column, String, Text, Float, Boolean, DateTime, func, CheckConstraint, Enum as SQLEnum

from enums.product_category import ProductCategory
from models.base import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Float, nullable=False)
    image = Column(Text, nullable=True)
    category = Column(SQLEnum(ProductCategory, values_callable=lambda e: [c.value for c in e]), nullable=False)
    # Free-form label such as "1.5 кг"; the leading number is the base weight in kg
    weight = Column(String(64), nullable=True)
    in_stock = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint('price >= 0', name='check_product_price_not_negative'),
    )


class ProductDTO(BaseModel):
    id: str
    name: str
    description: str = ""
    price: float
    image: str | None = None
    category: ProductCategory
    weight: str | None = None
    in_stock: bool = True
    created_at: datetime | None = None
