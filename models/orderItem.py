from pydantic import BaseModel
from sqlalchemy import Column, Integer, String, Float, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship

from models.base import Base


class OrderItem(Base):
    __tablename__ = 'order_items'

    __table_args__ = (
        CheckConstraint('quantity > 0', name='ck_order_item_quantity_positive'),
        CheckConstraint('price >= 0', name='ck_order_item_price_not_negative'),
        Index('ix_order_items_order_id', 'order_id'),
    )

    id = Column(Integer, primary_key=True)
    order_id = Column(String(36), ForeignKey('orders.id', ondelete='CASCADE'), nullable=False)
    # No foreign key: products may be deleted from the catalog after the order is placed
    product_id = Column(String(36), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Float, nullable=False)  # Unit price at the time of purchase

    order = relationship("Order", back_populates="order_items")


class OrderItemDTO(BaseModel):
    id: int | None = None
    order_id: str | None = None
    product_id: str | None = None
    quantity: int | None = None
    price: float | None = None
    product_name: str | None = None  # Filled in by the admin order view
