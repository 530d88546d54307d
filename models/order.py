import uuid
from datetime import datetime

from pydantic import BaseModel
from sqlalchemy import Column, String, Text, Float, DateTime, func, CheckConstraint, Enum as SQLEnum
from sqlalchemy.orm import relationship

from enums.delivery_type import DeliveryType
from enums.order_status import OrderStatus
from models.base import Base


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Order(Base):
    __tablename__ = 'orders'

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), nullable=True)  # Set only for signed-in customers
    name = Column(String(255), nullable=False)
    phone = Column(String(32), nullable=False)
    delivery_type = Column(SQLEnum(DeliveryType, values_callable=_enum_values), nullable=False)
    delivery_address = Column(Text, nullable=True)
    comment = Column(Text, nullable=True)
    total = Column(Float, nullable=False)
    status = Column(SQLEnum(OrderStatus, values_callable=_enum_values), nullable=False, default=OrderStatus.PENDING)
    created_at = Column(DateTime, default=func.now(), nullable=False)

    order_items = relationship('OrderItem', back_populates='order', cascade='all, delete-orphan')

    __table_args__ = (
        CheckConstraint('total >= 0', name='check_order_total_not_negative'),
    )


class OrderDTO(BaseModel):
    id: str | None = None
    user_id: str | None = None
    name: str | None = None
    phone: str | None = None
    delivery_type: DeliveryType | None = None
    delivery_address: str | None = None
    comment: str | None = None
    total: float | None = None
    status: OrderStatus | None = None
    created_at: datetime | None = None


class OrderWithItemsDTO(OrderDTO):
    """Order joined with its line items for the admin order view."""
    order_items: list["OrderItemDTO"] = []


from models.orderItem import OrderItemDTO  # noqa: E402

OrderWithItemsDTO.model_rebuild()
