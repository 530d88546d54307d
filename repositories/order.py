from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from enums.order_status import OrderStatus
from models.order import Order, OrderDTO


class OrderRepository:
    @staticmethod
    async def create(order_dto: OrderDTO, session: AsyncSession) -> OrderDTO:
        order = Order(**order_dto.model_dump(exclude_none=True))
        session.add(order)
        await session.flush()
        await session.refresh(order)
        return OrderDTO.model_validate(order, from_attributes=True)

    @staticmethod
    async def get_status(order_id: str, session: AsyncSession) -> OrderStatus | None:
        stmt = select(Order.status).where(Order.id == order_id)
        status = await session.execute(stmt)
        return status.scalar()

    @staticmethod
    async def update_status(order_id: str, status: OrderStatus, session: AsyncSession) -> bool:
        """Returns False when no order with this id exists."""
        stmt = update(Order).where(Order.id == order_id).values(status=status)
        result = await session.execute(stmt)
        return result.rowcount > 0

    @staticmethod
    async def get_all(session: AsyncSession) -> list[OrderDTO]:
        stmt = select(Order).order_by(Order.created_at.desc())
        orders = await session.execute(stmt)
        return [OrderDTO.model_validate(order, from_attributes=True) for order in orders.scalars().all()]
