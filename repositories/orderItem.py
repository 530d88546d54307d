from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.orderItem import OrderItem, OrderItemDTO


class OrderItemRepository:
    @staticmethod
    async def create_many(order_items: list[OrderItemDTO], session: AsyncSession) -> None:
        session.add_all([OrderItem(**item.model_dump(exclude_none=True, exclude={'product_name'}))
                         for item in order_items])
        await session.flush()

    @staticmethod
    async def get_by_order_ids(order_ids: list[str], session: AsyncSession) -> list[OrderItemDTO]:
        if not order_ids:
            return []
        stmt = select(OrderItem).where(OrderItem.order_id.in_(order_ids))
        order_items = await session.execute(stmt)
        return [OrderItemDTO.model_validate(order_item, from_attributes=True)
                for order_item in order_items.scalars().all()]
