import logging

from sqlalchemy.exc import SQLAlchemyError

from db import get_db_session
from enums.bot_entity import BotEntity
from enums.notification_type import NotificationType
from enums.order_status import OrderStatus
from exceptions import OrderNotFoundException, OrderStoreException
from models.order import OrderWithItemsDTO
from repositories.order import OrderRepository
from repositories.orderItem import OrderItemRepository
from repositories.product import ProductRepository
from services.notification import NotificationService
from utils.localizator import Localizator
from utils.permission_utils import require_admin

logger = logging.getLogger(__name__)


class OrderService:
    """Admin panel view of the order store."""

    @staticmethod
    async def get_orders_with_items(admin_user_id: str | None) -> list[OrderWithItemsDTO]:
        """
        Orders newest first, each with its line items and product names.

        Orders are loaded first; failing to load items or product names is
        logged and the orders are returned without them.

        Raises:
            AdminAccessDeniedException: Caller is not an admin
            OrderStoreException: The orders themselves could not be loaded
        """
        await require_admin(admin_user_id)
        try:
            async with get_db_session() as session:
                orders = await OrderRepository.get_all(session)
                if not orders:
                    return []

                order_ids = [order.id for order in orders]
                try:
                    order_items = await OrderItemRepository.get_by_order_ids(order_ids, session)
                except SQLAlchemyError as e:
                    logger.error(f"Error fetching order items: {e}")
                    order_items = []

                product_names: dict[str, str] = {}
                if order_items:
                    product_ids = list({item.product_id for item in order_items})
                    try:
                        products = await ProductRepository.get_by_ids(product_ids, session)
                        product_names = {product.id: product.name for product in products}
                    except SQLAlchemyError as e:
                        logger.error(f"Error fetching products: {e}")
        except SQLAlchemyError as e:
            logger.error(f"Error fetching orders: {e}")
            NotificationService.admin_notice(NotificationType.ERROR,
                                             Localizator.get_text(BotEntity.ADMIN, "orders_load_failed"), str(e))
            raise OrderStoreException("get_orders", str(e)) from e

        items_by_order: dict[str, list] = {order_id: [] for order_id in order_ids}
        for item in order_items:
            item.product_name = product_names.get(item.product_id)
            items_by_order.setdefault(item.order_id, []).append(item)

        return [OrderWithItemsDTO(**order.model_dump(), order_items=items_by_order[order.id]) for order in orders]

    @staticmethod
    async def update_status(order_id: str, status: OrderStatus, admin_user_id: str | None) -> None:
        """
        Set an order status from the admin panel; the outcome is duplicated to the admin chat.

        Raises:
            AdminAccessDeniedException: Caller is not an admin
            OrderNotFoundException: No order with this id
            OrderStoreException: The order store rejected the update
        """
        await require_admin(admin_user_id)
        try:
            async with get_db_session() as session:
                updated = await OrderRepository.update_status(order_id, status, session)
                if updated:
                    await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error updating status of order {order_id}: {e}")
            NotificationService.admin_notice(NotificationType.ERROR,
                                             Localizator.get_text(BotEntity.ADMIN, "status_update_failed"), str(e))
            raise OrderStoreException("update_status", str(e)) from e

        if not updated:
            raise OrderNotFoundException(order_id)

        logger.info(f"ORDER_STATUS_TRANSITION: Order {order_id} -> {status.value} by admin {admin_user_id}")
        NotificationService.admin_notice(NotificationType.SUCCESS,
                                         Localizator.get_text(BotEntity.ADMIN, "status_updated"),
                                         f"#{order_id[:8]}: {Localizator.get_status_label(status)}")
