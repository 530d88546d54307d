import asyncio
import logging
from datetime import datetime

from aiogram.enums import ParseMode

import config
from bot_instance import get_bot
from enums.bot_entity import BotEntity
from enums.notification_type import NotificationType
from models.order import OrderDTO
from models.orderItem import OrderItemDTO
from utils.html_escape import safe_html, format_amount
from utils.localizator import Localizator

logger = logging.getLogger(__name__)

# Strong references to in-flight sends; the event loop only keeps weak ones
_background_tasks: set[asyncio.Task] = set()


def _timestamp(now: datetime | None = None) -> str:
    return (now or datetime.now()).strftime('%d.%m.%Y, %H:%M')


class NotificationService:
    """
    Best-effort messages to the admin chat.

    Nothing here raises: a failed send is logged and reported as False,
    and fire-and-forget sends are never awaited by the caller.
    """

    @staticmethod
    async def send_message(text: str, chat_id: int | None = None,
                           parse_mode: ParseMode | None = ParseMode.HTML) -> bool:
        target_chat_id = chat_id if chat_id is not None else config.NOTIFY_CHAT_ID
        if not target_chat_id:
            logger.warning("Notification chat is not configured. Skipping notification.")
            return False
        try:
            bot = get_bot()
            await bot.send_message(target_chat_id, text, parse_mode=parse_mode)
            return True
        except Exception as e:
            logger.error(f"Error sending Telegram message: {e}")
            return False

    @staticmethod
    def fire_and_forget(text: str, chat_id: int | None = None,
                        parse_mode: ParseMode | None = ParseMode.HTML) -> asyncio.Task:
        """
        Schedule send_message in the background and return immediately.

        Must be called from a running event loop.
        """
        task = asyncio.create_task(NotificationService.send_message(text, chat_id, parse_mode))
        _background_tasks.add(task)
        task.add_done_callback(NotificationService._on_background_send_done)
        return task

    @staticmethod
    def _on_background_send_done(task: asyncio.Task) -> None:
        _background_tasks.discard(task)
        if task.cancelled():
            logger.warning("Background notification was cancelled")
            return
        exception = task.exception()
        if exception is not None:
            logger.error(f"Failed to send Telegram notification: {exception}")

    @staticmethod
    def format_notification(kind: NotificationType, title: str, description: str | None = None,
                            now: datetime | None = None) -> str:
        message = f"{kind.value} <b>{safe_html(title)}</b>"
        if description:
            message += f"\n\n{safe_html(description)}"
        message += f"\n\n<code>{_timestamp(now)}</code>"
        return message

    @staticmethod
    def format_order_notification(order: OrderDTO, order_items: list[OrderItemDTO],
                                  now: datetime | None = None) -> str:
        currency_sym = Localizator.get_currency_symbol()
        lines = [
            Localizator.get_text(BotEntity.ADMIN, "new_order_title").format(order_id=safe_html(order.id)),
            "",
            Localizator.get_text(BotEntity.ADMIN, "new_order_customer").format(name=safe_html(order.name)),
            Localizator.get_text(BotEntity.ADMIN, "new_order_phone").format(phone=safe_html(order.phone)),
            Localizator.get_text(BotEntity.ADMIN, "new_order_delivery_type").format(
                delivery_type=Localizator.get_delivery_type_label(order.delivery_type)),
        ]
        if order.delivery_address:
            lines.append(Localizator.get_text(BotEntity.ADMIN, "new_order_address").format(
                address=safe_html(order.delivery_address)))
        if order.comment:
            lines.append("")
            lines.append(Localizator.get_text(BotEntity.ADMIN, "new_order_comment").format(
                comment=safe_html(order.comment)))
        if order_items:
            lines.append("")
            lines.append(Localizator.get_text(BotEntity.ADMIN, "new_order_items"))
            fallback_name = Localizator.get_text(BotEntity.ADMIN, "new_order_item_fallback_name")
            for item in order_items:
                lines.append(Localizator.get_text(BotEntity.ADMIN, "new_order_item_line").format(
                    product_name=safe_html(item.product_name or fallback_name),
                    quantity=item.quantity,
                    line_total=format_amount(item.quantity * item.price),
                    currency_sym=currency_sym))
        lines.append("")
        lines.append(Localizator.get_text(BotEntity.ADMIN, "new_order_total").format(
            total=format_amount(order.total), currency_sym=currency_sym))
        lines.append("")
        lines.append(f"<code>{_timestamp(now)}</code>")
        return "\n".join(lines)

    @staticmethod
    def new_order(order: OrderDTO, order_items: list[OrderItemDTO]) -> asyncio.Task:
        return NotificationService.fire_and_forget(
            NotificationService.format_order_notification(order, order_items))

    @staticmethod
    def admin_notice(kind: NotificationType, title: str, description: str | None = None) -> asyncio.Task:
        """Duplicate an admin panel toast into the admin chat."""
        return NotificationService.fire_and_forget(
            NotificationService.format_notification(kind, title, description))
