import logging

from aiogram import F, Router
from aiogram.enums import ParseMode
from aiogram.filters import CommandStart
from aiogram.types import Message

from enums.bot_entity import BotEntity
from services.order_command import OrderCommandService
from utils.custom_filters import OperatorInAdminChatFilter, is_operator
from utils.html_escape import safe_html
from utils.localizator import Localizator

order_status_router = Router()


@order_status_router.message(CommandStart())
async def start(message: Message):
    if message.from_user is None or not is_operator(message.from_user.id):
        await message.answer(Localizator.get_text(BotEntity.ADMIN, "access_denied"))
        return
    await message.answer(Localizator.get_text(BotEntity.ADMIN, "start_message"), parse_mode=ParseMode.MARKDOWN)


@order_status_router.message(F.text, OperatorInAdminChatFilter())
async def order_status_command(message: Message):
    """
    Apply `#<order uuid> статус=<word>` commands posted by the operator.

    Each message is its own error boundary: a failure is answered in the chat
    and the bot keeps listening.
    """
    try:
        reply = await OrderCommandService.handle(message.text, operator_id=message.from_user.id)
    except Exception as e:
        logging.error(f"[OrderCommand] Unhandled error for message {message.message_id}: {e}", exc_info=e)
        reply = Localizator.get_text(BotEntity.ADMIN, "generic_error").format(error=safe_html(str(e)))

    if reply is None:
        return

    try:
        await message.reply(reply)
    except Exception as e:
        logging.error(f"[OrderCommand] Failed to reply to message {message.message_id}: {e}")
