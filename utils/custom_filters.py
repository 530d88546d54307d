from aiogram.filters import BaseFilter
from aiogram.types import Message

import config


def is_operator(user_id: int | None) -> bool:
    return user_id is not None and int(user_id) == int(config.ALLOWED_USER_ID)


def is_admin_chat(chat_id: int | None) -> bool:
    return chat_id is not None and int(chat_id) == int(config.ADMIN_CHAT_ID)


class OperatorInAdminChatFilter(BaseFilter):
    """
    Filter that matches only messages posted by the operator inside the admin chat.

    Everything else is not a command at all: no reply, no store access.
    """

    async def __call__(self, message: Message) -> bool:
        if message.from_user is None or message.chat is None:
            return False
        return is_operator(message.from_user.id) and is_admin_chat(message.chat.id)
