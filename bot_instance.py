"""
Bot Instance Singleton

Provides a single shared Bot instance for the order bot and for the
notifications sent from checkout and the admin order view.

Usage:
    from bot_instance import get_bot
    bot = get_bot()
    await bot.send_message(chat_id, text)
"""

from aiogram import Bot
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

import config

_bot_instance: Bot | None = None


def get_bot() -> Bot:
    """Get the shared Bot instance, creating it on first access."""
    global _bot_instance
    if _bot_instance is None:
        _bot_instance = Bot(
            token=config.TOKEN,
            default=DefaultBotProperties(parse_mode=ParseMode.HTML)
        )
    return _bot_instance


async def close_bot():
    """Close the Bot HTTP session. Called during shutdown."""
    global _bot_instance
    if _bot_instance is not None:
        await _bot_instance.session.close()
        _bot_instance = None
