import asyncio
import logging
import secrets
from contextlib import asynccontextmanager

import uvicorn
from aiogram import Dispatcher
from fastapi import FastAPI, Request, status, HTTPException
from fastapi.responses import JSONResponse

import config
from bot_instance import get_bot, close_bot
from db import create_db_and_tables
from enums.bot_entity import BotEntity
from utils.localizator import Localizator

bot = get_bot()
dp = Dispatcher()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for webhook mode startup and shutdown."""
    await create_db_and_tables()
    await bot.set_webhook(
        url=config.WEBHOOK_URL,
        secret_token=config.WEBHOOK_SECRET_TOKEN
    )
    logging.info("[Startup] Webhook registered with Telegram")
    logging.info(Localizator.get_text(BotEntity.ADMIN, "bot_started").format(chat_id=config.ADMIN_CHAT_ID))

    yield

    logging.warning('Shutting down..')
    await bot.delete_webhook()
    await close_bot()
    logging.warning('Bye!')


app = FastAPI(lifespan=lifespan)


# Health check endpoint (for Docker container monitoring)
@app.get("/health")
async def health_check():
    return {"status": "healthy"}


@app.post(config.WEBHOOK_PATH)
async def webhook(request: Request):
    secret_token = request.headers.get("X-Telegram-Bot-Api-Secret-Token")

    if secret_token is None:
        logging.warning("Webhook request rejected: Missing X-Telegram-Bot-Api-Secret-Token header")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    if not secrets.compare_digest(secret_token, config.WEBHOOK_SECRET_TOKEN):
        logging.warning("Webhook request rejected: Invalid secret token")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    try:
        update_data = await request.json()
        await dp.feed_webhook_update(bot, update_data)
        return {"status": "ok"}
    except Exception as e:
        logging.error(f"Error processing webhook: {e}")
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"status": "error"})


async def start_polling() -> None:
    """Long polling mode. SIGINT/SIGTERM stop polling and fall through to cleanup."""
    await create_db_and_tables()
    await bot.delete_webhook(drop_pending_updates=False)
    logging.info(Localizator.get_text(BotEntity.ADMIN, "bot_started").format(chat_id=config.ADMIN_CHAT_ID))
    try:
        await dp.start_polling(bot, handle_signals=True)
    finally:
        await close_bot()
        logging.warning('Bye!')


def main() -> None:
    if config.WEBHOOK_URL:
        uvicorn.run(app, host=config.WEBAPP_HOST, port=config.WEBAPP_PORT)
    else:
        asyncio.run(start_polling())
