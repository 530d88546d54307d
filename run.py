import logging
import traceback

from aiogram import F, Router
from aiogram.types import ErrorEvent, Message

from utils.logging_config import setup_logging

# Initialize centralized logging configuration
setup_logging()

from bot import dp, main
from handlers.admin.order_status import order_status_router
from services.notification import NotificationService
from utils.html_escape import safe_html

main_router = Router()


@main_router.error(F.update.message.as_("message"))
async def error_handler(event: ErrorEvent, message: Message):
    logging.error(f"Unhandled exception in handler: {event.exception}", exc_info=event.exception)

    traceback_str = "".join(traceback.format_exception(event.exception))
    admin_notification = (
        f"Critical error caused by {safe_html(str(event.exception))}\n\n"
        f"<pre>{safe_html(traceback_str[-3500:])}</pre>"
    )
    await NotificationService.send_message(admin_notification)


main_router.include_router(order_status_router)
dp.include_router(main_router)

if __name__ == '__main__':
    logging.info("[run.py] Starting bot")
    main()
