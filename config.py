import os
import sys

from dotenv import load_dotenv

# Load .env but don't override existing environment variables
# This allows test scripts to set values before import
load_dotenv(".env", override=False)


def _exit_with_config_error(name: str, reason: Exception | str, expected: str):
    print(f"\n ERROR: Invalid {name} configuration\n", file=sys.stderr)
    print(f"Reason: {reason}", file=sys.stderr)
    print(f"Expected: {expected}", file=sys.stderr)
    print(f"Current value: {os.environ.get(name, '(not set)')}\n", file=sys.stderr)
    sys.exit(1)


TOKEN = os.environ.get("TOKEN") or os.environ.get("TELEGRAM_BOT_TOKEN")
if not TOKEN:
    _exit_with_config_error("TOKEN", "TOKEN environment variable is not set", "Telegram bot token from @BotFather")

# Operator access: commands are accepted only from ALLOWED_USER_ID inside ADMIN_CHAT_ID
try:
    _admin_chat_id_str = os.environ.get("ADMIN_CHAT_ID")
    if not _admin_chat_id_str or len(_admin_chat_id_str.strip()) == 0:
        raise ValueError("ADMIN_CHAT_ID environment variable is not set or empty")
    ADMIN_CHAT_ID = int(_admin_chat_id_str.strip())
except ValueError as e:
    _exit_with_config_error("ADMIN_CHAT_ID", e, "Telegram chat ID (e.g., -1001234567890)")

try:
    _allowed_user_id_str = os.environ.get("ALLOWED_USER_ID")
    if not _allowed_user_id_str or len(_allowed_user_id_str.strip()) == 0:
        raise ValueError("ALLOWED_USER_ID environment variable is not set or empty")
    ALLOWED_USER_ID = int(_allowed_user_id_str.strip())
except ValueError as e:
    _exit_with_config_error("ALLOWED_USER_ID", e, "Telegram user ID of the operator (e.g., 123456789)")

# New-order and admin notifications go to the admin chat unless overridden
NOTIFY_CHAT_ID = int(os.environ.get("NOTIFY_CHAT_ID", ADMIN_CHAT_ID))

BOT_LANGUAGE = os.environ.get("BOT_LANGUAGE", "ru")

# Order store
DB_URL = os.environ.get("DB_URL", "sqlite+aiosqlite:///data/bakery.db")

# Cart storage
CART_STORAGE_KEY = os.environ.get("CART_STORAGE_KEY", "cart-storage")

# Checkout
try:
    DELIVERY_COST = float(os.environ.get("DELIVERY_COST", "300"))
    if DELIVERY_COST < 0:
        raise ValueError(f"DELIVERY_COST must not be negative (got: {DELIVERY_COST})")
except ValueError as e:
    _exit_with_config_error("DELIVERY_COST", e, "Non-negative number (e.g., 300)")

# Webhook configuration (polling is used when WEBHOOK_URL is empty)
WEBHOOK_URL = os.environ.get("WEBHOOK_URL", "")
WEBHOOK_PATH = os.environ.get("WEBHOOK_PATH", "/webhook")
WEBHOOK_SECRET_TOKEN = os.environ.get("WEBHOOK_SECRET_TOKEN", "")
WEBAPP_HOST = os.environ.get("WEBAPP_HOST", "0.0.0.0")
WEBAPP_PORT = int(os.environ.get("WEBAPP_PORT")) if os.environ.get("WEBAPP_PORT") else 8000

if WEBHOOK_URL and not WEBHOOK_SECRET_TOKEN:
    _exit_with_config_error("WEBHOOK_SECRET_TOKEN", "WEBHOOK_URL is set but WEBHOOK_SECRET_TOKEN is empty",
                            "Random secret string shared with Telegram")

# Logging Configuration
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_MASK_SECRETS = os.environ.get("LOG_MASK_SECRETS", "true") == "true"  # Mask sensitive data in logs
LOG_RETENTION_DAYS = int(os.environ.get("LOG_RETENTION_DAYS", "5"))
