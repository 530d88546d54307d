"""
Centralized Logging Configuration

Provides logging for the storefront services and the order bot with:
- Configurable log levels
- Automatic log rotation
- Secret masking to prevent credential and customer data leaks
"""

import logging
import logging.handlers
import re
from pathlib import Path
from typing import Pattern

import config

NOISY_LOGGERS = ['aiosqlite', 'sqlalchemy', 'sqlalchemy.engine', 'sqlalchemy.pool', 'sqlalchemy.orm']


class SecretMaskingFilter(logging.Filter):
    """
    Logging filter that masks sensitive data in log records.

    Masks:
    - Telegram bot tokens (also inside api.telegram.org URLs)
    - Bearer tokens and service keys
    - Passwords
    - Customer phone numbers
    """

    PATTERNS: list[tuple[Pattern, str]] = [
        # Telegram bot tokens: <bot id>:<35 chars>
        (re.compile(r'(?<!\d)\d{6,12}:[A-Za-z0-9_\-]{30,}'), '[REDACTED_BOT_TOKEN]'),

        # Tokens
        (re.compile(r'(token["\']?\s*[:=]\s*["\']?)([A-Za-z0-9_\-:]{20,})(["\']?)', re.IGNORECASE), r'\1[REDACTED_TOKEN]\3'),
        (re.compile(r'(Bearer\s+)([A-Za-z0-9_\-\.]+)', re.IGNORECASE), r'\1[REDACTED_BEARER_TOKEN]'),
        (re.compile(r'(service[_-]?key["\']?\s*[:=]\s*["\']?)([A-Za-z0-9_\-\.]{20,})(["\']?)', re.IGNORECASE), r'\1[REDACTED_SERVICE_KEY]\3'),

        # Passwords
        (re.compile(r'(password["\']?\s*[:=]\s*["\']?)([^\s"\']+)(["\']?)', re.IGNORECASE), r'\1[REDACTED_PASSWORD]\3'),

        # Phone numbers (+7 (999) 123-45-67, 89991234567, ...), not UUIDs or ISO dates
        (re.compile(r'(?<![\w-])'
                    r'(?![0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12})'
                    r'(?!\d{4}-\d{2}-\d{2})'
                    r'\+?\d[\d\s\-()]{8,}\d(?![\w-])'), '[REDACTED_PHONE]'),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Filter log record to mask sensitive data.

        Returns:
            True (always - we modify but don't block records)
        """
        if record.msg:
            for pattern, replacement in self.PATTERNS:
                record.msg = pattern.sub(replacement, str(record.msg))

        if record.args:
            masked_args = []
            for arg in record.args:
                if isinstance(arg, str):
                    for pattern, replacement in self.PATTERNS:
                        arg = pattern.sub(replacement, arg)
                masked_args.append(arg)
            record.args = tuple(masked_args)

        return True


def silence_noisy_loggers():
    for logger_name in NOISY_LOGGERS:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.CRITICAL)
        logger.propagate = False
        logger.addHandler(logging.NullHandler())


def setup_logging():
    """
    Initialize centralized logging configuration.

    Call this function once at application startup (in run.py).

    Configuration:
    - Log level from config.LOG_LEVEL (DEBUG, INFO, WARNING, ERROR)
    - Automatic rotation every midnight
    - Keeps logs for config.LOG_RETENTION_DAYS days
    - Masks secrets if config.LOG_MASK_SECRETS is True
    - Writes to logs/bot.log
    """
    log_dir = Path("logs")
    log_dir.mkdir(exist_ok=True)

    log_level_str = getattr(config, "LOG_LEVEL", "INFO")
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)
    retention_days = getattr(config, "LOG_RETENTION_DAYS", 5)
    mask_secrets = getattr(config, "LOG_MASK_SECRETS", True)

    formatter = logging.Formatter(
        fmt='%(asctime)s | %(name)-25s | %(levelname)-8s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    file_handler = logging.handlers.TimedRotatingFileHandler(
        filename=log_dir / "bot.log",
        when="midnight",
        interval=1,
        backupCount=retention_days,
        encoding="utf-8"
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(log_level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)

    if mask_secrets:
        file_handler.addFilter(SecretMaskingFilter())
        console_handler.addFilter(SecretMaskingFilter())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    silence_noisy_loggers()

    logging.info("=" * 80)
    logging.info(f"Logging initialized: Level={log_level_str}, Retention={retention_days} days, Masking={'ENABLED' if mask_secrets else 'DISABLED'}")
    logging.info("=" * 80)
