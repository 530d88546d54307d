import json
from functools import lru_cache
from pathlib import Path
from typing import Optional

import config
from enums.bot_entity import BotEntity
from enums.delivery_type import DeliveryType
from enums.order_status import OrderStatus

L10N_DIR = Path(__file__).resolve().parent.parent / "l10n"


@lru_cache(maxsize=None)
def _load_localization(language: str) -> dict:
    with open(L10N_DIR / f"{language}.json", "r", encoding="UTF-8") as f:
        return json.loads(f.read())


class Localizator:

    @staticmethod
    def get_text(entity: BotEntity, key: str, lang: Optional[str] = None) -> str:
        """
        Get localized text for given entity and key.

        Args:
            entity: Entity type (ADMIN, USER, COMMON)
            key: Localization key
            lang: Optional language code. If None, uses config.BOT_LANGUAGE.

        Returns:
            Localized text string
        """
        language = lang if lang is not None else config.BOT_LANGUAGE
        data = _load_localization(language)
        if entity == BotEntity.ADMIN:
            return data["admin"][key]
        elif entity == BotEntity.USER:
            return data["user"][key]
        else:
            return data["common"][key]

    @staticmethod
    def get_status_label(status: OrderStatus | str | None, lang: Optional[str] = None) -> str:
        # Unknown or missing statuses are shown as new orders
        try:
            status = OrderStatus(status)
        except ValueError:
            status = OrderStatus.PENDING
        return Localizator.get_text(BotEntity.COMMON, f"status_{status.value}", lang=lang)

    @staticmethod
    def get_delivery_type_label(delivery_type: DeliveryType | str, lang: Optional[str] = None) -> str:
        return Localizator.get_text(BotEntity.COMMON, f"delivery_type_{DeliveryType(delivery_type).value}", lang=lang)

    @staticmethod
    def get_currency_symbol(lang: Optional[str] = None) -> str:
        return Localizator.get_text(BotEntity.COMMON, "rub_symbol", lang=lang)
