"""
Error Handler Utility

Converts shop exceptions into localized, user-facing messages.

Usage in handlers and service boundaries:
    from utils.error_handler import handle_service_error

    try:
        order = await CheckoutService.place_order(cart, form)
    except BakeryShopException as e:
        toast = handle_service_error(e)
"""

import logging

from enums.bot_entity import BotEntity
from exceptions import (
    BakeryShopException,
    OrderNotFoundException,
    UnknownOrderStatusException,
    OrderStoreException,
    EmptyCartException,
    CartStorageException,
    CheckoutValidationException,
    OrderCreationException,
    ProductNotFoundException,
    ProductValidationException,
    ProductStoreException,
    AdminAccessDeniedException,
)
from utils.html_escape import safe_html
from utils.localizator import Localizator


def handle_service_error(exception: BakeryShopException,
                         entity: BotEntity = BotEntity.COMMON,
                         escape_html: bool = False) -> str:
    """
    Convert service exception to localized user-friendly error message.

    Args:
        exception: The custom exception raised by a service
        entity: Bot entity for localization
        escape_html: Escape backend failure texts, for messages sent with HTML parse mode

    Returns:
        Localized error message string
    """
    logging.warning(f"Service error handled: {type(exception).__name__} - {str(exception)}")

    error_mapping = {
        OrderNotFoundException: "error_order_not_found",
        UnknownOrderStatusException: "error_unknown_status",
        OrderStoreException: "error_order_store",
        EmptyCartException: "error_empty_cart",
        CartStorageException: "error_cart_storage",
        CheckoutValidationException: "error_checkout_validation",
        OrderCreationException: "error_order_creation",
        ProductNotFoundException: "error_product_not_found",
        ProductValidationException: "error_product_validation",
        ProductStoreException: "error_product_store",
        AdminAccessDeniedException: "error_access_denied",
    }

    localization_key = error_mapping.get(type(exception))

    if not localization_key:
        logging.error(f"Unmapped exception type: {type(exception).__name__}")
        return Localizator.get_text(entity, "error_unexpected")

    exception_data = {}
    if hasattr(exception, 'order_id'):
        exception_data['order_id'] = exception.order_id
    if hasattr(exception, 'reason'):
        exception_data['reason'] = safe_html(exception.reason) if escape_html else exception.reason

    try:
        return Localizator.get_text(entity, localization_key).format(**exception_data)
    except KeyError as e:
        logging.error(f"Missing format parameter in error message: {e}")
        return Localizator.get_text(entity, localization_key)
