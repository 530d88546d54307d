"""
Tests for Error Handler Utility

Tests the centralized error handling system that converts
shop exceptions to localized user-friendly messages.
"""

from unittest.mock import patch

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
    AdminAccessDeniedException,
    ProductNotFoundException,
    ProductValidationException,
    ProductStoreException,
)
from utils.error_handler import handle_service_error


class TestErrorHandler:
    """Test error handling utility"""

    @patch('utils.error_handler.Localizator')
    def test_order_not_found_exception(self, mock_localizator):
        """Test OrderNotFoundException handling"""
        mock_localizator.get_text.return_value = "❌ Заказ не найден."

        exc = OrderNotFoundException(order_id="755e4f83-48d4-4057-8ebf-144532ff9693")
        result = handle_service_error(exc, BotEntity.ADMIN)

        mock_localizator.get_text.assert_called_with(BotEntity.ADMIN, "error_order_not_found")
        assert "не найден" in result

    def test_order_store_exception_reason_is_escaped_for_chat(self):
        """Test backend failure text is HTML-escaped for HTML chat messages"""
        exc = OrderStoreException("update_status", "value <none> rejected")
        result = handle_service_error(exc, escape_html=True)

        assert result == "❌ Ошибка: value &lt;none&gt; rejected"

    def test_reason_kept_verbatim_for_plain_text(self):
        """Test storefront toasts show the failure text as it is"""
        exc = OrderStoreException("update_status", "value <none> rejected & retried")
        result = handle_service_error(exc)

        assert result == "❌ Ошибка: value <none> rejected & retried"

    def test_order_creation_exception(self):
        exc = OrderCreationException("disk full")
        result = handle_service_error(exc)

        assert result == "Ошибка при оформлении заказа: disk full. Попробуйте ещё раз."

    def test_simple_exceptions(self):
        """Test exceptions without format parameters"""
        assert handle_service_error(EmptyCartException()) == "Корзина пуста"
        assert handle_service_error(UnknownOrderStatusException("готов", ["новый"])) == "❌ Неизвестный статус."
        assert handle_service_error(CartStorageException("cart-storage", "OOM")) == "Не удалось сохранить корзину"
        assert handle_service_error(CheckoutValidationException({"name": "too short"})) == \
            "Проверьте правильность заполнения формы"
        assert handle_service_error(AdminAccessDeniedException("user-1")) == "❌ Доступ запрещён."
        assert handle_service_error(ProductNotFoundException("cake-1")) == "❌ Товар не найден."
        assert handle_service_error(ProductValidationException({"price": "bad"})) == \
            "Проверьте правильность заполнения формы товара"
        assert handle_service_error(ProductStoreException("create_product", "disk full")) == "❌ Ошибка: disk full"

    def test_unmapped_exception_falls_back(self):
        """Test unknown exception types produce the generic message"""
        class SomethingElseException(BakeryShopException):
            pass

        result = handle_service_error(SomethingElseException("oops"))

        assert result == "❌ Что-то пошло не так. Попробуйте ещё раз."
