"""
Unit Tests: CheckoutService

Tests for services/checkout.py covering:
- validate_form() - field errors shown next to the form fields
- calculate_total() - delivery surcharge
- place_order() / submit() - order storage, admin notification, cart reset
"""

import asyncio
from unittest.mock import patch, AsyncMock

import pytest
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from enums.delivery_type import DeliveryType
from enums.order_status import OrderStatus
from exceptions import CheckoutValidationException, EmptyCartException, OrderCreationException
from repositories.order import OrderRepository
from repositories.orderItem import OrderItemRepository
from services.checkout import CheckoutService

DELIVERY_FORM = {
    "name": "Анна",
    "phone": "+79991234567",
    "delivery_type": "delivery",
    "address": "ул. Ленина, 1, кв. 5",
    "comment": "Позвонить за час",
}

PICKUP_FORM = {
    "name": "Иван",
    "phone": "89991234567",
    "delivery_type": "pickup",
}


class TestValidateForm:
    """Test checkout form validation"""

    def test_valid_delivery_form(self):
        form = CheckoutService.validate_form(DELIVERY_FORM)

        assert form.delivery_type == DeliveryType.DELIVERY
        assert form.address == "ул. Ленина, 1, кв. 5"

    def test_pickup_needs_no_address(self):
        form = CheckoutService.validate_form(PICKUP_FORM)

        assert form.delivery_type == DeliveryType.PICKUP
        assert form.address is None

    def test_delivery_is_default(self):
        with pytest.raises(CheckoutValidationException) as exc_info:
            CheckoutService.validate_form({"name": "Анна", "phone": "+79991234567"})

        assert set(exc_info.value.errors) == {"address"}

    def test_all_field_errors_reported(self):
        with pytest.raises(CheckoutValidationException) as exc_info:
            CheckoutService.validate_form({"name": "А", "phone": "123", "delivery_type": "delivery",
                                           "address": "   "})

        assert exc_info.value.errors == {
            "name": "Имя должно содержать минимум 2 символа",
            "phone": "Введите корректный номер телефона",
            "address": "Адрес доставки обязателен",
        }

    def test_unknown_delivery_type(self):
        with pytest.raises(CheckoutValidationException) as exc_info:
            CheckoutService.validate_form({**PICKUP_FORM, "delivery_type": "courier"})

        assert exc_info.value.errors["delivery_type"] == "Выберите способ получения"


class TestTotals:
    """Test order total calculation"""

    def test_delivery_adds_fixed_cost(self, cart, big_cake):
        cart.add_item(big_cake)

        assert CheckoutService.calculate_total(cart, DeliveryType.DELIVERY) == pytest.approx(6300.0)

    def test_pickup_is_free(self, cart, big_cake):
        cart.add_item(big_cake)

        assert CheckoutService.calculate_total(cart, DeliveryType.PICKUP) == pytest.approx(6000.0)


class TestPlaceOrder:
    """Test order placement"""

    @pytest.mark.asyncio
    async def test_order_stored_notified_and_cart_cleared(self, test_session, cart, small_cake, cupcake):
        cart.add_item(small_cake)
        cart.add_item(cupcake)
        cart.update_quantity(cupcake.id, 2)
        form = CheckoutService.validate_form(DELIVERY_FORM)

        with patch('services.notification.NotificationService.send_message',
                   new=AsyncMock(return_value=True)) as mock_send:
            order = await CheckoutService.place_order(cart, form)
            await asyncio.sleep(0)

        assert order.status == OrderStatus.PENDING
        assert order.total == pytest.approx(5000.0 + 500.0 + 300.0)
        assert cart.is_empty()

        stored_orders = await OrderRepository.get_all(test_session)
        assert [stored.id for stored in stored_orders] == [order.id]
        assert stored_orders[0].delivery_address == "ул. Ленина, 1, кв. 5"
        assert stored_orders[0].comment == "Позвонить за час"

        stored_items = await OrderItemRepository.get_by_order_ids([order.id], test_session)
        assert sorted((item.product_id, item.quantity, item.price) for item in stored_items) == [
            ("cake-napoleon", 1, 3000.0),
            ("cupcake-vanilla", 2, 250.0),
        ]

        mock_send.assert_awaited_once()
        text = mock_send.await_args.args[0]
        assert order.id in text
        assert "Наполеон × 1" in text
        assert "Ванильный капкейк × 2 = 500 ₽" in text
        assert "5800 ₽" in text

    @pytest.mark.asyncio
    async def test_pickup_drops_address(self, test_session, cart, big_cake):
        cart.add_item(big_cake)
        form = CheckoutService.validate_form({**PICKUP_FORM, "address": "ул. Мира, 3"})

        with patch('services.notification.NotificationService.send_message', new=AsyncMock(return_value=True)):
            order = await CheckoutService.place_order(cart, form)
            await asyncio.sleep(0)

        assert order.delivery_address is None
        assert order.total == pytest.approx(6000.0)

    @pytest.mark.asyncio
    async def test_empty_cart_rejected(self, test_session_maker, cart):
        form = CheckoutService.validate_form(PICKUP_FORM)

        with pytest.raises(EmptyCartException):
            await CheckoutService.place_order(cart, form)

    @pytest.mark.asyncio
    async def test_store_failure_keeps_cart(self, test_session, cart, big_cake):
        cart.add_item(big_cake)
        form = CheckoutService.validate_form(PICKUP_FORM)
        failure = OperationalError("INSERT INTO order_items", {}, Exception("disk I/O error"))

        with patch('services.checkout.OrderItemRepository.create_many', new=AsyncMock(side_effect=failure)), \
                patch('services.notification.NotificationService.send_message',
                      new=AsyncMock(return_value=True)) as mock_send:
            with pytest.raises(OrderCreationException):
                await CheckoutService.place_order(cart, form)

        assert not cart.is_empty()
        assert await OrderRepository.get_all(test_session) == []
        mock_send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failed_notification_does_not_fail_order(self, test_session, cart, big_cake):
        cart.add_item(big_cake)
        form = CheckoutService.validate_form(PICKUP_FORM)

        with patch('services.notification.get_bot') as mock_get_bot:
            mock_get_bot.return_value.send_message = AsyncMock(side_effect=RuntimeError("Telegram is down"))
            order = await CheckoutService.place_order(cart, form)
            await asyncio.sleep(0)

        mock_get_bot.return_value.send_message.assert_awaited_once()

        assert order.id is not None
        assert cart.is_empty()


class TestSubmit:
    """Test the storefront checkout entry point"""

    @pytest.mark.asyncio
    async def test_success_message(self, test_session_maker, cart, cupcake):
        cart.add_item(cupcake)

        with patch('services.notification.NotificationService.send_message', new=AsyncMock(return_value=True)):
            success, message = await CheckoutService.submit(cart, PICKUP_FORM)
            await asyncio.sleep(0)

        assert success is True
        assert message == "Заказ успешно оформлен! Мы свяжемся с вами в ближайшее время."

    @pytest.mark.asyncio
    async def test_empty_cart_message(self, test_session_maker, cart):
        assert await CheckoutService.submit(cart, PICKUP_FORM) == (False, "Корзина пуста")

    @pytest.mark.asyncio
    async def test_failure_message(self, test_session_maker, cart, cupcake):
        cart.add_item(cupcake)
        failure = OperationalError("INSERT INTO orders", {}, Exception("no such table: orders"))

        with patch('services.checkout.OrderRepository.create', new=AsyncMock(side_effect=failure)):
            success, message = await CheckoutService.submit(cart, PICKUP_FORM)

        assert success is False
        assert message.startswith("Ошибка при оформлении заказа: ")
        assert "no such table" in message
        assert message.endswith("Попробуйте ещё раз.")
        assert not cart.is_empty()

    @pytest.mark.asyncio
    async def test_failure_text_is_not_html_escaped(self, test_session_maker, cart, cupcake):
        """Toasts render plain text, markup characters stay as they are"""
        cart.add_item(cupcake)
        failure = SQLAlchemyError("CHECK constraint failed: total > 0 & total < 1000000")

        with patch('services.checkout.OrderRepository.create', new=AsyncMock(side_effect=failure)):
            success, message = await CheckoutService.submit(cart, PICKUP_FORM)

        assert success is False
        assert "total > 0 & total < 1000000" in message
        assert "&lt;" not in message

    @pytest.mark.asyncio
    async def test_validation_errors_propagate(self, cart, cupcake):
        cart.add_item(cupcake)

        with pytest.raises(CheckoutValidationException):
            await CheckoutService.submit(cart, {"name": "", "phone": ""})
