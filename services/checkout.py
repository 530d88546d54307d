import logging

from pydantic import BaseModel, Field, ValidationError, ValidationInfo, field_validator
from sqlalchemy.exc import SQLAlchemyError

import config
from db import get_db_session
from enums.bot_entity import BotEntity
from enums.delivery_type import DeliveryType
from enums.order_status import OrderStatus
from exceptions import (
    BakeryShopException,
    CartStorageException,
    CheckoutValidationException,
    EmptyCartException,
    OrderCreationException,
)
from models.order import OrderDTO
from models.orderItem import OrderItemDTO
from repositories.order import OrderRepository
from repositories.orderItem import OrderItemRepository
from services.cart import CartService
from services.notification import NotificationService
from utils.error_handler import handle_service_error
from utils.localizator import Localizator

logger = logging.getLogger(__name__)

# Form field -> message shown next to that field
FIELD_ERROR_KEYS = {
    "name": "checkout_name_too_short",
    "phone": "checkout_phone_invalid",
    "delivery_type": "checkout_delivery_type_invalid",
    "address": "checkout_address_required",
}


class CheckoutFormDTO(BaseModel):
    name: str = Field(min_length=2)
    phone: str = Field(min_length=10)
    delivery_type: DeliveryType = DeliveryType.DELIVERY
    address: str | None = Field(default=None, validate_default=True)
    comment: str | None = None

    @field_validator("address")
    @classmethod
    def address_required_for_delivery(cls, address: str | None, info: ValidationInfo) -> str | None:
        if info.data.get("delivery_type") == DeliveryType.DELIVERY:
            if address is None or len(address.strip()) == 0:
                raise ValueError("delivery address is required")
        return address


class CheckoutService:

    @staticmethod
    def validate_form(form_data: dict) -> CheckoutFormDTO:
        """
        Validate raw checkout form input.

        Raises:
            CheckoutValidationException: errors maps each invalid field to its localized message
        """
        try:
            return CheckoutFormDTO.model_validate(form_data)
        except ValidationError as e:
            errors = {}
            for error in e.errors():
                field = str(error["loc"][0]) if error["loc"] else "form"
                if field in errors:
                    continue
                key = FIELD_ERROR_KEYS.get(field)
                errors[field] = Localizator.get_text(BotEntity.USER, key) if key else error["msg"]
            raise CheckoutValidationException(errors) from e

    @staticmethod
    def get_delivery_cost(delivery_type: DeliveryType) -> float:
        return config.DELIVERY_COST if delivery_type == DeliveryType.DELIVERY else 0.0

    @staticmethod
    def calculate_total(cart: CartService, delivery_type: DeliveryType) -> float:
        return cart.get_total() + CheckoutService.get_delivery_cost(delivery_type)

    @staticmethod
    async def place_order(cart: CartService, form: CheckoutFormDTO, user_id: str | None = None) -> OrderDTO:
        """
        Store the order and its line items, notify the admin chat, clear the cart.

        The cart is left untouched when storing fails.

        Raises:
            EmptyCartException: Cart has no items
            OrderCreationException: The order store rejected the order or its items
        """
        if cart.is_empty():
            raise EmptyCartException()

        cart_items = cart.items
        order_dto = OrderDTO(
            user_id=user_id,
            name=form.name,
            phone=form.phone,
            delivery_type=form.delivery_type,
            delivery_address=form.address if form.delivery_type == DeliveryType.DELIVERY else None,
            comment=form.comment or None,
            total=CheckoutService.calculate_total(cart, form.delivery_type),
            status=OrderStatus.PENDING,
        )

        try:
            async with get_db_session() as session:
                order = await OrderRepository.create(order_dto, session)
                order_items = [
                    OrderItemDTO(order_id=order.id, product_id=item.id, quantity=item.quantity, price=item.price)
                    for item in cart_items
                ]
                await OrderItemRepository.create_many(order_items, session)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Order creation error: {e}")
            raise OrderCreationException(str(e)) from e

        logger.info(f"[Checkout] Order {order.id} created: {len(order_items)} positions, total={order.total}")

        for order_item, cart_item in zip(order_items, cart_items):
            order_item.product_name = cart_item.name
        NotificationService.new_order(order, order_items)

        try:
            cart.clear_cart()
        except CartStorageException as e:
            # The order is stored at this point, a failed clear is only logged
            logger.error(f"[Checkout] Order {order.id} placed but cart was not cleared: {e}")
        return order

    @staticmethod
    async def submit(cart: CartService, form_data: dict, user_id: str | None = None) -> tuple[bool, str]:
        """
        Checkout entry point for the storefront.

        Validation errors are raised as CheckoutValidationException so the form
        can show them next to the fields. Any other failure is converted into
        the toast text.

        Returns:
            (success, message)
        """
        form = CheckoutService.validate_form(form_data)
        try:
            await CheckoutService.place_order(cart, form, user_id)
        except BakeryShopException as e:
            return False, handle_service_error(e)
        return True, Localizator.get_text(BotEntity.USER, "checkout_success")
