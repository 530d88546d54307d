"""
Custom exceptions for the bakery shop.

Exception Hierarchy:
--------------------
BakeryShopException (base)
├── OrderException
│   ├── OrderNotFoundException
│   ├── UnknownOrderStatusException
│   └── OrderStoreException
├── CartException
│   ├── EmptyCartException
│   └── CartStorageException
├── CheckoutException
│   ├── CheckoutValidationException
│   └── OrderCreationException
├── ProductException
│   ├── ProductNotFoundException
│   ├── ProductValidationException
│   └── ProductStoreException
└── UserException
    └── AdminAccessDeniedException

Usage:
------
Services raise specific exceptions:
    raise OrderNotFoundException(order_id="755e4f83-...")

Handlers catch and display user-friendly messages:
    try:
        reply = await OrderCommandService.apply(command)
    except OrderNotFoundException as e:
        await message.reply(handle_service_error(e, BotEntity.ADMIN, escape_html=True))
"""

from .base import BakeryShopException
from .cart import CartException, EmptyCartException, CartStorageException
from .checkout import CheckoutException, CheckoutValidationException, OrderCreationException
from .order import (
    OrderException,
    OrderNotFoundException,
    UnknownOrderStatusException,
    OrderStoreException,
)
from .product import (
    ProductException,
    ProductNotFoundException,
    ProductValidationException,
    ProductStoreException,
)
from .user import UserException, AdminAccessDeniedException

__all__ = [
    # Base
    'BakeryShopException',

    # Cart
    'CartException',
    'EmptyCartException',
    'CartStorageException',

    # Checkout
    'CheckoutException',
    'CheckoutValidationException',
    'OrderCreationException',

    # Order
    'OrderException',
    'OrderNotFoundException',
    'UnknownOrderStatusException',
    'OrderStoreException',

    # Product
    'ProductException',
    'ProductNotFoundException',
    'ProductValidationException',
    'ProductStoreException',

    # User
    'UserException',
    'AdminAccessDeniedException',
]
