"""
Checkout-related exceptions.
"""

from .base import BakeryShopException


class CheckoutException(BakeryShopException):
    """Base exception for checkout errors."""
    pass


class CheckoutValidationException(CheckoutException):
    """
    Raised when the checkout form is invalid.

    errors maps a form field name to the message shown next to that field.
    """

    def __init__(self, errors: dict[str, str]):
        super().__init__(
            f"Invalid checkout form: {', '.join(sorted(errors))}",
            details={'fields': sorted(errors)}
        )
        self.errors = errors


class OrderCreationException(CheckoutException):
    """Raised when the order or its line items could not be stored."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
