"""
Cart-related exceptions.
"""

from .base import BakeryShopException


class CartException(BakeryShopException):
    """Base exception for cart-related errors."""
    pass


class EmptyCartException(CartException):
    """Raised when trying to checkout with empty cart."""

    def __init__(self):
        super().__init__("Cart is empty")


class CartStorageException(CartException):
    """Raised when the cart snapshot cannot be written to storage."""

    def __init__(self, storage_key: str, reason: str):
        super().__init__(
            f"Failed to persist cart under '{storage_key}': {reason}",
            details={'storage_key': storage_key}
        )
        self.storage_key = storage_key
        self.reason = reason
