"""
User-related exceptions.
"""

from .base import BakeryShopException


class UserException(BakeryShopException):
    """Base exception for user-related errors."""
    pass


class AdminAccessDeniedException(UserException):
    """Raised when a storefront user without the admin role calls an admin operation."""

    def __init__(self, user_id: str | None):
        super().__init__(
            f"User {user_id} is not an admin",
            details={'user_id': user_id}
        )
        self.user_id = user_id
