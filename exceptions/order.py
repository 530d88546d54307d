"""
Order-related exceptions.
"""

from .base import BakeryShopException


class OrderException(BakeryShopException):
    """Base exception for order-related errors."""
    pass


class OrderNotFoundException(OrderException):
    """Raised when order is not found in the order store."""

    def __init__(self, order_id: str):
        super().__init__(
            f"Order {order_id} not found",
            details={'order_id': order_id}
        )
        self.order_id = order_id


class UnknownOrderStatusException(OrderException):
    """Raised when a status label does not map to any OrderStatus."""

    def __init__(self, label: str, allowed_labels: list[str]):
        super().__init__(
            f"Unknown order status '{label}', allowed: {', '.join(allowed_labels)}",
            details={'label': label, 'allowed_labels': allowed_labels}
        )
        self.label = label
        self.allowed_labels = allowed_labels


class OrderStoreException(OrderException):
    """Raised when reading or writing the order store fails."""

    def __init__(self, operation: str, reason: str):
        super().__init__(
            reason,
            details={'operation': operation}
        )
        self.operation = operation
        self.reason = reason
