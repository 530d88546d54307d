"""
Product catalog exceptions.
"""

from .base import BakeryShopException


class ProductException(BakeryShopException):
    """Base exception for product-related errors."""
    pass


class ProductNotFoundException(ProductException):
    """Raised when product is not found in the catalog."""

    def __init__(self, product_id: str):
        super().__init__(
            f"Product {product_id} not found",
            details={'product_id': product_id}
        )
        self.product_id = product_id


class ProductValidationException(ProductException):
    """
    Raised when the admin product form is invalid.

    Attributes:
        errors: field name -> message
    """

    def __init__(self, errors: dict[str, str]):
        super().__init__(
            f"Invalid product form: {', '.join(errors)}",
            details={'errors': errors}
        )
        self.errors = errors


class ProductStoreException(ProductException):
    """Raised when reading or writing the product catalog fails."""

    def __init__(self, operation: str, reason: str):
        super().__init__(
            reason,
            details={'operation': operation}
        )
        self.operation = operation
        self.reason = reason
