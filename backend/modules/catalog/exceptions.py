"""
Catalog module exceptions.
"""

from shared.exceptions import NotFoundError


class ProductNotFoundError(NotFoundError):
    """Raised when a product id does not exist."""

    def __init__(self, product_id: str):
        super().__init__(
            f"Product not found: {product_id}",
            code="product_not_found",
            details={"product_id": product_id},
        )
