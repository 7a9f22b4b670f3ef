"""
Catalog module interface.

The catalog is read-only here; products are managed directly in storage.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import Product


@runtime_checkable
class IProductRepository(Protocol):
    """Read access to products."""

    def get(self, product_id: str) -> Optional[Product]:
        """Get a product by id, active or not."""
        ...

    def list_active(self) -> list[Product]:
        """Active products, newest first."""
        ...

    def list_by_ids(self, product_ids: list[str]) -> list[Product]:
        """Products with the given ids, in no particular order. Unknown ids are skipped."""
        ...
