"""
Catalog module.

Read-only access to products.

Public API:
- IProductRepository: Interface for product storage
- CatalogService: Async lookups used by routes and grants
- Product: Product model
- ProductNotFoundError
"""

from .interfaces import IProductRepository
from .models import Product, ProductListResponse
from .exceptions import ProductNotFoundError
from .service import CatalogService
from .repository import ProductRepository, InMemoryProductRepository

__all__ = [
    # Interface
    "IProductRepository",
    # Models
    "Product",
    "ProductListResponse",
    # Implementations
    "CatalogService",
    "ProductRepository",
    "InMemoryProductRepository",
    # Exceptions
    "ProductNotFoundError",
]
