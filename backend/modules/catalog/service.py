"""
Catalog service.

Thin async facade over the product repository, used by the library
routes and by the grants module.
"""

from typing import Optional

from starlette.concurrency import run_in_threadpool

from .exceptions import ProductNotFoundError
from .interfaces import IProductRepository
from .models import Product


class CatalogService:
    def __init__(self, products: IProductRepository):
        self._products = products

    async def get(self, product_id: str) -> Optional[Product]:
        return await run_in_threadpool(self._products.get, product_id)

    async def require(self, product_id: str) -> Product:
        """
        Get a product that must exist.

        Raises:
            ProductNotFoundError: If the id is unknown
        """
        product = await self.get(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    async def list_active(self) -> list[Product]:
        return await run_in_threadpool(self._products.list_active)

    async def list_by_ids(self, product_ids: list[str]) -> list[Product]:
        return await run_in_threadpool(self._products.list_by_ids, product_ids)
