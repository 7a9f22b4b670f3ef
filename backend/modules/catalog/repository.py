"""
Product repositories.

`ProductRepository` reads the Supabase `products` table;
`InMemoryProductRepository` backs tests and local development.
"""

import threading
from typing import Any, Optional

from shared.repository import BaseRepository

from .models import Product

TABLE = "products"


class ProductRepository(BaseRepository[Product]):
    """Repository for product data access."""

    def get(self, product_id: str) -> Optional[Product]:
        result = self._db.table(TABLE).select("*").eq("id", product_id).execute()
        if not result.data:
            return None
        return self._map_to_product(result.data[0])

    def list_active(self) -> list[Product]:
        result = (
            self._db.table(TABLE)
            .select("*")
            .eq("active", True)
            .order("created_at", desc=True)
            .execute()
        )
        return [self._map_to_product(row) for row in result.data]

    def list_by_ids(self, product_ids: list[str]) -> list[Product]:
        if not product_ids:
            return []
        result = self._db.table(TABLE).select("*").in_("id", list(product_ids)).execute()
        return [self._map_to_product(row) for row in result.data]

    def _map_to_product(self, data: dict[str, Any]) -> Product:
        """Map a database row to a Product."""
        return Product(
            id=str(data["id"]),
            title=data["title"],
            slug=data["slug"],
            description=data.get("description"),
            media_url=data.get("media_url"),
            thumbnail=data.get("thumbnail"),
            category=data.get("category"),
            subcategory=data.get("subcategory"),
            price=float(data["price"]) if data.get("price") is not None else None,
            active=bool(data.get("active", False)),
            created_at=self._parse_datetime(data["created_at"]),
            updated_at=self._parse_datetime(data.get("updated_at")),
        )


class InMemoryProductRepository:
    """In-memory product store."""

    def __init__(self, products: Optional[list[Product]] = None) -> None:
        self._lock = threading.Lock()
        self._products: dict[str, Product] = {}
        for product in products or []:
            self.add(product)

    def add(self, product: Product) -> Product:
        with self._lock:
            self._products[product.id] = product
        return product

    def get(self, product_id: str) -> Optional[Product]:
        with self._lock:
            return self._products.get(product_id)

    def list_active(self) -> list[Product]:
        with self._lock:
            active = [p for p in self._products.values() if p.active]
        return sorted(active, key=lambda p: p.created_at, reverse=True)

    def list_by_ids(self, product_ids: list[str]) -> list[Product]:
        with self._lock:
            return [self._products[pid] for pid in product_ids if pid in self._products]
