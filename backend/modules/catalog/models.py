"""
Catalog module data models.
"""

from datetime import datetime
from typing import Optional

from shared.models import ApiModel


class Product(ApiModel):
    """A catalog item that can be granted to users."""

    id: str
    title: str
    slug: str
    description: Optional[str] = None
    media_url: Optional[str] = None
    thumbnail: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    price: Optional[float] = None
    active: bool = False
    created_at: datetime
    updated_at: Optional[datetime] = None


class ProductListResponse(ApiModel):
    products: list[Product]
