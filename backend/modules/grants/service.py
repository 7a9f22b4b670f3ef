"""
Grant service implementation.

Owns the entitlement rules: identities are normalized emails, a grant is
idempotent per (email, product), and a product is visible to a user iff it
is active and covered by an unexpired grant.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from starlette.concurrency import run_in_threadpool

from shared.exceptions import ValidationError
from shared.models import normalize_email, utc_now
from modules.catalog import CatalogService, Product

from .exceptions import GrantNotFoundError
from .interfaces import IGrantRepository
from .models import GrantRecord, as_utc

logger = logging.getLogger(__name__)


class GrantService:
    """Grant, revoke and query entitlements."""

    def __init__(
        self,
        grants: IGrantRepository,
        catalog: CatalogService,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._grants = grants
        self._catalog = catalog
        self._clock = clock

    async def grant(
        self,
        email: str,
        product_id: str,
        expires_at: Optional[datetime] = None,
    ) -> GrantRecord:
        """
        Grant `product_id` to `email`; a repeated grant returns the existing record.

        Raises:
            ValidationError: Empty email or product id
            ProductNotFoundError: Unknown product
        """
        email = normalize_email(email)
        product_id = (product_id or "").strip()
        if not email or not product_id:
            raise ValidationError(
                "email and productId are required",
                details={"email": email, "product_id": product_id},
            )

        await self._catalog.require(product_id)
        record = await run_in_threadpool(
            self._grants.upsert, email, product_id, as_utc(expires_at), self._clock()
        )
        logger.info(f"Granted {product_id} to {email}")
        return record

    async def revoke(self, email: str, product_id: str) -> bool:
        """Remove a grant; False if there was none."""
        email = normalize_email(email)
        product_id = (product_id or "").strip()
        removed = await run_in_threadpool(self._grants.delete, email, product_id)
        if removed:
            logger.info(f"Revoked {product_id} from {email}")
        return removed

    async def require_revoke(self, email: str, product_id: str) -> None:
        """
        Raises:
            GrantNotFoundError: If there was nothing to revoke
        """
        if not await self.revoke(email, product_id):
            raise GrantNotFoundError(normalize_email(email), product_id)

    async def list_for_email(self, email: str) -> list[GrantRecord]:
        return await run_in_threadpool(self._grants.list_for_email, normalize_email(email))

    async def list_all(self) -> list[GrantRecord]:
        return await run_in_threadpool(self._grants.list_all)

    async def entitled_products(
        self,
        email: str,
        now: Optional[datetime] = None,
    ) -> list[Product]:
        """
        Products the user may access right now, in grant order (newest first).

        Expired grants and inactive products are left out.
        """
        now = now or self._clock()
        grants = [g for g in await self.list_for_email(email) if g.is_active(now)]
        if not grants:
            return []

        products = await self._catalog.list_by_ids([g.product_id for g in grants])
        by_id = {p.id: p for p in products if p.active}
        return [by_id[g.product_id] for g in grants if g.product_id in by_id]

    async def is_entitled(
        self,
        email: str,
        product_id: str,
        now: Optional[datetime] = None,
    ) -> bool:
        now = now or self._clock()
        for grant in await self.list_for_email(email):
            if grant.product_id == product_id and grant.is_active(now):
                product = await self._catalog.get(product_id)
                return product is not None and product.active
        return False
