"""Tests for modules/grants/service.py."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from modules.catalog.exceptions import ProductNotFoundError
from modules.catalog.models import Product
from modules.catalog.repository import InMemoryProductRepository
from modules.catalog.service import CatalogService
from modules.grants.exceptions import GrantNotFoundError
from modules.grants.repository import InMemoryGrantRepository
from modules.grants.service import GrantService
from shared.exceptions import ValidationError

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _product(product_id: str, active: bool = True) -> Product:
    return Product(id=product_id, title=product_id.upper(), slug=product_id,
                   active=active, created_at=NOW - timedelta(days=1))


class TestGrantService:
    @pytest.fixture
    def clock(self):
        state = {"now": NOW}

        def now():
            state["now"] += timedelta(seconds=1)
            return state["now"]

        return now

    @pytest.fixture
    def service(self, clock):
        catalog = CatalogService(InMemoryProductRepository([
            _product("p1"),
            _product("p2"),
            _product("off", active=False),
        ]))
        return GrantService(InMemoryGrantRepository(), catalog, clock=clock)

    @pytest.mark.asyncio
    async def test_grant_is_case_insensitive(self, service):
        await service.grant("Ana@X.com", "p1")

        grants = await service.list_for_email("ana@x.com")

        assert len(grants) == 1
        assert grants[0].id == "ana@x.com::p1"
        assert grants[0].email == "ana@x.com"

    @pytest.mark.asyncio
    async def test_duplicate_grant_returns_existing(self, service):
        first = await service.grant("ana@x.com", "p1")
        second = await service.grant("ANA@x.com", "p1", expires_at=NOW + timedelta(days=9))

        assert second == first
        assert len(await service.list_all()) == 1

    @pytest.mark.asyncio
    async def test_concurrent_grants_converge(self, service):
        results = await asyncio.gather(*[service.grant("ana@x.com", "p1") for _ in range(10)])

        assert len({r.id for r in results}) == 1
        assert len({r.created_at for r in results}) == 1
        assert len(await service.list_for_email("ana@x.com")) == 1

    @pytest.mark.asyncio
    async def test_grant_unknown_product(self, service):
        with pytest.raises(ProductNotFoundError):
            await service.grant("ana@x.com", "ghost")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email,product_id", [("", "p1"), ("ana@x.com", ""), ("  ", "  ")])
    async def test_grant_requires_email_and_product(self, service, email, product_id):
        with pytest.raises(ValidationError):
            await service.grant(email, product_id)

    @pytest.mark.asyncio
    async def test_revoke(self, service):
        await service.grant("ana@x.com", "p1")

        assert await service.revoke("ANA@x.com", "p1") is True
        assert await service.list_for_email("ana@x.com") == []

    @pytest.mark.asyncio
    async def test_revoke_missing(self, service):
        assert await service.revoke("ana@x.com", "p1") is False
        with pytest.raises(GrantNotFoundError) as exc_info:
            await service.require_revoke("ana@x.com", "p1")
        assert exc_info.value.code == "grant_not_found"

    @pytest.mark.asyncio
    async def test_list_for_email_newest_first(self, service):
        await service.grant("ana@x.com", "p1")
        await service.grant("ana@x.com", "p2")

        assert [g.product_id for g in await service.list_for_email("ana@x.com")] == ["p2", "p1"]

    @pytest.mark.asyncio
    async def test_entitled_products(self, service):
        await service.grant("ana@x.com", "p1")
        await service.grant("ana@x.com", "p2")

        products = await service.entitled_products("Ana@X.com")

        assert [p.id for p in products] == ["p2", "p1"]

    @pytest.mark.asyncio
    async def test_expired_grant_is_hidden(self, service):
        await service.grant("ana@x.com", "p1", expires_at=NOW + timedelta(hours=1))
        await service.grant("ana@x.com", "p2")

        later = NOW + timedelta(hours=2)

        assert [p.id for p in await service.entitled_products("ana@x.com", now=later)] == ["p2"]
        assert await service.is_entitled("ana@x.com", "p1", now=later) is False
        assert await service.is_entitled("ana@x.com", "p1", now=NOW + timedelta(minutes=5)) is True

    @pytest.mark.asyncio
    async def test_inactive_product_is_hidden(self, service):
        await service.grant("ana@x.com", "off")

        assert await service.entitled_products("ana@x.com") == []
        assert await service.is_entitled("ana@x.com", "off") is False

    @pytest.mark.asyncio
    async def test_naive_expiry_is_treated_as_utc(self, service):
        grant = await service.grant("ana@x.com", "p1", expires_at=datetime(2030, 1, 1))
        assert grant.expires_at == datetime(2030, 1, 1, tzinfo=timezone.utc)
