"""Tests for modules/grants/models.py."""

from datetime import datetime, timedelta, timezone

from modules.grants.models import CreateGrantRequest, GrantRecord, grant_id

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class TestGrantId:
    def test_normalizes_email(self):
        assert grant_id(" Ana@X.com ", "p1") == "ana@x.com::p1"


class TestGrantRecord:
    def test_without_expiry_is_active(self):
        grant = GrantRecord(id="a::p1", email="a@x.com", product_id="p1", created_at=NOW)
        assert grant.is_active(NOW + timedelta(days=3650)) is True

    def test_expiry_boundary(self):
        grant = GrantRecord(id="a::p1", email="a@x.com", product_id="p1",
                            created_at=NOW, expires_at=NOW + timedelta(hours=1))
        assert grant.is_active(NOW) is True
        assert grant.is_active(NOW + timedelta(hours=1)) is False

    def test_naive_datetimes_are_utc(self):
        grant = GrantRecord(id="a::p1", email="a@x.com", product_id="p1",
                            created_at=datetime(2024, 5, 1, 12, 0))
        assert grant.created_at == NOW

    def test_serializes_camel_case(self):
        grant = GrantRecord(id="a::p1", email="A@X.com", product_id="p1", created_at=NOW)
        data = grant.model_dump(by_alias=True)
        assert data["productId"] == "p1"
        assert data["email"] == "a@x.com"
        assert data["expiresAt"] is None


class TestCreateGrantRequest:
    def test_accepts_camel_case(self):
        body = CreateGrantRequest.model_validate({
            "email": " ana@example.com ",
            "productId": " p1 ",
            "expiresAt": "2030-01-01T00:00:00Z",
        })
        assert body.email == "ana@example.com"
        assert body.product_id == "p1"
        assert body.expires_at.year == 2030
