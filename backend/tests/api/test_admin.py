"""Tests for the /admin endpoints."""

import pytest


class TestAdminAccess:
    @pytest.mark.parametrize("method,path", [
        ("get", "/api/admin/ping"),
        ("get", "/api/admin/users"),
        ("get", "/api/admin/grants"),
        ("delete", "/api/admin/grants?email=a@x.com&productId=p1"),
    ])
    def test_unauthenticated(self, client, method, path):
        response = getattr(client, method)(path)

        assert response.status_code == 401
        assert response.json()["error"] == "missing_token"

    def test_non_admin_is_forbidden_not_unauthenticated(self, client, user_headers):
        response = client.get("/api/admin/ping", headers=user_headers)

        assert response.status_code == 403
        assert response.json()["error"] == "forbidden"

    def test_is_admin_claim_is_not_trusted(self, client, container):
        token = container.tokens.issue({"sub": "mallory@example.com", "is_admin": True})

        response = client.get("/api/admin/ping", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403

    def test_admin_ping(self, client, admin_headers):
        response = client.get("/api/admin/ping", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"ok": True, "role": "admin", "email": "admin@example.com"}


class TestAdminUsers:
    def test_lists_users(self, client, admin_headers):
        client.post("/api/auth/signup", json={"name": "Ana", "email": "ana@x.com", "password": "secret1"})

        response = client.get("/api/admin/users", headers=admin_headers)

        assert response.status_code == 200
        emails = {u["email"] for u in response.json()["users"]}
        assert emails == {"admin@example.com", "ana@x.com"}
        assert all("passwordHash" not in u for u in response.json()["users"])


class TestAdminGrants:
    def test_create_grant(self, client, products, admin_headers):
        response = client.post(
            "/api/admin/grants",
            headers=admin_headers,
            json={"email": "Ana@X.com", "productId": "p1"},
        )

        assert response.status_code == 201
        grant = response.json()["grant"]
        assert grant["id"] == "ana@x.com::p1"
        assert grant["productId"] == "p1"
        assert grant["expiresAt"] is None

    def test_duplicate_grant_returns_existing(self, client, products, admin_headers):
        body = {"email": "ana@x.com", "productId": "p1"}
        first = client.post("/api/admin/grants", headers=admin_headers, json=body).json()["grant"]
        second = client.post(
            "/api/admin/grants",
            headers=admin_headers,
            json={**body, "expiresAt": "2030-01-01T00:00:00Z"},
        ).json()["grant"]

        assert second == first

    def test_grant_unknown_product(self, client, products, admin_headers):
        response = client.post(
            "/api/admin/grants",
            headers=admin_headers,
            json={"email": "ana@x.com", "productId": "ghost"},
        )

        assert response.status_code == 404
        assert response.json()["error"] == "product_not_found"

    def test_grant_validation(self, client, admin_headers):
        response = client.post("/api/admin/grants", headers=admin_headers, json={"email": "nope"})

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_list_grants_by_email_case_insensitive(self, client, products, admin_headers):
        client.post("/api/admin/grants", headers=admin_headers, json={"email": "Ana@X.com", "productId": "p1"})
        client.post("/api/admin/grants", headers=admin_headers, json={"email": "bia@x.com", "productId": "p2"})

        by_email = client.get("/api/admin/grants", params={"email": "ANA@x.com"}, headers=admin_headers)
        everything = client.get("/api/admin/grants", headers=admin_headers)

        assert [g["id"] for g in by_email.json()["grants"]] == ["ana@x.com::p1"]
        assert len(everything.json()["grants"]) == 2

    def test_revoke_grant(self, client, products, admin_headers):
        client.post("/api/admin/grants", headers=admin_headers, json={"email": "ana@x.com", "productId": "p1"})

        response = client.delete(
            "/api/admin/grants",
            params={"email": "ANA@x.com", "productId": "p1"},
            headers=admin_headers,
        )

        assert response.status_code == 204
        listed = client.get("/api/admin/grants", params={"email": "ana@x.com"}, headers=admin_headers)
        assert listed.json()["grants"] == []

    def test_revoke_missing_grant(self, client, admin_headers):
        response = client.delete(
            "/api/admin/grants",
            params={"email": "ana@x.com", "productId": "p1"},
            headers=admin_headers,
        )

        assert response.status_code == 404
        assert response.json()["error"] == "grant_not_found"

    def test_granted_product_shows_in_library(self, client, products, admin_headers, issue_headers):
        client.post("/api/admin/grants", headers=admin_headers, json={"email": "Ana@X.com", "productId": "p2"})

        response = client.get("/api/library/me/products", headers=issue_headers("ana@x.com"))

        assert [p["id"] for p in response.json()["products"]] == ["p2"]
