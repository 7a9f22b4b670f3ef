"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
Everything runs on the in-memory storage backend with the log email
transport, so no network is needed.
"""

import pytest
from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import ServiceContainer, reset_container, set_container
from modules.catalog import Product
from shared.config import Settings


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"
ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin-secret"


def make_product(product_id: str, active: bool = True, minutes_ago: int = 0, **overrides) -> Product:
    """Build a catalog product for tests."""
    data = {
        "id": product_id,
        "title": f"Product {product_id}",
        "slug": f"product-{product_id}",
        "active": active,
        "created_at": datetime.now(timezone.utc) - timedelta(minutes=minutes_ago),
    }
    data.update(overrides)
    return Product(**data)


@pytest.fixture
def settings() -> Settings:
    """Settings for an isolated in-memory deployment."""
    return Settings(
        _env_file=None,
        storage_backend="memory",
        jwt_secret=TEST_JWT_SECRET,
        bcrypt_rounds="8",
        admin_emails=f" {ADMIN_EMAIL.upper()} ",
        auto_seed_admin=True,
        admin_seed_password=ADMIN_PASSWORD,
        email_transport="log",
        public_base_url="http://testserver/api",
    )


@pytest.fixture
def container(settings: Settings):
    """Install a fresh service container for the test."""
    container = ServiceContainer(settings)
    set_container(container)
    yield container
    reset_container()


@pytest.fixture
def products(container: ServiceContainer) -> list[Product]:
    """Seed the catalog: two active products and one inactive."""
    items = [
        make_product("p1", minutes_ago=30),
        make_product("p2", minutes_ago=20),
        make_product("p3", active=False, minutes_ago=10),
    ]
    for item in items:
        container.products.add(item)
    return items


@pytest.fixture
def client(container: ServiceContainer, settings: Settings):
    """TestClient running the app lifespan (admin seed, mailer drain)."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def issue_headers(container: ServiceContainer):
    """Build authorization headers for an arbitrary identity."""

    def _issue(email: str, name: str = "Test User", ttl: timedelta | None = None) -> dict[str, str]:
        token = container.tokens.issue({"sub": email, "name": name}, ttl=ttl)
        return {"Authorization": f"Bearer {token}"}

    return _issue


@pytest.fixture
def admin_headers(issue_headers) -> dict[str, str]:
    """Authorization headers for the allow-listed admin."""
    return issue_headers(ADMIN_EMAIL, name="Admin")


@pytest.fixture
def user_headers(issue_headers) -> dict[str, str]:
    """Authorization headers for a regular user."""
    return issue_headers("test@example.com")
