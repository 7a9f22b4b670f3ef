"""Tests for api/dependencies.py."""

from unittest.mock import MagicMock, patch

import pytest

from api.dependencies import ServiceContainer, get_container, reset_container, set_container
from modules.auth.repository import InMemoryUserRepository, UserRepository
from modules.grants.repository import InMemoryGrantRepository
from modules.notifications.transports import LogEmailTransport, ResendEmailTransport
from shared.config import Settings


def _settings(**overrides) -> Settings:
    values = {"_env_file": None, "storage_backend": "memory", "jwt_secret": "test-secret"}
    values.update(overrides)
    return Settings(**values)


class TestServiceContainer:
    def test_memory_backend(self):
        container = ServiceContainer(_settings())

        assert isinstance(container.users, InMemoryUserRepository)
        assert isinstance(container.grant_repository, InMemoryGrantRepository)

    def test_services_are_cached(self):
        container = ServiceContainer(_settings())

        assert container.auth is container.auth
        assert container.grants is container.grants
        assert container.verification._users is container.users

    def test_reset_clears_services(self):
        container = ServiceContainer(_settings())
        first = container.auth

        container.reset()

        assert container.auth is not first

    @patch("shared.database.get_supabase_client")
    def test_supabase_backend(self, mock_client):
        mock_client.return_value = MagicMock()
        container = ServiceContainer(_settings(storage_backend="supabase"))

        assert isinstance(container.users, UserRepository)

    @patch("shared.database.check_connection")
    @patch("shared.database.get_supabase_client")
    def test_check_storage_queries_supabase(self, mock_client, mock_check):
        container = ServiceContainer(_settings(storage_backend="supabase"))

        container.check_storage()

        mock_check.assert_called_once_with(mock_client.return_value)

    @patch("shared.database.check_connection")
    @patch("shared.database.get_supabase_client")
    def test_check_storage_failure_propagates(self, mock_client, mock_check):
        mock_check.side_effect = ConnectionError("unreachable")
        container = ServiceContainer(_settings(storage_backend="supabase"))

        with pytest.raises(ConnectionError):
            container.check_storage()

    def test_log_transport_by_default(self):
        container = ServiceContainer(_settings())
        assert isinstance(container.mailer.transport, LogEmailTransport)

    def test_log_transport_refused_in_production(self):
        container = ServiceContainer(_settings(environment="production", email_transport="log"))
        with pytest.raises(ValueError, match="production"):
            container.mailer

    def test_resend_transport_allowed_in_production(self):
        container = ServiceContainer(
            _settings(environment="production", email_transport="resend", resend_api_key="re_test")
        )
        assert isinstance(container.mailer.transport, ResendEmailTransport)

    def test_resend_transport_when_configured(self):
        container = ServiceContainer(_settings(email_transport="resend", resend_api_key="re_test"))
        assert isinstance(container.mailer.transport, ResendEmailTransport)

    def test_resend_transport_requires_key(self):
        container = ServiceContainer(_settings(email_transport="resend", resend_api_key=""))
        with pytest.raises(ValueError):
            container.mailer

    def test_admin_policy_from_settings(self):
        container = ServiceContainer(_settings(admin_emails="Boss@Example.com"))
        assert container.admin_policy.is_admin_email("boss@example.com")


class TestContainerSingleton:
    def teardown_method(self):
        reset_container()

    def test_set_and_reset(self):
        container = ServiceContainer(_settings())
        set_container(container)

        assert get_container() is container

        reset_container()
        assert get_container() is not container
