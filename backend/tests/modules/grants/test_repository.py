"""Tests for modules/grants/repository.py."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from modules.grants.exceptions import GrantUpsertFailedError
from modules.grants.repository import GrantRepository, InMemoryGrantRepository

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class TestGrantRepository:
    @pytest.fixture
    def mock_db(self):
        return MagicMock()

    @pytest.fixture
    def repo(self, mock_db):
        return GrantRepository(mock_db)

    def test_upsert_is_insert_if_absent_then_read(self, repo, mock_db):
        table = mock_db.table.return_value
        table.select.return_value.eq.return_value.execute.return_value.data = [{
            "id": "ana@x.com::p1",
            "email": "ana@x.com",
            "product_id": "p1",
            "created_at": "2024-04-01T00:00:00+00:00",
            "expires_at": None,
        }]

        grant = repo.upsert("ana@x.com", "p1", None, NOW)

        row = table.upsert.call_args[0][0]
        assert row["id"] == "ana@x.com::p1"
        assert table.upsert.call_args.kwargs == {"on_conflict": "id", "ignore_duplicates": True}
        table.select.return_value.eq.assert_called_once_with("id", "ana@x.com::p1")
        # The stored (older) record wins
        assert grant.created_at == datetime(2024, 4, 1, tzinfo=timezone.utc)

    def test_upsert_read_back_miss(self, repo, mock_db):
        mock_db.table.return_value.select.return_value.eq.return_value.execute.return_value.data = []

        with pytest.raises(GrantUpsertFailedError) as exc_info:
            repo.upsert("ana@x.com", "p1", None, NOW)
        assert exc_info.value.code == "upsert_failed"

    def test_delete(self, repo, mock_db):
        delete = mock_db.table.return_value.delete.return_value
        delete.eq.return_value.execute.return_value.data = [{"id": "ana@x.com::p1"}]

        assert repo.delete("ana@x.com", "p1") is True
        delete.eq.assert_called_once_with("id", "ana@x.com::p1")

    def test_delete_missing(self, repo, mock_db):
        mock_db.table.return_value.delete.return_value.eq.return_value.execute.return_value.data = []
        assert repo.delete("ana@x.com", "p1") is False

    def test_list_for_email(self, repo, mock_db):
        select = mock_db.table.return_value.select.return_value
        select.eq.return_value.order.return_value.execute.return_value.data = []

        assert repo.list_for_email("ana@x.com") == []
        select.eq.assert_called_once_with("email", "ana@x.com")
        select.eq.return_value.order.assert_called_once_with("created_at", desc=True)


class TestInMemoryGrantRepository:
    @pytest.fixture
    def repo(self):
        return InMemoryGrantRepository()

    def test_duplicate_returns_existing(self, repo):
        first = repo.upsert("ana@x.com", "p1", None, NOW)
        second = repo.upsert("ana@x.com", "p1", NOW + timedelta(days=1), NOW + timedelta(hours=1))

        assert second == first
        assert len(repo.list_all()) == 1

    def test_delete(self, repo):
        repo.upsert("ana@x.com", "p1", None, NOW)
        assert repo.delete("ana@x.com", "p1") is True
        assert repo.delete("ana@x.com", "p1") is False

    def test_lists_newest_first(self, repo):
        repo.upsert("ana@x.com", "p1", None, NOW)
        repo.upsert("ana@x.com", "p2", None, NOW + timedelta(minutes=1))
        repo.upsert("bia@x.com", "p1", None, NOW + timedelta(minutes=2))

        assert [g.product_id for g in repo.list_for_email("ana@x.com")] == ["p2", "p1"]
        assert [g.id for g in repo.list_all()][0] == "bia@x.com::p1"
