"""
Single-retry paths: public share reads and the daily log upsert race.
Run with: python3 -m pytest tests/
"""

from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError


class TestRetryOnce:
    def test_transient_error_then_success(self):
        from app.services.public_share_service import retry_once
        from app.utils.errors import TransientIOError
        calls = []

        def flaky():
            calls.append(1)
            if len(calls) == 1:
                raise TransientIOError("Failed to load shared logs")
            return "ok"

        assert retry_once("load shared logs", flaky) == "ok"
        assert len(calls) == 2

    def test_two_failures_propagate(self):
        from app.services.public_share_service import retry_once
        from app.utils.errors import TransientIOError
        calls = []

        def down():
            calls.append(1)
            raise TransientIOError("Failed to load shared profile")

        with pytest.raises(TransientIOError):
            retry_once("load shared profile", down)
        assert len(calls) == 2

    def test_other_errors_are_not_retried(self):
        from app.services.public_share_service import retry_once
        from app.utils.errors import ShareLinkError
        calls = []

        def invalid():
            calls.append(1)
            raise ShareLinkError("Invalid share link")

        with pytest.raises(ShareLinkError):
            retry_once("load shared profile", invalid)
        assert len(calls) == 1


class FakeSession:
    def __init__(self):
        self.rollbacks = 0

    def rollback(self):
        self.rollbacks += 1


class TestUpsertRace:
    def test_integrity_error_retries_as_update(self, monkeypatch):
        from app.services.daily_log_repository import DailyLogRepository
        db = FakeSession()
        repo = DailyLogRepository(db, user_id=1, storage=object())
        attempts = []

        def write(log_date, values):
            attempts.append(values)
            if len(attempts) == 1:
                raise IntegrityError("INSERT INTO daily_logs", {}, Exception("UNIQUE constraint failed"))
            return type("Saved", (), {"id": 7})()

        monkeypatch.setattr(repo, "_write", write)

        saved = repo.upsert(date(2024, 3, 1), {"diet": 1.0, "not_a_field": "dropped"})

        assert saved.id == 7
        assert len(attempts) == 2
        assert attempts[1] == {"diet": 1.0}
        assert db.rollbacks == 1

    def test_repeated_integrity_error_is_transient(self, monkeypatch):
        from app.services.daily_log_repository import DailyLogRepository
        from app.utils.errors import TransientIOError
        db = FakeSession()
        repo = DailyLogRepository(db, user_id=1, storage=object())

        def write(log_date, values):
            raise IntegrityError("INSERT INTO daily_logs", {}, Exception("UNIQUE constraint failed"))

        monkeypatch.setattr(repo, "_write", write)

        with pytest.raises(TransientIOError):
            repo.upsert(date(2024, 3, 1), {"diet": 1.0})
        assert db.rollbacks == 2
