"""
Notification delivery: push first, in-app row as the fallback.
Run with: python3 -m pytest tests/
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker


@pytest.fixture
def session_factory(tmp_path):
    from app.models import database
    from app.models.notification import NotificationLog  # noqa: F401  registers the table
    engine = create_engine(f"sqlite:///{tmp_path / 'notify.db'}", connect_args={"check_same_thread": False})
    database.Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def store(tmp_path):
    from app.utils.local_store import LocalStore
    return LocalStore(str(tmp_path / "store.json"))


def stored_rows(session_factory):
    from app.models.notification import NotificationLog
    db = session_factory()
    try:
        return [(row.title, row.content, row.notification_type, row.delivered) for row in db.query(NotificationLog).all()]
    finally:
        db.close()


class TestShow:
    def test_push_when_token_registered(self, store, session_factory):
        from app.services.notification_platform import CHANNEL_PUSH, NotificationPlatform
        sent = []
        platform = NotificationPlatform(store, session_factory, push_sender=lambda **kw: sent.append(kw))
        platform.register_device_token("fcm-token-1")

        channel = platform.show("Reminder", "Log your day", icon="/pwa-192x192.png", tag="daily-reminder")

        assert channel == CHANNEL_PUSH
        assert sent[0]["token"] == "fcm-token-1"
        assert sent[0]["tag"] == "daily-reminder"
        assert stored_rows(session_factory) == []

    def test_failed_push_falls_back_to_in_app(self, store, session_factory):
        from app.services.notification_platform import CHANNEL_IN_APP, NotificationPlatform

        def failing_sender(**kwargs):
            raise RuntimeError("fcm down")

        platform = NotificationPlatform(store, session_factory, push_sender=failing_sender)
        platform.register_device_token("fcm-token-1")

        assert platform.show("Reminder", "Log your day", tag="daily-reminder") == CHANNEL_IN_APP
        assert stored_rows(session_factory) == [("Reminder", "Log your day", "daily-reminder", False)]

    def test_no_token_goes_in_app(self, store, session_factory):
        from app.services.notification_platform import CHANNEL_IN_APP, NotificationPlatform
        sent = []
        platform = NotificationPlatform(store, session_factory, push_sender=lambda **kw: sent.append(kw))

        assert platform.show("Reminder", "Log your day") == CHANNEL_IN_APP
        assert sent == []
        assert len(stored_rows(session_factory)) == 1


class TestPermission:
    def test_defaults_when_unset_or_garbage(self, store, session_factory):
        from app.schemas.notification_schemas import NotificationPermission
        from app.services.notification_platform import NotificationPlatform
        from app.utils.local_store import NOTIFICATION_PERMISSION_KEY
        platform = NotificationPlatform(store, session_factory)
        assert platform.query_permission() == NotificationPermission.default
        store.set(NOTIFICATION_PERMISSION_KEY, "maybe")
        assert platform.query_permission() == NotificationPermission.default

    def test_recorded_permission_is_read_back(self, store, session_factory):
        from app.schemas.notification_schemas import NotificationPermission
        from app.services.notification_platform import NotificationPlatform
        platform = NotificationPlatform(store, session_factory)
        platform.record_permission(NotificationPermission.denied)
        assert platform.query_permission() == NotificationPermission.denied
        assert platform.request_permission() == NotificationPermission.denied
