"""
Reminder time normalization and persisted settings.
Run with: python3 -m pytest tests/
"""

import pytest


class TestNormalizeReminderTime:
    @pytest.mark.parametrize("raw, expected", [
        ("20:00", "20:00"),
        ("20:03", "20:05"),
        ("20:02", "20:00"),
        ("07:58", "08:00"),
        ("23:58", "00:00"),
        ("9:7", "09:05"),
    ])
    def test_rounds_to_five_minutes(self, raw, expected):
        from app.schemas.notification_schemas import normalize_reminder_time
        assert normalize_reminder_time(raw) == expected

    @pytest.mark.parametrize("raw", ["", "25:00", "12:60", "noon", "12-30", "1:2:3"])
    def test_rejects_bad_input(self, raw):
        from app.schemas.notification_schemas import normalize_reminder_time
        with pytest.raises(ValueError):
            normalize_reminder_time(raw)


class TestNotificationSettings:
    def test_defaults(self):
        from app.schemas.notification_schemas import NotificationSettings
        settings = NotificationSettings()
        assert settings.enabled is False
        assert settings.time == "20:00"

    def test_json_round_trip_normalizes_time(self):
        from app.schemas.notification_schemas import NotificationSettings
        raw = '{"enabled": true, "time": "06:31"}'
        assert NotificationSettings.model_validate_json(raw).time == "06:30"
