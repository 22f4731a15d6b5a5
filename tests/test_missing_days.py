"""
Trailing-window gap detection.
Run with: python3 -m pytest tests/
"""

from datetime import date, datetime, timedelta

from conftest import make_log

TODAY = date(2024, 3, 10)


class TestFindMissingDays:
    def test_today_and_yesterday_logged(self):
        from app.services.missing_days import find_missing_days
        logs = [make_log(TODAY, 1), make_log(TODAY - timedelta(days=1), 2)]
        missing = find_missing_days(logs, window_days=7, today=TODAY)
        assert [d.isoformat() for d in missing] == [
            "2024-03-04", "2024-03-05", "2024-03-06", "2024-03-07", "2024-03-08",
        ]

    def test_no_logs_means_whole_window(self):
        from app.services.missing_days import find_missing_days
        missing = find_missing_days([], window_days=3, today=TODAY)
        assert missing == [date(2024, 3, 8), date(2024, 3, 9), date(2024, 3, 10)]

    def test_logs_outside_window_ignored(self):
        from app.services.missing_days import find_missing_days
        logs = [make_log(TODAY - timedelta(days=30), 1)]
        assert len(find_missing_days(logs, window_days=7, today=TODAY)) == 7

    def test_empty_window(self):
        from app.services.missing_days import find_missing_days
        assert find_missing_days([], window_days=0, today=TODAY) == []


class TestHasMissingDays:
    def test_full_week_logged(self):
        from app.services.missing_days import has_missing_days
        logs = [make_log(TODAY - timedelta(days=i), i + 1) for i in range(7)]
        assert has_missing_days(logs, window_days=7, today=TODAY) is False

    def test_single_gap(self):
        from app.services.missing_days import has_missing_days
        logs = [make_log(TODAY - timedelta(days=i), i + 1) for i in range(7) if i != 3]
        assert has_missing_days(logs, window_days=7, today=TODAY) is True


class TestCanonicalDate:
    def test_plain_date(self):
        from app.utils.dates import format_date_local
        assert format_date_local(date(2024, 1, 5)) == "2024-01-05"

    def test_aware_instant_uses_local_day(self, monkeypatch):
        import pytz
        from app.utils.dates import format_date_local
        monkeypatch.setenv("DAMIT_TIMEZONE", "Asia/Kolkata")
        late_utc = pytz.utc.localize(datetime(2024, 1, 5, 20, 0))
        assert format_date_local(late_utc) == "2024-01-06"

    def test_unknown_timezone(self, monkeypatch):
        import pytest
        from app.utils.dates import get_local_timezone
        monkeypatch.setenv("DAMIT_TIMEZONE", "Mars/Olympus")
        with pytest.raises(ValueError):
            get_local_timezone()
