"""
Dashboard statistics, trend series and custom range validation.
Run with: python3 -m pytest tests/
"""

import random
from datetime import date, timedelta

import pytest

from conftest import make_log


def week_of_logs(**per_field):
    """Seven consecutive days ending 2024-03-07, one value per day for each field."""
    start = date(2024, 3, 1)
    logs = []
    for i in range(7):
        fields = {name: values[i] for name, values in per_field.items()}
        logs.append(make_log(start + timedelta(days=i), log_id=i + 1, **fields))
    return logs


class TestComputeStats:
    def test_empty_logs_give_none(self):
        from app.services.log_stats import compute_stats
        from app.schemas.stats_schemas import TimeRange
        for time_range in TimeRange:
            assert compute_stats([], time_range) is None

    def test_custom_range_with_missing_endpoint_gives_none(self):
        from app.services.log_stats import compute_stats
        from app.schemas.stats_schemas import CustomRange, TimeRange
        logs = week_of_logs(diet=[1] * 7)
        assert compute_stats(logs, TimeRange.custom, CustomRange(date_to=date(2024, 3, 7))) is None
        assert compute_stats(logs, TimeRange.custom, None) is None

    def test_avg_diet_rounds_half_up(self):
        from app.services.log_stats import compute_stats
        from app.schemas.stats_schemas import TimeRange
        logs = week_of_logs(diet=[1, 0.5, 0.25, 1, 0, 0.5, 1])
        assert compute_stats(logs, TimeRange.week).avg_diet == 61

    def test_missing_ratings_count_as_zero(self):
        from app.services.log_stats import compute_stats
        from app.schemas.stats_schemas import TimeRange
        logs = week_of_logs(sleep_last_night=[1, None, 1, None, 1, None, 1])
        assert compute_stats(logs, TimeRange.week).avg_sleep == 57

    def test_total_steps_and_km(self):
        from app.services.log_stats import compute_stats
        from app.schemas.stats_schemas import TimeRange
        logs = week_of_logs(step_count=[10000, 5000, 2000, 15000, 0, 8000, 12000])
        stats = compute_stats(logs, TimeRange.week)
        assert stats.total_steps == "52,000"
        assert stats.total_km == "39.5"

    def test_mindset_rate(self):
        from app.services.log_stats import compute_stats
        from app.schemas.stats_schemas import TimeRange
        logs = week_of_logs(proud_of_yourself=["yes", "Yeah", "1", "TRUE", " yes ", "no", None])
        assert compute_stats(logs, TimeRange.week).mindset_rate == 71

    def test_week_uses_seven_most_recent_entries(self):
        from app.services.log_stats import compute_stats
        from app.schemas.stats_schemas import TimeRange
        oldest = make_log(date(2024, 2, 29), log_id=99, diet=-1)
        logs = [oldest] + week_of_logs(diet=[1] * 7)
        stats = compute_stats(logs, TimeRange.week)
        assert stats.log_count == 7
        assert stats.avg_diet == 100

    def test_day_and_overall_ranges(self):
        from app.services.log_stats import compute_stats
        from app.schemas.stats_schemas import TimeRange
        logs = week_of_logs(diet=[0, 0, 0, 0, 0, 0, 1])
        assert compute_stats(logs, TimeRange.day).avg_diet == 100
        assert compute_stats(logs, TimeRange.overall).log_count == 7

    def test_custom_range_is_inclusive(self):
        from app.services.log_stats import compute_stats
        from app.schemas.stats_schemas import CustomRange, TimeRange
        logs = week_of_logs(diet=[1] * 7)
        window = CustomRange(date_from=date(2024, 3, 2), date_to=date(2024, 3, 4))
        assert compute_stats(logs, TimeRange.custom, window).log_count == 3

    def test_order_independent(self):
        from app.services.log_stats import compute_stats
        from app.schemas.stats_schemas import TimeRange
        logs = week_of_logs(
            diet=[1, 0.5, 0, -1, 1, 0.5, 0],
            sleep_last_night=[0.5, 0.5, 1, 0, -1, 1, 1],
            step_count=[1, 20, 300, 4000, 50000, 6, 70],
            proud_of_yourself=["yes", "no", None, "1", "", "true", "meh"],
        ) + [make_log(date(2024, 2, 1), log_id=50, diet=-1)]
        rng = random.Random(7)
        for time_range in (TimeRange.day, TimeRange.week, TimeRange.month, TimeRange.overall):
            expected = compute_stats(logs, time_range)
            for _ in range(5):
                shuffled = logs[:]
                rng.shuffle(shuffled)
                assert compute_stats(shuffled, time_range) == expected


class TestRoundHalfUp:
    def test_half_rounds_up(self):
        from app.services.log_stats import round_half_up
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(-0.5) == 0
        assert round_half_up(71.428) == 71


class TestTrendAndGratitude:
    def test_trend_is_oldest_first_and_limited(self):
        from app.services.log_stats import build_trend_series
        logs = week_of_logs(energy_level=[1, 0.5, 0, -1, 1, 0.5, None])
        points = build_trend_series(list(reversed(logs)), limit=3)
        assert [p.date for p in points] == ["2024-03-05", "2024-03-06", "2024-03-07"]
        assert points[-1].energy == 0

    def test_gratitude_wall_skips_blank_entries(self):
        from app.services.log_stats import gratitude_wall
        logs = week_of_logs(good_thing=["walk", "", None, "  ", "friends", "book", "tea"])
        wall = gratitude_wall(logs, limit=3)
        assert [e.good_thing for e in wall] == ["tea", "book", "friends"]


class TestCustomRangeValidation:
    def test_accepts_thirty_days(self):
        from app.services.log_stats import validate_custom_range
        window = validate_custom_range(date(2024, 3, 1), date(2024, 3, 30))
        assert window.date_to == date(2024, 3, 30)

    def test_rejects_thirty_one_days(self):
        from app.services.log_stats import validate_custom_range
        from app.utils.errors import LogValidationError
        with pytest.raises(LogValidationError, match="30 days"):
            validate_custom_range(date(2024, 3, 1), date(2024, 3, 31))

    def test_rejects_inverted_range(self):
        from app.services.log_stats import validate_custom_range
        from app.utils.errors import LogValidationError
        with pytest.raises(LogValidationError):
            validate_custom_range(date(2024, 3, 5), date(2024, 3, 1))

    def test_missing_endpoint_passes_through(self):
        from app.services.log_stats import validate_custom_range
        window = validate_custom_range(None, date(2024, 3, 1))
        assert window.date_from is None
