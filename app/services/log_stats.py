# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.

"""
Dashboard statistics over a user's daily logs.

Everything here is pure: logs in, numbers out. Inputs only need the DailyLog
attributes (ORM rows and ``DailyLogRead`` both work) and may arrive in any
order; results do not depend on that order.
"""

import math
from datetime import date
from typing import Iterable, List, Optional, Sequence

from app.schemas.stats_schemas import CustomRange, GratitudeEntry, LogStats, TimeRange, TrendPoint
from app.utils.affirmation import Affirmation
from app.utils.dates import format_date_local
from app.utils.errors import LogValidationError

# Most recent N entries per range; None means all of them
RANGE_ENTRY_LIMITS = {
    TimeRange.day: 1,
    TimeRange.week: 7,
    TimeRange.month: 30,
    TimeRange.overall: None,
}

MAX_CUSTOM_RANGE_DAYS = 30
STRIDE_LENGTH_METERS = 0.76
TREND_POINTS = 14
GRATITUDE_WALL_SIZE = 8


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _sort_key(log):
    return (log.log_date, str(log.id) if log.id is not None else "")


def sort_logs_newest_first(logs: Iterable) -> list:
    return sorted(logs, key=_sort_key, reverse=True)


def select_logs(logs: Iterable, time_range: TimeRange, custom_range: Optional[CustomRange] = None) -> list:
    ordered = sort_logs_newest_first(logs)

    if time_range == TimeRange.custom:
        if custom_range is None or custom_range.date_from is None or custom_range.date_to is None:
            return []
        return [
            log for log in ordered
            if custom_range.date_from <= log.log_date <= custom_range.date_to
        ]

    limit = RANGE_ENTRY_LIMITS[time_range]
    return ordered if limit is None else ordered[:limit]


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def compute_stats(logs: Iterable, time_range: TimeRange = TimeRange.week,
                  custom_range: Optional[CustomRange] = None) -> Optional[LogStats]:
    """
    Reduce logs to the four dashboard tiles.

    Returns None when nothing is selected so callers can show an empty state.
    Note that Day/Week/Month count log entries, not calendar days: gaps in
    logging are not filled with zeros.
    """
    selected = select_logs(logs or [], time_range, custom_range)
    if not selected:
        return None

    avg_diet = _mean([log.diet or 0 for log in selected])
    avg_sleep = _mean([log.sleep_last_night or 0 for log in selected])
    total_steps = sum(log.step_count or 0 for log in selected)
    total_km = total_steps * STRIDE_LENGTH_METERS / 1000
    proud_count = sum(1 for log in selected if log.affirmation == Affirmation.yes)

    return LogStats(
        avg_diet=round_half_up(avg_diet * 100),
        avg_sleep=round_half_up(avg_sleep * 100),
        total_steps=f"{total_steps:,}",
        total_km=f"{round_half_up(total_km * 10) / 10:.1f}",
        mindset_rate=round_half_up(proud_count / len(selected) * 100),
        log_count=len(selected),
    )


def build_trend_series(logs: Iterable, limit: int = TREND_POINTS) -> List[TrendPoint]:
    recent = sort_logs_newest_first(logs or [])[:limit]
    return [
        TrendPoint(
            date=format_date_local(log.log_date),
            energy=log.energy_level or 0,
            stress=log.stress_fatigue or 0,
            diet=log.diet or 0,
        )
        for log in reversed(recent)
    ]


def gratitude_wall(logs: Iterable, limit: int = GRATITUDE_WALL_SIZE) -> List[GratitudeEntry]:
    entries = []
    for log in sort_logs_newest_first(logs or []):
        if log.good_thing and log.good_thing.strip():
            entries.append(GratitudeEntry(log_date=log.log_date, good_thing=log.good_thing.strip()))
            if len(entries) == limit:
                break
    return entries


def validate_custom_range(date_from: Optional[date], date_to: Optional[date]) -> CustomRange:
    """
    Reject an inverted or over-long custom window before any read.

    A missing endpoint is not an error here: compute_stats returns None for it.
    """
    if date_from is None or date_to is None:
        return CustomRange(date_from=date_from, date_to=date_to)
    if date_from > date_to:
        raise LogValidationError("Custom range start must not be after its end")
    span = (date_to - date_from).days + 1
    if span > MAX_CUSTOM_RANGE_DAYS:
        raise LogValidationError(
            f"Custom range is limited to {MAX_CUSTOM_RANGE_DAYS} days (got {span})"
        )
    return CustomRange(date_from=date_from, date_to=date_to)
