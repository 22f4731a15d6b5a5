# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.

from datetime import date, timedelta
from typing import Iterable, Iterator, List, Optional

from app.utils.dates import format_date_local, local_today

DEFAULT_WINDOW_DAYS = 7


def _logged_day_keys(logs: Iterable) -> set:
    return {format_date_local(log.log_date) for log in logs or []}


def _window_days_newest_first(window_days: int, today: date) -> Iterator[date]:
    for offset in range(window_days):
        yield today - timedelta(days=offset)


def find_missing_days(logs: Iterable, window_days: int = DEFAULT_WINDOW_DAYS,
                      today: Optional[date] = None) -> List[date]:
    """
    Calendar days in the trailing window (today included) with no log,
    oldest first.
    """
    if window_days < 1:
        return []
    today = today or local_today()
    logged = _logged_day_keys(logs)

    missing = [
        day for day in _window_days_newest_first(window_days, today)
        if format_date_local(day) not in logged
    ]
    missing.reverse()
    return missing


def has_missing_days(logs: Iterable, window_days: int = DEFAULT_WINDOW_DAYS,
                     today: Optional[date] = None) -> bool:
    if window_days < 1:
        return False
    today = today or local_today()
    logged = _logged_day_keys(logs)

    for day in _window_days_newest_first(window_days, today):
        if format_date_local(day) not in logged:
            return True
    return False
