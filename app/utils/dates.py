# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.

"""
Calendar-date helpers.

Log dates are plain ``datetime.date`` values (no time, no zone). The only string
form used for keys and comparisons is ``format_date_local``: the local
``YYYY-MM-DD`` of a date, or of an instant converted to the device timezone.
"""

import os
from datetime import date, datetime
from typing import Union

from pytz import timezone, UnknownTimeZoneError

DEFAULT_TIMEZONE = "UTC"


def get_local_timezone():
    name = os.environ.get("DAMIT_TIMEZONE", DEFAULT_TIMEZONE)
    try:
        return timezone(name)
    except UnknownTimeZoneError:
        raise ValueError(f"DAMIT_TIMEZONE is not a known timezone: {name}")


def local_now() -> datetime:
    return datetime.now(get_local_timezone())


def local_today() -> date:
    return local_now().date()


def format_date_local(value: Union[date, datetime]) -> str:
    """
    Canonical ``YYYY-MM-DD`` for a calendar day.

    Aware datetimes are first converted to the device timezone so an instant
    stored in UTC lands on the user's local day, not the UTC one.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(get_local_timezone())
        value = value.date()
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"

