# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.

import enum
from datetime import date
from typing import List, Optional

from pydantic import BaseModel


class TimeRange(str, enum.Enum):
    day = "day"
    week = "week"
    month = "month"
    overall = "overall"
    custom = "custom"


class CustomRange(BaseModel):
    date_from: Optional[date] = None
    date_to: Optional[date] = None


class LogStats(BaseModel):
    avg_diet: int
    avg_sleep: int
    total_steps: str
    total_km: str
    mindset_rate: int
    log_count: int


class TrendPoint(BaseModel):
    date: str
    energy: float
    stress: float
    diet: float


class GratitudeEntry(BaseModel):
    log_date: date
    good_thing: str


class MissingDaysResponse(BaseModel):
    window_days: int
    missing_days: List[date]
    has_missing_logs: bool
