# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.


from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.routers.daily_log_router import get_log_repository
from app.schemas.stats_schemas import GratitudeEntry, LogStats, MissingDaysResponse, TimeRange, TrendPoint
from app.services.daily_log_repository import DailyLogRepository
from app.services.log_stats import build_trend_series, compute_stats, gratitude_wall, validate_custom_range
from app.services.missing_days import DEFAULT_WINDOW_DAYS, find_missing_days, has_missing_days
from app.utils.dates import local_today

router = APIRouter(prefix="/stats", tags=["Stats"])


@router.get("", response_model=Optional[LogStats])
def get_stats(
    time_range: TimeRange = Query(TimeRange.week, alias="range"),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    repo: DailyLogRepository = Depends(get_log_repository),
):
    if time_range == TimeRange.custom:
        custom_range = validate_custom_range(date_from, date_to)
        if custom_range.date_from is None or custom_range.date_to is None:
            return None
        return compute_stats(repo.list(custom_range.date_from, custom_range.date_to), time_range, custom_range)

    return compute_stats(repo.list(), time_range)


@router.get("/trend", response_model=List[TrendPoint])
def get_trend(
    limit: int = Query(14, ge=1, le=90),
    repo: DailyLogRepository = Depends(get_log_repository),
):
    return build_trend_series(repo.list(), limit=limit)


@router.get("/missing-days", response_model=MissingDaysResponse)
def get_missing_days(
    window_days: int = Query(DEFAULT_WINDOW_DAYS, ge=1, le=90),
    repo: DailyLogRepository = Depends(get_log_repository),
):
    today = local_today()
    logs = repo.list()
    missing = find_missing_days(logs, window_days=window_days, today=today)
    return MissingDaysResponse(
        window_days=window_days,
        missing_days=missing,
        has_missing_logs=has_missing_days(logs, window_days=window_days, today=today),
    )


@router.get("/gratitude", response_model=List[GratitudeEntry])
def get_gratitude_wall(
    limit: int = Query(8, ge=1, le=50),
    repo: DailyLogRepository = Depends(get_log_repository),
):
    return gratitude_wall(repo.list(), limit=limit)
