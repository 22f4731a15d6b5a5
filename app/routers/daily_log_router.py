# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.


from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, Request, UploadFile
from sqlalchemy.orm import Session

from app.models.database import get_db
from app.schemas.daily_log_schemas import DailyLogRead, DailyLogUpsert, DamMessageResponse
from app.services.dam_message import build_dam_message
from app.services.daily_log_repository import DailyLogRepository
from app.utils.app_state import get_log_photo_storage
from app.utils.auth_utils import current_user_id, require_token
from app.utils.dates import local_today
from app.utils.errors import LogValidationError
from app.utils.rate_limit_utils import limiter, UPLOAD_LIMIT

router = APIRouter(prefix="/logs", tags=["Daily Logs"])


def get_log_repository(
    db: Session = Depends(get_db),
    user_data: dict = Depends(require_token),
    storage=Depends(get_log_photo_storage),
) -> DailyLogRepository:
    return DailyLogRepository(db, current_user_id(user_data), storage)


def _require_log(repo: DailyLogRepository, log_date: date):
    log = repo.get(log_date)
    if not log:
        raise HTTPException(status_code=404, detail="No log for this day")
    return log


@router.get("", response_model=List[DailyLogRead])
def list_logs(
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    repo: DailyLogRepository = Depends(get_log_repository),
):
    return repo.list(date_from, date_to)


@router.get("/{log_date}", response_model=DailyLogRead)
def get_log(log_date: date, repo: DailyLogRepository = Depends(get_log_repository)):
    return _require_log(repo, log_date)


@router.put("/{log_date}", response_model=DailyLogRead)
def save_log(log_date: date, payload: DailyLogUpsert, repo: DailyLogRepository = Depends(get_log_repository)):
    if log_date > local_today():
        raise LogValidationError("Cannot log a day that has not happened yet")
    return repo.upsert(log_date, payload.model_dump())


@router.delete("/{log_id}")
def delete_log(log_id: int, repo: DailyLogRepository = Depends(get_log_repository)):
    if not repo.delete(log_id):
        raise HTTPException(status_code=404, detail="Log not found")
    return {"status": "deleted", "id": log_id}


@router.get("/{log_date}/dam-message", response_model=DamMessageResponse)
def get_dam_message(log_date: date, repo: DailyLogRepository = Depends(get_log_repository)):
    log = _require_log(repo, log_date)
    return DamMessageResponse(log_date=log.log_date, text=build_dam_message(log))


@router.post("/{log_date}/photo", response_model=DailyLogRead)
@limiter.limit(UPLOAD_LIMIT)
async def upload_log_photo(
    request: Request,
    log_date: date,
    photo: UploadFile = File(...),
    repo: DailyLogRepository = Depends(get_log_repository),
):
    log = _require_log(repo, log_date)
    data = await photo.read()
    return await repo.attach_photo(log, data, photo.content_type)


@router.delete("/{log_date}/photo", response_model=DailyLogRead)
async def remove_log_photo(log_date: date, repo: DailyLogRepository = Depends(get_log_repository)):
    log = _require_log(repo, log_date)
    return await repo.remove_photo(log)
