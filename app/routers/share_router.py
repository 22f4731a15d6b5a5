# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.


from typing import List, Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.models.database import get_db
from app.schemas.daily_log_schemas import DailyLogRead
from app.schemas.share_schemas import PublicProfile, ShareRequest, ShareToken
from app.services.public_share_service import PublicShareService
from app.utils.auth_utils import current_user_id, require_token
from app.utils.rate_limit_utils import limiter, PUBLIC_READ_LIMIT

router = APIRouter(tags=["Sharing"])


# -------------------------------
# Owner side
# -------------------------------

@router.post("/share", response_model=ShareToken)
def create_share_link(
    payload: Optional[ShareRequest] = None,
    db: Session = Depends(get_db),
    user_data: dict = Depends(require_token),
):
    payload = payload or ShareRequest()
    return PublicShareService(db).generate_token(current_user_id(user_data), payload.expiry_days)


@router.delete("/share")
def disable_share_link(db: Session = Depends(get_db), user_data: dict = Depends(require_token)):
    was_enabled = PublicShareService(db).disable(current_user_id(user_data))
    return {"status": "disabled", "was_enabled": was_enabled}


@router.get("/share", response_model=Optional[ShareToken])
def get_share_link(db: Session = Depends(get_db), user_data: dict = Depends(require_token)):
    return PublicShareService(db).get_current(current_user_id(user_data))


# -------------------------------
# Public read-only dashboard
# -------------------------------

@router.get("/public/{token}/profile", response_model=PublicProfile)
@limiter.limit(PUBLIC_READ_LIMIT)
def get_public_profile(request: Request, token: str, db: Session = Depends(get_db)):
    return PublicShareService(db).get_public_profile(token)


@router.get("/public/{token}/logs", response_model=List[DailyLogRead])
@limiter.limit(PUBLIC_READ_LIMIT)
def get_public_logs(request: Request, token: str, db: Session = Depends(get_db)):
    return PublicShareService(db).get_public_logs(token)
