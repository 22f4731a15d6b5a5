# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from app.models.database import get_db
from app.models.user import User
from app.schemas.user_schemas import LoginRequest
from app.services.daily_log_repository import db_errors
from app.utils.jwt_utils import create_access_token
from app.utils.rate_limit_utils import limiter, PUBLIC_READ_LIMIT

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/device-login")
@limiter.limit(PUBLIC_READ_LIMIT)
def device_login(request: Request, payload: LoginRequest, db: Session = Depends(get_db)):
    with db_errors(db, "sign in"):
        user = db.query(User).filter(User.device_id == payload.device_id).first()
        is_new = user is None

        if is_new:
            user = User(device_id=payload.device_id)
            db.add(user)
            db.commit()
            db.refresh(user)
            logger.info(f"🆕 Created user {user.id} for device {payload.device_id}")

    token = create_access_token({"sub": str(user.id)})
    return {
        "message": "🆕 New user created" if is_new else "🔁 Returning user",
        "token": token,
        "user": {
            "id": user.id,
            "device_id": user.device_id,
            "display_name": user.display_name,
        }
    }
