# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
import re
import secrets
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from app.models.daily_log import DailyLog
from app.models.user import User
from app.schemas.share_schemas import PublicProfile, ShareToken
from app.services.daily_log_repository import db_errors
from app.utils.errors import (
    LogValidationError,
    NotAuthenticated,
    ShareLinkError,
    ShareLinkExpired,
    TransientIOError,
)

logger = logging.getLogger(__name__)

DEFAULT_EXPIRY_DAYS = 30
SHARE_TOKEN_PATTERN = re.compile(r"^[A-Za-z0-9_-]{16,128}$")


def is_expired(expires_at: Optional[datetime], now: Optional[datetime] = None) -> bool:
    if expires_at is None:
        return False
    return expires_at < (now or datetime.utcnow())


def validate_share_token(token: Optional[str]) -> str:
    if not token or not SHARE_TOKEN_PATTERN.match(token):
        raise LogValidationError("Malformed share link")
    return token


def retry_once(action: str, fn: Callable):
    """Run a read, retrying a single time on a transient database failure."""
    try:
        return fn()
    except TransientIOError as e:
        logger.warning(f"⚠️ {action} failed, retrying once: {e}")
        return fn()


class PublicShareService:
    def __init__(self, db: Session, clock: Callable[[], datetime] = datetime.utcnow):
        self.db = db
        self.clock = clock

    def _user(self, user_id: Optional[int]) -> User:
        if user_id is None:
            raise NotAuthenticated("Not authenticated")
        with db_errors(self.db, "load profile"):
            user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotAuthenticated("User not found")
        return user

    # -------------------------------
    # Owner side
    # -------------------------------

    def generate_token(self, user_id: Optional[int], expiry_days: int = DEFAULT_EXPIRY_DAYS) -> ShareToken:
        if not 1 <= expiry_days <= 365:
            raise LogValidationError("Share link expiry must be between 1 and 365 days")

        user = self._user(user_id)
        with db_errors(self.db, "generate share link"):
            user.share_token = secrets.token_urlsafe(24)
            user.share_enabled = True
            user.share_token_expires_at = self.clock() + timedelta(days=expiry_days)
            self.db.commit()
            self.db.refresh(user)

        logger.info(f"🔗 Share link issued for user {user.id}, expires {user.share_token_expires_at.isoformat()}")
        return ShareToken(token=user.share_token, expires_at=user.share_token_expires_at)

    def disable(self, user_id: Optional[int]) -> bool:
        user = self._user(user_id)
        with db_errors(self.db, "disable sharing"):
            was_enabled = bool(user.share_enabled)
            user.share_enabled = False
            user.share_token = None
            user.share_token_expires_at = None
            self.db.commit()

        logger.info(f"🔒 Sharing disabled for user {user.id}")
        return was_enabled

    def get_current(self, user_id: Optional[int]) -> Optional[ShareToken]:
        user = self._user(user_id)
        if not user.share_enabled or not user.share_token:
            return None
        return ShareToken(token=user.share_token, expires_at=user.share_token_expires_at)

    # -------------------------------
    # Public side
    # -------------------------------

    def _shared_user(self, token: str) -> User:
        validate_share_token(token)

        def load():
            with db_errors(self.db, "load shared profile"):
                return self.db.query(User).filter(User.share_token == token).first()

        user = retry_once("load shared profile", load)
        if not user:
            raise ShareLinkError("Invalid share link")
        if not user.share_enabled:
            raise ShareLinkError("Sharing has been disabled")
        if is_expired(user.share_token_expires_at, self.clock()):
            raise ShareLinkExpired("Share link has expired")
        return user

    def get_public_profile(self, token: str) -> PublicProfile:
        user = self._shared_user(token)
        return PublicProfile(
            display_name=user.display_name,
            avatar_url=user.avatar_url,
            share_token_expires_at=user.share_token_expires_at,
        )

    def get_public_logs(self, token: str) -> List[DailyLog]:
        user = self._shared_user(token)

        def load():
            with db_errors(self.db, "load shared logs"):
                return (
                    self.db.query(DailyLog)
                    .filter(DailyLog.user_id == user.id)
                    .order_by(DailyLog.log_date.desc())
                    .all()
                )

        return retry_once("load shared logs", load)
