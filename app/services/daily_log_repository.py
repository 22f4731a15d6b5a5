# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from contextlib import contextmanager
from datetime import date, datetime
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.daily_log import DailyLog
from app.utils.attachment_storage import (
    AttachmentStorage,
    LOG_PHOTO_BUCKET,
    image_extension,
    path_from_public_url,
)
from app.utils.dates import format_date_local
from app.utils.errors import NotAuthenticated, TransientIOError

logger = logging.getLogger(__name__)

WRITABLE_FIELDS = {
    "diet", "energy_level", "stress_fatigue", "workout", "water_intake",
    "sleep_last_night", "cravings", "hunger_level", "step_goal_reached",
    "step_count", "good_thing", "proud_of_yourself",
}


@contextmanager
def db_errors(db: Session, action: str):
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"🛑 Database error while trying to {action}: {e}")
        raise TransientIOError(f"Failed to {action}") from e


class DailyLogRepository:
    """
    One user's daily logs. At most one row per (user, log_date); writes upsert.
    """

    def __init__(self, db: Session, user_id: Optional[int], storage: Optional[AttachmentStorage] = None):
        if user_id is None:
            raise NotAuthenticated("Not authenticated")
        self.db = db
        self.user_id = user_id
        self.storage = storage or AttachmentStorage(LOG_PHOTO_BUCKET)

    def _query(self):
        return self.db.query(DailyLog).filter(DailyLog.user_id == self.user_id)

    def list(self, date_from: Optional[date] = None, date_to: Optional[date] = None) -> List[DailyLog]:
        with db_errors(self.db, "load logs"):
            query = self._query()
            if date_from is not None:
                query = query.filter(DailyLog.log_date >= date_from)
            if date_to is not None:
                query = query.filter(DailyLog.log_date <= date_to)
            return query.order_by(DailyLog.log_date.desc()).all()

    def get(self, log_date: date) -> Optional[DailyLog]:
        with db_errors(self.db, "load log"):
            return self._query().filter(DailyLog.log_date == log_date).first()

    def upsert(self, log_date: date, fields: dict) -> DailyLog:
        values = {k: v for k, v in fields.items() if k in WRITABLE_FIELDS}

        with db_errors(self.db, "save log"):
            try:
                log = self._write(log_date, values)
            except IntegrityError:
                # Lost an insert race for the same (user, date); update the winner
                self.db.rollback()
                log = self._write(log_date, values)

        logger.info(f"📝 Saved log {log.id} for user {self.user_id} on {format_date_local(log_date)}")
        return log

    def _write(self, log_date: date, values: dict) -> DailyLog:
        log = self._query().filter(DailyLog.log_date == log_date).first()
        if log is None:
            log = DailyLog(user_id=self.user_id, log_date=log_date)
            self.db.add(log)
        for key, value in values.items():
            setattr(log, key, value)
        log.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(log)
        return log

    def delete(self, log_id: int) -> bool:
        with db_errors(self.db, "delete log"):
            count = (
                self._query()
                .filter(DailyLog.id == log_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()

        if count:
            logger.info(f"🗑️ Deleted log {log_id} for user {self.user_id}")
        return bool(count)

    # -------------------------------
    # Photo attachment
    # -------------------------------

    def photo_path(self, log_date: date, content_type: str) -> str:
        return f"{self.user_id}/{format_date_local(log_date)}.{image_extension(content_type)}"

    async def attach_photo(self, log: DailyLog, data: bytes, content_type: str) -> DailyLog:
        path = self.photo_path(log.log_date, content_type)
        public_url = await self.storage.upload(path, data, content_type)

        with db_errors(self.db, "save photo"):
            log.photo_url = public_url
            log.updated_at = datetime.utcnow()
            self.db.commit()
            self.db.refresh(log)
        return log

    async def remove_photo(self, log: DailyLog) -> DailyLog:
        path = path_from_public_url(log.photo_url, self.storage.bucket)
        if path:
            await self.storage.remove(path)

        with db_errors(self.db, "remove photo"):
            log.photo_url = None
            log.updated_at = datetime.utcnow()
            self.db.commit()
            self.db.refresh(log)
        return log
