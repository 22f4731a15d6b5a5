# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_
from sqlalchemy.orm import Session
from app.models.database import get_db
from app.models.notification import NotificationLog
from app.schemas.notification_schemas import (
    DeviceTokenRequest,
    NotificationSettingsUpdate,
    NotificationStatus,
    PermissionReport,
    normalize_reminder_time,
)
from app.services.daily_log_repository import db_errors
from app.services.reminder_scheduler import ReminderScheduler
from app.utils.app_state import get_reminder_scheduler
from app.utils.auth_utils import current_user_id, require_token
from app.utils.errors import LogValidationError, NotificationPermissionDenied

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["Notifications"])


def _status(reminders: ReminderScheduler) -> NotificationStatus:
    next_fire = reminders.next_fire_time
    return NotificationStatus(
        settings=reminders.settings,
        permission=reminders.permission,
        next_reminder_at=next_fire.isoformat() if next_fire else None,
    )


@router.get("/settings", response_model=NotificationStatus)
def get_settings(
    user_data: dict = Depends(require_token),
    reminders: ReminderScheduler = Depends(get_reminder_scheduler),
):
    return _status(reminders)


@router.put("/settings", response_model=NotificationStatus)
def update_settings(
    payload: NotificationSettingsUpdate,
    user_data: dict = Depends(require_token),
    reminders: ReminderScheduler = Depends(get_reminder_scheduler),
):
    enabled, time = payload.enabled, None
    if payload.time is not None:
        try:
            time = normalize_reminder_time(payload.time)
        except ValueError as e:
            raise LogValidationError(str(e))

    # Turning reminders on has to go through the permission prompt
    if enabled and not reminders.settings.enabled:
        if not reminders.enable():
            raise NotificationPermissionDenied("Notification permission was not granted")
        enabled = None

    reminders.update_settings(enabled=enabled, time=time)
    return _status(reminders)


@router.post("/enable", response_model=NotificationStatus)
def enable_reminders(
    user_data: dict = Depends(require_token),
    reminders: ReminderScheduler = Depends(get_reminder_scheduler),
):
    if not reminders.enable():
        raise NotificationPermissionDenied("Notification permission was not granted")
    return _status(reminders)


@router.post("/disable", response_model=NotificationStatus)
def disable_reminders(
    user_data: dict = Depends(require_token),
    reminders: ReminderScheduler = Depends(get_reminder_scheduler),
):
    reminders.disable()
    return _status(reminders)


@router.post("/permission", response_model=NotificationStatus)
def report_permission(
    payload: PermissionReport,
    user_data: dict = Depends(require_token),
    reminders: ReminderScheduler = Depends(get_reminder_scheduler),
):
    reminders.report_permission(payload.permission)
    return _status(reminders)


@router.post("/focus", response_model=NotificationStatus)
def app_focused(
    user_data: dict = Depends(require_token),
    reminders: ReminderScheduler = Depends(get_reminder_scheduler),
):
    reminders.sync_permission()
    return _status(reminders)


@router.post("/device-token")
def register_device_token(
    payload: DeviceTokenRequest,
    user_data: dict = Depends(require_token),
    reminders: ReminderScheduler = Depends(get_reminder_scheduler),
):
    reminders.platform.register_device_token(payload.token)
    logger.info("📲 Device push token registered")
    return {"status": "registered"}


@router.get("/recent")
def get_recent_notifications(
    db: Session = Depends(get_db),
    user_data: dict = Depends(require_token),
    limit: int = 10
):
    user_id = current_user_id(user_data)

    with db_errors(db, "load notifications"):
        logs = (
            db.query(NotificationLog)
            .filter(or_(NotificationLog.user_id.is_(None), NotificationLog.user_id == user_id))
            .order_by(NotificationLog.timestamp.desc())
            .limit(limit)
            .all()
        )

    return [
        {
            "id": log.id,
            "type": log.notification_type,
            "title": log.title,
            "text": log.content,
            "icon": log.icon,
            "delivered": log.delivered,
            "timestamp": log.timestamp.isoformat()
        }
        for log in logs
    ]


@router.patch("/{notification_id}/delivered")
def mark_as_delivered(
    notification_id: int,
    db: Session = Depends(get_db),
    user_data: dict = Depends(require_token),
):
    user_id = current_user_id(user_data)

    with db_errors(db, "update notification"):
        log = (
            db.query(NotificationLog)
            .filter(NotificationLog.id == notification_id)
            .filter(or_(NotificationLog.user_id.is_(None), NotificationLog.user_id == user_id))
            .first()
        )
        if not log:
            raise HTTPException(status_code=404, detail="Notification not found")
        log.delivered = True
        db.commit()
    return {"status": "updated"}
