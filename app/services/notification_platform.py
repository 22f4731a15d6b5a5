# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from datetime import datetime

from app.models.database import SessionLocal
from app.models.notification import NotificationLog
from app.schemas.notification_schemas import NotificationPermission
from app.utils.firebase import send_fcm_push
from app.utils.local_store import LocalStore, NOTIFICATION_PERMISSION_KEY, DEVICE_TOKEN_KEY

logger = logging.getLogger(__name__)

CHANNEL_PUSH = "push"
CHANNEL_IN_APP = "in_app"


class NotificationPlatform:
    """
    The device's notification surface.

    Permission mirrors what the device last reported (the prompt itself is
    shown on the device). Delivery prefers FCM push, which reaches the device
    in the background, and falls back to an in-app notification row the
    client fetches from ``/notifications/recent``.
    """

    def __init__(self, store: LocalStore, session_factory=SessionLocal, push_sender=send_fcm_push):
        self.store = store
        self.session_factory = session_factory
        self.push_sender = push_sender

    # -------- Permission --------

    def query_permission(self) -> NotificationPermission:
        raw = self.store.get(NOTIFICATION_PERMISSION_KEY)
        try:
            return NotificationPermission(raw) if raw else NotificationPermission.default
        except ValueError:
            return NotificationPermission.default

    def record_permission(self, permission: NotificationPermission):
        self.store.set(NOTIFICATION_PERMISSION_KEY, permission.value)

    def request_permission(self) -> NotificationPermission:
        current = self.query_permission()
        if current == NotificationPermission.default:
            logger.info("🔔 Notification permission not answered yet; waiting for the device prompt.")
        return current

    # -------- Delivery --------

    def register_device_token(self, token: str):
        self.store.set(DEVICE_TOKEN_KEY, token)

    def show(self, title: str, body: str, icon: str = None, badge: str = None,
             tag: str = None, user_id: int = None) -> str:
        token = self.store.get(DEVICE_TOKEN_KEY)
        if token:
            try:
                self.push_sender(
                    token=token, title=title, body=body,
                    icon=icon, badge=badge, tag=tag, data={"url": "/"}
                )
                logger.info(f"📲 Sent '{tag or title}' via push")
                return CHANNEL_PUSH
            except Exception as e:
                logger.warning(f"⚠️ Push notification failed, falling back to in-app: {e}")

        db = self.session_factory()
        try:
            db.add(NotificationLog(
                user_id=user_id,
                notification_type=tag or "generic",
                title=title,
                content=body,
                icon=icon,
                delivered=False,
                timestamp=datetime.utcnow()
            ))
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

        logger.info(f"📥 Stored '{tag or title}' as in-app notification")
        return CHANNEL_IN_APP
