# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
import threading
from datetime import datetime, date, time as wall_time, timedelta
from typing import Callable, Optional

from apscheduler.jobstores.base import JobLookupError

from app.schemas.notification_schemas import (
    NotificationPermission,
    NotificationSettings,
    normalize_reminder_time,
)
from app.utils.dates import format_date_local, get_local_timezone
from app.utils.local_store import LocalStore, NOTIFICATION_SETTINGS_KEY, LAST_NOTIFICATION_DATE_KEY

logger = logging.getLogger(__name__)

REMINDER_JOB_PREFIX = "damit-daily-reminder"
PERMISSION_POLL_JOB_ID = "damit-permission-poll"
PERMISSION_POLL_SECONDS = 30

REMINDER_TITLE = "DAMit! Daily Reminder"
REMINDER_BODY = "Don't forget to log your daily accountability! 📝"
REMINDER_ICON = "/pwa-192x192.png"
REMINDER_BADGE = "/favicon.png"
REMINDER_TAG = "daily-reminder"


def _at(day: date, at: wall_time, tz) -> datetime:
    naive = datetime.combine(day, at)
    if tz is None:
        return naive
    if hasattr(tz, "localize"):
        return tz.localize(naive)
    return naive.replace(tzinfo=tz)


def compute_next_fire(time_str: str, now: datetime, tz=None) -> datetime:
    """
    Next occurrence of ``HH:MM`` after ``now``: today if still ahead, else tomorrow.
    """
    hours, minutes = (int(part) for part in normalize_reminder_time(time_str).split(":"))
    at = wall_time(hours, minutes)
    if now.tzinfo is not None:
        tz = tz or now.tzinfo
        now = now.astimezone(tz)
    else:
        tz = None

    candidate = _at(now.date(), at, tz)
    if candidate <= now:
        candidate = _at(now.date() + timedelta(days=1), at, tz)
    return candidate


class ReminderScheduler:
    """
    Device-local daily reminder with a single self-rearming timer.

    Owns the persisted NotificationSettings, the last known notification
    permission, and at most one pending APScheduler date job. Construct one per
    process and call ``start()``; ``stop()`` releases the timer and the
    permission poll.
    """

    def __init__(self, scheduler, store: LocalStore, platform, tz=None,
                 clock: Optional[Callable[[], datetime]] = None,
                 poll_seconds: int = PERMISSION_POLL_SECONDS):
        self.scheduler = scheduler
        self.store = store
        self.platform = platform
        self.tz = tz or get_local_timezone()
        self.clock = clock or (lambda: datetime.now(self.tz))
        self.poll_seconds = poll_seconds

        self._lock = threading.RLock()
        self._timer = None
        self._next_fire: Optional[datetime] = None
        self._settings = self._load_settings()
        self._permission = self.platform.query_permission()

    # -------------------------------
    # State
    # -------------------------------

    @property
    def settings(self) -> NotificationSettings:
        with self._lock:
            return self._settings.model_copy()

    @property
    def permission(self) -> NotificationPermission:
        with self._lock:
            return self._permission

    @property
    def has_pending_timer(self) -> bool:
        with self._lock:
            return self._timer is not None

    @property
    def next_fire_time(self) -> Optional[datetime]:
        with self._lock:
            return self._next_fire if self._timer is not None else None

    def _load_settings(self) -> NotificationSettings:
        raw = self.store.get(NOTIFICATION_SETTINGS_KEY)
        if not raw:
            return NotificationSettings()
        try:
            return NotificationSettings.model_validate_json(raw)
        except ValueError as e:
            logger.warning(f"⚠️ Stored notification settings unreadable, using defaults: {e}")
            return NotificationSettings()

    def _persist_settings(self):
        self.store.set(NOTIFICATION_SETTINGS_KEY, self._settings.model_dump_json())

    def _should_run(self) -> bool:
        return self._settings.enabled and self._permission == NotificationPermission.granted

    def _apply_schedule(self):
        if self._should_run():
            self.schedule_daily(self._settings.time)
        else:
            self.cancel()

    def _today_key(self) -> str:
        now = self.clock()
        if now.tzinfo is not None:
            now = now.astimezone(self.tz)
        return format_date_local(now.date())

    # -------------------------------
    # Lifecycle
    # -------------------------------

    def start(self):
        with self._lock:
            self._settings = self._load_settings()
            self._permission = self.platform.query_permission()
            self.scheduler.add_job(
                self.sync_permission,
                trigger="interval",
                seconds=self.poll_seconds,
                id=PERMISSION_POLL_JOB_ID,
                replace_existing=True,
            )
            self._apply_schedule()
        logger.info(
            f"🚀 Reminder scheduler started (enabled={self._settings.enabled}, "
            f"time={self._settings.time}, permission={self._permission.value})"
        )

    def stop(self):
        with self._lock:
            self.cancel()
            try:
                self.scheduler.remove_job(PERMISSION_POLL_JOB_ID)
            except JobLookupError:
                pass
        logger.info("🛑 Reminder scheduler stopped")

    # -------------------------------
    # Permission
    # -------------------------------

    def sync_permission(self) -> NotificationPermission:
        """Pick up permission changes made on the device (poll + focus)."""
        current = self.platform.query_permission()
        with self._lock:
            if current != self._permission:
                logger.info(f"🔐 Notification permission changed: {self._permission.value} -> {current.value}")
                self._permission = current
                self._apply_schedule()
        return current

    def report_permission(self, permission: NotificationPermission) -> NotificationPermission:
        self.platform.record_permission(permission)
        return self.sync_permission()

    def request_permission(self) -> bool:
        current = self.platform.query_permission()
        with self._lock:
            if current == NotificationPermission.granted:
                self._permission = current
                return True

            if current == NotificationPermission.denied:
                self._permission = current
                logger.warning("🚫 Notification permission was denied; it must be re-enabled in the device settings.")
                return False

            result = self.platform.request_permission()
            self._permission = result
            return result == NotificationPermission.granted

    # -------------------------------
    # Settings
    # -------------------------------

    def enable(self) -> bool:
        if self._permission != NotificationPermission.granted and not self.request_permission():
            return False
        self.update_settings(enabled=True)
        logger.info("✅ Daily reminders enabled")
        return True

    def disable(self):
        self.update_settings(enabled=False)
        self.cancel()
        logger.info("🔕 Daily reminders disabled")

    def update_settings(self, enabled: Optional[bool] = None, time: Optional[str] = None) -> NotificationSettings:
        with self._lock:
            data = self._settings.model_dump()
            if enabled is not None:
                data["enabled"] = enabled
            if time is not None:
                data["time"] = time
            updated = NotificationSettings(**data)

            self._settings = updated
            self._persist_settings()
            self._apply_schedule()
            return updated.model_copy()

    # -------------------------------
    # Timer
    # -------------------------------

    def schedule_daily(self, time_str: str) -> datetime:
        with self._lock:
            self.cancel()
            run_at = compute_next_fire(time_str, self.clock(), self.tz)
            self._timer = self.scheduler.add_job(
                self._fire,
                trigger="date",
                run_date=run_at,
                args=[time_str],
                # One id per armed occurrence; the fired job is removed by the
                # scheduler after it runs and must not take the next one with it.
                id=f"{REMINDER_JOB_PREFIX}:{run_at.isoformat()}",
                name=REMINDER_JOB_PREFIX,
                replace_existing=True,
                misfire_grace_time=None,
            )
            self._next_fire = run_at
        logger.info(f"⏰ Daily reminder armed for {run_at.isoformat()}")
        return run_at

    def cancel(self):
        with self._lock:
            if self._timer is not None:
                try:
                    self.scheduler.remove_job(self._timer.id)
                except JobLookupError:
                    pass
                logger.info("🧹 Pending daily reminder cancelled")
            self._timer = None
            self._next_fire = None

    def _fire(self, time_str: str):
        try:
            self.show_reminder()
        except Exception as e:
            logger.error(f"🛑 Daily reminder delivery failed, skipping today: {e}", exc_info=True)
        finally:
            with self._lock:
                self._timer = None
                self._next_fire = None
                if self._should_run():
                    self.schedule_daily(time_str)

    def show_reminder(self) -> bool:
        if self.platform.query_permission() != NotificationPermission.granted:
            logger.info("🔒 Skipped daily reminder: permission not granted")
            return False

        today = self._today_key()
        if self.store.get(LAST_NOTIFICATION_DATE_KEY) == today:
            logger.info(f"🔁 Skipped daily reminder: already notified on {today}")
            return False

        channel = self.platform.show(
            REMINDER_TITLE,
            REMINDER_BODY,
            icon=REMINDER_ICON,
            badge=REMINDER_BADGE,
            tag=REMINDER_TAG,
        )
        self.store.set(LAST_NOTIFICATION_DATE_KEY, today)
        logger.info(f"🔔 Daily reminder shown via {channel} for {today}")
        return True
