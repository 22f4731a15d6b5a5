# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.

import enum
from typing import Optional

from pydantic import BaseModel, field_validator

DEFAULT_REMINDER_TIME = "20:00"


class NotificationPermission(str, enum.Enum):
    default = "default"
    granted = "granted"
    denied = "denied"


def normalize_reminder_time(value: str) -> str:
    """
    Round an ``HH:MM`` wall-clock time to the nearest 5 minutes.

    Rounding up past :57 carries into the hour, and past 23:57 wraps to 00:00.
    """
    try:
        hours_str, minutes_str = value.strip().split(":")
        hours, minutes = int(hours_str), int(minutes_str)
    except (AttributeError, ValueError):
        raise ValueError(f"Reminder time must be HH:MM, got {value!r}")

    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise ValueError(f"Reminder time out of range: {value!r}")

    total = hours * 60 + (minutes + 2) // 5 * 5
    total %= 24 * 60
    return f"{total // 60:02d}:{total % 60:02d}"


class NotificationSettings(BaseModel):
    enabled: bool = False
    time: str = DEFAULT_REMINDER_TIME

    @field_validator("time")
    @classmethod
    def round_time(cls, v):
        return normalize_reminder_time(v)


class NotificationSettingsUpdate(BaseModel):
    enabled: Optional[bool] = None
    time: Optional[str] = None


class PermissionReport(BaseModel):
    permission: NotificationPermission


class DeviceTokenRequest(BaseModel):
    token: str


class NotificationStatus(BaseModel):
    settings: NotificationSettings
    permission: NotificationPermission
    next_reminder_at: Optional[str] = None
