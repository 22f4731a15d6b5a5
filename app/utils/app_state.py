# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.

from fastapi import Request

from app.utils.attachment_storage import AttachmentStorage, AVATAR_BUCKET, LOG_PHOTO_BUCKET


# ✅ Process-wide singletons, created in the app lifespan

def get_local_store(request: Request):
    return request.app.state.local_store


def get_reminder_scheduler(request: Request):
    return request.app.state.reminder_scheduler


def get_log_photo_storage() -> AttachmentStorage:
    return AttachmentStorage(LOG_PHOTO_BUCKET)


def get_avatar_storage() -> AttachmentStorage:
    return AttachmentStorage(AVATAR_BUCKET)
