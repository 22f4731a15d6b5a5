# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
from fastapi import APIRouter, Depends, File, Request, UploadFile
from sqlalchemy.orm import Session
from app.models.database import get_db
from app.models.user import User
from app.schemas.user_schemas import EmojiRequest, ProfileUpdateRequest
from app.services.daily_log_repository import db_errors
from app.utils.app_state import get_avatar_storage, get_local_store
from app.utils.attachment_storage import AttachmentStorage, image_extension
from app.utils.auth_utils import current_user_id, require_token
from app.utils.errors import NotAuthenticated
from app.utils.local_store import LocalStore, emoji_avatar_key
from app.utils.rate_limit_utils import limiter, UPLOAD_LIMIT

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["Profile"])


def _load_user(db: Session, user_data: dict) -> User:
    user_id = current_user_id(user_data)
    with db_errors(db, "load profile"):
        user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotAuthenticated("User not found")
    return user


def _profile(user: User, store: LocalStore) -> dict:
    return {
        "id": user.id,
        "display_name": user.display_name,
        "avatar_url": user.avatar_url,
        "emoji": store.get(emoji_avatar_key(user.id)),
    }


@router.get("")
def get_profile(
    db: Session = Depends(get_db),
    user_data: dict = Depends(require_token),
    store: LocalStore = Depends(get_local_store),
):
    return _profile(_load_user(db, user_data), store)


@router.patch("")
def update_profile(
    payload: ProfileUpdateRequest,
    db: Session = Depends(get_db),
    user_data: dict = Depends(require_token),
    store: LocalStore = Depends(get_local_store),
):
    user = _load_user(db, user_data)
    if payload.display_name is not None:
        with db_errors(db, "update profile"):
            user.display_name = payload.display_name.strip()
            db.commit()
            db.refresh(user)
        logger.info(f"👤 Display name updated for user {user.id}")
    return _profile(user, store)


@router.put("/emoji")
def set_emoji_avatar(
    payload: EmojiRequest,
    db: Session = Depends(get_db),
    user_data: dict = Depends(require_token),
    store: LocalStore = Depends(get_local_store),
):
    user = _load_user(db, user_data)
    emoji = payload.emoji.strip()
    if emoji:
        store.set(emoji_avatar_key(user.id), emoji)
    else:
        store.remove(emoji_avatar_key(user.id))
    return _profile(user, store)


@router.post("/avatar")
@limiter.limit(UPLOAD_LIMIT)
async def upload_avatar(
    request: Request,
    avatar: UploadFile = File(...),
    db: Session = Depends(get_db),
    user_data: dict = Depends(require_token),
    store: LocalStore = Depends(get_local_store),
    storage: AttachmentStorage = Depends(get_avatar_storage),
):
    user = _load_user(db, user_data)
    data = await avatar.read()
    path = f"{user.id}/avatar.{image_extension(avatar.content_type)}"
    public_url = await storage.upload(path, data, avatar.content_type)

    with db_errors(db, "save avatar"):
        user.avatar_url = public_url
        db.commit()
        db.refresh(user)
    return _profile(user, store)


@router.delete("/avatar")
def remove_avatar(
    db: Session = Depends(get_db),
    user_data: dict = Depends(require_token),
    store: LocalStore = Depends(get_local_store),
):
    # Only the profile reference is cleared; the stored file is overwritten on the next upload
    user = _load_user(db, user_data)
    with db_errors(db, "remove avatar"):
        user.avatar_url = None
        db.commit()
        db.refresh(user)
    return _profile(user, store)
