# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.


from typing import Optional
from fastapi import Header
from app.utils.errors import NotAuthenticated
from app.utils.jwt_utils import verify_access_token


# ✅ Dependency to extract token payload
def require_token(authorization: Optional[str] = Header(None)) -> dict:
    if not authorization or not authorization.startswith("Bearer "):
        raise NotAuthenticated("Missing or invalid authorization header")
    token = authorization.replace("Bearer ", "", 1)
    return verify_access_token(token)


# ✅ Resolve the user id carried by the token
def current_user_id(user_data: dict) -> int:
    sub = user_data.get("sub") if user_data else None
    try:
        return int(sub)
    except (TypeError, ValueError):
        raise NotAuthenticated("Token does not identify a user")
