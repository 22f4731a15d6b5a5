# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ShareRequest(BaseModel):
    expiry_days: int = Field(30, ge=1, le=365)


class ShareToken(BaseModel):
    token: str
    expires_at: Optional[datetime] = None


class PublicProfile(BaseModel):
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    share_token_expires_at: Optional[datetime] = None
