# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.

from typing import Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    device_id: str = Field(..., min_length=1)


class ProfileUpdateRequest(BaseModel):
    display_name: Optional[str] = Field(None, max_length=80)


class EmojiRequest(BaseModel):
    emoji: str = Field("", max_length=16)
