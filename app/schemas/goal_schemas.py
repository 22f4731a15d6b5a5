# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GoalRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=120)
    target: str = Field(..., min_length=1, max_length=120)
    icon_type: str = "target"
    color: str = "primary"


class GoalRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    target: str
    icon_type: str
    color: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
