# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.utils.affirmation import Affirmation, parse_affirmation
from app.utils.questions import ALLOWED_RATING_VALUES, RATING_FIELDS


class DailyLogUpsert(BaseModel):
    diet: Optional[float] = None
    energy_level: Optional[float] = None
    stress_fatigue: Optional[float] = None
    workout: Optional[float] = None
    water_intake: Optional[float] = None
    sleep_last_night: Optional[float] = None
    cravings: Optional[float] = None
    hunger_level: Optional[float] = None
    step_goal_reached: Optional[float] = None
    step_count: Optional[int] = Field(None, ge=0)
    good_thing: Optional[str] = None
    proud_of_yourself: Optional[str] = None

    @field_validator(*RATING_FIELDS)
    @classmethod
    def rating_in_option_set(cls, v, info):
        if v is None:
            return v
        allowed = ALLOWED_RATING_VALUES[info.field_name]
        if float(v) not in allowed:
            raise ValueError(f"{info.field_name} must be one of {sorted(allowed)}")
        return float(v)

    @field_validator("good_thing", "proud_of_yourself", mode="before")
    @classmethod
    def blank_text_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class DailyLogRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    log_date: date
    diet: Optional[float] = None
    energy_level: Optional[float] = None
    stress_fatigue: Optional[float] = None
    workout: Optional[float] = None
    water_intake: Optional[float] = None
    sleep_last_night: Optional[float] = None
    cravings: Optional[float] = None
    hunger_level: Optional[float] = None
    step_goal_reached: Optional[float] = None
    step_count: Optional[int] = None
    good_thing: Optional[str] = None
    proud_of_yourself: Optional[str] = None
    affirmation: Affirmation = Affirmation.unanswered
    photo_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode="after")
    def derive_affirmation(self):
        self.affirmation = parse_affirmation(self.proud_of_yourself)
        return self


class DamMessageResponse(BaseModel):
    log_date: date
    text: str
