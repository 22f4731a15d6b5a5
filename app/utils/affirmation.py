# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.

import enum
from typing import Optional, Union


class Affirmation(str, enum.Enum):
    yes = "yes"
    no = "no"
    unanswered = "unanswered"


AFFIRMATIVE_TOKENS = {"1", "yes", "yeah", "true"}


def parse_affirmation(raw: Optional[Union[str, int, bool]]) -> Affirmation:
    """
    Tolerant parser for the "Proud of yourself?" answer.

    Older rows hold "Yes"/"No", newer ones free text or "1"/"0". Anything
    non-empty that is not an affirmative token counts as "no".
    """
    if raw is None:
        return Affirmation.unanswered
    if isinstance(raw, bool):
        return Affirmation.yes if raw else Affirmation.no

    value = str(raw).strip().lower()
    if not value:
        return Affirmation.unanswered
    if value in AFFIRMATIVE_TOKENS:
        return Affirmation.yes
    return Affirmation.no
