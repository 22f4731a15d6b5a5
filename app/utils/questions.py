# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.

from typing import Dict, List, Optional, Union

# ------------------- Option Sets -------------------

QUALITY_OPTIONS = [
    {"value": 1, "label": "Perfect"},
    {"value": 0.5, "label": "Good"},
    {"value": 0, "label": "Bad"},
    {"value": -1, "label": "Too bad"},
]

LEVEL_OPTIONS = [
    {"value": 1, "label": "Very High"},
    {"value": 0.5, "label": "High"},
    {"value": 0, "label": "Low"},
    {"value": -1, "label": "Too low"},
]

# Inverted: a high value is the bad outcome
INTENSITY_OPTIONS = [
    {"value": 1, "label": "Very High"},
    {"value": 0.5, "label": "High"},
    {"value": 0.25, "label": "Low"},
    {"value": 0, "label": "Nill"},
]

YES_NO_OPTIONS = [
    {"value": 1, "label": "Yes"},
    {"value": 0, "label": "No"},
]

# ------------------- Questionnaire -------------------

QUESTIONS: List[Dict] = [
    {"id": 1, "field": "diet", "question": "Diet", "type": "rating", "options": QUALITY_OPTIONS},
    {"id": 2, "field": "energy_level", "question": "Energy level", "type": "rating", "options": LEVEL_OPTIONS},
    {"id": 3, "field": "stress_fatigue", "question": "Stress & Fatigue", "type": "rating",
     "options": INTENSITY_OPTIONS, "invert_colors": True},
    {"id": 4, "field": "workout", "question": "Workout", "type": "rating", "options": QUALITY_OPTIONS},
    {"id": 5, "field": "water_intake", "question": "Water intake", "type": "rating", "options": QUALITY_OPTIONS},
    {"id": 6, "field": "sleep_last_night", "question": "Sleep last night", "type": "rating", "options": QUALITY_OPTIONS},
    {"id": 7, "field": "cravings", "question": "Cravings", "type": "rating",
     "options": INTENSITY_OPTIONS, "invert_colors": True},
    {"id": 8, "field": "hunger_level", "question": "Hunger level", "type": "rating",
     "options": INTENSITY_OPTIONS, "invert_colors": True},
    {"id": 9, "field": "step_goal_reached", "question": "Did you reach your 10K goal?", "type": "rating",
     "options": YES_NO_OPTIONS},
    {"id": 10, "field": "good_thing", "question": "One good thing about today", "type": "text"},
    {"id": 11, "field": "step_count", "question": "Total step count?", "type": "number"},
    {"id": 12, "field": "proud_of_yourself", "question": "Proud of yourself?", "type": "text"},
]

RATING_FIELDS = [q["field"] for q in QUESTIONS if q["type"] == "rating"]

ALLOWED_RATING_VALUES: Dict[str, set] = {
    q["field"]: {float(o["value"]) for o in q["options"]}
    for q in QUESTIONS if q["type"] == "rating"
}


def format_option_value(value: Union[int, float]) -> str:
    sign = "+" if value > 0 else ""
    number = int(value) if float(value).is_integer() else value
    return f"{sign}{number}"


def format_answer_for_copy(question: Dict, answer: Optional[Union[str, int, float]]) -> str:
    if answer is None or answer == "":
        return "Not answered"

    if question["type"] == "rating":
        for option in question["options"]:
            if float(option["value"]) == float(answer):
                return f"{option['label']} ({format_option_value(option['value'])})"

    if isinstance(answer, float) and answer.is_integer():
        return str(int(answer))
    return str(answer)
