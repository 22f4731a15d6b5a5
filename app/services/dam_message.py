# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.

from app.utils.questions import QUESTIONS, format_answer_for_copy, format_option_value

DIVIDER = "─" * 30


def build_dam_message(log) -> str:
    """
    Render a day's answers as the copyable "Daily Accountable Message".
    """
    lines = [
        "DAM (Daily Accountable Message)",
        f"📅 {log.log_date.strftime('%A, %B')} {log.log_date.day}, {log.log_date.year}",
        DIVIDER,
        "",
        "Rate your day:",
        "",
    ]

    for q in QUESTIONS:
        answer = getattr(log, q["field"], None)

        if q["type"] == "rating":
            options = " ".join(
                f"({format_option_value(o['value'])} = {o['label']})" for o in q["options"]
            )
            lines.append(f"{q['id']}. {q['question']} {options}")
        elif q["type"] == "number":
            lines.append(f"{q['id']}. {q['question']} (In numbers)")
        else:
            lines.append(f"{q['id']}. {q['question']}")

        lines.append(f"Ans: {format_answer_for_copy(q, answer)}")
        lines.append("")

    return "\n".join(lines)
