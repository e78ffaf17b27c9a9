"""Plain-text export of a weekly schedule."""

from __future__ import annotations

from datetime import date
from typing import Iterable

from weekly_schedule.interval import WEEKDAYS, ClassSession, format_12h

TITLE = "STUDENT SCHEDULE"


def export_schedule_as_text(
    classes: Iterable[ClassSession],
    generated_on: str | None = None,
) -> str:
    """Render sessions grouped by day (Monday first), start ascending.

    generated_on defaults to today's ISO date.
    """
    classes = list(classes)
    if generated_on is None:
        generated_on = date.today().isoformat()

    lines = [TITLE, "=" * len(TITLE), ""]

    for day in WEEKDAYS:
        day_classes = sorted(
            (c for c in classes if c.day == day), key=lambda c: c.start_minutes
        )
        if not day_classes:
            continue

        lines.append(day.value.upper())
        lines.append("-" * len(day.value))
        for c in day_classes:
            lines.append(f"* {c.course_name}")
            if c.location:
                lines.append(f"  Location: {c.location}")
            lines.append(
                f"  Time: {format_12h(c.start_time)} - {format_12h(c.end_time)}"
            )
            if c.description:
                lines.append(f"  Notes: {c.description}")
            lines.append("")

    lines.append(f"Total Classes: {len(classes)}")
    lines.append(f"Generated on: {generated_on}")
    return "\n".join(lines) + "\n"
