"""ASCII visualisation for development-time verification.

This module is dev-only and not imported by production code.
"""

from __future__ import annotations

from weekly_schedule.interval import WEEKDAYS, WINDOW_END, WINDOW_START
from weekly_schedule.store import ScheduleStore

MINUTES_PER_CHAR = 30


def show_week(store: ScheduleStore) -> str:
    """Print ASCII week view of the 07:00-21:00 window.

    Legend: '.' = free, 'A'-'Z' = class (by id, in weekday/start order).
    Each row is one day, each char = 30 minutes.
    Returns the string and also prints to stdout.
    """
    lines: list[str] = []
    chars_per_day = (WINDOW_END - WINDOW_START) // MINUTES_PER_CHAR

    # Build class label map: id -> letter
    labels: dict[str, str] = {}
    label_chars = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    for session in store.get_all_classes():
        labels[session.id] = label_chars[len(labels) % len(label_chars)]

    # Header: hour marks every 2 hours (4 chars)
    first_hour = WINDOW_START // 60
    header = "".join(
        f"{first_hour + i // 2:02d}" if i % 4 == 0 else ("" if i % 4 == 1 else " ")
        for i in range(chars_per_day)
    )
    lines.append(f"{'':>10s}  {header}")

    for day in WEEKDAYS:
        row = list("." * chars_per_day)
        for session in store.get_classes_for_day(day):
            start = max(session.start_minutes, WINDOW_START) - WINDOW_START
            end = min(session.end_minutes, WINDOW_END) - WINDOW_START
            if end <= 0 or start >= WINDOW_END - WINDOW_START:
                continue
            # Any session touching a 30-minute cell claims it
            first = start // MINUTES_PER_CHAR
            last = -(-end // MINUTES_PER_CHAR)
            for i in range(first, min(last, chars_per_day)):
                row[i] = labels[session.id]
        lines.append(f"{day.value:>10s}  {''.join(row)}")

    if labels:
        by_id = {s.id: s for s in store.get_all_classes()}
        legend_parts = [
            f"{v}={by_id[k].course_name}" for k, v in labels.items()
        ]
        lines.append(f"\nLegend: . = free, {', '.join(legend_parts)}")

    result = "\n".join(lines)
    print(result)
    return result
