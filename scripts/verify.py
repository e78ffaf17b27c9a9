#!/usr/bin/env python
"""Visual verification report for weekly-schedule.

Run:  uv run python scripts/verify.py

Produces a formatted report showing:
  1. Reference data (weekday order, search window)
  2. Fixture schedules (class tables + ASCII week)
  3. Conflict scenarios  -- input/output tables
  4. Free-slot scenarios  -- input/output tables
  5. Scheduler demo (update with rollback, text export)
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

from weekly_schedule.config import get_app_config
from weekly_schedule.debug import show_week
from weekly_schedule.interval import (
    WEEKDAYS,
    WINDOW_END,
    WINDOW_START,
    ClassSession,
    format_time,
)
from weekly_schedule.loaders import parse_sessions
from weekly_schedule.scheduler import Scheduler
from weekly_schedule.store import ScheduleStore

logger = logging.getLogger("verify")

# ---------------------------------------------------------------------------
# Paths and data loading
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
FIXTURES = ROOT / "data" / "fixtures"
SCENARIOS = FIXTURES / "scenarios"


def _load(path: Path):
    with open(path) as f:
        return json.load(f)


_schedules = _load(FIXTURES / "schedules.json")

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------
WIDTH = 90


def banner(title: str):
    print()
    print("=" * WIDTH)
    print(f"  {title}")
    print("=" * WIDTH)


def heading(title: str):
    print()
    print(f"  {title}")
    print(f"  {'-' * (len(title) + 2)}")


def table(headers: list[str], rows: list[list[str]], indent: int = 4):
    """Print a formatted table with auto-sized columns."""
    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            col_widths[i] = max(col_widths[i], len(cell))

    pad = " " * indent
    fmt = pad + "  ".join(f"{{:<{w}}}" for w in col_widths)

    print(fmt.format(*headers))
    print(pad + "  ".join("-" * w for w in col_widths))
    for row in rows:
        print(fmt.format(*(row + [""] * (len(headers) - len(row)))))


def _make_store(name: str) -> ScheduleStore:
    store = ScheduleStore()
    for session in parse_sessions(_schedules[name]["classes"], source=name):
        store.add_class(session)
    return store


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------
def section_reference():
    banner("REFERENCE DATA")
    print(f"\n    Weekday order:  {', '.join(d.value for d in WEEKDAYS)}")
    print(f"    Search window:  {format_time(WINDOW_START)}-{format_time(WINDOW_END)} "
          f"= [{WINDOW_START}, {WINDOW_END}) = {WINDOW_END - WINDOW_START} min")


def section_schedules():
    banner("FIXTURE SCHEDULES")

    for name, config in _schedules.items():
        heading(f"Schedule: {name}")
        print(f"    {config['description']}\n")
        store = _make_store(name)
        rows = [
            [s.day.value, f"{s.start_time}-{s.end_time}", s.id, s.course_name]
            for s in store.get_all_classes()
        ]
        if rows:
            table(["Day", "Time", "ID", "Course"], rows)
        else:
            print("    (no classes)")
        print()
        show_week(store)


def section_conflicts():
    banner("CONFLICT DETECTION")
    heading("Function: store.detect_conflict(session) -> ConflictInfo")
    print("    Earliest-starting overlapping class on the same day; touching is allowed.\n")

    rows = []
    for s in _load(SCENARIOS / "conflicts.json")["detect"]:
        c = s["candidate"]
        candidate = ClassSession("CANDIDATE", "Candidate", c["day"], c["startTime"], c["endTime"])
        result = _make_store(s["schedule"]).detect_conflict(candidate)
        actual = result.conflicting_class.id if result.has_conflict else None
        rows.append([
            s["id"], s["schedule"], f"{c['day'][:3]} {c['startTime']}-{c['endTime']}",
            str(actual), "OK" if actual == s["expected_conflict"] else "FAIL",
            s["notes"],
        ])
    table(["ID", "Schedule", "Candidate", "Collider", "", "Notes"], rows)


def section_free_slots():
    banner("FREE-SLOT SEARCH")
    heading("Function: store.suggest_free_slots(duration, preferred_days) -> [FreeSlot]")
    print("    Full gaps of at least `duration` minutes within the search window.\n")

    rows = []
    for s in _load(SCENARIOS / "free_slots.json")["suggest"]:
        slots = _make_store(s["schedule"]).suggest_free_slots(s["duration"], s["days"])
        actual = [[x.day.value, x.start_time, x.end_time, x.duration] for x in slots]
        slot_str = "; ".join(f"{d[:3]} {a}-{b} ({m})" for d, a, b, m in actual) or "(none)"
        rows.append([
            s["id"], str(s["duration"]), slot_str,
            "OK" if actual == s["expected"] else "FAIL",
        ])
    table(["ID", "Min", "Slots", ""], rows)


def section_scheduler():
    banner("SCHEDULER: UPDATE WITH ROLLBACK + TEXT EXPORT")

    scheduler = Scheduler(store=_make_store("week"))
    original = scheduler.store.get_class("MATH-101")
    clash = ClassSession(
        original.id, original.course_name, "Monday", "08:30", "09:30",
        original.location, original.color,
    )
    result = scheduler.update_class(clash)
    restored = scheduler.store.get_class("MATH-101")

    rows = [
        ["Conflict reported", str(result.has_conflict)],
        ["Message", result.message or ""],
        ["MATH-101 after", f"{restored.day.value} {restored.start_time}-{restored.end_time}"],
        ["Rolled back", "OK" if restored == original else "FAIL"],
    ]
    table(["Check", "Value"], rows)

    heading("Text export")
    print()
    for line in scheduler.export_text().splitlines():
        print(f"    {line}")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------
def main():
    config = get_app_config(dotenv=True)
    logging.basicConfig(
        level=config["log_level"],
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    banner("WEEKLY-SCHEDULE  --  VISUAL VERIFICATION REPORT")
    print(f"    Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}")
    print(f"    Fixture data: {FIXTURES.relative_to(ROOT)}/")
    logger.debug("Config: %s", config)

    section_reference()
    section_schedules()
    section_conflicts()
    section_free_slots()
    section_scheduler()

    banner("END OF REPORT")
    print()


if __name__ == "__main__":
    main()
