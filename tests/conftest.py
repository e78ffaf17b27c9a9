"""Shared test fixtures and data loading for weekly-schedule.

All test data lives in data/fixtures/ as JSON files.  This module loads
that data and exposes helper functions + pytest fixtures for the tests.

Named schedules live in schedules.json; scenario tables in scenarios/.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
FIXTURES_DIR = Path(__file__).resolve().parent.parent / "data" / "fixtures"
SCENARIOS_DIR = FIXTURES_DIR / "scenarios"


# ---------------------------------------------------------------------------
# Data loaders
# ---------------------------------------------------------------------------
def _load_json(path: Path):
    with open(path) as f:
        return json.load(f)


_schedules = _load_json(FIXTURES_DIR / "schedules.json")

SCHEDULE_NAMES = tuple(_schedules)


def load_scenarios(name: str):
    """Load a scenario file from data/fixtures/scenarios/{name}.json."""
    return _load_json(SCENARIOS_DIR / f"{name}.json")


def schedule_records(name: str) -> list[dict]:
    """Raw persisted records for a named schedule (fresh copies)."""
    return [dict(r) for r in _schedules[name]["classes"]]


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
_counter = 0


def make_session(
    day: str = "Monday",
    start: str = "09:00",
    end: str = "10:00",
    session_id: str | None = None,
    course_name: str | None = None,
    **extra,
):
    """Build a ClassSession with a unique id unless one is given.

    >>> make_session("Tuesday", "10:00", "11:00").day.value
    'Tuesday'
    """
    from weekly_schedule.interval import ClassSession

    global _counter
    if session_id is None:
        _counter += 1
        session_id = f"S-{_counter}"
    return ClassSession(
        id=session_id,
        course_name=course_name or f"Course {session_id}",
        day=day,
        start_time=start,
        end_time=end,
        **extra,
    )


def make_store(name: str = "empty"):
    """ScheduleStore populated by replaying a named schedule through add_class."""
    from weekly_schedule.interval import ClassSession
    from weekly_schedule.store import ScheduleStore

    store = ScheduleStore()
    for record in schedule_records(name):
        conflict = store.add_class(ClassSession.from_dict(record))
        assert not conflict.has_conflict, f"fixture {name} must be conflict-free"
    return store


def make_raw_store(sessions):
    """ScheduleStore built without conflict checks.

    Simulates partitions written by another mutator so algorithms can be
    checked against overlapping data.
    """
    from weekly_schedule.interval import WEEKDAYS
    from weekly_schedule.store import ScheduleStore

    partitions = {day: [] for day in WEEKDAYS}
    for s in sorted(sessions, key=lambda s: s.start_minutes):
        partitions[s.day].append(s)
    return ScheduleStore(
        _partitions=partitions, _index={s.id: s.day for s in sessions}
    )


def snapshot(store) -> list[dict]:
    """Full store contents in a comparable form."""
    return [s.to_dict() for s in store.get_all_classes()]


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def empty_store():
    return make_store("empty")


@pytest.fixture
def two_blocks_store():
    """Monday 09:00-10:00 (MATH-101) and 14:00-15:00 (PHYS-110)."""
    return make_store("two_blocks")


@pytest.fixture
def week_store():
    """Six classes across Mon/Wed/Fri/Sun, loaded out of order."""
    return make_store("week")


@pytest.fixture
def schedule_file(tmp_path):
    """Path to a JSON file holding the 'week' schedule."""
    path = tmp_path / "schedule.json"
    path.write_text(json.dumps(schedule_records("week"), indent=2))
    return path
