"""weekly-schedule: conflict-free weekly class timetables and free-slot search."""

from weekly_schedule.interval import (
    WEEKDAYS,
    WINDOW_END,
    WINDOW_START,
    ClassSession,
    Weekday,
    format_time,
    overlaps,
    parse_time,
)
from weekly_schedule.scheduler import Scheduler
from weekly_schedule.store import ScheduleStore
from weekly_schedule.types import (
    NO_CONFLICT,
    ConflictInfo,
    DuplicateIdError,
    ErrorKind,
    FreeSlot,
    InvalidIntervalError,
    InvalidTimeError,
    ScheduleError,
)

__all__ = [
    "ClassSession",
    "ConflictInfo",
    "DuplicateIdError",
    "ErrorKind",
    "FreeSlot",
    "InvalidIntervalError",
    "InvalidTimeError",
    "NO_CONFLICT",
    "ScheduleError",
    "ScheduleStore",
    "Scheduler",
    "WEEKDAYS",
    "WINDOW_END",
    "WINDOW_START",
    "Weekday",
    "format_time",
    "overlaps",
    "parse_time",
]
