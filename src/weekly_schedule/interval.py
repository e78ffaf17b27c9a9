"""Layer 1: interval model. Weekdays, "HH:MM" arithmetic and ClassSession.

All times are local wall-clock minutes since midnight on a fixed 7-day week.
Intervals are half-open: [start, end).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from weekly_schedule.types import InvalidIntervalError, InvalidTimeError


class Weekday(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @property
    def position(self) -> int:
        """Position in the fixed Monday-first order (0-6)."""
        return WEEKDAYS.index(self)


WEEKDAYS: tuple[Weekday, ...] = tuple(Weekday)

MINUTES_PER_DAY = 24 * 60

# Visible scheduling window used by free-slot search: 07:00-21:00
WINDOW_START = 7 * 60
WINDOW_END = 21 * 60

_TIME_RE = re.compile(r"([0-9]{1,2}):([0-9]{2})")


def coerce_day(value: Weekday | str) -> Weekday:
    """Accept a Weekday or its label ("Monday"). Raises ValueError otherwise."""
    if isinstance(value, Weekday):
        return value
    try:
        return Weekday(value)
    except ValueError:
        raise ValueError(
            f"Unknown weekday {value!r} "
            f"(expected one of {', '.join(d.value for d in WEEKDAYS)})"
        ) from None


def parse_time(s: str) -> int:
    """Parse 'HH:MM' to minutes since midnight.

    Raises InvalidTimeError unless the string is a one- or two-digit hour
    in [0, 23], a ':' and a two-digit minute in [0, 59], ASCII digits only.
    """
    if not isinstance(s, str):
        raise InvalidTimeError(s, "expected a 'HH:MM' string")

    match = _TIME_RE.fullmatch(s)
    if match is None:
        raise InvalidTimeError(s, "expected 'H:MM' or 'HH:MM' with ASCII digits")

    hour, minute = int(match.group(1)), int(match.group(2))
    if not 0 <= hour <= 23:
        raise InvalidTimeError(s, f"hour {hour} out of range 0-23")
    if not 0 <= minute <= 59:
        raise InvalidTimeError(s, f"minute {minute} out of range 0-59")
    return hour * 60 + minute


def format_time(minutes: int) -> str:
    """Minutes since midnight to 'HH:MM'. Inverse of parse_time."""
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"minutes {minutes} outside a single day")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def format_12h(s: str) -> str:
    """'13:05' -> '1:05 PM', '00:30' -> '12:30 AM'."""
    minutes = parse_time(s)
    hour, minute = divmod(minutes, 60)
    suffix = "PM" if hour >= 12 else "AM"
    hour12 = hour % 12 or 12
    return f"{hour12}:{minute:02d} {suffix}"


def overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """Half-open overlap test. Touching intervals (a_end == b_start) do not overlap."""
    return a_start < b_end and b_start < a_end


@dataclass(frozen=True)
class ClassSession:
    """One scheduled class on a single weekday. Immutable.

    Invariants:
        - start_time and end_time are valid 'HH:MM' strings
        - start_time < end_time (zero-length and cross-midnight are rejected)
    """

    id: str
    course_name: str
    day: Weekday
    start_time: str
    end_time: str
    location: str = ""
    color: str = ""
    description: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "day", coerce_day(self.day))
        start = parse_time(self.start_time)
        end = parse_time(self.end_time)
        if start >= end:
            raise InvalidIntervalError(self.start_time, self.end_time)

    @property
    def start_minutes(self) -> int:
        return parse_time(self.start_time)

    @property
    def end_minutes(self) -> int:
        return parse_time(self.end_time)

    @property
    def duration(self) -> int:
        """Length in minutes."""
        return self.end_minutes - self.start_minutes

    def overlaps(self, other: ClassSession) -> bool:
        """Same-day overlap with another session."""
        return self.day == other.day and overlaps(
            self.start_minutes, self.end_minutes,
            other.start_minutes, other.end_minutes,
        )

    def to_dict(self) -> dict[str, Any]:
        """Persistence shape: camelCase keys, description omitted when unset."""
        record: dict[str, Any] = {
            "id": self.id,
            "courseName": self.course_name,
            "day": self.day.value,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "location": self.location,
            "color": self.color,
        }
        if self.description is not None:
            record["description"] = self.description
        return record

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> ClassSession:
        """Build from the persistence shape. Missing optional keys default."""
        return cls(
            id=record["id"],
            course_name=record["courseName"],
            day=record["day"],
            start_time=record["startTime"],
            end_time=record["endTime"],
            location=record.get("location", ""),
            color=record.get("color", ""),
            description=record.get("description"),
        )
