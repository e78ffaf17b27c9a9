"""Shared types: ConflictInfo, FreeSlot and the ScheduleError family."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from weekly_schedule.interval import ClassSession, Weekday


@dataclass(frozen=True)
class ConflictInfo:
    """Outcome of a conflict check.

    Invariants:
        - conflicting_class is set iff has_conflict
        - message is set iff has_conflict
    """

    has_conflict: bool
    conflicting_class: ClassSession | None = None
    message: str | None = None

    def __bool__(self) -> bool:
        return self.has_conflict

    @classmethod
    def collision(cls, other: ClassSession) -> ConflictInfo:
        """Conflict with an already stored session."""
        return cls(
            has_conflict=True,
            conflicting_class=other,
            message=(
                f"Conflicts with {other.course_name} "
                f"({other.start_time}-{other.end_time})"
            ),
        )


NO_CONFLICT = ConflictInfo(has_conflict=False)


@dataclass(frozen=True)
class FreeSlot:
    """A free gap within the daily window. Bounds are the full gap."""

    day: Weekday
    start_time: str
    end_time: str
    duration: int


class ErrorKind(str, Enum):
    INVALID_TIME = "invalid_time"
    INVALID_INTERVAL = "invalid_interval"
    DUPLICATE_ID = "duplicate_id"


class ScheduleError(Exception):
    """Structural violation that prevents a mutation. Never a conflict."""

    kind: ErrorKind

    def __init__(self, kind: ErrorKind, message: str) -> None:
        self.kind = kind
        super().__init__(message)


class InvalidTimeError(ScheduleError, ValueError):
    """Raised for a malformed or out-of-range 'HH:MM' string."""

    def __init__(self, value: object, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(
            ErrorKind.INVALID_TIME,
            f"Invalid time {value!r}: {reason}",
        )


class InvalidIntervalError(ScheduleError, ValueError):
    """Raised when start_time >= end_time."""

    def __init__(self, start_time: str, end_time: str) -> None:
        self.start_time = start_time
        self.end_time = end_time
        super().__init__(
            ErrorKind.INVALID_INTERVAL,
            f"Invalid interval {start_time}-{end_time}: "
            f"start must be strictly before end",
        )


class DuplicateIdError(ScheduleError):
    """Raised when inserting an id that is already stored on any day."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(
            ErrorKind.DUPLICATE_ID,
            f"Duplicate class id {session_id!r}: already in the schedule",
        )
