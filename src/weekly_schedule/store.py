"""Layer 2: ScheduleStore, sessions partitioned by weekday.

Provides add_class (conflict-checked insert), remove_class, detect_conflict
(read-only check), replace_class (remove + add with rollback), ordered
enumeration and free-slot search over the 07:00-21:00 window.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from weekly_schedule.interval import (
    WEEKDAYS,
    WINDOW_END,
    WINDOW_START,
    ClassSession,
    Weekday,
    coerce_day,
    format_time,
    overlaps,
)
from weekly_schedule.types import (
    NO_CONFLICT,
    ConflictInfo,
    DuplicateIdError,
    FreeSlot,
    ScheduleError,
)

logger = logging.getLogger(__name__)


def _empty_partitions() -> dict[Weekday, list[ClassSession]]:
    return {day: [] for day in WEEKDAYS}


@dataclass
class ScheduleStore:
    """Mutable schedule state. Single-threaded; callers serialise access.

    _partitions[day] is sorted by start time and holds no overlapping pair.
    _index maps every stored id to its day (ids are unique store-wide).
    """

    _partitions: dict[Weekday, list[ClassSession]] = field(
        default_factory=_empty_partitions
    )
    _index: dict[str, Weekday] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._index

    def copy(self) -> ScheduleStore:
        """Independent copy. Sessions are immutable so a shallow list copy suffices."""
        return ScheduleStore(
            _partitions={day: list(p) for day, p in self._partitions.items()},
            _index=dict(self._index),
        )

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_class(self, session: ClassSession) -> ConflictInfo:
        """Insert unless it overlaps a same-day session.

        Returns ConflictInfo naming the earliest-starting collider, in which
        case nothing is inserted. Raises DuplicateIdError if the id is
        already stored on any day.
        """
        if session.id in self._index:
            raise DuplicateIdError(session.id)

        conflict = self.detect_conflict(session)
        if conflict.has_conflict:
            logger.debug("Rejected %s: %s", session.id, conflict.message)
            return conflict

        self._insert(session)
        logger.debug(
            "Added %s on %s %s-%s",
            session.id, session.day.value, session.start_time, session.end_time,
        )
        return NO_CONFLICT

    def remove_class(self, day: Weekday | str, session_id: str) -> bool:
        """Remove (day, id). False when absent; never an error."""
        partition = self._partitions[coerce_day(day)]
        for i, existing in enumerate(partition):
            if existing.id == session_id:
                del partition[i]
                del self._index[session_id]
                logger.debug("Removed %s from %s", session_id, existing.day.value)
                return True
        return False

    def replace_class(
        self,
        day: Weekday | str,
        session_id: str,
        new_session: ClassSession,
    ) -> ConflictInfo:
        """Swap (day, id) for new_session atomically.

        On conflict or ScheduleError the original session is put back and the
        store is left exactly as before. If (day, id) is absent this is
        add_class.
        """
        original = self._find(coerce_day(day), session_id)
        if original is None:
            return self.add_class(new_session)

        self.remove_class(original.day, original.id)
        try:
            result = self.add_class(new_session)
        except ScheduleError:
            self._insert(original)
            raise

        if result.has_conflict:
            self._insert(original)
        return result

    def _insert(self, session: ClassSession) -> None:
        """Insert keeping start order; equal starts keep arrival order."""
        partition = self._partitions[session.day]
        start = session.start_minutes
        pos = len(partition)
        for i, existing in enumerate(partition):
            if existing.start_minutes > start:
                pos = i
                break
        partition.insert(pos, session)
        self._index[session.id] = session.day

    def _find(self, day: Weekday, session_id: str) -> ClassSession | None:
        for existing in self._partitions[day]:
            if existing.id == session_id:
                return existing
        return None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def detect_conflict(self, session: ClassSession) -> ConflictInfo:
        """Read-only: earliest-starting same-day session that overlaps.

        A stored session carrying the candidate's own id is skipped, so an
        edited version can be previewed against the rest of the schedule.
        """
        start, end = session.start_minutes, session.end_minutes
        for existing in self._partitions[session.day]:
            if existing.id == session.id:
                continue
            if existing.start_minutes >= end:
                # Partition is start-ordered: nothing later can overlap
                break
            if overlaps(start, end, existing.start_minutes, existing.end_minutes):
                return ConflictInfo.collision(existing)
        return NO_CONFLICT

    def get_class(self, session_id: str) -> ClassSession | None:
        """Look up a session by id across all days."""
        day = self._index.get(session_id)
        if day is None:
            return None
        return self._find(day, session_id)

    def get_classes_for_day(self, day: Weekday | str) -> list[ClassSession]:
        """Sessions for one day, start ascending. Returns a new list."""
        return list(self._partitions[coerce_day(day)])

    def get_all_classes(self) -> list[ClassSession]:
        """Every session: Monday..Sunday, then start ascending."""
        result: list[ClassSession] = []
        for day in WEEKDAYS:
            result.extend(self._partitions[day])
        return result

    def suggest_free_slots(
        self,
        duration_minutes: int,
        preferred_days: Iterable[Weekday | str] | None = None,
    ) -> list[FreeSlot]:
        """Gaps of at least duration_minutes within 07:00-21:00.

        Days are searched in Monday..Sunday order regardless of the order of
        preferred_days; None or empty means all seven days. Each slot reports
        the full gap, not a window truncated to the requested duration.
        """
        if duration_minutes <= 0:
            raise ValueError(
                f"duration_minutes must be positive, got {duration_minutes}"
            )

        if isinstance(preferred_days, str):
            # A single label (or Weekday) names one day, not its characters
            preferred_days = [preferred_days]
        wanted = {coerce_day(d) for d in preferred_days or ()}
        days = [d for d in WEEKDAYS if not wanted or d in wanted]

        slots: list[FreeSlot] = []
        for day in days:
            slots.extend(self._free_slots_for_day(day, duration_minutes))
        return slots

    def _free_slots_for_day(self, day: Weekday, duration: int) -> list[FreeSlot]:
        """Walk the window with a cursor, tolerating overlaps and out-of-window sessions."""
        sessions = sorted(self._partitions[day], key=lambda s: s.start_minutes)
        slots: list[FreeSlot] = []
        cursor = WINDOW_START

        for session in sessions:
            gap_end = min(session.start_minutes, WINDOW_END)
            if gap_end - cursor >= duration:
                slots.append(_make_slot(day, cursor, gap_end))
            cursor = max(cursor, min(session.end_minutes, WINDOW_END))

        if WINDOW_END - cursor >= duration:
            slots.append(_make_slot(day, cursor, WINDOW_END))
        return slots


def _make_slot(day: Weekday, begin: int, end: int) -> FreeSlot:
    return FreeSlot(
        day=day,
        start_time=format_time(begin),
        end_time=format_time(end),
        duration=end - begin,
    )
