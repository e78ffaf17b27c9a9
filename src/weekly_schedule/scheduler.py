"""Scheduler facade: one owned ScheduleStore plus persistence.

Composes the store primitives the way an application layer uses them:
replay a persisted snapshot on start, persist the full snapshot after every
successful mutation, and model edits as replace-with-rollback.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Iterable

from weekly_schedule.config import DEFAULT_SLOT_MINUTES, get_app_config
from weekly_schedule.export import export_schedule_as_text
from weekly_schedule.interval import ClassSession, Weekday
from weekly_schedule.loaders import dump_sessions_json, load_sessions_json
from weekly_schedule.store import ScheduleStore
from weekly_schedule.types import ConflictInfo, FreeSlot

logger = logging.getLogger(__name__)

ChangeListener = Callable[[list[ClassSession]], None]


class Scheduler:
    """Application-facing wrapper around a ScheduleStore.

    Args:
        store: Store to own. A fresh empty store when omitted.
        path: JSON file the snapshot is written to after each successful
            mutation. No file I/O when None.
        on_change: Called with the get_all_classes() snapshot after each
            successful mutation.
        default_slot_minutes: Request size used by suggest_free_slots when
            no duration is given.
    """

    def __init__(
        self,
        store: ScheduleStore | None = None,
        path: str | Path | None = None,
        on_change: ChangeListener | None = None,
        default_slot_minutes: int = DEFAULT_SLOT_MINUTES,
    ) -> None:
        self.store = store if store is not None else ScheduleStore()
        self.path = Path(path) if path is not None else None
        self.on_change = on_change
        self.default_slot_minutes = default_slot_minutes

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        on_change: ChangeListener | None = None,
        default_slot_minutes: int = DEFAULT_SLOT_MINUTES,
    ) -> Scheduler:
        """Build a scheduler persisted at path, replaying its contents if present."""
        scheduler = cls(
            path=path, on_change=on_change,
            default_slot_minutes=default_slot_minutes,
        )
        scheduler.load()
        return scheduler

    @classmethod
    def from_config(
        cls,
        config: dict[str, Any] | None = None,
        on_change: ChangeListener | None = None,
    ) -> Scheduler:
        """Build from get_app_config() settings (data_file, default_slot_minutes)."""
        if config is None:
            config = get_app_config()
        return cls.from_file(
            config["data_file"],
            on_change=on_change,
            default_slot_minutes=config["default_slot_minutes"],
        )

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self, path: str | Path | None = None) -> list[ClassSession]:
        """Replay add_class for each persisted record, in file order.

        Records that conflict with earlier ones are skipped with a warning and
        returned. A missing file leaves the schedule empty. Nothing is
        persisted by loading.
        """
        source = Path(path) if path is not None else self.path
        if source is None:
            raise ValueError("No path given and scheduler has no persistence path")
        if not source.exists():
            logger.info("No saved schedule at %s; starting empty", source)
            return []

        # Replay into a copy so a failure part-way leaves the schedule untouched
        staged = self.store.copy()
        skipped: list[ClassSession] = []
        for session in load_sessions_json(source):
            conflict = staged.add_class(session)
            if conflict.has_conflict:
                logger.warning(
                    "Skipping saved class %s (%s): %s",
                    session.id, session.course_name, conflict.message,
                )
                skipped.append(session)

        self.store = staged
        logger.info(
            "Loaded %d classes from %s (%d skipped)",
            len(self.store), source, len(skipped),
        )
        return skipped

    def _commit(self) -> None:
        """Persist and notify. Failures are logged; the mutation stands."""
        snapshot = self.store.get_all_classes()
        if self.path is not None:
            try:
                dump_sessions_json(self.path, snapshot)
            except OSError:
                logger.exception("Could not save schedule to %s", self.path)
        if self.on_change is not None:
            try:
                self.on_change(snapshot)
            except Exception:
                logger.exception("Change listener failed")

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_class(self, session: ClassSession) -> ConflictInfo:
        conflict = self.store.add_class(session)
        if not conflict.has_conflict:
            self._commit()
        return conflict

    def remove_class(self, day: Weekday | str, session_id: str) -> bool:
        removed = self.store.remove_class(day, session_id)
        if removed:
            self._commit()
        return removed

    def update_class(self, session: ClassSession) -> ConflictInfo:
        """Replace the stored session with the same id; add it if unknown.

        On conflict the previous version stays in place.
        """
        existing = self.store.get_class(session.id)
        if existing is None:
            return self.add_class(session)

        conflict = self.store.replace_class(existing.day, existing.id, session)
        if not conflict.has_conflict:
            self._commit()
        return conflict

    def clear_all(self) -> None:
        """Replace the store with a freshly constructed empty one."""
        count = len(self.store)
        self.store = ScheduleStore()
        logger.info("Cleared %d classes", count)
        self._commit()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def classes(self) -> list[ClassSession]:
        return self.store.get_all_classes()

    def get_classes_for_day(self, day: Weekday | str) -> list[ClassSession]:
        return self.store.get_classes_for_day(day)

    def detect_conflict(self, session: ClassSession) -> ConflictInfo:
        return self.store.detect_conflict(session)

    def suggest_free_slots(
        self,
        duration: int | None = None,
        preferred_days: Iterable[Weekday | str] | None = None,
    ) -> list[FreeSlot]:
        if duration is None:
            duration = self.default_slot_minutes
        return self.store.suggest_free_slots(duration, preferred_days)

    def export_text(self, generated_on: str | None = None) -> str:
        return export_schedule_as_text(self.classes, generated_on=generated_on)
