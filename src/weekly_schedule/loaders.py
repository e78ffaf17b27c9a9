"""Reading and writing the JSON session format used for persistence."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable

from weekly_schedule.interval import ClassSession
from weekly_schedule.schema import validate_session_records

logger = logging.getLogger(__name__)


def parse_sessions(data: object, source: str = "<data>") -> list[ClassSession]:
    """Validate decoded JSON and build sessions in their original order.

    Accepts either a bare array or {"classes": [...]}.
    Raises ValueError listing every problem if validation fails.
    """
    records = data.get("classes", data) if isinstance(data, dict) else data

    errors = validate_session_records(records)
    if errors:
        raise ValueError(
            f"Validation errors in {source}:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )

    return [ClassSession.from_dict(r) for r in records]  # type: ignore[union-attr]


def load_sessions_json(path: str | Path) -> list[ClassSession]:
    """Load sessions from a JSON file.

    The file holds the persisted snapshot:
    [
        {"id": "...", "courseName": "...", "day": "Monday",
         "startTime": "09:00", "endTime": "10:30",
         "location": "...", "color": "...", "description": "..."},
        ...
    ]

    Raises ValueError if validation fails.
    """
    path = Path(path)
    with open(path) as f:
        data = json.load(f)

    sessions = parse_sessions(data, source=path.name)
    logger.debug("Loaded %d sessions from %s", len(sessions), path)
    return sessions


def dump_sessions_json(path: str | Path, sessions: Iterable[ClassSession]) -> None:
    """Write sessions as a JSON array, replacing the file.

    The array is written to a temporary file beside the target and moved into
    place, so an interrupted write never leaves a truncated schedule behind.
    """
    path = Path(path)
    records = [s.to_dict() for s in sessions]
    if path.parent != Path("."):
        path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w") as f:
            json.dump(records, f, indent=2)
            f.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.debug("Wrote %d sessions to %s", len(records), path)
