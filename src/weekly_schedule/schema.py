"""Input validation for persisted session records."""

from __future__ import annotations

from typing import Any

from weekly_schedule.interval import coerce_day, parse_time
from weekly_schedule.types import InvalidTimeError

REQUIRED_FIELDS = ("id", "courseName", "day", "startTime", "endTime")
OPTIONAL_STRING_FIELDS = ("location", "color", "description")


def validate_session_record(record: Any, index: int = 0) -> list[str]:
    """Validate one record. Returns list of error messages (empty = valid).

    Checks:
    - Record is an object with the required keys
    - String-valued fields are strings
    - Day is one of Monday..Sunday
    - Times parse as 'HH:MM' and start < end
    """
    label = f"Record {index}"
    if not isinstance(record, dict):
        return [f"{label}: expected an object, got {type(record).__name__}"]

    if isinstance(record.get("id"), str):
        label = f"Record {index} ({record['id']!r})"

    errors: list[str] = []
    for key in REQUIRED_FIELDS:
        if key not in record:
            errors.append(f"{label}: missing {key!r}")
        elif not isinstance(record[key], str):
            errors.append(f"{label}: {key!r} must be a string")

    for key in OPTIONAL_STRING_FIELDS:
        value = record.get(key)
        if value is not None and not isinstance(value, str):
            errors.append(f"{label}: {key!r} must be a string")

    if errors:
        return errors

    try:
        coerce_day(record["day"])
    except ValueError as e:
        errors.append(f"{label}: {e}")

    minutes: dict[str, int] = {}
    for key in ("startTime", "endTime"):
        try:
            minutes[key] = parse_time(record[key])
        except InvalidTimeError as e:
            errors.append(f"{label}: {key} - {e}")

    if len(minutes) == 2 and minutes["startTime"] >= minutes["endTime"]:
        errors.append(
            f"{label}: startTime {record['startTime']} must be before "
            f"endTime {record['endTime']}"
        )

    return errors


def validate_session_records(records: Any) -> list[str]:
    """Validate a whole persisted array, including store-wide id uniqueness."""
    if not isinstance(records, list):
        return [f"Expected a list of session records, got {type(records).__name__}"]

    errors: list[str] = []
    seen: dict[str, int] = {}
    for i, record in enumerate(records):
        errors.extend(validate_session_record(record, i))
        session_id = record.get("id") if isinstance(record, dict) else None
        if isinstance(session_id, str):
            if session_id in seen:
                errors.append(
                    f"Record {i}: duplicate id {session_id!r} "
                    f"(first seen at record {seen[session_id]})"
                )
            else:
                seen[session_id] = i
    return errors
