"""Environment-driven settings for entry points and the Scheduler facade."""

from __future__ import annotations

import os
from typing import Any

from dotenv import find_dotenv, load_dotenv

DEFAULT_DATA_FILE = "schedule.json"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_SLOT_MINUTES = 60


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def get_app_config(dotenv: bool = False) -> dict[str, Any]:
    """Get application configuration from environment variables.

    With dotenv=True a .env file in the working directory is read first;
    variables already set in the environment win.
    """
    if dotenv:
        load_dotenv(find_dotenv(usecwd=True))

    slot_minutes = _int_env("SCHEDULE_DEFAULT_SLOT_MINUTES", DEFAULT_SLOT_MINUTES)
    if slot_minutes <= 0:
        raise ValueError(
            f"SCHEDULE_DEFAULT_SLOT_MINUTES must be positive, got {slot_minutes}"
        )

    return {
        "data_file": os.getenv("SCHEDULE_DATA_FILE", DEFAULT_DATA_FILE),
        "log_level": os.getenv("SCHEDULE_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        "default_slot_minutes": slot_minutes,
    }
