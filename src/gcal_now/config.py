from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

SCOPES = ["https://www.googleapis.com/auth/calendar.readonly"]
PROJECT_ROOT = Path(__file__).resolve().parents[2]
TOKEN_FILE = PROJECT_ROOT / "token.json"
CREDENTIALS_FILE = PROJECT_ROOT / "credentials.json"
ENV_FILE = PROJECT_ROOT / ".env"
DEFAULT_CALENDAR_ID = "primary"
DEFAULT_MAX_DISPLAY_ROWS = 6
DEFAULT_TITLE_WIDTH_CAP = 57
# Room for the default "..." plus one character of the title.
MIN_TITLE_WIDTH_CAP = 4
DEFAULT_IMMINENT_MINUTES = 10
DEFAULT_MAX_SPAN_HOURS = 24
DEFAULT_REFRESH_SECONDS = 60
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class DisplaySettings:
    max_display_rows: int = DEFAULT_MAX_DISPLAY_ROWS
    title_width_cap: int = DEFAULT_TITLE_WIDTH_CAP
    imminence_window: timedelta = timedelta(minutes=DEFAULT_IMMINENT_MINUTES)
    max_event_span: timedelta = timedelta(hours=DEFAULT_MAX_SPAN_HOURS)
    refresh_seconds: int = DEFAULT_REFRESH_SECONDS
    calendar_id: str = DEFAULT_CALENDAR_ID

    def __post_init__(self) -> None:
        if self.max_display_rows < 0:
            msg = "max_display_rows cannot be negative."
            raise ValueError(msg)
        if self.title_width_cap < MIN_TITLE_WIDTH_CAP:
            msg = f"title_width_cap must be at least {MIN_TITLE_WIDTH_CAP}."
            raise ValueError(msg)
        if self.imminence_window < timedelta(0):
            msg = "imminence_window cannot be negative."
            raise ValueError(msg)
        if self.max_event_span <= timedelta(0):
            msg = "max_event_span must be greater than zero."
            raise ValueError(msg)
        if self.refresh_seconds < 1:
            msg = "refresh_seconds must be at least 1."
            raise ValueError(msg)


def load_environment() -> None:
    load_dotenv(ENV_FILE)


def _get_int(name: str, default: int, low: int, high: int) -> int:
    raw = os.getenv(name, str(default)).strip()
    try:
        value = int(raw)
    except ValueError:
        return default
    return min(high, max(low, value))


def get_calendar_id() -> str:
    load_environment()
    return os.getenv("GCAL_NOW_CALENDAR_ID", DEFAULT_CALENDAR_ID).strip() or DEFAULT_CALENDAR_ID


def get_max_display_rows() -> int:
    load_environment()
    return _get_int("GCAL_NOW_MAX_ROWS", DEFAULT_MAX_DISPLAY_ROWS, 1, 100)


def get_title_width_cap() -> int:
    load_environment()
    return _get_int("GCAL_NOW_TITLE_WIDTH", DEFAULT_TITLE_WIDTH_CAP, 8, 200)


def get_imminence_window() -> timedelta:
    load_environment()
    minutes = _get_int("GCAL_NOW_IMMINENT_MINUTES", DEFAULT_IMMINENT_MINUTES, 0, 240)
    return timedelta(minutes=minutes)


def get_max_event_span() -> timedelta:
    load_environment()
    hours = _get_int("GCAL_NOW_MAX_SPAN_HOURS", DEFAULT_MAX_SPAN_HOURS, 1, 24 * 7)
    return timedelta(hours=hours)


def get_refresh_seconds() -> int:
    load_environment()
    return _get_int("GCAL_NOW_REFRESH_SECONDS", DEFAULT_REFRESH_SECONDS, 5, 3600)


def load_settings(**overrides: Any) -> DisplaySettings:
    """Build settings from the environment, with non-None overrides on top."""
    values: dict[str, Any] = {
        "max_display_rows": get_max_display_rows(),
        "title_width_cap": get_title_width_cap(),
        "imminence_window": get_imminence_window(),
        "max_event_span": get_max_event_span(),
        "refresh_seconds": get_refresh_seconds(),
        "calendar_id": get_calendar_id(),
    }
    unknown = set(overrides) - set(values)
    if unknown:
        msg = f"Unknown settings: {', '.join(sorted(unknown))}"
        raise ValueError(msg)
    values.update({key: value for key, value in overrides.items() if value is not None})
    return DisplaySettings(**values)


def get_log_level() -> str:
    load_environment()
    level = os.getenv("GCAL_NOW_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    if level in {"DEBUG", "INFO", "WARNING", "ERROR"}:
        return level
    return DEFAULT_LOG_LEVEL
