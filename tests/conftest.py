"""Shared fixtures for gcal_now tests."""
from datetime import UTC, datetime, timedelta

import pytest

from gcal_now.events import Event

NOW = datetime(2024, 1, 1, 10, 0, tzinfo=UTC)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_event():
    """Build an event relative to NOW, offsets given in minutes."""

    def _make(summary="Meeting", start_in=0, length=60, link=""):
        start = NOW + timedelta(minutes=start_in)
        return Event(summary=summary, start=start, end=start + timedelta(minutes=length), link=link)

    return _make


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "GCAL_NOW_CALENDAR_ID",
        "GCAL_NOW_MAX_ROWS",
        "GCAL_NOW_TITLE_WIDTH",
        "GCAL_NOW_IMMINENT_MINUTES",
        "GCAL_NOW_MAX_SPAN_HOURS",
        "GCAL_NOW_REFRESH_SECONDS",
        "GCAL_NOW_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
