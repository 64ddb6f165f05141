"""Event eligibility and temporal classification.

Every function here is pure: callers capture ``now`` once per render pass and
pass the same instant to each call so that one table never mixes two clocks.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

DEFAULT_IMMINENCE_WINDOW = timedelta(minutes=10)
DEFAULT_MAX_EVENT_SPAN = timedelta(hours=24)


@dataclass(frozen=True)
class Event:
    summary: str = ""
    start: datetime | None = None
    end: datetime | None = None
    link: str = ""

    @property
    def is_all_day(self) -> bool:
        return self.start is None or self.end is None


class Classification(Enum):
    ONGOING = "ongoing"
    IMMINENT_UPCOMING = "imminent_upcoming"
    UPCOMING = "upcoming"
    PAST = "past"


def is_eligible(
    event: Event,
    now: datetime,
    max_span: timedelta = DEFAULT_MAX_EVENT_SPAN,
) -> bool:
    if event.start is None or event.end is None:
        return False
    if event.start == event.end:
        return False
    if now >= event.end:
        return False
    return event.end - event.start <= max_span


def filter_events(
    events: Iterable[Event],
    now: datetime,
    max_span: timedelta = DEFAULT_MAX_EVENT_SPAN,
) -> list[Event]:
    """Keep the events worth showing at ``now``, in their original order.

    All-day, zero-length, finished and longer-than-``max_span`` events are
    dropped silently; garbled calendar data must never abort a render.
    """
    return [event for event in events if is_eligible(event, now, max_span)]


def classify(
    start: datetime,
    end: datetime,
    now: datetime,
    imminence_window: timedelta = DEFAULT_IMMINENCE_WINDOW,
) -> Classification:
    if now >= end:
        return Classification.PAST
    if start <= now:
        return Classification.ONGOING
    if start - now < imminence_window:
        return Classification.IMMINENT_UPCOMING
    return Classification.UPCOMING
