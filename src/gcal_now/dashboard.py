"""One-shot and live rendering of the meeting table.

A render pass captures ``now`` once and threads it through filtering,
classification, row formatting and the header clock. The live view repeats
independent passes; nothing computed in one tick is reused by the next
except the raw event list, which is re-fetched every ``refresh_seconds``.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Sequence
from datetime import UTC, datetime, tzinfo

from rich.console import Console
from rich.live import Live
from rich.table import Table

from gcal_now.calendar import CalendarError
from gcal_now.config import DisplaySettings
from gcal_now.events import Event, classify, filter_events
from gcal_now.logging_utils import get_logger
from gcal_now.rows import DisplayRow, format_row
from gcal_now.styles import DEFAULT_STYLE, StyleConfig
from gcal_now.table import build_table, render_table

LOGGER = get_logger("gcal_now.dashboard")
TICK_SECONDS = 1.0

Clock = Callable[[], datetime]
Fetcher = Callable[[datetime], Sequence[Event]]


def utc_now() -> datetime:
    return datetime.now(UTC)


def prepare_rows(
    events: Iterable[Event],
    now: datetime,
    settings: DisplaySettings,
    style: StyleConfig = DEFAULT_STYLE,
    tz: tzinfo | None = None,
) -> list[DisplayRow]:
    rows: list[DisplayRow] = []
    for event in filter_events(events, now, settings.max_event_span):
        if len(rows) >= settings.max_display_rows:
            break
        if event.start is None or event.end is None:
            continue
        classification = classify(event.start, event.end, now, settings.imminence_window)
        rows.append(format_row(event, classification, settings.title_width_cap, style, tz))
    return rows


def build_pass(
    events: Iterable[Event],
    now: datetime,
    settings: DisplaySettings,
    style: StyleConfig = DEFAULT_STYLE,
    tz: tzinfo | None = None,
) -> Table:
    rows = prepare_rows(events, now, settings, style, tz)
    LOGGER.debug("Render pass at %s produced %d rows", now.isoformat(), len(rows))
    return build_table(rows, settings.max_display_rows, now, style=style, tz=tz)


def render_pass(
    events: Iterable[Event],
    settings: DisplaySettings,
    style: StyleConfig = DEFAULT_STYLE,
    now: datetime | None = None,
    console: Console | None = None,
    tz: tzinfo | None = None,
) -> str:
    now = now or utc_now()
    rows = prepare_rows(events, now, settings, style, tz)
    return render_table(
        rows,
        settings.max_display_rows,
        now,
        style=style,
        console=console,
        tz=tz,
    )


def watch(
    fetch: Fetcher,
    settings: DisplaySettings,
    style: StyleConfig = DEFAULT_STYLE,
    console: Console | None = None,
    clock: Clock = utc_now,
    sleep: Callable[[float], None] = time.sleep,
    tz: tzinfo | None = None,
) -> int:
    """Redraw the table every tick until interrupted with Ctrl-C."""
    console = console or Console()
    events: Sequence[Event] = ()
    fetched_at: datetime | None = None

    try:
        with Live(console=console, auto_refresh=False, transient=False) as live:
            while True:
                now = clock()
                if fetched_at is None or _elapsed(fetched_at, now) >= settings.refresh_seconds:
                    events = _refetch(fetch, now, events)
                    fetched_at = now
                live.update(build_pass(events, now, settings, style, tz), refresh=True)
                sleep(TICK_SECONDS)
    except KeyboardInterrupt:
        LOGGER.info("Live view stopped.")
    return 0


def _elapsed(since: datetime, now: datetime) -> float:
    return (now - since).total_seconds()


def _refetch(fetch: Fetcher, now: datetime, previous: Sequence[Event]) -> Sequence[Event]:
    try:
        return fetch(now)
    except CalendarError as exc:
        LOGGER.warning("Keeping previous events; refresh failed: %s", exc)
        return previous
