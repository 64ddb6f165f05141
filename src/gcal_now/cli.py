from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from datetime import datetime

from gcal_now.calendar import CalendarError, authenticate_google_calendar, fetch_window_events
from gcal_now.config import DisplaySettings, load_settings
from gcal_now.dashboard import Fetcher, render_pass, utc_now, watch
from gcal_now.events import Event
from gcal_now.logging_utils import get_logger, set_console_level

LOGGER = get_logger("gcal_now.cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Show what is on your Google Calendar right now.")
    parser.add_argument(
        "--calendar",
        help="Calendar ID to read (default: GCAL_NOW_CALENDAR_ID or 'primary').",
    )
    parser.add_argument(
        "--max-rows",
        type=int,
        help="Maximum number of meetings to display.",
    )
    parser.add_argument(
        "--title-width",
        type=int,
        help="Maximum summary width (4 or more), including the status marker and ellipsis.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Also print informational log messages to stderr.",
    )
    subparsers = parser.add_subparsers(dest="command", required=False)

    subparsers.add_parser("auth", help="Authenticate with Google Calendar and create token.json.")
    subparsers.add_parser("show", help="Print the meeting table once (default).")
    subparsers.add_parser("watch", help="Keep the meeting table on screen; Ctrl-C quits.")
    return parser


def _fetcher(settings: DisplaySettings) -> Fetcher:
    def fetch(now: datetime) -> Sequence[Event]:
        return fetch_window_events(now, calendar_id=settings.calendar_id)

    return fetch


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        set_console_level(logging.INFO)

    if args.command == "auth":
        authenticate_google_calendar()
        return 0

    try:
        settings = load_settings(
            calendar_id=args.calendar,
            max_display_rows=args.max_rows,
            title_width_cap=args.title_width,
        )
    except ValueError as exc:
        parser.error(str(exc))

    if args.command == "watch":
        return watch(_fetcher(settings), settings)

    now = utc_now()
    try:
        events = fetch_window_events(now, calendar_id=settings.calendar_id)
    except CalendarError as exc:
        print(exc)
        return 1

    LOGGER.info("Rendering %d events for %s", len(events), settings.calendar_id)
    if not events:
        print("No upcoming events found.")
    print(render_pass(events, settings, now=now), end="")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
