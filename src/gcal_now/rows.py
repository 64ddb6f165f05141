from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo

from gcal_now.events import Classification, Event
from gcal_now.styles import DEFAULT_STYLE, StyleConfig

TIME_FORMAT = "%H:%M"


@dataclass(frozen=True)
class DisplayRow:
    label: str
    start_text: str
    end_text: str
    link: str

    def cells(self) -> tuple[str, str, str, str]:
        return (self.label, self.start_text, self.end_text, self.link)


def format_clock(value: datetime | None, tz: tzinfo | None = None) -> str:
    """Render ``value`` as 24-hour HH:MM in ``tz`` (system local time when None)."""
    if value is None:
        return ""
    return value.astimezone(tz).strftime(TIME_FORMAT)


def truncate_label(label: str, width_cap: int, ellipsis: str = "...") -> str:
    if len(label) <= width_cap:
        return label
    if width_cap <= len(ellipsis):
        return ellipsis[:width_cap]
    return label[: width_cap - len(ellipsis)] + ellipsis


def format_row(
    event: Event,
    classification: Classification,
    width_cap: int,
    style: StyleConfig = DEFAULT_STYLE,
    tz: tzinfo | None = None,
) -> DisplayRow:
    label = event.summary or ""
    if classification is Classification.ONGOING:
        label = style.started_marker + label
    elif classification is Classification.IMMINENT_UPCOMING:
        label = style.next_marker + label

    return DisplayRow(
        label=truncate_label(label, width_cap, style.ellipsis),
        start_text=format_clock(event.start, tz),
        end_text=format_clock(event.end, tz),
        link=event.link or "",
    )
