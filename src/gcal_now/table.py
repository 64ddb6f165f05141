from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, tzinfo

from rich.console import Console
from rich.measure import Measurement
from rich.table import Table

from gcal_now.rows import DisplayRow, format_clock
from gcal_now.styles import DEFAULT_STYLE, StyleConfig

SUMMARY_TITLE = "Summary"
END_TITLE = "End"
LINK_TITLE = "Link"
CLOCK_WIDTH = len("HH:MM")
MAX_TABLE_WIDTH = 1000


def build_table(
    rows: Sequence[DisplayRow],
    cap: int,
    now: datetime,
    style: StyleConfig = DEFAULT_STYLE,
    tz: tzinfo | None = None,
) -> Table:
    """Lay out at most ``cap`` rows under a header whose start column shows ``now``."""
    table = Table(
        box=style.box,
        border_style=style.border_style,
        header_style=style.header_style,
        show_header=True,
    )
    # Narrow consoles wrap summaries and links rather than eating into the times.
    table.add_column(SUMMARY_TITLE, overflow="fold")
    table.add_column(format_clock(now, tz), min_width=CLOCK_WIDTH, no_wrap=True)
    table.add_column(END_TITLE, min_width=CLOCK_WIDTH, no_wrap=True)
    table.add_column(LINK_TITLE, overflow="fold")

    for row in rows[: max(cap, 0)]:
        table.add_row(*row.cells(), style=style.row_style(row.label))
    return table


def natural_width(table: Table, console: Console) -> int:
    """Width the table needs to show every cell on one line."""
    options = console.options.update_width(MAX_TABLE_WIDTH)
    return Measurement.get(console, options, table).maximum


def render_table(
    rows: Sequence[DisplayRow],
    cap: int,
    now: datetime,
    style: StyleConfig = DEFAULT_STYLE,
    console: Console | None = None,
    tz: tzinfo | None = None,
) -> str:
    """Serialize the table at its natural width, overflowing narrow terminals.

    Cells are never cropped: the printed block is as wide as its longest row,
    and the terminal wraps it if it has to.
    """
    table = build_table(rows, cap, now, style=style, tz=tz)
    console = console or Console()
    sized = Console(
        width=max(console.width, natural_width(table, console)),
        color_system=console.color_system,
        force_terminal=console.is_terminal,
        highlight=False,
    )
    with sized.capture() as capture:
        sized.print(table)
    return capture.get()
