from __future__ import annotations

from dataclasses import dataclass

from rich import box
from rich.box import Box


@dataclass(frozen=True)
class StyleConfig:
    """Markers and rich style strings shared by row formatting and the table."""

    started_marker: str = "+"
    next_marker: str = ">"
    ellipsis: str = "..."
    header_style: str = "#FAFAFA on black"
    normal_style: str = "color(7) on black"
    started_style: str = "bold #62D9F5 on #0000FF"
    next_style: str = "bold #000000 on #00FF00"
    border_style: str = "color(99)"
    box: Box = box.SQUARE

    def __post_init__(self) -> None:
        if not self.started_marker or not self.next_marker:
            msg = "Row markers cannot be empty."
            raise ValueError(msg)
        if self.started_marker.startswith(self.next_marker) or self.next_marker.startswith(
            self.started_marker
        ):
            msg = "Row markers must not be prefixes of each other."
            raise ValueError(msg)

    def row_style(self, label: str) -> str:
        if label.startswith(self.next_marker):
            return self.next_style
        if label.startswith(self.started_marker):
            return self.started_style
        return self.normal_style


DEFAULT_STYLE = StyleConfig()
