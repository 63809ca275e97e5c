"""Small value types shared across the editor: positions, sizes and file status."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Position:
    """A screen cell, addressed by column and row."""

    column: int = 0
    row: int = 0

    def saturating_sub(self, other: Position) -> Position:
        """Subtract component-wise, clamping each component at zero."""
        return Position(
            column=max(0, self.column - other.column),
            row=max(0, self.row - other.row),
        )


@dataclass(frozen=True)
class Size:
    """Width and height of a screen area, in cells."""

    width: int = 0
    height: int = 0


@dataclass
class FileStatus:
    """What the status bar shows about the open document."""

    lines_count: int = 0
    current_line_index: int = 0
    modified: bool = False
    file_name: Optional[str] = None

    def modified_indicator(self) -> str:
        return "Modified" if self.modified else "Not modified"

    def lines_count_text(self) -> str:
        if self.lines_count == 1:
            return "1 line"
        return f"{self.lines_count} lines"

    def position_indicator(self) -> str:
        return f"{self.current_line_index + 1}:{self.lines_count}"