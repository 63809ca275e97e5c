"""The lines of an open document, its file and the edits made to it."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from rsedit.line import Line

NO_FILE = "No file open"

PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class Location:
    """A place in the text: a grapheme within a line."""

    grapheme_index: int = 0
    line_index: int = 0


class FileInfo:
    """The path a document is read from and written to, if any."""

    def __init__(self, path: Optional[PathLike] = None) -> None:
        self.path: Optional[Path] = Path(path) if path is not None else None

    def has_path(self) -> bool:
        return self.path is not None

    def __str__(self) -> str:
        if self.path is None:
            return NO_FILE
        name = self.path.name
        if not name or name == "..":
            return NO_FILE
        return name

    def __repr__(self) -> str:
        return f"FileInfo({self.path!r})"


def _split_lines(data: str) -> List[str]:
    """Split on ``\\n`` or ``\\r\\n``; a final line ending is optional."""
    pieces = data.split("\n")
    last = pieces.pop()
    lines = [piece[:-1] if piece.endswith("\r") else piece for piece in pieces]
    if last:
        lines.append(last)
    return lines


@dataclass(eq=False)
class Buffer:
    """An editable list of lines backed by an optional file."""

    lines: List[Line] = field(default_factory=list)
    modified: bool = False
    file_info: FileInfo = field(default_factory=FileInfo)

    @classmethod
    def load(cls, path: PathLike) -> Buffer:
        """Read ``path`` as UTF-8 text; raises ``OSError`` or ``UnicodeDecodeError``."""
        with open(path, encoding="utf-8", newline="") as handle:
            data = handle.read()
        return cls(
            lines=[Line(text) for text in _split_lines(data)],
            modified=False,
            file_info=FileInfo(path),
        )

    def _write(self, file_info: FileInfo) -> None:
        if file_info.path is None:
            return
        with open(file_info.path, "w", encoding="utf-8", newline="") as handle:
            for line in self.lines:
                handle.write(f"{line}\n")

    def save_as(self, file_name: PathLike) -> None:
        file_info = FileInfo(file_name)
        self._write(file_info)
        self.file_info = file_info
        self.modified = False

    def save(self) -> None:
        self._write(self.file_info)
        self.modified = False

    def _line_at(self, index: int) -> Optional[Line]:
        if 0 <= index < len(self.lines):
            return self.lines[index]
        return None

    def insert_char(self, character: str, at: Location) -> None:
        if at.line_index == self.height():
            self.lines.append(Line(character))
            self.modified = True
            return
        line = self._line_at(at.line_index)
        if line is not None:
            line.insert_char(character, at.grapheme_index)
            self.modified = True

    def insert_line(self, at: Location) -> None:
        if at.line_index == self.height():
            self.lines.append(Line())
            self.modified = True
            return
        line = self._line_at(at.line_index)
        if line is not None:
            self.lines.insert(at.line_index + 1, line.split(at.grapheme_index))
            self.modified = True

    def remove_char(self, at: Location) -> None:
        """Delete the grapheme at ``at``, joining the next line when at a line's end."""
        line = self._line_at(at.line_index)
        if line is None:
            return
        count = line.grapheme_count()
        if at.grapheme_index >= count and self.height() > at.line_index + 1:
            line.append(self.lines.pop(at.line_index + 1))
            self.modified = True
        elif at.grapheme_index < count:
            line.remove_char(at.grapheme_index)
            self.modified = True

    def search_next(self, query: str, start: Location) -> Optional[Location]:
        """Find ``query`` at or after ``start``, wrapping around the document."""
        count = len(self.lines)
        if not query or count == 0:
            return None
        for step in range(count + 1):
            line_index = (start.line_index + step) % count
            from_index = start.grapheme_index if step == 0 else 0
            found = self.lines[line_index].search_next(query, from_index)
            if found is not None:
                return Location(grapheme_index=found, line_index=line_index)
        return None

    def search_previous(self, query: str, start: Location) -> Optional[Location]:
        """Find ``query`` before ``start``, wrapping around the document."""
        count = len(self.lines)
        if not query or count == 0:
            return None
        skip = max(0, count - start.line_index - 1)
        for step in range(count + 1):
            line_index = count - 1 - (skip + step) % count
            line = self.lines[line_index]
            from_index = start.grapheme_index if step == 0 else line.grapheme_count()
            found = line.search_previous(query, from_index)
            if found is not None:
                return Location(grapheme_index=found, line_index=line_index)
        return None

    def is_empty(self) -> bool:
        return not self.lines

    def is_file_loaded(self) -> bool:
        return self.file_info.has_path()

    def height(self) -> int:
        return len(self.lines)