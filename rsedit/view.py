"""The text area: cursor movement, editing, scrolling, searching and drawing."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import Optional

from rsedit.bars import UIElement
from rsedit.buffer import Buffer, Location, PathLike
from rsedit.commands import Edit, EditAction, Move
from rsedit.geometry import FileStatus, Position
from rsedit.line import Line
from rsedit.terminal import Terminal

VERSION = "1.5.1"

_TAB_SPACES = 4


class SearchDirection(enum.Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass
class SearchInfo:
    """Where the cursor was when a search began, and the current query."""

    previous_location: Location
    previous_scroll_offset: Position
    query: Optional[Line] = None


def _div_ceil(value: int, divisor: int) -> int:
    return -(-value // divisor)


class View(UIElement):
    """Shows the buffer and keeps the cursor within it and on screen."""

    def __init__(self, terminal: Terminal) -> None:
        super().__init__(terminal)
        self.buffer = Buffer()
        self.text_location = Location()
        self.scroll_offset = Position()
        self.search_info: Optional[SearchInfo] = None

    def current_status(self) -> FileStatus:
        return FileStatus(
            lines_count=self.buffer.height(),
            current_line_index=self.text_location.line_index,
            modified=self.buffer.modified,
            file_name=str(self.buffer.file_info),
        )

    def handle_edit_command(self, command: Edit) -> None:
        action = command.action
        if action is EditAction.INSERT_CHARACTER:
            if command.character is not None:
                self._insert_char(command.character)
        elif action is EditAction.INSERT_TAB:
            for _ in range(_TAB_SPACES):
                self._insert_char(" ")
        elif action is EditAction.INSERT_LINE:
            self.buffer.insert_line(self.text_location)
            self.handle_move_command(Move.RIGHT)
            self.needs_redraw = True
        elif action is EditAction.DELETE_PREVIOUS:
            self._delete_previous()
        elif action is EditAction.DELETE_NEXT:
            self.buffer.remove_char(self.text_location)
            self.needs_redraw = True

    def handle_move_command(self, command: Move) -> None:
        page = max(0, self.size.height - 1)
        if command is Move.UP:
            self._move_up(1)
        elif command is Move.DOWN:
            self._move_down(1)
        elif command is Move.LEFT:
            self._move_left()
        elif command is Move.RIGHT:
            self._move_right()
        elif command is Move.PAGE_UP:
            self._move_up(page)
        elif command is Move.PAGE_DOWN:
            self._move_down(page)
        elif command is Move.START_OF_LINE:
            self._set_grapheme(0)
        elif command is Move.END_OF_LINE:
            self._move_to_end_of_line()
        self._scroll_text_location_into_view()

    def load(self, path: PathLike) -> None:
        self.buffer = Buffer.load(path)
        self.needs_redraw = True

    def is_file_loaded(self) -> bool:
        return self.buffer.is_file_loaded()

    def save(self) -> None:
        self.buffer.save()

    def save_as(self, file_name: PathLike) -> None:
        self.buffer.save_as(file_name)

    def cursor_position(self) -> Position:
        return self._text_location_to_position().saturating_sub(self.scroll_offset)

    def _current_line(self) -> Optional[Line]:
        index = self.text_location.line_index
        if 0 <= index < len(self.buffer.lines):
            return self.buffer.lines[index]
        return None

    def _current_line_length(self) -> int:
        line = self._current_line()
        return line.grapheme_count() if line is not None else 0

    def _set_grapheme(self, index: int) -> None:
        self.text_location = replace(self.text_location, grapheme_index=index)

    def _set_line(self, index: int) -> None:
        self.text_location = replace(self.text_location, line_index=index)

    def _text_location_to_position(self) -> Position:
        line = self._current_line()
        column = line.width_until(self.text_location.grapheme_index) if line is not None else 0
        return Position(column=column, row=self.text_location.line_index)

    def _center_text_location(self) -> None:
        position = self._text_location_to_position()
        self.scroll_offset = Position(
            column=max(0, position.column - _div_ceil(self.size.width, 2)),
            row=max(0, position.row - _div_ceil(self.size.height, 2)),
        )
        self.needs_redraw = True

    def _move_up(self, step: int) -> None:
        self._set_line(max(0, self.text_location.line_index - step))
        self._snap_to_valid_grapheme()

    def _move_down(self, step: int) -> None:
        self._set_line(self.text_location.line_index + step)
        self._snap_to_valid_grapheme()
        self._set_line(min(self.text_location.line_index, self.buffer.height()))

    def _move_right(self) -> None:
        if self.text_location.grapheme_index < self._current_line_length():
            self._set_grapheme(self.text_location.grapheme_index + 1)
        else:
            self._set_grapheme(0)
            self._move_down(1)

    def _move_left(self) -> None:
        if self.text_location.grapheme_index > 0:
            self._set_grapheme(self.text_location.grapheme_index - 1)
        elif self.text_location.line_index > 0:
            self._move_up(1)
            self._move_to_end_of_line()

    def _move_to_end_of_line(self) -> None:
        self._set_grapheme(self._current_line_length())

    def _snap_to_valid_grapheme(self) -> None:
        line = self._current_line()
        if line is None:
            self._set_grapheme(0)
        else:
            self._set_grapheme(min(line.grapheme_count(), self.text_location.grapheme_index))

    def _scroll_horizontally(self, to_where: int) -> None:
        width = self.size.width
        column = self.scroll_offset.column
        if to_where < column:
            column = to_where
        elif to_where >= column + width:
            column = max(0, to_where - width) + 1
        else:
            return
        self.scroll_offset = replace(self.scroll_offset, column=column)
        self.needs_redraw = True

    def _scroll_vertically(self, to_where: int) -> None:
        height = self.size.height
        row = self.scroll_offset.row
        if to_where < row:
            row = to_where
        elif to_where >= row + height:
            row = max(0, to_where - height) + 1
        else:
            return
        self.scroll_offset = replace(self.scroll_offset, row=row)
        self.needs_redraw = True

    def _scroll_text_location_into_view(self) -> None:
        position = self._text_location_to_position()
        self._scroll_horizontally(position.column)
        self._scroll_vertically(position.row)

    def _insert_char(self, character: str) -> None:
        old_length = self._current_line_length()
        self.buffer.insert_char(character, self.text_location)
        if self._current_line_length() > old_length:
            self.handle_move_command(Move.RIGHT)
        self.needs_redraw = True

    def _delete_previous(self) -> None:
        if self.text_location.line_index != 0 or self.text_location.grapheme_index != 0:
            self.handle_move_command(Move.LEFT)
            self.buffer.remove_char(self.text_location)
            self.needs_redraw = True

    def enter_search(self) -> None:
        self.search_info = SearchInfo(
            previous_location=self.text_location,
            previous_scroll_offset=self.scroll_offset,
        )

    def exit_search(self) -> None:
        self.search_info = None
        self.needs_redraw = True

    def dismiss_search(self) -> None:
        """Leave search mode, returning the cursor to where the search began."""
        if self.search_info is not None:
            self.text_location = self.search_info.previous_location
            self.scroll_offset = self.search_info.previous_scroll_offset
            self._scroll_text_location_into_view()
        self.search_info = None
        self.needs_redraw = True

    def search(self, query: str) -> None:
        if self.search_info is not None:
            self.search_info.query = Line(query)
        self._search_in_direction(self.text_location, SearchDirection.FORWARD)
        self.needs_redraw = True

    def _search_query(self) -> Optional[Line]:
        return self.search_info.query if self.search_info is not None else None

    def _search_in_direction(self, start: Location, direction: SearchDirection) -> None:
        query = self._search_query()
        if query is None or len(query) == 0:
            return
        if direction is SearchDirection.FORWARD:
            location = self.buffer.search_next(str(query), start)
        else:
            location = self.buffer.search_previous(str(query), start)
        if location is not None:
            self.text_location = location
            self._center_text_location()

    def search_next(self) -> None:
        query = self._search_query()
        step = min(query.grapheme_count(), 1) if query is not None else 1
        start = replace(
            self.text_location, grapheme_index=self.text_location.grapheme_index + step
        )
        self._search_in_direction(start, SearchDirection.FORWARD)

    def search_previous(self) -> None:
        self._search_in_direction(self.text_location, SearchDirection.BACKWARD)

    @staticmethod
    def render_welcome(width: int) -> str:
        """The welcome line shown in an empty document, fitted to ``width``."""
        if width == 0:
            return ""
        remaining = width - 1
        message = f"Welcome to Rsedit v{VERSION}!"
        if remaining < len(message.encode("utf-8")):
            return "~"
        return f"~{message:^{remaining}}"

    def draw(self, row: int) -> None:
        width, height = self.size.width, self.size.height
        query_line = self._search_query()
        query = str(query_line) if query_line is not None else None
        welcome_row = _div_ceil(height, 3)
        for current_row in range(row, row + height):
            line_index = current_row - row + self.scroll_offset.row
            if 0 <= line_index < len(self.buffer.lines):
                left = self.scroll_offset.column
                selected = (
                    self.text_location.grapheme_index
                    if self.text_location.line_index == line_index and query is not None
                    else None
                )
                annotated = self.buffer.lines[line_index].annotated_visible_substr(
                    left, left + width, query, selected
                )
                self.terminal.print_annotated_line(current_row, annotated)
            elif current_row == welcome_row and self.buffer.is_empty():
                self.terminal.print_line(current_row, self.render_welcome(width))
            else:
                self.terminal.print_line(current_row, "~")