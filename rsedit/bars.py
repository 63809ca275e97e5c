"""One-line screen elements: the command prompt, hint line and status line."""

from __future__ import annotations

import abc

from rsedit.commands import Edit, EditAction
from rsedit.geometry import FileStatus, Size
from rsedit.line import Line
from rsedit.terminal import Terminal

_DEFAULT_HINT = "[ Control + F -> Search ] [ Control + S -> Save ] [ Control + Q -> Quit ]"


class UIElement(abc.ABC):
    """A screen element that redraws itself only when marked as changed."""

    def __init__(self, terminal: Terminal) -> None:
        self.terminal = terminal
        self.size = Size()
        self.needs_redraw = False

    def resize(self, size: Size) -> None:
        self.size = size
        self.needs_redraw = True

    def render(self, row: int) -> None:
        """Draw at ``row`` if needed; a failed draw is retried next time."""
        if not self.needs_redraw:
            return
        try:
            self.draw(row)
        except OSError:
            return
        self.needs_redraw = False

    @abc.abstractmethod
    def draw(self, row: int) -> None:
        """Queue this element's output for ``row``."""


class CommandBar(UIElement):
    """A prompt followed by a single line of user input."""

    def __init__(self, terminal: Terminal) -> None:
        super().__init__(terminal)
        self.prompt = ""
        self._value = Line()

    def handle_edit_command(self, command: Edit) -> None:
        if command.action is EditAction.INSERT_CHARACTER and command.character is not None:
            self._value.append_char(command.character)
        elif command.action is EditAction.DELETE_PREVIOUS:
            self._value.remove_last_char()
        self.needs_redraw = True

    def cursor_column(self) -> int:
        return min(len(self.prompt) + self._value.grapheme_count(), self.size.width)

    def clear_value(self) -> None:
        self._value = Line()
        self.needs_redraw = True

    def value(self) -> str:
        return str(self._value)

    def set_prompt(self, prompt: str) -> None:
        self.prompt = prompt
        self.needs_redraw = True

    def draw(self, row: int) -> None:
        value_area = max(0, self.size.width - len(self.prompt))
        value_end = self._value.width()
        value_start = max(0, value_end - value_area)
        message = self.prompt + self._value.visible_graphemes(value_start, value_end)
        fits = len(message.encode("utf-8")) <= self.size.width
        self.terminal.print_line(row, message if fits else "")


class HintBar(UIElement):
    """A line showing the latest hint or message."""

    def __init__(self, terminal: Terminal) -> None:
        super().__init__(terminal)
        self.hint = _DEFAULT_HINT

    def update_hint(self, hint: str) -> None:
        self.hint = f"[ HINT ] :: {hint}"
        self.needs_redraw = True

    def draw(self, row: int) -> None:
        self.terminal.print_line(row, self.hint)


class StatusBar(UIElement):
    """An inverted line summarising the open document."""

    def __init__(self, terminal: Terminal) -> None:
        super().__init__(terminal)
        self.status = FileStatus()

    def update_status(self, status: FileStatus) -> None:
        if status != self.status:
            self.status = status
            self.needs_redraw = True

    def draw(self, row: int) -> None:
        if self.status.file_name is None:
            raise ValueError("status has no file name")
        left = (
            f"[ STATUS ] :: [ {self.status.file_name} ] "
            f"[ {self.status.modified_indicator()} ]"
        )
        right = f" [ {self.status.position_indicator()} ] [ {self.status.lines_count_text()} ]"
        remainder = max(0, self.size.width - len(left.encode("utf-8")))
        self.terminal.print_inverted_line(row, f"{left}{right:>{remainder}}")