"""The editor: wires input events to the text view, the bars and the terminal."""

from __future__ import annotations

import enum
import sys
from typing import Optional, Sequence

from rsedit.bars import CommandBar, HintBar, StatusBar
from rsedit.buffer import NO_FILE, PathLike
from rsedit.commands import (
    Command,
    Edit,
    EditAction,
    Event,
    KeyEvent,
    Move,
    ResizeEvent,
    System,
    SystemAction,
    command_from_event,
)
from rsedit.geometry import Position, Size
from rsedit.terminal import Terminal
from rsedit.view import View

_DEFAULT_HINT = "[ Control + F -> Search ] [ Control + S -> Save ] [ Control + Q -> Quit ]"
_SEARCH_PROMPT = "[ COMMAND ] :: Search: "
_SAVE_PROMPT = "[ COMMAND ] :: Save as: "


class PromptType(enum.Enum):
    NONE = "none"
    SEARCH = "search"
    SAVE = "save"


class Editor:
    """Owns the screen elements and dispatches commands between them."""

    def __init__(
        self,
        terminal: Optional[Terminal] = None,
        file_name: Optional[PathLike] = None,
    ) -> None:
        self.terminal = terminal if terminal is not None else Terminal()
        self.terminal.init()
        try:
            self.should_quit = False
            self.view = View(self.terminal)
            self.statusbar = StatusBar(self.terminal)
            self.hintbar = HintBar(self.terminal)
            self.commandbar = CommandBar(self.terminal)
            self.prompt_type = PromptType.NONE
            self.title = ""
            self.terminal_size = Size()

            self._handle_resize(self.terminal.size())
            self._update_hint(_DEFAULT_HINT)

            if file_name is not None:
                try:
                    self.view.load(file_name)
                except (OSError, UnicodeError):
                    self._update_hint("[ Error opening the file ]")

            self.update_status()
        except BaseException:
            self.terminal.kill()
            raise

    def __enter__(self) -> Editor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def run(self) -> None:
        """Draw and handle input until the user quits or input ends."""
        events = self.terminal.read_events()
        while True:
            self.update_screen()
            if self.should_quit:
                break
            try:
                event = next(events)
            except StopIteration:
                break
            self.process_event(event)
            self.update_status()

    def process_event(self, event: Event) -> None:
        """Handle key presses and resizes; other events are ignored."""
        if isinstance(event, KeyEvent):
            if not event.pressed:
                return
        elif not isinstance(event, ResizeEvent):
            return
        try:
            command = command_from_event(event)
        except ValueError:
            return
        self.process_command(command)

    def process_command(self, command: Command) -> None:
        if isinstance(command, System) and command.action is SystemAction.RESIZE:
            if command.size is not None:
                self._handle_resize(command.size)
            return

        if self.prompt_type is PromptType.SEARCH:
            self._process_search_command(command)
        elif self.prompt_type is PromptType.SAVE:
            self._process_save_command(command)
        else:
            self._process_no_prompt_command(command)

    def _process_search_command(self, command: Command) -> None:
        if isinstance(command, System):
            if command.action is SystemAction.DISMISS:
                self._set_prompt(PromptType.NONE)
                self.view.dismiss_search()
                self._update_hint("[ Cancelled searching ]")
        elif isinstance(command, Edit):
            if command.action is EditAction.INSERT_LINE:
                self._set_prompt(PromptType.NONE)
                self.view.exit_search()
                self._update_hint("[ Done searching ]")
            else:
                self.commandbar.handle_edit_command(command)
                self.view.search(self.commandbar.value())
        elif command in (Move.UP, Move.LEFT):
            self.view.search_previous()
        elif command in (Move.DOWN, Move.RIGHT):
            self.view.search_next()

    def _process_save_command(self, command: Command) -> None:
        if isinstance(command, System):
            if command.action is SystemAction.DISMISS:
                self._set_prompt(PromptType.NONE)
                self._update_hint("[ Cancelled saving ]")
        elif isinstance(command, Edit):
            if command.action is EditAction.INSERT_LINE:
                self._save_file(self.commandbar.value())
                self._set_prompt(PromptType.NONE)
            else:
                self.commandbar.handle_edit_command(command)

    def _process_no_prompt_command(self, command: Command) -> None:
        if isinstance(command, System):
            if command.action is SystemAction.QUIT:
                self._handle_quit()
            elif command.action is SystemAction.SEARCH:
                self._set_prompt(PromptType.SEARCH)
            elif command.action is SystemAction.SAVE:
                self._handle_save()
        elif isinstance(command, Edit):
            self.view.handle_edit_command(command)
        elif isinstance(command, Move):
            self.view.handle_move_command(command)

    def _handle_resize(self, size: Size) -> None:
        bar_size = Size(width=size.width, height=1)
        self.terminal_size = size
        self.view.resize(Size(width=size.width, height=max(0, size.height - 2)))
        self.hintbar.resize(bar_size)
        self.statusbar.resize(bar_size)
        self.commandbar.resize(bar_size)

    def _handle_quit(self) -> None:
        status = self.view.current_status()
        if not status.modified or status.file_name == NO_FILE:
            self._update_hint("[ Quitting ]")
            self.should_quit = True
        else:
            self._update_hint("[ Error quitting. The file has unsaved changes ]")

    def _handle_save(self) -> None:
        if self.view.is_file_loaded():
            self._save_file(None)
        else:
            self._set_prompt(PromptType.SAVE)

    def _save_file(self, file_name: Optional[str]) -> None:
        try:
            if file_name is not None:
                self.view.save_as(file_name)
            else:
                self.view.save()
        except (OSError, UnicodeError):
            self._update_hint("[ Error saving the file ]")
        else:
            self._update_hint("[ Successfully saved the file ]")

    def _set_prompt(self, prompt_type: PromptType) -> None:
        if prompt_type is PromptType.SEARCH:
            self.view.enter_search()
            self.commandbar.set_prompt(_SEARCH_PROMPT)
        elif prompt_type is PromptType.SAVE:
            self.commandbar.set_prompt(_SAVE_PROMPT)
        else:
            self.hintbar.needs_redraw = True
        self.commandbar.clear_value()
        self.prompt_type = prompt_type

    def _in_prompt(self) -> bool:
        return self.prompt_type is not PromptType.NONE

    def _update_hint(self, hint: str) -> None:
        self.hintbar.update_hint(hint)

    def update_screen(self) -> None:
        """Redraw whatever changed and place the cursor."""
        height, width = self.terminal_size.height, self.terminal_size.width
        if height == 0 or width == 0:
            return

        self.terminal.hide_cursor()
        self.statusbar.render(max(0, height - 2))

        if height > 1:
            if self._in_prompt():
                self.commandbar.render(height - 1)
            else:
                self.hintbar.render(height - 1)

        if height > 2:
            self.view.render(0)

        if self._in_prompt():
            cursor = Position(column=self.commandbar.cursor_column(), row=height - 1)
        else:
            cursor = self.view.cursor_position()

        self.terminal.move_cursor_to(cursor)
        self.terminal.show_cursor()
        self.terminal.execute()

    def update_status(self) -> None:
        status = self.view.current_status()
        title = f"Rsedit - {status.file_name}"
        self.statusbar.update_status(status)
        if title != self.title:
            try:
                self.terminal.set_title(title)
            except OSError:
                return
            self.title = title

    def close(self) -> None:
        """Restore the terminal to its normal state."""
        self.terminal.kill()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    file_name = args[0] if args else None
    editor = Editor(Terminal(), file_name)
    try:
        editor.run()
    finally:
        editor.close()
    return 0