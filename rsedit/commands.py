"""Keyboard and resize events and the editor commands they map to."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Union

from rsedit.geometry import Size


class KeyCode(enum.Enum):
    CHAR = "char"
    TAB = "tab"
    BACK_TAB = "back_tab"
    ENTER = "enter"
    BACKSPACE = "backspace"
    DELETE = "delete"
    INSERT = "insert"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    ESC = "esc"
    FUNCTION = "function"


class Modifiers(enum.Flag):
    NONE = 0
    SHIFT = 1
    ALT = 2
    CONTROL = 4


@dataclass(frozen=True)
class KeyEvent:
    """A key press (or release) with its modifier keys."""

    code: KeyCode
    character: Optional[str] = None
    modifiers: Modifiers = Modifiers.NONE
    pressed: bool = True


@dataclass(frozen=True)
class ResizeEvent:
    """The terminal changed to ``width`` by ``height`` cells."""

    width: int
    height: int


Event = Union[KeyEvent, ResizeEvent]


class Move(enum.Enum):
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    START_OF_LINE = "start_of_line"
    END_OF_LINE = "end_of_line"
    UP = "up"
    LEFT = "left"
    RIGHT = "right"
    DOWN = "down"


class EditAction(enum.Enum):
    INSERT_CHARACTER = "insert_character"
    INSERT_TAB = "insert_tab"
    INSERT_LINE = "insert_line"
    DELETE_PREVIOUS = "delete_previous"
    DELETE_NEXT = "delete_next"


@dataclass(frozen=True)
class Edit:
    """A change to text; ``character`` is set for insertions of a character."""

    action: EditAction
    character: Optional[str] = None


class SystemAction(enum.Enum):
    SAVE = "save"
    RESIZE = "resize"
    QUIT = "quit"
    DISMISS = "dismiss"
    SEARCH = "search"


@dataclass(frozen=True)
class System:
    """An editor-level command; ``size`` is set for resizes."""

    action: SystemAction
    size: Optional[Size] = None


Command = Union[Move, Edit, System]

_EDIT_KEYS = {
    KeyCode.TAB: EditAction.INSERT_TAB,
    KeyCode.ENTER: EditAction.INSERT_LINE,
    KeyCode.BACKSPACE: EditAction.DELETE_PREVIOUS,
    KeyCode.DELETE: EditAction.DELETE_NEXT,
}

_MOVE_KEYS = {
    KeyCode.UP: Move.UP,
    KeyCode.DOWN: Move.DOWN,
    KeyCode.LEFT: Move.LEFT,
    KeyCode.RIGHT: Move.RIGHT,
    KeyCode.PAGE_DOWN: Move.PAGE_DOWN,
    KeyCode.PAGE_UP: Move.PAGE_UP,
    KeyCode.HOME: Move.START_OF_LINE,
    KeyCode.END: Move.END_OF_LINE,
}

_CONTROL_KEYS = {
    "q": SystemAction.QUIT,
    "s": SystemAction.SAVE,
    "f": SystemAction.SEARCH,
}


def edit_from_key(event: KeyEvent) -> Edit:
    """Map a key to a text edit, raising ``ValueError`` if it is not one."""
    if event.code is KeyCode.CHAR and event.modifiers in (Modifiers.NONE, Modifiers.SHIFT):
        if event.character is None:
            raise ValueError("character key without a character")
        return Edit(EditAction.INSERT_CHARACTER, event.character)
    if event.modifiers == Modifiers.NONE and event.code in _EDIT_KEYS:
        return Edit(_EDIT_KEYS[event.code])
    raise ValueError(f"not an edit key: {event!r}")


def move_from_key(event: KeyEvent) -> Move:
    """Map a key to a cursor movement, raising ``ValueError`` if it is not one."""
    if event.modifiers == Modifiers.NONE and event.code in _MOVE_KEYS:
        return _MOVE_KEYS[event.code]
    raise ValueError(f"not a movement key: {event!r}")


def system_from_key(event: KeyEvent) -> System:
    """Map a key to an editor command, raising ``ValueError`` if it is not one."""
    if event.modifiers == Modifiers.CONTROL:
        if event.code is KeyCode.CHAR and event.character in _CONTROL_KEYS:
            return System(_CONTROL_KEYS[event.character])
        raise ValueError(f"not a system key: {event!r}")
    if event.code is KeyCode.ESC and event.modifiers == Modifiers.NONE:
        return System(SystemAction.DISMISS)
    raise ValueError(f"not a system key: {event!r}")


def command_from_event(event: Event) -> Command:
    """Turn an input event into a command, raising ``ValueError`` if none applies."""
    if isinstance(event, ResizeEvent):
        return System(SystemAction.RESIZE, Size(width=event.width, height=event.height))
    if isinstance(event, KeyEvent):
        for convert in (edit_from_key, move_from_key, system_from_key):
            try:
                return convert(event)
            except ValueError:
                continue
        raise ValueError(f"no command for key: {event!r}")
    raise ValueError(f"unsupported event: {event!r}")