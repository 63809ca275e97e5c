import pytest

from rsedit.commands import (
    Edit,
    EditAction,
    KeyCode,
    KeyEvent,
    Modifiers,
    Move,
    ResizeEvent,
    System,
    SystemAction,
    command_from_event,
    edit_from_key,
    move_from_key,
    system_from_key,
)
from rsedit.geometry import Size


def test_plain_character_is_inserted():
    event = KeyEvent(KeyCode.CHAR, "a")
    assert edit_from_key(event) == Edit(EditAction.INSERT_CHARACTER, "a")


def test_shifted_character_is_inserted():
    event = KeyEvent(KeyCode.CHAR, "A", Modifiers.SHIFT)
    assert edit_from_key(event) == Edit(EditAction.INSERT_CHARACTER, "A")


def test_control_character_is_not_an_edit():
    with pytest.raises(ValueError):
        edit_from_key(KeyEvent(KeyCode.CHAR, "a", Modifiers.CONTROL))


@pytest.mark.parametrize(
    "code, action",
    [
        (KeyCode.TAB, EditAction.INSERT_TAB),
        (KeyCode.ENTER, EditAction.INSERT_LINE),
        (KeyCode.BACKSPACE, EditAction.DELETE_PREVIOUS),
        (KeyCode.DELETE, EditAction.DELETE_NEXT),
    ],
)
def test_edit_keys(code, action):
    assert edit_from_key(KeyEvent(code)) == Edit(action)


def test_shifted_tab_is_not_an_edit():
    with pytest.raises(ValueError):
        edit_from_key(KeyEvent(KeyCode.TAB, modifiers=Modifiers.SHIFT))


@pytest.mark.parametrize(
    "code, move",
    [
        (KeyCode.UP, Move.UP),
        (KeyCode.DOWN, Move.DOWN),
        (KeyCode.LEFT, Move.LEFT),
        (KeyCode.RIGHT, Move.RIGHT),
        (KeyCode.PAGE_UP, Move.PAGE_UP),
        (KeyCode.PAGE_DOWN, Move.PAGE_DOWN),
        (KeyCode.HOME, Move.START_OF_LINE),
        (KeyCode.END, Move.END_OF_LINE),
    ],
)
def test_move_keys(code, move):
    assert move_from_key(KeyEvent(code)) is move


def test_move_with_modifier_is_rejected():
    with pytest.raises(ValueError):
        move_from_key(KeyEvent(KeyCode.UP, modifiers=Modifiers.CONTROL))


@pytest.mark.parametrize(
    "char, action",
    [("q", SystemAction.QUIT), ("s", SystemAction.SAVE), ("f", SystemAction.SEARCH)],
)
def test_control_shortcuts(char, action):
    event = KeyEvent(KeyCode.CHAR, char, Modifiers.CONTROL)
    assert system_from_key(event) == System(action)


def test_escape_dismisses():
    assert system_from_key(KeyEvent(KeyCode.ESC)) == System(SystemAction.DISMISS)


def test_unknown_control_shortcut_is_rejected():
    with pytest.raises(ValueError):
        system_from_key(KeyEvent(KeyCode.CHAR, "x", Modifiers.CONTROL))


def test_escape_with_modifier_is_rejected():
    with pytest.raises(ValueError):
        system_from_key(KeyEvent(KeyCode.ESC, modifiers=Modifiers.SHIFT))


def test_command_prefers_edit_then_move_then_system():
    assert command_from_event(KeyEvent(KeyCode.CHAR, "q")) == Edit(EditAction.INSERT_CHARACTER, "q")
    assert command_from_event(KeyEvent(KeyCode.DOWN)) is Move.DOWN
    assert command_from_event(KeyEvent(KeyCode.CHAR, "q", Modifiers.CONTROL)) == System(SystemAction.QUIT)


def test_resize_event_becomes_resize_command():
    command = command_from_event(ResizeEvent(80, 24))
    assert command == System(SystemAction.RESIZE, Size(width=80, height=24))


def test_unmapped_key_raises():
    with pytest.raises(ValueError):
        command_from_event(KeyEvent(KeyCode.INSERT))


def test_unsupported_event_raises():
    with pytest.raises(ValueError):
        command_from_event("not an event")