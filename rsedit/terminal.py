"""Queued terminal output using ANSI escape sequences, and input decoding."""

from __future__ import annotations

import codecs
import dataclasses
import os
import re
import selectors
import shutil
import sys
from dataclasses import dataclass
from typing import Iterator, List, Optional, TextIO, Tuple, Union

try:
    import termios
    import tty
except ImportError:  # pragma: no cover - non-POSIX platforms
    termios = None
    tty = None

from rsedit.annotated import AnnotatedString, AnnotationType
from rsedit.commands import Event, KeyCode, KeyEvent, Modifiers, ResizeEvent
from rsedit.geometry import Position, Size

Rgb = Tuple[int, int, int]

_ESC = "\x1b"
_REVERSE = f"{_ESC}[7m"
_RESET = f"{_ESC}[0m"


@dataclass(frozen=True)
class Attribute:
    """Colours used to draw an annotated run of text."""

    foreground: Optional[Rgb] = None
    background: Optional[Rgb] = None


def attribute_for(annotation_type: AnnotationType) -> Attribute:
    if annotation_type is AnnotationType.MATCH:
        return Attribute(foreground=(255, 255, 255), background=(100, 100, 100))
    return Attribute(foreground=(255, 255, 255), background=(200, 200, 200))


_CSI = re.compile(r"\x1b\[([0-9;]*)([A-Za-z~])")
_SS3 = re.compile(r"\x1bO([A-Za-z])")

_LETTER_KEYS = {
    "A": KeyCode.UP,
    "B": KeyCode.DOWN,
    "C": KeyCode.RIGHT,
    "D": KeyCode.LEFT,
    "H": KeyCode.HOME,
    "F": KeyCode.END,
}

_TILDE_KEYS = {
    1: KeyCode.HOME,
    7: KeyCode.HOME,
    2: KeyCode.INSERT,
    3: KeyCode.DELETE,
    4: KeyCode.END,
    8: KeyCode.END,
    5: KeyCode.PAGE_UP,
    6: KeyCode.PAGE_DOWN,
}


def _modifiers_from_param(value: int) -> Modifiers:
    return Modifiers(max(0, value - 1) & 0b111)


def _csi_event(params: str, final: str) -> Optional[KeyEvent]:
    numbers = [int(part) if part else 1 for part in params.split(";")] if params else []
    modifiers = _modifiers_from_param(numbers[1]) if len(numbers) > 1 else Modifiers.NONE
    if final == "Z":
        return KeyEvent(KeyCode.BACK_TAB, modifiers=Modifiers.SHIFT)
    if final == "~":
        code = _TILDE_KEYS.get(numbers[0] if numbers else 0)
        return KeyEvent(code, modifiers=modifiers) if code else None
    if final in _LETTER_KEYS:
        return KeyEvent(_LETTER_KEYS[final], modifiers=modifiers)
    return None


def _ss3_event(final: str) -> Optional[KeyEvent]:
    if final in _LETTER_KEYS:
        return KeyEvent(_LETTER_KEYS[final])
    if final in "PQRS":
        return KeyEvent(KeyCode.FUNCTION)
    return None


def _single_key(char: str) -> KeyEvent:
    code = ord(char)
    if char in "\r\n":
        return KeyEvent(KeyCode.ENTER)
    if char == "\t":
        return KeyEvent(KeyCode.TAB)
    if char in "\x7f\x08":
        return KeyEvent(KeyCode.BACKSPACE)
    if char == _ESC:
        return KeyEvent(KeyCode.ESC)
    if code == 0:
        return KeyEvent(KeyCode.CHAR, " ", Modifiers.CONTROL)
    if 0x01 <= code <= 0x1A:
        return KeyEvent(KeyCode.CHAR, chr(code - 1 + ord("a")), Modifiers.CONTROL)
    if 0x1C <= code <= 0x1F:
        return KeyEvent(KeyCode.CHAR, chr(code - 0x1C + ord("4")), Modifiers.CONTROL)
    modifiers = Modifiers.SHIFT if char.isupper() else Modifiers.NONE
    return KeyEvent(KeyCode.CHAR, char, modifiers)


def decode_input(data: Union[str, bytes, bytearray]) -> List[KeyEvent]:
    """Decode raw terminal input into key events."""
    text = bytes(data).decode("utf-8", errors="replace") if isinstance(data, (bytes, bytearray)) else data
    events: List[KeyEvent] = []
    index = 0
    while index < len(text):
        char = text[index]
        if char != _ESC:
            events.append(_single_key(char))
            index += 1
            continue

        match = _CSI.match(text, index)
        if match:
            event = _csi_event(match.group(1), match.group(2))
            if event is not None:
                events.append(event)
            index = match.end()
            continue

        match = _SS3.match(text, index)
        if match:
            event = _ss3_event(match.group(1))
            if event is not None:
                events.append(event)
            index = match.end()
            continue

        if index + 1 < len(text) and text[index + 1] != _ESC:
            event = _single_key(text[index + 1])
            events.append(dataclasses.replace(event, modifiers=event.modifiers | Modifiers.ALT))
            index += 2
            continue

        events.append(KeyEvent(KeyCode.ESC))
        index += 1
    return events


class Terminal:
    """Queues escape sequences and writes them to ``stream`` on :meth:`execute`."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._pending: List[str] = []
        self._saved_mode = None

    def _queue(self, sequence: str) -> None:
        self._pending.append(sequence)

    def _enable_raw_mode(self) -> None:
        if termios is None:
            return
        try:
            fd = sys.stdin.fileno()
        except (AttributeError, OSError, ValueError):
            return
        if not os.isatty(fd):
            return
        self._saved_mode = (fd, termios.tcgetattr(fd))
        tty.setraw(fd)

    def _disable_raw_mode(self) -> None:
        if self._saved_mode is None:
            return
        fd, attributes = self._saved_mode
        termios.tcsetattr(fd, termios.TCSAFLUSH, attributes)
        self._saved_mode = None

    def init(self) -> None:
        self._enable_raw_mode()
        self.enter_altscreen()
        self.disable_line_wrap()
        self.clear_all()
        self.move_cursor_to(Position(0, 0))
        self.execute()

    def kill(self) -> None:
        self.leave_altscreen()
        self.enable_line_wrap()
        self.show_cursor()
        self.execute()
        self._disable_raw_mode()

    def enter_altscreen(self) -> None:
        self._queue(f"{_ESC}[?1049h")

    def leave_altscreen(self) -> None:
        self._queue(f"{_ESC}[?1049l")

    def clear_all(self) -> None:
        self._queue(f"{_ESC}[2J")

    def clear_line(self) -> None:
        self._queue(f"{_ESC}[2K")

    def move_cursor_to(self, position: Position) -> None:
        self._queue(f"{_ESC}[{position.row + 1};{position.column + 1}H")

    def hide_cursor(self) -> None:
        self._queue(f"{_ESC}[?25l")

    def show_cursor(self) -> None:
        self._queue(f"{_ESC}[?25h")

    def enable_line_wrap(self) -> None:
        self._queue(f"{_ESC}[?7h")

    def disable_line_wrap(self) -> None:
        self._queue(f"{_ESC}[?7l")

    def set_title(self, title: str) -> None:
        self._queue(f"{_ESC}]0;{title}\x07")

    def print(self, text: str) -> None:
        self._queue(text)

    def print_line(self, row: int, text: str) -> None:
        self.move_cursor_to(Position(column=0, row=row))
        self.clear_line()
        self.print(text)

    def print_annotated_line(self, row: int, annotated: AnnotatedString) -> None:
        self.move_cursor_to(Position(column=0, row=row))
        self.clear_line()
        for part in annotated:
            if part.annotation_type is not None:
                self._set_attribute(attribute_for(part.annotation_type))
            self.print(part.string)
            self._reset_color()

    def _set_attribute(self, attribute: Attribute) -> None:
        if attribute.foreground is not None:
            r, g, b = attribute.foreground
            self._queue(f"{_ESC}[38;2;{r};{g};{b}m")
        if attribute.background is not None:
            r, g, b = attribute.background
            self._queue(f"{_ESC}[48;2;{r};{g};{b}m")

    def _reset_color(self) -> None:
        self._queue(_RESET)

    def print_inverted_line(self, row: int, text: str) -> None:
        """Print ``text`` in reverse video, padded or cut to the terminal width."""
        width = self.size().width
        self.print_line(row, f"{_REVERSE}{text:<{width}.{width}}{_RESET}")

    def size(self) -> Size:
        try:
            columns, lines = os.get_terminal_size(self._stream.fileno())
        except (AttributeError, OSError, ValueError):
            columns, lines = shutil.get_terminal_size()
        return Size(width=columns, height=lines)

    def execute(self) -> None:
        if self._pending:
            self._stream.write("".join(self._pending))
            self._pending.clear()
        self._stream.flush()

    def read_events(self) -> Iterator[Event]:
        """Yield key events from standard input, and resize events as the size changes."""
        fd = sys.stdin.fileno()
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        last_size = self.size()
        with selectors.DefaultSelector() as selector:
            selector.register(fd, selectors.EVENT_READ)
            while True:
                ready = selector.select(timeout=0.1)
                current_size = self.size()
                if current_size != last_size:
                    last_size = current_size
                    yield ResizeEvent(current_size.width, current_size.height)
                if not ready:
                    continue
                data = os.read(fd, 4096)
                if not data:
                    return
                text = decoder.decode(data)
                if text:
                    yield from decode_input(text)