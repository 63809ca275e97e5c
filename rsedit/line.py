"""A single line of text, split into grapheme clusters with rendered widths."""

from __future__ import annotations

import enum
import unicodedata
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import regex
from wcwidth import wcwidth

from rsedit.annotated import AnnotatedString, AnnotationType

_GRAPHEME = regex.compile(r"\X")
_ELLIPSIS = "⋯"


class GraphemeWidth(enum.IntEnum):
    HALF = 1
    FULL = 2


@dataclass(frozen=True)
class TextFragment:
    """One grapheme cluster of a line and how it is drawn."""

    grapheme: str
    rendered_width: GraphemeWidth
    replacement: Optional[str]
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.grapheme)


def _cluster_width(grapheme: str) -> int:
    return sum(max(wcwidth(char), 0) for char in grapheme)


def _replacement_for(grapheme: str) -> Optional[str]:
    if grapheme == " ":
        return None
    if grapheme == "\t":
        return " "
    width = _cluster_width(grapheme)
    if width > 0 and not grapheme.strip():
        return "␣"
    if width == 0:
        if len(grapheme) == 1 and unicodedata.category(grapheme) == "Cc":
            return "▯"
        return "·"
    return None


def _fragments(text: str) -> List[TextFragment]:
    fragments = []
    for match in _GRAPHEME.finditer(text):
        grapheme = match.group()
        replacement = _replacement_for(grapheme)
        if replacement is not None:
            width = GraphemeWidth.HALF
        else:
            width = GraphemeWidth.HALF if _cluster_width(grapheme) <= 1 else GraphemeWidth.FULL
        fragments.append(TextFragment(grapheme, width, replacement, match.start()))
    return fragments


def _match_indices(text: str, query: str) -> Iterator[int]:
    """Yield the start of each non-overlapping occurrence of ``query``, left to right."""
    if not query:
        yield from range(len(text) + 1)
        return
    position = text.find(query)
    while position != -1:
        yield position
        position = text.find(query, position + len(query))


class Line:
    """Editable line text with grapheme-aware editing, searching and clipping."""

    def __init__(self, text: str = "") -> None:
        self._text = text
        self._fragments = _fragments(text)

    def _rerender(self) -> None:
        self._fragments = _fragments(self._text)

    def visible_graphemes(self, start: int, end: int) -> str:
        """Return the text shown between screen columns ``start`` and ``end``."""
        return str(self.annotated_visible_substr(start, end))

    def annotated_visible_substr(
        self,
        start: int,
        end: int,
        query: Optional[str] = None,
        selected_match: Optional[int] = None,
    ) -> AnnotatedString:
        """Clip the line to columns ``[start, end)``, highlighting ``query`` matches."""
        if start >= end:
            return AnnotatedString()

        result = AnnotatedString(self._text)
        length = len(self._text)

        if query:
            for match_start, grapheme_index in self._find_all(query, 0, length):
                kind = (
                    AnnotationType.SELECTED_MATCH
                    if selected_match is not None and grapheme_index == selected_match
                    else AnnotationType.MATCH
                )
                result.add_annotation(kind, match_start, match_start + len(query))

        fragment_start = self.width()
        for fragment in reversed(self._fragments):
            fragment_end = fragment_start
            fragment_start = max(0, fragment_start - fragment.rendered_width)

            if fragment_start > end:
                continue
            if fragment_start < end < fragment_end:
                result.replace(fragment.start, length, _ELLIPSIS)
                continue
            if fragment_start == end:
                result.replace(fragment.start, length, "")
                continue

            if fragment_end <= start:
                result.replace(0, fragment.end, "")
                break
            if fragment_start < start < fragment_end:
                result.replace(0, fragment.end, _ELLIPSIS)
                break

            if fragment_start >= start and fragment_end <= end and fragment.replacement is not None:
                result.replace(fragment.start, fragment.end, fragment.replacement)

        return result

    def grapheme_count(self) -> int:
        return len(self._fragments)

    def width_until(self, grapheme_index: int) -> int:
        return sum(f.rendered_width for f in self._fragments[:grapheme_index])

    def width(self) -> int:
        return self.width_until(self.grapheme_count())

    def insert_char(self, character: str, at: int) -> None:
        """Insert ``character`` before grapheme ``at``, or append if ``at`` is past the end."""
        if 0 <= at < len(self._fragments):
            position = self._fragments[at].start
            self._text = self._text[:position] + character + self._text[position:]
        else:
            self._text += character
        self._rerender()

    def append_char(self, character: str) -> None:
        self.insert_char(character, self.grapheme_count())

    def remove_char(self, at: int) -> None:
        """Remove grapheme ``at``; out-of-range indices are ignored."""
        if 0 <= at < len(self._fragments):
            fragment = self._fragments[at]
            self._text = self._text[: fragment.start] + self._text[fragment.end :]
            self._rerender()

    def remove_last_char(self) -> None:
        self.remove_char(max(0, self.grapheme_count() - 1))

    def append(self, other: Line) -> None:
        self._text += other._text
        self._rerender()

    def split(self, at: int) -> Line:
        """Cut the line before grapheme ``at`` and return the remainder."""
        if 0 <= at < len(self._fragments):
            position = self._fragments[at].start
            remainder = self._text[position:]
            self._text = self._text[:position]
            self._rerender()
            return Line(remainder)
        return Line()

    def _index_to_grapheme(self, index: int) -> Optional[int]:
        if index > len(self._text):
            return None
        return next(
            (i for i, fragment in enumerate(self._fragments) if fragment.start >= index),
            None,
        )

    def _grapheme_to_index(self, grapheme_index: int) -> int:
        if grapheme_index == 0 or not self._fragments:
            return 0
        if 0 <= grapheme_index < len(self._fragments):
            return self._fragments[grapheme_index].start
        return 0

    def search_next(self, query: str, from_index: int) -> Optional[int]:
        """Grapheme index of the first match at or after ``from_index``."""
        if from_index == self.grapheme_count():
            return None
        start = self._grapheme_to_index(from_index)
        matches = self._find_all(query, start, len(self._text))
        return matches[0][1] if matches else None

    def search_previous(self, query: str, from_index: int) -> Optional[int]:
        """Grapheme index of the last match that starts before ``from_index``."""
        if from_index == 0:
            return None
        if from_index == self.grapheme_count():
            end = len(self._text)
        else:
            end = self._grapheme_to_index(from_index)
        matches = self._find_all(query, 0, end)
        return matches[-1][1] if matches else None

    def _find_all(self, query: str, start: int, end: int) -> List[Tuple[int, int]]:
        if not 0 <= start <= end <= len(self._text):
            return []
        found = []
        for relative in _match_indices(self._text[start:end], query):
            absolute = start + relative
            grapheme_index = self._index_to_grapheme(absolute)
            if grapheme_index is not None:
                found.append((absolute, grapheme_index))
        return found

    def __str__(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return self._text == other._text

    def __repr__(self) -> str:
        return f"Line({self._text!r})"