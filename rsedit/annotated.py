"""Strings carrying highlight annotations over index ranges."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterator, List, Optional


class AnnotationType(enum.Enum):
    MATCH = "match"
    SELECTED_MATCH = "selected_match"


@dataclass
class Annotation:
    """A highlighted range ``[start, end)`` of an annotated string."""

    annotation_type: AnnotationType
    start: int
    end: int


@dataclass(frozen=True)
class AnnotatedStringPart:
    """A run of text sharing one annotation (or none)."""

    string: str
    annotation_type: Optional[AnnotationType] = None


class AnnotatedString:
    """A string plus a list of annotated ranges that follow edits."""

    def __init__(self, string: str = "") -> None:
        self._string = string
        self.annotations: List[Annotation] = []

    def add_annotation(self, annotation_type: AnnotationType, start: int, end: int) -> None:
        self.annotations.append(Annotation(annotation_type, start, end))

    def replace(self, start: int, end: int, new_string: str) -> None:
        """Replace ``[start, end)`` by ``new_string`` and shift annotations to match."""
        end = min(end, len(self._string))
        if start > end:
            return

        self._string = self._string[:start] + new_string + self._string[end:]

        replaced_length = end - start
        shortened = len(new_string) < replaced_length
        difference = abs(len(new_string) - replaced_length)
        if difference == 0:
            return

        def shift(index: int) -> int:
            if index >= end:
                return max(0, index - difference) if shortened else index + difference
            if index >= start:
                if shortened:
                    return max(start, max(0, index - difference))
                return min(end, index + difference)
            return index

        for annotation in self.annotations:
            annotation.start = shift(annotation.start)
            annotation.end = shift(annotation.end)

        length = len(self._string)
        self.annotations = [
            a for a in self.annotations if a.start < a.end and a.start < length
        ]

    def __str__(self) -> str:
        return self._string

    def __repr__(self) -> str:
        return f"AnnotatedString({self._string!r}, {self.annotations!r})"

    def __iter__(self) -> Iterator[AnnotatedStringPart]:
        length = len(self._string)
        current = 0
        while current < length:
            covering = [
                a for a in self.annotations if a.start <= current < a.end
            ]
            if covering:
                annotation = covering[-1]
                stop = min(annotation.end, length)
                yield AnnotatedStringPart(self._string[current:stop], annotation.annotation_type)
                current = stop
                continue

            stop = min(
                (a.start for a in self.annotations if current < a.start < length),
                default=length,
            )
            yield AnnotatedStringPart(self._string[current:stop], None)
            current = stop