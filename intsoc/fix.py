"""Proposed fixes and the concrete changes they make."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .validation import CheckCategory, Fixability


class InsertPositionKind(Enum):
    """Where an XML element is inserted relative to its parent."""

    FIRST = "First"
    LAST = "Last"
    BEFORE = "Before"
    AFTER = "After"


@dataclass(frozen=True)
class XmlInsertPosition:
    """An insert position; BEFORE and AFTER name an anchor element."""

    kind: InsertPositionKind
    anchor: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", InsertPositionKind(self.kind))
        needs_anchor = self.kind in (InsertPositionKind.BEFORE, InsertPositionKind.AFTER)
        if needs_anchor and self.anchor is None:
            raise ValueError(f"{self.kind.value} position needs an anchor element")
        if not needs_anchor and self.anchor is not None:
            raise ValueError(f"{self.kind.value} position takes no anchor element")


def _check_line(*values: int) -> None:
    if any(value < 0 for value in values):
        raise ValueError("line numbers must not be negative")


@dataclass(frozen=True)
class ReplaceChange:
    """Replace ``old_text`` if given, otherwise the lines in the range."""

    start_line: int
    end_line: int
    old_text: str
    new_text: str

    def __post_init__(self) -> None:
        _check_line(self.start_line, self.end_line)


@dataclass(frozen=True)
class InsertChange:
    """Insert text before the given line."""

    line: int
    text: str

    def __post_init__(self) -> None:
        _check_line(self.line)


@dataclass(frozen=True)
class DeleteChange:
    """Delete an inclusive range of lines."""

    start_line: int
    end_line: int

    def __post_init__(self) -> None:
        _check_line(self.start_line, self.end_line)


@dataclass(frozen=True)
class XmlReplaceChange:
    """Replace the value found at an XML path."""

    path: str
    old_value: str
    new_value: str


@dataclass(frozen=True)
class XmlInsertChange:
    """Insert an element under an XML parent."""

    parent_path: str
    position: XmlInsertPosition
    element: str


FixChange = Union[ReplaceChange, InsertChange, DeleteChange, XmlReplaceChange, XmlInsertChange]


@dataclass(frozen=True)
class Fix:
    """A proposed fix for one check result."""

    id: str
    check_id: str
    description: str
    fixability: Fixability
    category: CheckCategory
    change: FixChange