"""Line-based diffs between two versions of a text."""

from __future__ import annotations

import difflib
import re
from dataclasses import dataclass
from typing import Iterator

_LINE = re.compile(r"[^\n]*\n|[^\n]+")
_NO_NEWLINE = "\\ No newline at end of file\n"


def _split_lines(text: str) -> list[str]:
    return _LINE.findall(text)


def _changes(original: str, modified: str) -> Iterator[tuple[str, str]]:
    """Yield (tag, line) pairs with tags '-', '+' or ' '."""
    old, new = _split_lines(original), _split_lines(modified)
    matcher = difflib.SequenceMatcher(None, old, new, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            yield from ((" ", line) for line in old[i1:i2])
            continue
        yield from (("-", line) for line in old[i1:i2])
        yield from (("+", line) for line in new[j1:j2])


def unified_diff(original: str, modified: str, filename: str) -> str:
    """A unified diff with ``a/`` and ``b/`` headers; empty if nothing changed."""
    lines = difflib.unified_diff(
        _split_lines(original),
        _split_lines(modified),
        fromfile=f"a/{filename}",
        tofile=f"b/{filename}",
    )
    return "".join(
        line if line.endswith("\n") else f"{line}\n{_NO_NEWLINE}" for line in lines
    )


def inline_diff(original: str, modified: str) -> str:
    """Every line prefixed with its change sign, coloured for a terminal."""
    colours = {"-": ("\x1b[31m", "\x1b[0m"), "+": ("\x1b[32m", "\x1b[0m"), " ": ("", "")}
    parts = []
    for sign, line in _changes(original, modified):
        start, end = colours[sign]
        parts.append(f"{start}{sign}{line}{end}")
    return "".join(parts)


@dataclass(frozen=True)
class ChangeStats:
    """Numbers of inserted and deleted lines."""

    insertions: int
    deletions: int

    def total(self) -> int:
        """Total number of changed lines."""
        return self.insertions + self.deletions


def change_count(original: str, modified: str) -> ChangeStats:
    """Count inserted and deleted lines between two texts."""
    insertions = deletions = 0
    for sign, _ in _changes(original, modified):
        if sign == "+":
            insertions += 1
        elif sign == "-":
            deletions += 1
    return ChangeStats(insertions=insertions, deletions=deletions)