"""Planning and applying fixes to document sources."""

from __future__ import annotations

import difflib
import logging
import re
from dataclasses import dataclass
from typing import Iterable, Sequence

from .document import Document
from .errors import TargetNotFoundError
from .fix import DeleteChange, Fix, InsertChange, ReplaceChange
from .fixplan import FixPlan
from .generators import generate_all_fixes
from .validation import CheckResult

logger = logging.getLogger(__name__)

_LINE_WITH_END = re.compile(r"[^\n]*\n|[^\n]+")


def _lines(text: str) -> list[str]:
    """Lines without their terminators; a final newline adds no empty line."""
    if not text:
        return []
    pieces = text.split("\n")
    if text.endswith("\n"):
        pieces.pop()
    return [piece[:-1] if piece.endswith("\r") else piece for piece in pieces]


def apply_single_fix(source: str, fix: Fix) -> str:
    """Apply one fix to ``source`` and return the new text."""
    change = fix.change
    if isinstance(change, ReplaceChange):
        if change.old_text:
            return source.replace(change.old_text, change.new_text, 1)
        lines = _lines(source)
        start, end = change.start_line, change.end_line
        if start >= len(lines):
            raise TargetNotFoundError(f"line {start} out of range")
        kept = [
            change.new_text if i == start else line
            for i, line in enumerate(lines)
            if not start < i <= end
        ]
        return "\n".join(kept)
    if isinstance(change, InsertChange):
        lines = _lines(source)
        result: list[str] = []
        for i, line in enumerate(lines):
            if i == change.line:
                result.append(change.text)
            result.append(line)
        if change.line >= len(lines):
            result.append(change.text)
        return "\n".join(result)
    if isinstance(change, DeleteChange):
        return "\n".join(
            line
            for i, line in enumerate(_lines(source))
            if i < change.start_line or i > change.end_line
        )
    logger.warning("fix %s cannot be applied directly to the source text", fix.id)
    return source


@dataclass
class FixEngine:
    """Turns check results into fix plans and applies them."""

    auto_apply_safe: bool = False

    def plan(self, document: Document, results: Sequence[CheckResult]) -> FixPlan:
        """A plan holding every fix the generators propose."""
        plan = FixPlan.for_document(document)
        for fix in generate_all_fixes(document, results):
            plan.add(fix)
        return plan

    def apply_auto_safe(self, source: str, plan: FixPlan) -> str:
        """Apply only the plan's AutoSafe fixes."""
        return self.apply_fixes(source, plan.auto_safe_fixes())

    def apply_fixes(self, source: str, fixes: Iterable[Fix]) -> str:
        """Apply fixes one after another."""
        for fix in fixes:
            source = apply_single_fix(source, fix)
        return source

    def preview(self, original: str, modified: str) -> str:
        """Every line prefixed with '-', '+' or ' ' for its change."""
        old = _LINE_WITH_END.findall(original)
        new = _LINE_WITH_END.findall(modified)
        matcher = difflib.SequenceMatcher(None, old, new, autojunk=False)
        parts: list[str] = []
        for tag, i1, i2, j1, j2 in matcher.get_opcodes():
            if tag == "equal":
                parts.extend(f" {line}" for line in old[i1:i2])
            else:
                parts.extend(f"-{line}" for line in old[i1:i2])
                parts.extend(f"+{line}" for line in new[j1:j2])
        return "".join(parts)