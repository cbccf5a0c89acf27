"""Plans of fixes to apply to a document."""

from __future__ import annotations

from dataclasses import dataclass, field

from .document import Document
from .fix import Fix
from .validation import Fixability


@dataclass
class FixPlan:
    """An ordered list of fixes, with the source they were planned against."""

    original_source: str = ""
    fixes: list[Fix] = field(default_factory=list)
    applied: bool = False

    @classmethod
    def for_document(cls, document: Document) -> FixPlan:
        """An empty plan that remembers the document's source for undo."""
        return cls(original_source=document.source)

    def add(self, fix: Fix) -> None:
        """Append a fix to the plan."""
        self.fixes.append(fix)

    def _with(self, fixability: Fixability) -> list[Fix]:
        return [fix for fix in self.fixes if fix.fixability is fixability]

    def auto_safe_fixes(self) -> list[Fix]:
        """Fixes that can be applied without review."""
        return self._with(Fixability.AUTO_SAFE)

    def recommended_fixes(self) -> list[Fix]:
        """Fixes that are automatic but should be reviewed."""
        return self._with(Fixability.RECOMMENDED)

    def manual_only_fixes(self) -> list[Fix]:
        """Fixes that need a manual edit."""
        return self._with(Fixability.MANUAL_ONLY)