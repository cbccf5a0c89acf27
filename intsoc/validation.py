"""Check results, their classification and summaries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterable


class Severity(IntEnum):
    """How serious a finding is; members compare in order of severity."""

    INFO = 0
    WARNING = 1
    ERROR = 2
    FATAL = 3


class CheckCategory(Enum):
    """The kind of check that produced a finding."""

    BOILERPLATE = "Boilerplate"
    DATE = "Date"
    HEADER = "Header"
    REFERENCES = "References"
    SECTIONS = "Sections"
    TEXT_FORMAT = "TextFormat"
    XML = "Xml"
    IANA_SECTIONS = "IanaSections"
    DRAFT_NAME = "DraftName"
    IPR = "Ipr"


class Fixability(Enum):
    """How far a finding can be fixed automatically."""

    AUTO_SAFE = "AutoSafe"
    RECOMMENDED = "Recommended"
    MANUAL_ONLY = "ManualOnly"
    NOT_FIXABLE = "NotFixable"


@dataclass(frozen=True)
class Location:
    """A place in a document.

    Exactly one form is used: a line (optionally with a column), an XML
    path, or a section heading.
    """

    line: int | None = None
    column: int | None = None
    xml_path: str | None = None
    section: str | None = None

    def __post_init__(self) -> None:
        if self.column is not None and self.line is None:
            raise ValueError("a column needs a line")
        forms = [self.line is not None, self.xml_path is not None, self.section is not None]
        if sum(forms) != 1:
            raise ValueError("a location is a line, an XML path or a section")
        for value in (self.line, self.column):
            if value is not None and value < 0:
                raise ValueError("line and column must not be negative")

    def __str__(self) -> str:
        if self.xml_path is not None:
            return self.xml_path
        if self.section is not None:
            return f"section {self.section}"
        if self.column is not None:
            return f"line {self.line}, column {self.column}"
        return f"line {self.line}"


@dataclass(frozen=True)
class CheckResult:
    """One finding of one check."""

    check_id: str
    severity: Severity
    message: str
    category: CheckCategory
    fixable: Fixability
    location: Location | None = None
    suggestion: str | None = None


@dataclass(frozen=True)
class CheckSummary:
    """All findings for a document together with their counts."""

    results: tuple[CheckResult, ...]
    error_count: int
    warning_count: int
    info_count: int
    auto_fixable_count: int
    recommended_fixable_count: int
    manual_only_count: int

    @classmethod
    def from_results(cls, results: Iterable[CheckResult]) -> CheckSummary:
        """Build a summary, counting errors and fatal findings together."""
        items = tuple(results)

        def count(predicate) -> int:
            return sum(1 for r in items if predicate(r))

        return cls(
            results=items,
            error_count=count(lambda r: r.severity >= Severity.ERROR),
            warning_count=count(lambda r: r.severity == Severity.WARNING),
            info_count=count(lambda r: r.severity == Severity.INFO),
            auto_fixable_count=count(lambda r: r.fixable is Fixability.AUTO_SAFE),
            recommended_fixable_count=count(lambda r: r.fixable is Fixability.RECOMMENDED),
            manual_only_count=count(lambda r: r.fixable is Fixability.MANUAL_ONLY),
        )

    def passes(self) -> bool:
        """True when there are no errors or fatal findings."""
        return self.error_count == 0