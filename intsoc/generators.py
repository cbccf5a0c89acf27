"""Fix generators, one per category of document issue."""

from __future__ import annotations

import datetime
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, ClassVar, Sequence

from .document import Document, DocumentFormat, IprDeclaration
from .fix import (
    Fix,
    InsertChange,
    InsertPositionKind,
    ReplaceChange,
    XmlInsertChange,
    XmlInsertPosition,
    XmlReplaceChange,
)
from .validation import CheckCategory, CheckResult, Fixability

_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_XML_FORMATS = (DocumentFormat.XML_V3, DocumentFormat.XML_V2)


def _fix_id(result: CheckResult) -> str:
    return f"fix-{result.check_id}"


def _utc_today() -> datetime.date:
    return datetime.datetime.now(datetime.timezone.utc).date()


class FixGenerator(ABC):
    """Turns check results of one category into fixes."""

    category: ClassVar[CheckCategory]

    @abstractmethod
    def generate(self, document: Document, results: Sequence[CheckResult]) -> list[Fix]:
        """Fixes for the results this generator handles."""


def trust200902_boilerplate() -> str:
    """The standard legal provisions text for an Internet-Draft."""
    return (
        "Status of This Memo\n"
        "\n"
        "   This Internet-Draft is submitted in full conformance with the\n"
        "   provisions of BCP 78 and BCP 79.\n"
        "\n"
        "   Internet-Drafts are working documents of the Internet Engineering\n"
        "   Task Force (IETF).  Note that other groups may also distribute\n"
        "   working documents as Internet-Drafts.\n"
        "\n"
        "   Internet-Drafts are draft documents valid for a maximum of six months\n"
        "   and may be updated, replaced, or obsoleted by other documents at any\n"
        "   time.  It is inappropriate to use Internet-Drafts as reference\n"
        "   material or to cite them other than as \"work in progress.\"\n"
        "\n"
        "Copyright Notice\n"
        "\n"
        "   This document is subject to BCP 78 and the IETF Trust's Legal\n"
        "   Provisions Relating to IETF Documents in effect on the date of\n"
        "   publication of this document.  Please review these documents\n"
        "   carefully, as they describe your rights and restrictions with\n"
        "   respect to this document.\n"
    )


class BoilerplateFixGenerator(FixGenerator):
    """Fixes missing or wrong legal boilerplate."""

    category = CheckCategory.BOILERPLATE

    def generate(self, document: Document, results: Sequence[CheckResult]) -> list[Fix]:
        return [
            self._fix_for(document, r) for r in results if r.category is CheckCategory.BOILERPLATE
        ]

    @staticmethod
    def _fix_for(document: Document, result: CheckResult) -> Fix:
        if document.format in _XML_FORMATS:
            target = IprDeclaration.TRUST200902.value
            return Fix(
                id=_fix_id(result),
                check_id=result.check_id,
                description=f"Set ipr attribute to '{target}'",
                fixability=Fixability.AUTO_SAFE,
                category=CheckCategory.BOILERPLATE,
                change=XmlReplaceChange(
                    path="/rfc/@ipr",
                    old_value="" if document.ipr is None else document.ipr.value,
                    new_value=target,
                ),
            )
        return Fix(
            id=_fix_id(result),
            check_id=result.check_id,
            description="Insert IETF Trust boilerplate",
            fixability=Fixability.RECOMMENDED,
            category=CheckCategory.BOILERPLATE,
            change=InsertChange(line=0, text=trust200902_boilerplate()),
        )


@dataclass
class DateFixGenerator(FixGenerator):
    """Fixes wrong or missing dates by setting today's date."""

    category: ClassVar[CheckCategory] = CheckCategory.DATE
    today: Callable[[], datetime.date] = _utc_today

    def generate(self, document: Document, results: Sequence[CheckResult]) -> list[Fix]:
        return [self._fix_for(document, r) for r in results if r.category is CheckCategory.DATE]

    def _fix_for(self, document: Document, result: CheckResult) -> Fix:
        now = self.today()
        year, month, day = str(now.year), _MONTH_NAMES[now.month - 1], str(now.day)
        if document.format in _XML_FORMATS:
            return Fix(
                id=_fix_id(result),
                check_id=result.check_id,
                description=f"Update date to {month} {day}, {year}",
                fixability=Fixability.AUTO_SAFE,
                category=CheckCategory.DATE,
                change=XmlReplaceChange(
                    path="/rfc/front/date",
                    old_value="",
                    new_value=f'<date year="{year}" month="{month}" day="{day}"/>',
                ),
            )
        return Fix(
            id=_fix_id(result),
            check_id=result.check_id,
            description=f"Update date to {month} {year}",
            fixability=Fixability.AUTO_SAFE,
            category=CheckCategory.DATE,
            change=ReplaceChange(start_line=0, end_line=0, old_text="", new_text=f"{month} {year}"),
        )


class HeaderFixGenerator(FixGenerator):
    """Fixes header and metadata issues."""

    category = CheckCategory.HEADER

    def generate(self, document: Document, results: Sequence[CheckResult]) -> list[Fix]:
        fixes = (self._fix_for(document, r) for r in results if r.category is CheckCategory.HEADER)
        return [fix for fix in fixes if fix is not None]

    @staticmethod
    def _fix_for(document: Document, result: CheckResult) -> Fix | None:
        msg = result.message.lower()
        if "category" in msg or "intended status" in msg:
            category = "info" if document.category is None else document.category.xml_value()
            return Fix(
                id=_fix_id(result),
                check_id=result.check_id,
                description=f"Set document category to '{category}'",
                fixability=Fixability.RECOMMENDED,
                category=CheckCategory.HEADER,
                change=XmlReplaceChange(path="/rfc/@category", old_value="", new_value=category),
            )
        if "workgroup" in msg or "working group" in msg:
            return Fix(
                id=_fix_id(result),
                check_id=result.check_id,
                description="Add workgroup element to document front matter",
                fixability=Fixability.MANUAL_ONLY,
                category=CheckCategory.HEADER,
                change=XmlInsertChange(
                    parent_path="/rfc/front",
                    position=XmlInsertPosition(InsertPositionKind.AFTER, "title"),
                    element="<workgroup>TODO</workgroup>",
                ),
            )
        return None


_SECURITY_SECTION = (
    '<section title="Security Considerations">\n'
    "  <t>TODO: Describe security considerations for this document.</t>\n"
    "</section>"
)
_IANA_SECTION = (
    '<section title="IANA Considerations">\n'
    "  <t>This document has no IANA actions.</t>\n"
    "</section>"
)


class SectionFixGenerator(FixGenerator):
    """Adds missing required sections."""

    category = CheckCategory.SECTIONS

    def generate(self, document: Document, results: Sequence[CheckResult]) -> list[Fix]:
        relevant = (CheckCategory.SECTIONS, CheckCategory.IANA_SECTIONS)
        fixes = (self._fix_for(r) for r in results if r.category in relevant)
        return [fix for fix in fixes if fix is not None]

    @staticmethod
    def _fix_for(result: CheckResult) -> Fix | None:
        msg = result.message.lower()
        if "security considerations" in msg:
            description, category, element = (
                "Add Security Considerations section",
                CheckCategory.SECTIONS,
                _SECURITY_SECTION,
            )
        elif "iana" in msg:
            description, category, element = (
                "Add IANA Considerations section",
                CheckCategory.IANA_SECTIONS,
                _IANA_SECTION,
            )
        else:
            return None
        return Fix(
            id=_fix_id(result),
            check_id=result.check_id,
            description=description,
            fixability=Fixability.MANUAL_ONLY,
            category=category,
            change=XmlInsertChange(
                parent_path="/rfc/middle",
                position=XmlInsertPosition(InsertPositionKind.LAST),
                element=element,
            ),
        )


class ReferenceFixGenerator(FixGenerator):
    """Flags reference issues for manual review."""

    category = CheckCategory.REFERENCES

    def generate(self, document: Document, results: Sequence[CheckResult]) -> list[Fix]:
        return [
            Fix(
                id=_fix_id(r),
                check_id=r.check_id,
                description=f"Review reference issue: {r.message}",
                fixability=Fixability.MANUAL_ONLY,
                category=CheckCategory.REFERENCES,
                change=ReplaceChange(start_line=0, end_line=0, old_text="", new_text=""),
            )
            for r in results
            if r.category is CheckCategory.REFERENCES
        ]


class DraftNameFixGenerator(FixGenerator):
    """Fixes the revision number in a draft name."""

    category = CheckCategory.DRAFT_NAME

    def generate(self, document: Document, results: Sequence[CheckResult]) -> list[Fix]:
        fixes = (
            self._fix_for(document, r) for r in results if r.category is CheckCategory.DRAFT_NAME
        )
        return [fix for fix in fixes if fix is not None]

    @staticmethod
    def _fix_for(document: Document, result: CheckResult) -> Fix | None:
        msg = result.message.lower()
        if "version" not in msg and "revision" not in msg:
            return None
        parts = Document.parse_draft_name(document.name)
        if parts is None:
            return None
        expected = f"draft-{parts.source_and_name}-{document.version:02d}"
        return Fix(
            id=_fix_id(result),
            check_id=result.check_id,
            description=f"Update draft name to '{expected}'",
            fixability=Fixability.AUTO_SAFE,
            category=CheckCategory.DRAFT_NAME,
            change=XmlReplaceChange(path="/rfc/@docName", old_value=document.name, new_value=expected),
        )


def generate_all_fixes(document: Document, results: Sequence[CheckResult]) -> list[Fix]:
    """Run every built-in generator, in a fixed order, and collect the fixes."""
    generators: tuple[FixGenerator, ...] = (
        BoilerplateFixGenerator(),
        DateFixGenerator(),
        HeaderFixGenerator(),
        SectionFixGenerator(),
        ReferenceFixGenerator(),
        DraftNameFixGenerator(),
    )
    return [fix for generator in generators for fix in generator.generate(document, results)]