"""The document model for Internet-Drafts and RFCs."""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass, field
from enum import Enum

from .stream import Stream


class DocumentFormat(Enum):
    """Source format of a document."""

    XML_V3 = "XmlV3"
    XML_V2 = "XmlV2"
    PLAIN_TEXT = "PlainText"


class IprDeclaration(Enum):
    """IPR declaration; the value is the ``ipr`` attribute of ``<rfc>``."""

    TRUST200902 = "trust200902"
    NO_MODIFICATION_TRUST200902 = "noModificationTrust200902"
    NO_DERIVATIVES_TRUST200902 = "noDerivativesTrust200902"
    PRE5378_TRUST200902 = "pre5378Trust200902"


class Category(Enum):
    """Intended status; the value is the ``category`` attribute of ``<rfc>``."""

    STANDARDS_TRACK = "std"
    INFORMATIONAL = "info"
    EXPERIMENTAL = "exp"
    BEST_CURRENT_PRACTICE = "bcp"
    HISTORIC = "historic"

    def xml_value(self) -> str:
        """The value used in the XML ``category`` attribute."""
        return self.value


@dataclass
class Author:
    """A document author or editor."""

    fullname: str
    surname: str
    initials: str | None = None
    organization: str | None = None
    email: str | None = None
    role: str | None = None


@dataclass
class Reference:
    """A cited document."""

    anchor: str
    title: str = ""
    target: str | None = None


@dataclass(frozen=True)
class DraftNameParts:
    """A draft name split into its base and two-digit revision."""

    source_and_name: str
    version: int | None


_DRAFT_NAME = re.compile(r"draft-(.+?)(?:-([0-9]{2}))?")


@dataclass
class Document:
    """A parsed document and everything known about it."""

    name: str
    stream: Stream
    title: str = ""
    format: DocumentFormat = DocumentFormat.XML_V3
    category: Category | None = None
    version: int = 0
    authors: list[Author] = field(default_factory=list)
    ipr: IprDeclaration | None = IprDeclaration.TRUST200902
    abstract_text: str | None = None
    date: datetime.date | None = None
    expires: datetime.date | None = None
    normative_references: list[Reference] = field(default_factory=list)
    informative_references: list[Reference] = field(default_factory=list)
    iana_considerations: str | None = None
    has_boilerplate: bool = False
    source: str = ""
    submission_history: list = field(default_factory=list)
    obsoletes: list[int] = field(default_factory=list)
    updates: list[int] = field(default_factory=list)

    @staticmethod
    def parse_draft_name(name: str) -> DraftNameParts | None:
        """Split ``draft-<base>[-NN]``; None if ``name`` is not a draft name."""
        match = _DRAFT_NAME.fullmatch(name)
        if match is None:
            return None
        base, version = match.groups()
        return DraftNameParts(base, None if version is None else int(version))