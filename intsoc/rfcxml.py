"""Parsing of RFC XML v3 documents."""

from __future__ import annotations

import datetime
import re
from xml.parsers import expat

from .document import Author, Category, Document, DocumentFormat, IprDeclaration
from .errors import ParseError
from .stream import Stream, StreamKind

_IPR_VALUES = {declaration.value: declaration for declaration in IprDeclaration}
_CATEGORY_VALUES = {category.value: category for category in Category}

_MONTH_NAMES = {
    "january": 1, "jan": 1,
    "february": 2, "feb": 2,
    "march": 3, "mar": 3,
    "april": 4, "apr": 4,
    "may": 5,
    "june": 6, "jun": 6,
    "july": 7, "jul": 7,
    "august": 8, "aug": 8,
    "september": 9, "sep": 9,
    "october": 10, "oct": 10,
    "november": 11, "nov": 11,
    "december": 12, "dec": 12,
}

_UNSIGNED = re.compile(r"\+?[0-9]+")
_SIGNED = re.compile(r"[+-]?[0-9]+")
_U32_LIMIT = 2**32
_I32_MIN, _I32_MAX = -(2**31), 2**31 - 1


def _parse_u32(text: str) -> int | None:
    if not _UNSIGNED.fullmatch(text):
        return None
    value = int(text)
    return value if value < _U32_LIMIT else None


def _parse_i32(text: str) -> int | None:
    if not _SIGNED.fullmatch(text):
        return None
    value = int(text)
    return value if _I32_MIN <= value <= _I32_MAX else None


def parse_month(value: str) -> int | None:
    """Month number for a month name, abbreviation or number; None if unknown."""
    known = _MONTH_NAMES.get(value.lower())
    if known is not None:
        return known
    return _parse_u32(value)


class _Reader:
    """Collects document metadata from expat callbacks."""

    def __init__(self, doc: Document) -> None:
        self.doc = doc
        self.in_front = False
        self.in_middle = False
        self.in_back = False
        self.in_abstract = False
        self.in_title = False
        self.in_references = False
        self.in_cdata = False
        self.depth = 0
        self.abstract_depth = 0
        self._text: list[str] = []

    # -- text handling -----------------------------------------------------

    def characters(self, data: str) -> None:
        if not self.in_cdata:
            self._text.append(data)

    def start_cdata(self) -> None:
        self.flush()
        self.in_cdata = True

    def end_cdata(self) -> None:
        self.in_cdata = False

    def flush(self) -> None:
        text = "".join(self._text).strip()
        self._text.clear()
        if text:
            self._on_text(text)

    def _on_text(self, text: str) -> None:
        doc = self.doc
        if self.in_title and self.in_front and not self.in_references:
            doc.title = text
            self.in_title = False
        elif self.in_abstract and self.depth > self.abstract_depth:
            doc.abstract_text = text if doc.abstract_text is None else f"{doc.abstract_text} {text}"

    # -- elements ----------------------------------------------------------

    def start(self, name: str, attrs: dict[str, str]) -> None:
        self.flush()
        self.depth += 1
        in_front_matter = self.in_front and not self.in_references
        if name == "rfc":
            _apply_rfc_attrs(attrs, self.doc)
        elif name == "front":
            self.in_front = True
        elif name == "middle":
            self.in_middle = True
        elif name == "back":
            self.in_back = True
            self.in_middle = False
        elif name == "title" and in_front_matter:
            self.in_title = True
        elif name == "abstract" and self.in_front:
            self.in_abstract = True
            self.abstract_depth = self.depth
        elif name == "author" and in_front_matter:
            self.doc.authors.append(_author_from_attrs(attrs))
        elif name == "date" and in_front_matter:
            _apply_date_attrs(attrs, self.doc)
        elif name == "references" and self.in_back:
            self.in_references = True
        elif name == "seriesInfo" and self.in_front:
            if attrs.get("name") == "Internet-Draft" and "value" in attrs:
                self.doc.name = attrs["value"]

    def end(self, name: str) -> None:
        self.flush()
        if name == "front":
            self.in_front = False
        elif name == "middle":
            self.in_middle = False
        elif name == "back":
            self.in_back = False
        elif name == "title":
            self.in_title = False
        elif name == "abstract":
            self.in_abstract = False
        elif name == "references":
            self.in_references = False
        self.depth = max(self.depth - 1, 0)


def _number_list(text: str) -> list[int]:
    numbers = (_parse_u32(part.strip()) for part in text.split(","))
    return [number for number in numbers if number is not None]


def _apply_rfc_attrs(attrs: dict[str, str], doc: Document) -> None:
    if "ipr" in attrs:
        doc.ipr = _IPR_VALUES.get(attrs["ipr"])
    if "category" in attrs:
        doc.category = _CATEGORY_VALUES.get(attrs["category"])
    if "docName" in attrs:
        doc.name = attrs["docName"]
    if "obsoletes" in attrs:
        doc.obsoletes = _number_list(attrs["obsoletes"])
    if "updates" in attrs:
        doc.updates = _number_list(attrs["updates"])


def _author_from_attrs(attrs: dict[str, str]) -> Author:
    return Author(
        fullname=attrs.get("fullname", ""),
        surname=attrs.get("surname", ""),
        initials=attrs.get("initials"),
        role=attrs.get("role"),
    )


def _apply_date_attrs(attrs: dict[str, str], doc: Document) -> None:
    year = _parse_i32(attrs["year"]) if "year" in attrs else None
    month = parse_month(attrs["month"]) if "month" in attrs else None
    day = _parse_u32(attrs["day"]) if "day" in attrs else None
    if year is None or month is None:
        return
    try:
        doc.date = datetime.date(year, month, 1 if day is None else day)
    except (ValueError, OverflowError):
        doc.date = None


def _detect_stream(doc: Document) -> None:
    if doc.name.startswith("draft-ietf-"):
        group = doc.name[len("draft-ietf-"):].split("-", 1)[0]
        doc.stream = Stream(StreamKind.IETF_WORKING_GROUP, wg=group)
    elif doc.name.startswith("draft-irtf-"):
        group = doc.name[len("draft-irtf-"):].split("-", 1)[0]
        doc.stream = Stream(StreamKind.IRTF_RESEARCH_GROUP, rg=group)


def parse_xml(source: str) -> Document:
    """Parse an RFC XML v3 document; raise ParseError on malformed XML."""
    doc = Document(name="", stream=Stream(StreamKind.IETF_INDIVIDUAL))
    doc.format = DocumentFormat.XML_V3
    doc.source = source

    if source.strip():
        reader = _Reader(doc)
        parser = expat.ParserCreate()
        parser.buffer_text = True
        parser.StartElementHandler = reader.start
        parser.EndElementHandler = reader.end
        parser.CharacterDataHandler = reader.characters
        parser.CommentHandler = lambda _data: reader.flush()
        parser.ProcessingInstructionHandler = lambda _target, _data: reader.flush()
        parser.StartCdataSectionHandler = reader.start_cdata
        parser.EndCdataSectionHandler = reader.end_cdata
        try:
            parser.Parse(source, True)
        except expat.ExpatError as exc:
            raise ParseError(f"XML parse error: {exc}") from exc
        reader.flush()

    _detect_stream(doc)
    doc.has_boilerplate = doc.ipr is not None
    return doc