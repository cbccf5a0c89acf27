"""Parsing of plain-text Internet-Drafts."""

from __future__ import annotations

import datetime
import re

from .document import Author, Document, DocumentFormat
from .stream import Stream, StreamKind

_MONTHS = (
    ("January", 1),
    ("February", 2),
    ("March", 3),
    ("April", 4),
    ("May", 5),
    ("June", 6),
    ("July", 7),
    ("August", 8),
    ("September", 9),
    ("October", 10),
    ("November", 11),
    ("December", 12),
)

_INTEGER = re.compile(r"[+-]?[0-9]+")
_NAME_END = re.compile(r"[\s>\"\]]")
_BOILERPLATE_MARKERS = ("Internet Engineering Task Force", "Request for Comments", "Internet-Draft")


def _lines(text: str) -> list[str]:
    if not text:
        return []
    pieces = text.split("\n")
    if text.endswith("\n"):
        pieces.pop()
    return [piece[:-1] if piece.endswith("\r") else piece for piece in pieces]


def parse_plain_text(source: str) -> Document:
    """Parse a plain-text draft into a Document."""
    doc = Document(name="", stream=Stream(StreamKind.IETF_INDIVIDUAL))
    doc.format = DocumentFormat.PLAIN_TEXT
    doc.source = source

    lines = _lines(source)
    _parse_header(lines, doc)
    _parse_abstract(lines, doc)
    doc.has_boilerplate = any(marker in source for marker in _BOILERPLATE_MARKERS)
    return doc


def _parse_header(lines: list[str], doc: Document) -> None:
    found_title = False
    for i, line in enumerate(lines):
        trimmed = line.strip()

        if "draft-" in trimmed:
            name = extract_draft_name(trimmed)
            if name is not None:
                doc.name = name

        if not found_title and 0 < i < 20:
            leading_spaces = len(line) - len(line.lstrip())
            if leading_spaces > 15 and trimmed and ":" not in trimmed:
                doc.title = trimmed
                found_title = True

        if trimmed.startswith(("Authors:", "Author:")):
            author_name = trimmed.split(":")[1].strip()
            if author_name:
                words = author_name.split()
                doc.authors.append(
                    Author(fullname=author_name, surname=words[-1] if words else "")
                )

        date = try_parse_date(trimmed)
        if date is not None:
            doc.date = date

        if trimmed == "\f" or i > 50:
            break


def _parse_abstract(lines: list[str], doc: Document) -> None:
    in_abstract = False
    collected: list[str] = []
    for line in lines:
        trimmed = line.strip()
        if trimmed in ("Abstract", "abstract"):
            in_abstract = True
            continue
        if in_abstract:
            if trimmed.startswith(("1.", "Table of Contents")):
                break
            collected.append(trimmed)

    text = " ".join(collected).strip()
    if text:
        doc.abstract_text = text


def extract_draft_name(text: str) -> str | None:
    """The first ``draft-...`` token in ``text``, or None."""
    start = text.find("draft-")
    if start < 0:
        return None
    rest = text[start:]
    end = _NAME_END.search(rest)
    name = rest if end is None else rest[: end.start()]
    return name if len(name.encode("utf-8")) > 6 else None


def try_parse_date(text: str) -> datetime.date | None:
    """The first day of a "Month Year" date found in ``text``, or None."""
    for month_name, month in _MONTHS:
        if month_name not in text:
            continue
        parts = text.split()
        for i, part in enumerate(parts):
            if part != month_name or i + 1 >= len(parts):
                continue
            year_text = parts[i + 1].rstrip(",")
            if _INTEGER.fullmatch(year_text):
                year = int(year_text)
                if 2000 <= year <= 2100:
                    return datetime.date(year, month, 1)
    return None