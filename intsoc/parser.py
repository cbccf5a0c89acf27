"""Parsing of documents in any supported format."""

from __future__ import annotations

from .document import Document
from .plain_text import parse_plain_text
from .rfcxml import parse_xml


def parse(source: str) -> Document:
    """Parse a document, choosing XML or plain text from its first characters."""
    trimmed = source.lstrip()
    if trimmed.startswith(("<?xml", "<rfc")):
        return parse_xml(source)
    return parse_plain_text(source)