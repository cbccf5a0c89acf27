import pytest

from intsoc.document import DocumentFormat
from intsoc.errors import ParseError
from intsoc.parser import parse


def test_xml_declaration_selects_xml():
    doc = parse('<?xml version="1.0"?>\n<rfc docName="draft-smith-a-00"/>')
    assert doc.format is DocumentFormat.XML_V3
    assert doc.name == "draft-smith-a-00"


def test_leading_whitespace_before_rfc():
    doc = parse('  \n <rfc docName="draft-smith-b-01"/>')
    assert doc.format is DocumentFormat.XML_V3
    assert doc.name == "draft-smith-b-01"


def test_plain_text_selected_otherwise():
    source = "Internet-Draft draft-jewell-http-430-00\n"
    doc = parse(source)
    assert doc.format is DocumentFormat.PLAIN_TEXT
    assert doc.name == "draft-jewell-http-430-00"


def test_other_markup_is_plain_text():
    doc = parse("<html></html>")
    assert doc.format is DocumentFormat.PLAIN_TEXT


def test_empty_is_plain_text():
    assert parse("").format is DocumentFormat.PLAIN_TEXT


def test_broken_xml_raises():
    with pytest.raises(ParseError):
        parse("<rfc><front>")