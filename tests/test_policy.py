import pytest

from intsoc.document import Author, Document
from intsoc.errors import PolicyFailedError
from intsoc.nickel import NickelWorkspace
from intsoc.policy import build_policy_context, check_policy
from intsoc.stream import Stream, StreamKind


@pytest.fixture
def workspace(tmp_path):
    ws = NickelWorkspace(tmp_path)
    ws.policies_dir().mkdir()
    (ws.policies_dir() / "stream-rules.ncl").write_text("{}")
    return ws


def _complete_document(stream=None):
    doc = Document(name="draft-doe-example-00", stream=stream or Stream(StreamKind.IETF_INDIVIDUAL))
    doc.title = "An Example"
    doc.authors.append(Author(fullname="Jane Doe", surname="Doe"))
    doc.abstract_text = "Short abstract."
    return doc


def test_missing_policy_file(tmp_path):
    with pytest.raises(PolicyFailedError) as info:
        check_policy(NickelWorkspace(tmp_path), _complete_document())
    assert "stream-rules.ncl not found" in str(info.value)


def test_complete_document_passes(workspace):
    result = check_policy(workspace, _complete_document())
    assert result.passed is True
    assert result.violations == []


def test_empty_document_lists_all_violations(workspace):
    doc = Document(name="", stream=Stream(StreamKind.IETF_INDIVIDUAL))
    result = check_policy(workspace, doc)
    assert result.passed is False
    assert result.violations == [
        "Document title is required",
        "At least one author is required",
        "Abstract is required",
    ]


def test_empty_working_group(workspace):
    doc = _complete_document(Stream(StreamKind.IETF_WORKING_GROUP, wg=""))
    result = check_policy(workspace, doc)
    assert result.violations == ["Working group abbreviation cannot be empty"]
    assert not result.passed


def test_empty_research_group(workspace):
    doc = _complete_document(Stream(StreamKind.IRTF_RESEARCH_GROUP, rg=""))
    result = check_policy(workspace, doc)
    assert result.violations == ["Research group abbreviation cannot be empty"]


def test_build_policy_context():
    doc = _complete_document()
    context = build_policy_context(doc)
    assert context["name"] == doc.name
    assert context["title"] == doc.title
    assert context["authors_count"] == 1
    assert context["has_abstract"] is True
    assert context["stream"] == str(doc.stream)
    assert context["format"] == doc.format.value