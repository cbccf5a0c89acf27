"""Stream-specific submission policy checks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .document import Document
from .errors import PolicyFailedError
from .nickel import NickelWorkspace
from .stream import StreamKind

POLICY_FILE = "stream-rules.ncl"


@dataclass(frozen=True)
class PolicyResult:
    """Outcome of a policy check."""

    passed: bool
    violations: list[str] = field(default_factory=list)


def check_policy(workspace: NickelWorkspace, document: Document) -> PolicyResult:
    """Check a document against the submission rules of its stream."""
    policy_file = workspace.policies_dir() / POLICY_FILE
    if not policy_file.exists():
        raise PolicyFailedError(f"{POLICY_FILE} not found")

    violations: list[str] = []
    stream = document.stream
    if stream.kind is StreamKind.IETF_WORKING_GROUP and not stream.wg:
        violations.append("Working group abbreviation cannot be empty")
    elif stream.kind is StreamKind.IRTF_RESEARCH_GROUP and not stream.rg:
        violations.append("Research group abbreviation cannot be empty")

    if not document.title:
        violations.append("Document title is required")
    if not document.authors:
        violations.append("At least one author is required")
    if document.abstract_text is None:
        violations.append("Abstract is required")

    return PolicyResult(passed=not violations, violations=violations)


def build_policy_context(document: Document) -> dict[str, Any]:
    """The document facts a policy evaluation looks at."""
    return {
        "name": document.name,
        "title": document.title,
        "stream": str(document.stream),
        "category": None if document.category is None else document.category.value,
        "authors_count": len(document.authors),
        "has_abstract": document.abstract_text is not None,
        "has_boilerplate": document.has_boilerplate,
        "format": document.format.value,
    }