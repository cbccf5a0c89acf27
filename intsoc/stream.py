"""Submission streams and the rules tied to each of them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .organization import Organization


class StreamKind(Enum):
    """The kinds of submission stream; the value is the serialised tag."""

    IETF_INDIVIDUAL = "IetfIndividual"
    IETF_WORKING_GROUP = "IetfWorkingGroup"
    IETF_STANDARDS_TRACK = "IetfStandardsTrack"
    IETF_INFORMATIONAL = "IetfInformational"
    IETF_EXPERIMENTAL = "IetfExperimental"
    IETF_BCP = "IetfBcp"
    IETF_BIS = "IetfBis"
    IRTF_RESEARCH_GROUP = "IrtfResearchGroup"
    IRTF_INDIVIDUAL = "IrtfIndividual"
    IAB_DOCUMENT = "IabDocument"
    IAB_STATEMENT = "IabStatement"
    INDEPENDENT_SUBMISSION = "IndependentSubmission"
    IANA_REGISTRY_REQUEST = "IanaRegistryRequest"
    IANA_PARAMETER_ASSIGNMENT = "IanaParameterAssignment"
    RFC_EDITOR_ERRATA = "RfcEditorErrata"
    RFC_EDITOR_EDITORIAL = "RfcEditorEditorial"


_K = StreamKind

# kind -> (required fields, optional fields)
_SHAPES: dict[StreamKind, tuple[frozenset[str], frozenset[str]]] = {
    _K.IETF_INDIVIDUAL: (frozenset(), frozenset()),
    _K.IETF_WORKING_GROUP: (frozenset({"wg"}), frozenset()),
    _K.IETF_STANDARDS_TRACK: (frozenset(), frozenset({"wg"})),
    _K.IETF_INFORMATIONAL: (frozenset(), frozenset({"wg"})),
    _K.IETF_EXPERIMENTAL: (frozenset(), frozenset({"wg"})),
    _K.IETF_BCP: (frozenset(), frozenset({"wg"})),
    _K.IETF_BIS: (frozenset(), frozenset({"obsoletes"})),
    _K.IRTF_RESEARCH_GROUP: (frozenset({"rg"}), frozenset()),
    _K.IRTF_INDIVIDUAL: (frozenset(), frozenset()),
    _K.IAB_DOCUMENT: (frozenset(), frozenset()),
    _K.IAB_STATEMENT: (frozenset(), frozenset()),
    _K.INDEPENDENT_SUBMISSION: (frozenset(), frozenset()),
    _K.IANA_REGISTRY_REQUEST: (frozenset({"registry"}), frozenset()),
    _K.IANA_PARAMETER_ASSIGNMENT: (frozenset({"registry"}), frozenset()),
    _K.RFC_EDITOR_ERRATA: (frozenset({"rfc"}), frozenset()),
    _K.RFC_EDITOR_EDITORIAL: (frozenset(), frozenset()),
}

_ORGANIZATIONS = {
    _K.IETF_INDIVIDUAL: Organization.IETF,
    _K.IETF_WORKING_GROUP: Organization.IETF,
    _K.IETF_STANDARDS_TRACK: Organization.IETF,
    _K.IETF_INFORMATIONAL: Organization.IETF,
    _K.IETF_EXPERIMENTAL: Organization.IETF,
    _K.IETF_BCP: Organization.IETF,
    _K.IETF_BIS: Organization.IETF,
    _K.IRTF_RESEARCH_GROUP: Organization.IRTF,
    _K.IRTF_INDIVIDUAL: Organization.IRTF,
    _K.IAB_DOCUMENT: Organization.IAB,
    _K.IAB_STATEMENT: Organization.IAB,
    _K.INDEPENDENT_SUBMISSION: Organization.INDEPENDENT,
    _K.IANA_REGISTRY_REQUEST: Organization.IANA,
    _K.IANA_PARAMETER_ASSIGNMENT: Organization.IANA,
    _K.RFC_EDITOR_ERRATA: Organization.RFC_EDITOR,
    _K.RFC_EDITOR_EDITORIAL: Organization.RFC_EDITOR,
}

_LABELS = {
    _K.IETF_INDIVIDUAL: "IETF Individual",
    _K.IETF_WORKING_GROUP: "IETF WG",
    _K.IETF_STANDARDS_TRACK: "IETF Standards Track",
    _K.IETF_INFORMATIONAL: "IETF Informational",
    _K.IETF_EXPERIMENTAL: "IETF Experimental",
    _K.IETF_BCP: "IETF BCP",
    _K.IETF_BIS: "IETF BIS",
    _K.IRTF_RESEARCH_GROUP: "IRTF RG",
    _K.IRTF_INDIVIDUAL: "IRTF Individual",
    _K.IAB_DOCUMENT: "IAB Document",
    _K.IAB_STATEMENT: "IAB Statement",
    _K.INDEPENDENT_SUBMISSION: "Independent Submission",
    _K.IANA_REGISTRY_REQUEST: "IANA Registry Request",
    _K.IANA_PARAMETER_ASSIGNMENT: "IANA Parameter Assignment",
    _K.RFC_EDITOR_ERRATA: "RFC Editor Errata",
    _K.RFC_EDITOR_EDITORIAL: "RFC Editor Editorial",
}

_OPTIONAL_WG_KINDS = frozenset(
    {_K.IETF_STANDARDS_TRACK, _K.IETF_INFORMATIONAL, _K.IETF_EXPERIMENTAL, _K.IETF_BCP}
)
_AUTHOR_PREFIX_KINDS = frozenset({_K.IETF_INDIVIDUAL, _K.IETF_BIS, _K.IRTF_INDIVIDUAL})

_BOILERPLATE_IDS = {
    Organization.IETF: "trust200902",
    Organization.IRTF: "trust200902",
    Organization.IAB: "trust200902",
    Organization.INDEPENDENT: "trust200902",
    Organization.IANA: "iana-submission",
    Organization.RFC_EDITOR: "rfc-editor",
}


@dataclass(frozen=True)
class Stream:
    """A submission stream with the details its kind carries.

    Only the fields that belong to ``kind`` may be set: ``wg`` for IETF
    working-group streams, ``rg`` for research groups, ``registry`` for
    IANA requests, ``rfc`` for errata and ``obsoletes`` for BIS documents.
    """

    kind: StreamKind
    wg: str | None = None
    rg: str | None = None
    registry: str | None = None
    rfc: int | None = None
    obsoletes: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", StreamKind(self.kind))
        object.__setattr__(self, "obsoletes", tuple(self.obsoletes))
        required, optional = _SHAPES[self.kind]
        allowed = required | optional
        for field in ("wg", "rg", "registry", "rfc"):
            value = getattr(self, field)
            if field in required and value is None:
                raise ValueError(f"{self.kind.value} stream requires '{field}'")
            if field not in allowed and value is not None:
                raise ValueError(f"{self.kind.value} stream does not take '{field}'")
        if self.obsoletes and "obsoletes" not in allowed:
            raise ValueError(f"{self.kind.value} stream does not take 'obsoletes'")
        if self.rfc is not None and self.rfc < 0:
            raise ValueError("RFC number must not be negative")
        if any(number < 0 for number in self.obsoletes):
            raise ValueError("RFC numbers must not be negative")

    def organization(self) -> Organization:
        """The organization that manages this stream."""
        return _ORGANIZATIONS[self.kind]

    def draft_prefix(self, author_last_name: str) -> str | None:
        """The conventional draft name prefix, or None if the stream has none."""
        if self.kind in _AUTHOR_PREFIX_KINDS:
            return f"draft-{author_last_name}-"
        if self.kind is StreamKind.IETF_WORKING_GROUP or (
            self.kind in _OPTIONAL_WG_KINDS and self.wg is not None
        ):
            return f"draft-ietf-{self.wg}-"
        if self.kind is StreamKind.IRTF_RESEARCH_GROUP:
            return f"draft-irtf-{self.rg}-"
        return None

    def boilerplate_id(self) -> str:
        """The boilerplate identifier required in the document header."""
        return _BOILERPLATE_IDS[self.organization()]

    def __str__(self) -> str:
        label = _LABELS[self.kind]
        if self.kind is StreamKind.IETF_WORKING_GROUP:
            return f"{label} ({self.wg})"
        if self.kind in _OPTIONAL_WG_KINDS:
            return label if self.wg is None else f"{label} ({self.wg})"
        if self.kind is StreamKind.IETF_BIS:
            rfcs = ", ".join(f"RFC {number}" for number in self.obsoletes)
            return f"{label} (obsoletes {rfcs})"
        if self.kind is StreamKind.IRTF_RESEARCH_GROUP:
            return f"{label} ({self.rg})"
        if self.registry is not None:
            return f"{label} ({self.registry})"
        if self.kind is StreamKind.RFC_EDITOR_ERRATA:
            return f"{label} (RFC {self.rfc})"
        return label