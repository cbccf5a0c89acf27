"""Internet Society organizations that produce or process documents."""

from __future__ import annotations

from enum import Enum


class Organization(Enum):
    """An organization; the value is its serialised identifier."""

    IETF = "IETF"
    IRTF = "IRTF"
    IAB = "IAB"
    INDEPENDENT = "INDEPENDENT"
    IANA = "IANA"
    RFC_EDITOR = "RFCEDITOR"

    def __str__(self) -> str:
        return _DISPLAY_NAMES[self]

    def datatracker_base(self) -> str:
        """Base URL of the site that handles this organization's documents."""
        if self.uses_datatracker():
            return "https://datatracker.ietf.org"
        if self is Organization.IANA:
            return "https://www.iana.org"
        return "https://www.rfc-editor.org"

    def uses_datatracker(self) -> bool:
        """Whether submissions go through the IETF Datatracker."""
        return self in _DATATRACKER_ORGS


_DISPLAY_NAMES = {
    Organization.IETF: "IETF",
    Organization.IRTF: "IRTF",
    Organization.IAB: "IAB",
    Organization.INDEPENDENT: "Independent",
    Organization.IANA: "IANA",
    Organization.RFC_EDITOR: "RFC Editor",
}

_DATATRACKER_ORGS = frozenset(
    {
        Organization.IETF,
        Organization.IRTF,
        Organization.IAB,
        Organization.INDEPENDENT,
    }
)