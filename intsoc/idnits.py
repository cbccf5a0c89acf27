"""Parsing of idnits reports into check results."""

from __future__ import annotations

from .validation import CheckCategory, CheckResult, Fixability, Severity

# (keywords, category, fixability); the first rule with a matching keyword wins
_RULES: tuple[tuple[tuple[str, ...], CheckCategory, Fixability], ...] = (
    (("iana",), CheckCategory.IANA_SECTIONS, Fixability.MANUAL_ONLY),
    (("ipr", "intellectual property"), CheckCategory.IPR, Fixability.MANUAL_ONLY),
    (
        ("boilerplate", "copyright", "license", "trust legal"),
        CheckCategory.BOILERPLATE,
        Fixability.RECOMMENDED,
    ),
    (("expir", "date"), CheckCategory.DATE, Fixability.AUTO_SAFE),
    (("reference", "rfc 2119", "citation"), CheckCategory.REFERENCES, Fixability.MANUAL_ONLY),
    (("security considerations", "section"), CheckCategory.SECTIONS, Fixability.MANUAL_ONLY),
    (("draft name", "filename", "revision"), CheckCategory.DRAFT_NAME, Fixability.RECOMMENDED),
    (
        ("line", "character", "page", "ascii", "whitespace"),
        CheckCategory.TEXT_FORMAT,
        Fixability.RECOMMENDED,
    ),
    (("xml", "element", "attribute"), CheckCategory.XML, Fixability.MANUAL_ONLY),
)

_CATEGORY_IDS = {
    CheckCategory.BOILERPLATE: "boilerplate",
    CheckCategory.DATE: "date",
    CheckCategory.HEADER: "header",
    CheckCategory.REFERENCES: "references",
    CheckCategory.SECTIONS: "sections",
    CheckCategory.TEXT_FORMAT: "text-format",
    CheckCategory.XML: "xml",
    CheckCategory.IANA_SECTIONS: "iana-sections",
    CheckCategory.DRAFT_NAME: "draft-name",
    CheckCategory.IPR: "ipr",
}


def _categorize(message: str) -> tuple[CheckCategory, Fixability]:
    lower = message.lower()
    for keywords, category, fixability in _RULES:
        if any(keyword in lower for keyword in keywords):
            return category, fixability
    return CheckCategory.HEADER, Fixability.NOT_FIXABLE


def _strip_leading(text: str, marker: str) -> str:
    """Drop ``marker`` characters and whitespace from the start of ``text``."""
    index = 0
    while index < len(text) and (text[index] == marker or text[index].isspace()):
        index += 1
    return text[index:]


def _strip_prefix_repeated(text: str, prefix: str) -> str:
    while text.startswith(prefix):
        text = text[len(prefix):]
    return text


def _parse_line(line: str) -> CheckResult | None:
    if "**" in line:
        severity, rest = Severity.ERROR, _strip_leading(line, "*")
    elif "~~" in line:
        severity, rest = Severity.WARNING, _strip_leading(line, "~")
    elif "-- Comment:" in line or ("--" in line and not line.startswith("---")):
        severity, rest = Severity.INFO, _strip_leading(line, "-")
    else:
        return None

    for label in ("Error:", "Warning:", "Comment:"):
        rest = _strip_prefix_repeated(rest, label)
    message = rest.strip()
    if not message:
        return None

    category, fixability = _categorize(message)
    return CheckResult(
        check_id=f"idnits-{_CATEGORY_IDS[category]}",
        severity=severity,
        message=message,
        category=category,
        fixable=fixability,
    )


def parse_idnits_output(output: str) -> list[CheckResult]:
    """Turn an idnits text report into check results, one per flagged line."""
    results = []
    for line in output.splitlines():
        trimmed = line.strip()
        if not trimmed:
            continue
        result = _parse_line(trimmed)
        if result is not None:
            results.append(result)
    return results