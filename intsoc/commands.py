"""The check, fix, submit, status and init commands."""

from __future__ import annotations

import json
import logging
from os import PathLike
from pathlib import Path
from typing import Any

from . import diff
from .datatracker import DataTrackerClient, DraftInfo
from .document import Document, DocumentFormat, IprDeclaration
from .engine import FixEngine
from .errors import IntsocError, NickelError, NotFoundError
from .nickel import NickelWorkspace, render_template
from .parser import parse
from .validation import CheckCategory, CheckResult, CheckSummary, Fixability, Severity

logger = logging.getLogger(__name__)

_XML_FORMATS = (DocumentFormat.XML_V3, DocumentFormat.XML_V2)

# stream name -> (template type, organization directory, required group flag)
_STREAM_TEMPLATES = {
    "individual": ("individual-draft", "ietf", None),
    "wg": ("wg-draft", "ietf", "Working group stream requires --group <wg-abbrev>"),
    "irtf": ("rg-draft", "irtf", "IRTF stream requires --group <rg-abbrev>"),
    "iab": ("iab-document", "iab", None),
    "independent": ("independent-submission", "independent", None),
}


def run_checks(document: Document) -> list[CheckResult]:
    """The deterministic checks run on every document."""
    is_xml = document.format in _XML_FORMATS
    results: list[CheckResult] = []

    if not document.has_boilerplate:
        results.append(
            CheckResult(
                check_id="boilerplate-missing",
                severity=Severity.ERROR,
                message="Required IETF Trust boilerplate is missing",
                category=CheckCategory.BOILERPLATE,
                fixable=Fixability.AUTO_SAFE if is_xml else Fixability.RECOMMENDED,
                suggestion=(
                    'Declare ipr="trust200902" on the <rfc> element'
                    if is_xml
                    else "Insert the Status of This Memo and Copyright Notice text"
                ),
            )
        )

    if not document.title.strip():
        results.append(
            CheckResult(
                check_id="title-missing",
                severity=Severity.ERROR,
                message="Document title is missing",
                category=CheckCategory.HEADER,
                fixable=Fixability.MANUAL_ONLY,
            )
        )

    if not document.authors:
        results.append(
            CheckResult(
                check_id="authors-missing",
                severity=Severity.ERROR,
                message="Document lists no authors",
                category=CheckCategory.HEADER,
                fixable=Fixability.MANUAL_ONLY,
            )
        )

    if not document.name:
        results.append(
            CheckResult(
                check_id="draft-name-missing",
                severity=Severity.ERROR,
                message="Document has no draft name",
                category=CheckCategory.DRAFT_NAME,
                fixable=Fixability.MANUAL_ONLY,
            )
        )
    elif not document.name.startswith("draft-"):
        results.append(
            CheckResult(
                check_id="draft-name-prefix",
                severity=Severity.ERROR,
                message=f"Draft name '{document.name}' does not start with 'draft-'",
                category=CheckCategory.DRAFT_NAME,
                fixable=Fixability.MANUAL_ONLY,
            )
        )

    if document.ipr is not None and document.ipr is not IprDeclaration.TRUST200902:
        results.append(
            CheckResult(
                check_id="ipr-nondefault",
                severity=Severity.WARNING,
                message=f"Document uses the {document.ipr.value} IPR declaration",
                category=CheckCategory.IPR,
                fixable=Fixability.NOT_FIXABLE,
            )
        )

    if document.abstract_text is None:
        results.append(
            CheckResult(
                check_id="abstract-missing",
                severity=Severity.ERROR,
                message="Document has no abstract",
                category=CheckCategory.SECTIONS,
                fixable=Fixability.MANUAL_ONLY,
            )
        )

    if is_xml and document.category is None:
        results.append(
            CheckResult(
                check_id="category-missing",
                severity=Severity.WARNING,
                message="Document category (intended status) is not set",
                category=CheckCategory.HEADER,
                fixable=Fixability.RECOMMENDED,
            )
        )

    return results


def _severity_label(severity: Severity) -> str:
    return severity.name.capitalize()


def _result_to_dict(result: CheckResult) -> dict[str, Any]:
    return {
        "check_id": result.check_id,
        "severity": _severity_label(result.severity),
        "message": result.message,
        "location": None if result.location is None else str(result.location),
        "category": result.category.value,
        "fixable": result.fixable.value,
        "suggestion": result.suggestion,
    }


def _load(file: str | PathLike[str]) -> tuple[str, Document]:
    source = Path(file).read_text(encoding="utf-8")
    return source, parse(source)


def run_check(file: str | PathLike[str], errors_only: bool, output_format: str) -> CheckSummary:
    """Check a document file and print the findings."""
    _, document = _load(file)
    logger.info("Checking: %s (%s)", document.name, document.stream)
    summary = CheckSummary.from_results(run_checks(document))
    shown = [
        r for r in summary.results if not errors_only or r.severity >= Severity.ERROR
    ]

    if output_format == "json":
        report = {
            "results": [_result_to_dict(r) for r in shown],
            "error_count": summary.error_count,
            "warning_count": summary.warning_count,
            "info_count": summary.info_count,
            "auto_fixable_count": summary.auto_fixable_count,
            "recommended_fixable_count": summary.recommended_fixable_count,
            "manual_only_count": summary.manual_only_count,
            "passes": summary.passes(),
        }
        print(json.dumps(report, indent=2))
        return summary

    for result in shown:
        where = "" if result.location is None else f" ({result.location})"
        print(f"{_severity_label(result.severity)}: [{result.check_id}] {result.message}{where}")
        if result.suggestion:
            print(f"  suggestion: {result.suggestion}")
    print()
    print(
        f"{summary.error_count} error(s), {summary.warning_count} warning(s), "
        f"{summary.info_count} info"
    )
    print(
        f"Fixable: {summary.auto_fixable_count} auto-safe, "
        f"{summary.recommended_fixable_count} recommended, "
        f"{summary.manual_only_count} manual-only"
    )
    print("PASS" if summary.passes() else "FAIL")
    return summary


def run_fix(
    file: str | PathLike[str],
    auto_only: bool,
    dry_run: bool,
    output: str | PathLike[str] | None,
    output_format: str,
) -> str:
    """Plan and apply fixes; write the result unless ``dry_run``."""
    path = Path(file)
    source, document = _load(path)
    logger.info("Fixing: %s (%s)", document.name, document.stream)

    results = run_checks(document)
    engine = FixEngine()
    plan = engine.plan(document, results)
    print(
        f"Fix plan: {len(plan.auto_safe_fixes())} auto-safe, "
        f"{len(plan.recommended_fixes())} recommended, "
        f"{len(plan.manual_only_fixes())} manual-only"
    )

    if auto_only:
        fixed = engine.apply_auto_safe(source, plan)
    else:
        fixed = engine.apply_fixes(source, plan.fixes)

    if dry_run:
        diff_text = diff.unified_diff(source, fixed, str(path))
        print(diff_text if diff_text else "No changes to apply.")
        return fixed

    target = Path(output) if output is not None else path
    target.write_text(fixed, encoding="utf-8")
    print(f"Fixed document written to: {target}")
    stats = diff.change_count(source, fixed)
    print(f"Changes: +{stats.insertions} -{stats.deletions} (total: {stats.total()} lines)")
    return fixed


def run_submit(file: str | PathLike[str], skip_checks: bool) -> None:
    """Run pre-submission checks and report where the document goes."""
    _, document = _load(file)
    logger.info("Preparing submission: %s -> %s", document.name, document.stream)

    if not skip_checks:
        summary = CheckSummary.from_results(run_checks(document))
        if not summary.passes():
            raise IntsocError(
                f"Pre-submission checks failed with {summary.error_count} error(s). "
                "Run 'intsoc check' for details, or use --skip-checks to override."
            )
        print("Pre-submission checks passed.")

    org = document.stream.organization()
    if not org.uses_datatracker():
        raise IntsocError(
            f"{org} submissions are not yet supported via API. "
            f"Please submit manually at {org.datatracker_base()}"
        )

    print("Submission target: IETF Datatracker")
    print(f"Document: {document.name}")
    print(f"Stream: {document.stream}")
    print()
    print("NOTE: Automated submission requires Datatracker API authentication.")
    print(f"Please submit manually at: {org.datatracker_base()}/submit/")
    print("Automated submission will be available in a future release.")


def _print_draft(info: DraftInfo) -> None:
    print(f"Draft: {info.name}")
    print(f"Title: {info.title}")
    print(f"Revision: {info.rev}")
    if info.group is not None:
        print(f"Group: {info.group.name} ({info.group.acronym})")
    if info.stream is not None:
        print(f"Stream: {info.stream}")
    if info.intended_std_level is not None:
        print(f"Intended Status: {info.intended_std_level}")
    if info.expires is not None:
        print(f"Expires: {info.expires}")


async def run_status(
    name: str, output_format: str, client: DataTrackerClient | None = None
) -> DraftInfo | None:
    """Look a draft up on the Datatracker and print what is known."""
    owned = client is None
    tracker = DataTrackerClient() if client is None else client
    logger.info("Looking up: %s", name)
    try:
        try:
            info = await tracker.get_draft(name)
        except NotFoundError:
            print(f"Draft '{name}' not found on Datatracker.")
            print("It may not have been submitted yet, or the name may be incorrect.")
            return None
    finally:
        if owned:
            await tracker.aclose()

    if output_format == "json":
        print(json.dumps(info.to_dict(), indent=2))
    else:
        _print_draft(info)
    return info


def run_init(
    name: str,
    stream: str,
    group: str | None,
    directory: str | PathLike[str],
) -> Path:
    """Create ``<name>.xml`` in ``directory`` from a template; return its path."""
    if not name.startswith("draft-"):
        raise IntsocError(f"Draft name must start with 'draft-', got '{name}'")

    logger.info("Initializing draft: %s (stream: %s)", name, stream)
    try:
        template_type, org, group_required = _STREAM_TEMPLATES[stream]
    except KeyError:
        raise IntsocError(f"Unknown stream type: {stream}") from None
    if group_required is not None and group is None:
        raise IntsocError(group_required)

    base = Path(directory)
    output_file = base / f"{name}.xml"

    nickel_dir = base / "nickel"
    if nickel_dir.exists():
        template = NickelWorkspace(nickel_dir).template_for_stream(org, template_type)
        if template.exists():
            print(f"Using Nickel template: {template}")
            try:
                rendered = render_template(template)
            except NickelError as exc:
                logger.warning("Nickel rendering failed, using built-in template: %s", exc)
            else:
                output_file.write_text(rendered, encoding="utf-8")
                print(f"Created: {output_file}")
                return output_file

    output_file.write_text(generate_xml_template(name, stream, group), encoding="utf-8")
    print(f"Created: {output_file}")
    return output_file


def generate_xml_template(name: str, stream: str, group: str | None) -> str:
    """The built-in RFC XML v3 skeleton for a new draft."""
    workgroup = "" if group is None else f"    <workgroup>{group}</workgroup>\n"
    return f"""<?xml version="1.0" encoding="utf-8"?>
<!DOCTYPE rfc [
  <!ENTITY nbsp "&#160;">
  <!ENTITY zwsp "&#8203;">
  <!ENTITY nbhy "&#8209;">
  <!ENTITY wj "&#8288;">
]>
<rfc
  xmlns:xi="http://www.w3.org/2001/XInclude"
  category="info"
  docName="{name}"
  ipr="trust200902"
  submissionType="IETF"
  consensus="true"
  version="3">

  <front>
    <title>TODO: Document Title</title>
    <seriesInfo name="Internet-Draft" value="{name}"/>
{workgroup}
    <author fullname="TODO: Author Name" surname="TODO">
      <organization>TODO: Organization</organization>
      <address>
        <email>TODO: email@example.com</email>
      </address>
    </author>

    <date year="2026"/>

    <area>General</area>

    <abstract>
      <t>TODO: Write abstract.</t>
    </abstract>
  </front>

  <middle>
    <section title="Introduction">
      <t>TODO: Write introduction.</t>
    </section>

    <section title="Security Considerations">
      <t>TODO: Describe security considerations.</t>
    </section>

    <section title="IANA Considerations">
      <t>This document has no IANA actions.</t>
    </section>
  </middle>

  <back>
    <references title="Normative References">
    </references>

    <references title="Informative References">
    </references>
  </back>
</rfc>
"""