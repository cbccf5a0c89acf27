import asyncio
import json
import subprocess
from unittest import mock

import httpx
import pytest
import respx

from intsoc.commands import (
    generate_xml_template,
    run_check,
    run_checks,
    run_fix,
    run_init,
    run_status,
    run_submit,
)
from intsoc.datatracker import BASE_URL, DataTrackerClient
from intsoc.errors import ApiError, IntsocError
from intsoc.generators import trust200902_boilerplate
from intsoc.parser import parse
from intsoc.validation import CheckCategory, CheckSummary, Severity

NAME = "draft-doe-example-00"


@pytest.fixture
def good_xml(tmp_path):
    path = tmp_path / "good.xml"
    path.write_text(generate_xml_template(NAME, "individual", None))
    return path


@pytest.fixture
def bare_text(tmp_path):
    path = tmp_path / "bare.txt"
    path.write_text("hello\n")
    return path


def test_template_round_trips_through_parser():
    doc = parse(generate_xml_template(NAME, "wg", "httpbis"))
    assert doc.name == NAME
    assert doc.title == "TODO: Document Title"
    assert len(doc.authors) == 1


def test_template_workgroup_only_with_group():
    assert "<workgroup>httpbis</workgroup>" in generate_xml_template(NAME, "wg", "httpbis")
    assert "<workgroup>" not in generate_xml_template(NAME, "individual", None)


def test_template_document_passes_checks():
    doc = parse(generate_xml_template(NAME, "individual", None))
    assert CheckSummary.from_results(run_checks(doc)).passes()


def test_bare_text_fails_checks():
    results = run_checks(parse("hello\n"))
    categories = {r.category for r in results}
    assert CheckCategory.BOILERPLATE in categories
    assert CheckCategory.HEADER in categories
    assert not CheckSummary.from_results(results).passes()


def test_run_check_json_matches_summary(bare_text, capsys):
    summary = run_check(bare_text, False, "json")
    report = json.loads(capsys.readouterr().out)
    assert report["error_count"] == summary.error_count
    assert len(report["results"]) == len(summary.results)
    assert report["passes"] is False


def test_run_check_errors_only_hides_warnings(tmp_path, capsys):
    source = generate_xml_template(NAME, "individual", None).replace('category="info"', "")
    path = tmp_path / "nocat.xml"
    path.write_text(source)
    summary = run_check(path, True, "json")
    report = json.loads(capsys.readouterr().out)
    assert summary.warning_count >= 1
    assert all(r["severity"] in ("Error", "Fatal") for r in report["results"])


def test_run_fix_auto_only_leaves_text_unchanged(bare_text, tmp_path, capsys):
    out = tmp_path / "out.txt"
    fixed = run_fix(bare_text, True, False, out, "text")
    assert out.read_text() == bare_text.read_text()
    assert fixed == bare_text.read_text()


def test_run_fix_inserts_boilerplate(bare_text, tmp_path):
    out = tmp_path / "out.txt"
    run_fix(bare_text, False, False, out, "text")
    first_line = trust200902_boilerplate().splitlines()[0]
    assert out.read_text().startswith(first_line)


def test_run_fix_dry_run_keeps_file(bare_text, capsys):
    original = bare_text.read_text()
    run_fix(bare_text, False, True, None, "text")
    out = capsys.readouterr().out
    assert bare_text.read_text() == original
    assert f"--- a/{bare_text}" in out


def test_run_fix_dry_run_without_changes(bare_text, capsys):
    run_fix(bare_text, True, True, None, "text")
    assert "No changes to apply." in capsys.readouterr().out


def test_run_submit_rejects_failing_document(bare_text):
    with pytest.raises(IntsocError) as info:
        run_submit(bare_text, False)
    assert "Pre-submission checks failed" in str(info.value)


def test_run_submit_passing_document(good_xml, capsys):
    run_submit(good_xml, False)
    out = capsys.readouterr().out
    assert "Pre-submission checks passed." in out
    assert f"Document: {NAME}" in out


def test_run_init_rejects_bad_name(tmp_path):
    with pytest.raises(IntsocError):
        run_init("my-doc", "individual", None, tmp_path)


def test_run_init_requires_group(tmp_path):
    with pytest.raises(IntsocError) as info:
        run_init(NAME, "wg", None, tmp_path)
    assert "--group" in str(info.value)


def test_run_init_unknown_stream(tmp_path):
    with pytest.raises(IntsocError) as info:
        run_init(NAME, "bogus", None, tmp_path)
    assert "Unknown stream type: bogus" in str(info.value)


def test_run_init_builtin_template(tmp_path):
    path = run_init(NAME, "wg", "httpbis", tmp_path)
    assert path == tmp_path / f"{NAME}.xml"
    assert path.read_text() == generate_xml_template(NAME, "wg", "httpbis")


def _nickel_template(tmp_path):
    template = tmp_path / "nickel" / "templates" / "ietf" / "individual-draft.ncl"
    template.parent.mkdir(parents=True)
    template.write_text("{}")
    return template


def test_run_init_uses_nickel_template(tmp_path):
    _nickel_template(tmp_path)
    rendered = subprocess.CompletedProcess(args=[], returncode=0, stdout='{"rendered": true}', stderr="")
    with mock.patch("subprocess.run", return_value=rendered):
        path = run_init(NAME, "individual", None, tmp_path)
    assert path.read_text() == '{"rendered": true}'


def test_run_init_falls_back_when_rendering_fails(tmp_path):
    _nickel_template(tmp_path)
    failed = subprocess.CompletedProcess(args=[], returncode=1, stdout="", stderr="error")
    with mock.patch("subprocess.run", return_value=failed):
        path = run_init(NAME, "individual", None, tmp_path)
    assert path.read_text() == generate_xml_template(NAME, "individual", None)


def _status(name, fmt, response):
    async def go():
        client = DataTrackerClient()
        try:
            with respx.mock:
                respx.get(f"{BASE_URL}/api/v1/doc/document/{name}/").mock(return_value=response)
                return await run_status(name, fmt, client)
        finally:
            await client.aclose()

    return asyncio.run(go())


def test_run_status_json(capsys):
    payload = {"name": NAME, "title": "Example", "rev": "00", "time": "2026-01-01T00:00:00"}
    info = _status(NAME, "json", httpx.Response(200, json=payload))
    printed = json.loads(capsys.readouterr().out)
    assert info.name == NAME
    assert printed["title"] == "Example"


def test_run_status_text(capsys):
    payload = {"name": NAME, "title": "Example", "rev": "00", "time": "2026-01-01T00:00:00"}
    _status(NAME, "text", httpx.Response(200, json=payload))
    assert f"Draft: {NAME}" in capsys.readouterr().out


def test_run_status_not_found(capsys):
    assert _status(NAME, "text", httpx.Response(404)) is None
    assert "not found on Datatracker" in capsys.readouterr().out


def test_run_status_server_error():
    with pytest.raises(ApiError) as info:
        _status(NAME, "text", httpx.Response(500, text="down"))
    assert info.value.status == 500


def test_severity_counts_consistent():
    results = run_checks(parse("hello\n"))
    summary = CheckSummary.from_results(results)
    assert summary.error_count == sum(r.severity >= Severity.ERROR for r in results)