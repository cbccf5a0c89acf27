import json
from pathlib import Path

import pytest

from intsoc.cli import build_parser, main
from intsoc.commands import generate_xml_template

NAME = "draft-doe-example-00"


def test_global_options_after_subcommand():
    args = build_parser().parse_args(["check", "doc.xml", "--errors-only", "-f", "json"])
    assert args.command == "check"
    assert args.file == Path("doc.xml")
    assert args.errors_only is True
    assert args.format == "json"


def test_defaults():
    args = build_parser().parse_args(["-v", "init", NAME])
    assert args.verbose is True
    assert args.format == "text"
    assert args.stream == "individual"
    assert args.group is None
    assert args.dir == Path(".")


def test_fix_options():
    args = build_parser().parse_args(["fix", "a.xml", "--auto-only", "--dry-run", "-o", "b.xml"])
    assert (args.auto_only, args.dry_run, args.output) == (True, True, Path("b.xml"))


def test_subcommand_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_init_bad_name_reports_error(tmp_path, capsys):
    assert main(["init", "bad-name", "-d", str(tmp_path)]) == 1
    assert capsys.readouterr().err.startswith("Error:")


def test_init_creates_file(tmp_path):
    assert main(["init", NAME, "-d", str(tmp_path)]) == 0
    assert (tmp_path / f"{NAME}.xml").read_text() == generate_xml_template(NAME, "individual", None)


def test_check_json(tmp_path, capsys):
    path = tmp_path / "doc.xml"
    path.write_text(generate_xml_template(NAME, "individual", None))
    assert main(["check", str(path), "--format", "json"]) == 0
    report = json.loads(capsys.readouterr().out)
    assert report["passes"] is True
    assert report["error_count"] == 0


def test_check_missing_file(tmp_path, capsys):
    assert main(["check", str(tmp_path / "absent.xml")]) == 1
    assert "Error:" in capsys.readouterr().err


def test_submit_failing_document(tmp_path, capsys):
    path = tmp_path / "bare.txt"
    path.write_text("hello\n")
    assert main(["submit", str(path)]) == 1
    assert "Pre-submission checks failed" in capsys.readouterr().err