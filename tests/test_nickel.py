import subprocess
from pathlib import Path
from unittest import mock

import pytest

from intsoc.errors import ContractViolationError, EvaluationError, TemplateNotFoundError
from intsoc.nickel import NickelWorkspace, render_template, validate_contracts


def _completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def template(tmp_path):
    path = tmp_path / "doc.ncl"
    path.write_text("{ title = \"x\" }")
    return path


def test_workspace_directories(tmp_path):
    ws = NickelWorkspace(str(tmp_path))
    assert ws.root == tmp_path
    assert ws.contracts_dir() == tmp_path / "contracts"
    assert ws.templates_dir() == tmp_path / "templates"
    assert ws.policies_dir() == tmp_path / "policies"


def test_template_for_stream_lowercases_org(tmp_path):
    ws = NickelWorkspace(tmp_path)
    assert ws.template_for_stream("IETF", "wg-draft") == tmp_path / "templates" / "ietf" / "wg-draft.ncl"


def test_validate_reports_first_missing_directory(tmp_path):
    ws = NickelWorkspace(tmp_path)
    with pytest.raises(TemplateNotFoundError) as info:
        ws.validate()
    assert info.value.path == ws.contracts_dir()


def test_validate_reports_missing_policies(tmp_path):
    ws = NickelWorkspace(tmp_path)
    ws.contracts_dir().mkdir()
    ws.templates_dir().mkdir()
    with pytest.raises(TemplateNotFoundError) as info:
        ws.validate()
    assert info.value.path == ws.policies_dir()


def test_render_missing_template(tmp_path):
    with pytest.raises(TemplateNotFoundError):
        render_template(tmp_path / "absent.ncl")


def test_render_returns_export_output(template):
    with mock.patch("subprocess.run", return_value=_completed(stdout='{"a": 1}')) as run:
        assert render_template(template) == '{"a": 1}'
    command = run.call_args.args[0]
    assert command[1:4] == ["export", "--format", "json"]
    assert command[-1] == str(template)


def test_render_failure_raises_evaluation_error(template):
    with mock.patch("subprocess.run", return_value=_completed(returncode=1, stderr="boom")):
        with pytest.raises(EvaluationError) as info:
            render_template(template)
    assert "boom" in str(info.value)


def test_render_without_nickel_installed(template):
    with mock.patch("subprocess.run", side_effect=FileNotFoundError("nickel")):
        with pytest.raises(EvaluationError):
            render_template(template)


def test_validate_contracts_failure(template):
    with mock.patch("subprocess.run", return_value=_completed(returncode=2, stderr="bad")) as run:
        with pytest.raises(ContractViolationError) as info:
            validate_contracts(template)
    assert "bad" in str(info.value)
    assert run.call_args.args[0][1] == "typecheck"


def test_validate_contracts_missing_file(tmp_path):
    with pytest.raises(TemplateNotFoundError) as info:
        validate_contracts(tmp_path / "none.ncl")
    assert info.value.path == Path(tmp_path / "none.ncl")