"""Nickel workspace layout, template rendering and contract checks."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from .errors import ContractViolationError, EvaluationError, TemplateNotFoundError

logger = logging.getLogger(__name__)

NICKEL_COMMAND = "nickel"


@dataclass(frozen=True)
class NickelWorkspace:
    """A ``nickel/`` directory holding contracts, templates and policies."""

    root: Path

    def __post_init__(self) -> None:
        object.__setattr__(self, "root", Path(self.root))

    def contracts_dir(self) -> Path:
        """Directory of type contracts for metadata validation."""
        return self.root / "contracts"

    def templates_dir(self) -> Path:
        """Directory of per-stream document templates."""
        return self.root / "templates"

    def policies_dir(self) -> Path:
        """Directory of per-organization submission policies."""
        return self.root / "policies"

    def template_for_stream(self, org: str, stream_type: str) -> Path:
        """Path of the template for an organization and stream type."""
        return self.templates_dir() / org.lower() / f"{stream_type}.ncl"

    def validate(self) -> None:
        """Raise TemplateNotFoundError for the first missing directory."""
        for directory in (self.contracts_dir(), self.templates_dir(), self.policies_dir()):
            if not directory.exists():
                raise TemplateNotFoundError(directory)


def _run_nickel(arguments: list[str]) -> subprocess.CompletedProcess:
    command = [NICKEL_COMMAND, *arguments]
    logger.debug("running %s", " ".join(command))
    try:
        return subprocess.run(command, capture_output=True, text=True, check=False)
    except OSError as exc:
        raise EvaluationError(f"cannot run {NICKEL_COMMAND}: {exc}") from exc


def _failure_detail(completed: subprocess.CompletedProcess) -> str:
    stderr = (completed.stderr or "").strip()
    return stderr or f"exit status {completed.returncode}"


def render_template(template_path: str | PathLike[str]) -> str:
    """Evaluate a Nickel template and return its JSON export."""
    path = Path(template_path)
    if not path.exists():
        raise TemplateNotFoundError(path)
    completed = _run_nickel(["export", "--format", "json", str(path)])
    if completed.returncode != 0:
        raise EvaluationError(_failure_detail(completed))
    return completed.stdout


def validate_contracts(file_path: str | PathLike[str]) -> None:
    """Type-check a Nickel file; raise ContractViolationError if it fails."""
    path = Path(file_path)
    if not path.exists():
        raise TemplateNotFoundError(path)
    completed = _run_nickel(["typecheck", str(path)])
    if completed.returncode != 0:
        raise ContractViolationError(_failure_detail(completed))