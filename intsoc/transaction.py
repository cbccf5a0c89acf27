"""Submission transactions and their audit trail."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from enum import Enum

from .stream import Stream
from .validation import CheckResult


class TransactionPhase(Enum):
    """Where a submission session stands."""

    LOADED = "Loaded"
    CHECKING = "Checking"
    CHECKED = "Checked"
    FIXING = "Fixing"
    READY_TO_SUBMIT = "ReadyToSubmit"
    SUBMITTING = "Submitting"
    SUBMITTED = "Submitted"
    FAILED = "Failed"


@dataclass(frozen=True)
class FixRecord:
    """A fix that was applied, with the unified diff of the change."""

    fix_id: str
    description: str
    applied_at: datetime.datetime
    diff: str


@dataclass(frozen=True)
class SubmissionAttempt:
    """The outcome of one submission attempt."""

    attempted_at: datetime.datetime
    succeeded: bool
    message: str | None = None


@dataclass
class Transaction:
    """A submission session: findings, applied fixes and attempts."""

    id: str
    document_name: str
    stream: Stream
    phase: TransactionPhase = TransactionPhase.LOADED
    check_results: list[CheckResult] = field(default_factory=list)
    fixes_applied: list[FixRecord] = field(default_factory=list)
    attempts: list[SubmissionAttempt] = field(default_factory=list)