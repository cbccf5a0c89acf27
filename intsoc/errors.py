"""Exception hierarchy shared by the whole package."""

from __future__ import annotations

from os import PathLike
from pathlib import Path


class IntsocError(Exception):
    """Base class for every error raised by this package."""


# --- API errors -----------------------------------------------------------


class ApiError(IntsocError):
    """A remote service answered with a non-success status.

    Also the base class of the other API failures below.
    """

    def __init__(self, status: int, message: str) -> None:
        super().__init__(f"API error: {status} - {message}")
        self.status = status
        self.message = message


class HttpError(ApiError):
    """Network-level failure: DNS, TLS or connection problems."""

    def __init__(self, detail: object) -> None:
        IntsocError.__init__(self, f"HTTP error: {detail}")
        self.status = None
        self.message = str(detail)
        self.detail = detail


class NotFoundError(ApiError):
    """The requested draft, RFC or registry does not exist."""

    def __init__(self, resource: str) -> None:
        IntsocError.__init__(self, f"not found: {resource}")
        self.status = 404
        self.message = resource
        self.resource = resource


class DeserializeError(ApiError):
    """A response body did not match the expected schema."""

    def __init__(self, detail: object) -> None:
        IntsocError.__init__(self, f"deserialization error: {detail}")
        self.status = None
        self.message = str(detail)
        self.detail = detail


# --- Parser errors --------------------------------------------------------


class ParseError(IntsocError):
    """A document or tool report could not be parsed."""


class PlainTextParseError(ParseError):
    """A plain-text draft could not be parsed at a given line."""

    def __init__(self, line: int, message: str) -> None:
        super().__init__(f"plain-text parse error at line {line}: {message}")
        self.line = line
        self.message = message


class IdnitsParseError(ParseError):
    """The idnits report could not be parsed."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"idnits parse error: {detail}")
        self.detail = detail


class UnsupportedFormatError(ParseError):
    """The document is in a format the parser does not handle."""

    def __init__(self, format_name: str) -> None:
        super().__init__(f"unsupported format: {format_name}")
        self.format_name = format_name


# --- Fixer errors ---------------------------------------------------------


class FixError(IntsocError):
    """A fix could not be applied."""


class ConflictError(FixError):
    """The fix conflicts with a change already made."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"fix conflicts with existing change: {detail}")
        self.detail = detail


class TargetNotFoundError(FixError):
    """The text or line a fix targets is missing."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"fix target not found: {detail}")
        self.detail = detail


class InvalidStateError(FixError):
    """The fix cannot be applied in the current state."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"cannot apply fix in current state: {detail}")
        self.detail = detail


# --- Template / policy errors ---------------------------------------------


class NickelError(IntsocError):
    """Template rendering or policy evaluation failed."""


class TemplateNotFoundError(NickelError):
    """A template file or workspace directory is missing."""

    def __init__(self, path: str | PathLike[str]) -> None:
        self.path = Path(path)
        super().__init__(f"template not found: {self.path}")


class ContractViolationError(NickelError):
    """A file violates its type contracts."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"contract violation: {detail}")
        self.detail = detail


class PolicyFailedError(NickelError):
    """A submission policy check could not be carried out."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"policy check failed: {detail}")
        self.detail = detail


class EvaluationError(NickelError):
    """The template evaluator reported an error."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"nickel evaluation error: {detail}")
        self.detail = detail