"""Client for the IETF Datatracker REST API."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import httpx

from .errors import ApiError, DeserializeError, HttpError, NotFoundError

BASE_URL = "https://datatracker.ietf.org"
USER_AGENT = "intsoc/0.1.0"

_U32_LIMIT = 2**32
_U64_LIMIT = 2**64


def _mapping(data: Any, what: str) -> dict:
    if not isinstance(data, dict):
        raise DeserializeError(f"invalid type for {what}: expected an object")
    return data


def _string(data: dict, key: str, *, optional: bool = False) -> str | None:
    value = data.get(key)
    if value is None:
        if optional:
            return None
        raise DeserializeError(f"missing field `{key}`")
    if not isinstance(value, str):
        raise DeserializeError(f"invalid type for `{key}`: expected a string")
    return value


def _unsigned(data: dict, key: str, limit: int, *, optional: bool = False) -> int | None:
    value = data.get(key)
    if value is None:
        if optional:
            return None
        raise DeserializeError(f"missing field `{key}`")
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < limit:
        raise DeserializeError(f"invalid value for `{key}`: expected an unsigned integer")
    return value


@dataclass(frozen=True)
class GroupInfo:
    """The working or research group responsible for a document."""

    acronym: str
    name: str
    group_type: str

    @classmethod
    def from_dict(cls, data: Any) -> GroupInfo:
        data = _mapping(data, "group")
        return cls(
            acronym=_string(data, "acronym"),
            name=_string(data, "name"),
            group_type=_string(data, "type"),
        )

    def to_dict(self) -> dict:
        return {"acronym": self.acronym, "name": self.name, "type": self.group_type}


@dataclass(frozen=True)
class DraftInfo:
    """Metadata the Datatracker holds for a draft or RFC."""

    name: str
    title: str
    rev: str
    time: str
    pages: int | None = None
    expires: str | None = None
    group: GroupInfo | None = None
    stream: str | None = None
    intended_std_level: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> DraftInfo:
        data = _mapping(data, "document")
        group = data.get("group")
        return cls(
            name=_string(data, "name"),
            title=_string(data, "title"),
            rev=_string(data, "rev"),
            time=_string(data, "time"),
            pages=_unsigned(data, "pages", _U32_LIMIT, optional=True),
            expires=_string(data, "expires", optional=True),
            group=None if group is None else GroupInfo.from_dict(group),
            stream=_string(data, "stream", optional=True),
            intended_std_level=_string(data, "intended_std_level", optional=True),
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "title": self.title,
            "rev": self.rev,
            "pages": self.pages,
            "time": self.time,
            "expires": self.expires,
            "group": None if self.group is None else self.group.to_dict(),
            "stream": self.stream,
            "intended_std_level": self.intended_std_level,
        }


@dataclass(frozen=True)
class SubmissionStatus:
    """One submission event for a draft."""

    id: int
    name: str
    rev: str
    state: str
    submission_date: str

    @classmethod
    def from_dict(cls, data: Any) -> SubmissionStatus:
        data = _mapping(data, "submission")
        return cls(
            id=_unsigned(data, "id", _U64_LIMIT),
            name=_string(data, "name"),
            rev=_string(data, "rev"),
            state=_string(data, "state"),
            submission_date=_string(data, "submission_date"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "rev": self.rev,
            "state": self.state,
            "submission_date": self.submission_date,
        }


def _json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DeserializeError(exc) from exc


class DataTrackerClient:
    """Asynchronous Datatracker client; use as an async context manager."""

    def __init__(self, base_url: str = BASE_URL) -> None:
        self.base_url = base_url
        self._client = httpx.AsyncClient(headers={"User-Agent": USER_AGENT})

    async def __aenter__(self) -> DataTrackerClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP connections."""
        await self._client.aclose()

    async def _get(
        self, url: str, params: dict | None = None, not_found: str | None = None
    ) -> httpx.Response:
        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise HttpError(exc) from exc
        if not_found is not None and response.status_code == 404:
            raise NotFoundError(not_found)
        if not response.is_success:
            raise ApiError(response.status_code, response.text)
        return response

    async def get_draft(self, name: str) -> DraftInfo:
        """Metadata for a document; NotFoundError if it does not exist."""
        url = f"{self.base_url}/api/v1/doc/document/{name}/"
        response = await self._get(url, not_found=name)
        return DraftInfo.from_dict(_json(response))

    async def submission_status(self, name: str) -> list[SubmissionStatus]:
        """All submission events recorded for a document name."""
        url = f"{self.base_url}/api/v1/submit/submission/"
        response = await self._get(url, params={"name": name, "format": "json"})
        body = _mapping(_json(response), "submission list")
        objects = body.get("objects")
        if not isinstance(objects, list):
            raise DeserializeError("missing field `objects`")
        return [SubmissionStatus.from_dict(item) for item in objects]

    async def is_name_available(self, name: str) -> bool:
        """True when no document with this name exists."""
        try:
            await self.get_draft(name)
        except NotFoundError:
            return True
        return False