"""Client for IANA protocol registries."""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from .errors import ApiError, HttpError, NotFoundError

IANA_BASE = "https://www.iana.org"
USER_AGENT = "intsoc/0.1.0"


@dataclass(frozen=True)
class RegistryInfo:
    """Basic metadata for an IANA registry."""

    id: str
    title: str
    category: str
    updated: str | None = None


def extract_xml_text(xml: str, tag: str) -> str | None:
    """Trimmed text between the first ``<tag>`` and the first ``</tag>``."""
    opening, closing = f"<{tag}>", f"</{tag}>"
    start = xml.find(opening)
    end = xml.find(closing)
    if start < 0 or end < 0:
        return None
    content_start = start + len(opening)
    if end < content_start:
        return None
    return xml[content_start:end].strip()


class IanaClient:
    """Asynchronous IANA registry client; use as an async context manager."""

    def __init__(self, base_url: str = IANA_BASE) -> None:
        self.base_url = base_url
        self._client = httpx.AsyncClient(headers={"User-Agent": USER_AGENT})

    async def __aenter__(self) -> IanaClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP connections."""
        await self._client.aclose()

    async def get_registry(self, registry_id: str) -> RegistryInfo:
        """Look up a registry by its identifier."""
        url = f"{self.base_url}/assignments/{registry_id}/{registry_id}.xml"
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            raise HttpError(exc) from exc
        if response.status_code == 404:
            raise NotFoundError(registry_id)
        if not response.is_success:
            raise ApiError(response.status_code, response.text)

        body = response.text
        return RegistryInfo(
            id=registry_id,
            title=extract_xml_text(body, "title") or "",
            category=extract_xml_text(body, "category") or "",
            updated=extract_xml_text(body, "updated"),
        )