from dataclasses import dataclass
from typing import Dict, Iterable, Tuple
from urllib.parse import urlencode

import httpx

from app.core.config import settings
from app.core.exceptions.errors import TransportError
from app.utils.logging import get_logger

logger = get_logger("upstream")

FORMAT_PARAM = "format"


def with_default_format(
    query_items: Iterable[Tuple[str, str]], default_format: str = settings.DEFAULT_FORMAT
) -> list[Tuple[str, str]]:
    """Append the content-negotiation parameter unless the caller sent one."""
    items = list(query_items)
    if not any(key == FORMAT_PARAM for key, _ in items):
        items.append((FORMAT_PARAM, default_format))
    return items


def build_meetings_url(
    sub_path: str,
    query_items: Iterable[Tuple[str, str]],
    base_url: str = settings.UPSTREAM_BASE_URL,
) -> str:
    clean_path = sub_path.lstrip("/")
    resource = f"meetings/{clean_path}" if clean_path else "meetings"
    query = urlencode(with_default_format(query_items))
    return f"{base_url.rstrip('/')}/{resource}?{query}"


def build_mep_url(mep_id: str, base_url: str = settings.UPSTREAM_BASE_URL) -> str:
    # Caller query parameters are dropped, only the format is forced.
    query = urlencode([(FORMAT_PARAM, settings.DEFAULT_FORMAT)])
    return f"{base_url.rstrip('/')}/meps/{mep_id}?{query}"


@dataclass
class UpstreamResponse:
    status_code: int
    reason: str
    headers: Dict[str, str]
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "")

    @property
    def is_json(self) -> bool:
        content_type = self.content_type
        return "application/json" in content_type or "application/ld+json" in content_type


class UpstreamClient:
    """Thin async wrapper around the open-data API transport."""

    def __init__(self, client: httpx.AsyncClient, accept: str = settings.DEFAULT_FORMAT):
        self._client = client
        self.accept = accept

    async def get(self, url: str) -> UpstreamResponse:
        logger.info(f"Fetching from external API: {url}")
        try:
            response = await self._client.get(url, headers={"accept": self.accept})
        except httpx.HTTPError as exc:
            raise TransportError(str(exc) or type(exc).__name__, url=url) from exc

        logger.info(
            f"External response status: {response.status_code}, "
            f"content-type: {response.headers.get('content-type')}"
        )
        return UpstreamResponse(
            status_code=response.status_code,
            reason=response.reason_phrase,
            headers={key.lower(): value for key, value in response.headers.multi_items()},
            text=response.text,
        )

    async def close(self):
        await self._client.aclose()


def create_upstream_client(transport: httpx.AsyncBaseTransport | None = None) -> UpstreamClient:
    client = httpx.AsyncClient(timeout=settings.UPSTREAM_TIMEOUT, transport=transport)
    return UpstreamClient(client)
