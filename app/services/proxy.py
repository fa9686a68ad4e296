import json
from dataclasses import dataclass
from typing import Any, Dict

from fastapi.responses import JSONResponse, Response

from app.core.exceptions.errors import (
    CacheCorruptionError,
    MalformedResponseError,
    UpstreamError,
)
from app.services.upstream import UpstreamClient, UpstreamResponse
from app.utils.caching import CacheEntry, ResponseCache, filter_headers
from app.utils.logging import get_logger

logger = get_logger("upstream")


@dataclass
class ProxiedResponse:
    status_code: int
    headers: Dict[str, str]
    body: Any
    is_json: bool
    from_cache: bool = False

    def to_response(self) -> Response:
        if self.is_json:
            return JSONResponse(
                content=self.body, status_code=self.status_code, headers=self.headers
            )
        return Response(
            content=self.body,
            status_code=self.status_code,
            headers=self.headers,
            media_type=self.headers.get("content-type"),
        )


class ProxyService:
    """Serves upstream resources through the response cache.

    ``json_only`` requests (meetings) must come back as JSON and turn any
    non-success status into an ``UpstreamError``. Otherwise (person records)
    status, content type and body are mirrored, and a JSON parse is only
    attempted when the upstream declares a JSON content type.
    """

    def __init__(self, cache: ResponseCache, upstream: UpstreamClient):
        self.cache = cache
        self.upstream = upstream

    async def fetch(self, url: str, json_only: bool = True) -> ProxiedResponse:
        entry = self.cache.get(url)
        if entry is not None:
            return self._replay(entry)

        response = await self.upstream.get(url)
        if json_only and not response.ok:
            raise UpstreamError(response.status_code, response.reason, url=url)

        is_json = json_only or response.is_json
        body = self._parse(response, url) if is_json else response.text
        headers = filter_headers(response.headers.items())
        if not json_only:
            headers.setdefault("content-type", "application/json")

        if response.ok:
            payload = json.dumps(body) if is_json else body
            self.cache.set(url, payload, response.status_code, headers, is_json=is_json)
        else:
            logger.warning(
                f"Not caching {response.status_code} response from {url}"
            )

        return ProxiedResponse(
            status_code=response.status_code,
            headers=headers,
            body=body,
            is_json=is_json,
        )

    def _replay(self, entry: CacheEntry) -> ProxiedResponse:
        body: Any = entry.payload
        if entry.is_json:
            try:
                body = json.loads(entry.payload)
            except ValueError as exc:
                raise CacheCorruptionError(str(exc), url=entry.key) from exc
        return ProxiedResponse(
            status_code=entry.status_code,
            headers=dict(entry.headers),
            body=body,
            is_json=entry.is_json,
            from_cache=True,
        )

    @staticmethod
    def _parse(response: UpstreamResponse, url: str) -> Any:
        try:
            return json.loads(response.text)
        except ValueError as exc:
            raise MalformedResponseError(str(exc), url=url) from exc
