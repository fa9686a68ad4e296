from typing import Any, Dict, List, Mapping, Optional

import httpx

from app.client.fanout import join_all
from app.client.fields import number
from app.core.config import settings
from app.schemas.meeting import MeetingDetail, PersonIdentity
from app.utils.logging import get_logger

logger = get_logger()

DETAIL_ERROR_MESSAGE = "Could not load the meeting details."

# Name of each detail sub-resource and the path below /api/meetings/{id}.
DETAIL_RESOURCES = {
    "main": "",
    "activities": "/activities",
    "decisions": "/decisions",
    "foreseen_activities": "/foreseen-activities",
    "vote_results": "/vote-results",
    "meeting_decisions": "/decisions",
}


class ViewClientError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def items(payload: Any) -> List[Dict[str, Any]]:
    """Records of a collection response (``{"data": [...]}`` or a bare list)."""
    if isinstance(payload, Mapping):
        payload = payload.get("data", [])
    if not isinstance(payload, list):
        return []
    return [item for item in payload if isinstance(item, Mapping)]


def total_count(payload: Any) -> int:
    if isinstance(payload, Mapping):
        meta = payload.get("meta")
        for candidate in (
            payload.get("total"),
            meta.get("total") if isinstance(meta, Mapping) else None,
        ):
            total = number(candidate)
            if total is not None:
                return total
    return len(items(payload))


def window_offset(total: int, window: int, fallback: int = 0) -> int:
    return total - window if total > window else fallback


class MeetingsClient:
    """Talks to the proxy's HTTP surface, never to its internals."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        window: int = settings.MEETINGS_WINDOW,
        fallback_offset: int = settings.MEETINGS_FALLBACK_OFFSET,
    ):
        self._client = client
        self.window = window
        self.fallback_offset = fallback_offset

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as exc:
            logger.error(f"Request to {path} failed: {exc}")
            raise ViewClientError(f"Request to {path} failed: {exc}") from exc
        if not response.is_success:
            logger.warning(f"{path} answered with HTTP {response.status_code}")
            raise ViewClientError(
                f"HTTP error! status: {response.status_code}",
                status_code=response.status_code,
            )
        return response

    async def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        response = await self._get(path, params)
        try:
            return response.json()
        except ValueError as exc:
            raise ViewClientError(f"Response from {path} is not JSON") from exc

    async def count_meetings(self, year: int) -> int:
        payload = await self._get_json("/api/meetings", {"year": year, "limit": 1})
        return total_count(payload)

    async def recent_meetings(self, year: int, window: Optional[int] = None) -> List[Dict[str, Any]]:
        """The last ``window`` meetings of ``year``, most recent first."""
        window = window or self.window
        total = await self.count_meetings(year)
        offset = window_offset(total, window, self.fallback_offset)
        logger.info(f"Loading meetings {offset}..{offset + window} of {total} for {year}")
        payload = await self._get_json(
            "/api/meetings", {"year": year, "offset": offset, "limit": window}
        )
        return list(reversed(items(payload)))

    async def meeting_detail(self, meeting_id: str) -> MeetingDetail:
        result = await join_all(
            {
                name: self._get_json(f"/api/meetings/{meeting_id}{suffix}")
                for name, suffix in DETAIL_RESOURCES.items()
            }
        )
        if not result.ok:
            logger.error(
                f"Detail fetch for {meeting_id} failed at {result.name}: {result.error}"
            )
            raise ViewClientError(DETAIL_ERROR_MESSAGE) from result.error
        return MeetingDetail(**result.values)

    async def person(self, mep_id: str) -> PersonIdentity:
        return PersonIdentity.from_record(mep_id, await self._get_json(f"/api/meps/{mep_id}"))

    async def close(self):
        await self._client.aclose()


def create_meetings_client(app=None) -> MeetingsClient:
    """Client against ``PROXY_BASE_URL``, or against ``app`` in-process when unset."""
    if settings.PROXY_BASE_URL:
        client = httpx.AsyncClient(
            base_url=settings.PROXY_BASE_URL, timeout=settings.UPSTREAM_TIMEOUT
        )
    else:
        client = httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url="http://proxy",
            timeout=settings.UPSTREAM_TIMEOUT,
        )
    return MeetingsClient(client)
