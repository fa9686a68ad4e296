from dataclasses import dataclass
import time
from typing import Callable, Dict, Iterable, Mapping, Optional, Tuple

from app.core.config import settings
from app.schemas.cache import CacheEntryStatus, CacheStatus
from app.utils.logging import get_logger

logger = get_logger("cache")

# Headers describing the upstream wire framing; replaying them against a
# re-serialized body breaks the transport.
EXCLUDED_HEADERS = frozenset(
    {"content-length", "transfer-encoding", "content-encoding", "connection"}
)


def filter_headers(headers: Iterable[Tuple[str, str]]) -> Dict[str, str]:
    return {
        key.lower(): value
        for key, value in headers
        if key.lower() not in EXCLUDED_HEADERS
    }


@dataclass
class CacheEntry:
    key: str
    payload: str
    status_code: int
    headers: Dict[str, str]
    stored_at: float
    is_json: bool = True

    def age(self, now: float) -> float:
        return now - self.stored_at


class ResponseCache:
    """In-memory upstream response store keyed by the exact outbound URL.

    Entries older than ``retention_seconds`` are never returned; the read
    that finds one stale evicts it. Concurrent misses for the same key are
    not coalesced, so the last ``set`` wins.
    """

    def __init__(
        self,
        retention_seconds: float = settings.CACHE_DURATION_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.retention_seconds = retention_seconds
        self.clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def is_fresh(self, entry: CacheEntry) -> bool:
        return entry.age(self.clock()) < self.retention_seconds

    def get(self, key: str) -> Optional[CacheEntry]:
        entry = self._entries.get(key)
        if entry is None:
            logger.info(f"Cache MISS for: {key}")
            return None
        if self.is_fresh(entry):
            logger.info(f"Cache HIT for: {key}")
            return entry
        logger.info(f"Cache EXPIRED for: {key}")
        self.evict(key)
        return None

    def set(
        self,
        key: str,
        payload: str,
        status_code: int,
        headers: Mapping[str, str],
        is_json: bool = True,
    ) -> CacheEntry:
        entry = CacheEntry(
            key=key,
            payload=payload,
            status_code=status_code,
            headers=filter_headers(headers.items()),
            stored_at=self.clock(),
            is_json=is_json,
        )
        self._entries[key] = entry
        logger.info(f"Cache SET for: {key} ({len(payload)} chars)")
        return entry

    def evict(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> int:
        cleared = len(self._entries)
        self._entries.clear()
        logger.info(f"Cache CLEARED: {cleared} entries removed")
        return cleared

    def stats(self) -> CacheStatus:
        now = self.clock()
        entries = [
            CacheEntryStatus(
                url=key,
                age=round(entry.age(now)),
                expires=round(self.retention_seconds - entry.age(now)),
            )
            for key, entry in self._entries.items()
        ]
        return CacheStatus(
            cache_size=len(self._entries),
            cache_duration=int(self.retention_seconds),
            entries=entries,
        )


cache = ResponseCache()
