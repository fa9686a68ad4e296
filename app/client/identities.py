import asyncio
from typing import Awaitable, Callable, Dict, Iterable

from app.schemas.meeting import PersonIdentity
from app.utils.logging import get_logger

logger = get_logger()


class IdentityResolver:
    """Resolve-or-fetch cache of voter identities keyed by MEP id.

    A successfully resolved id is never fetched again, and concurrent
    requests for an id that is still loading share one fetch. Failed ids are
    not remembered.
    """

    def __init__(self, fetch: Callable[[str], Awaitable[PersonIdentity]]):
        self._fetch = fetch
        self._resolved: Dict[str, PersonIdentity] = {}
        self._pending: Dict[str, asyncio.Future] = {}

    def __contains__(self, mep_id: str) -> bool:
        return mep_id in self._resolved

    def __len__(self) -> int:
        return len(self._resolved)

    def missing(self, mep_ids: Iterable[str]) -> list[str]:
        return [mep_id for mep_id in dict.fromkeys(mep_ids) if mep_id not in self._resolved]

    async def _load(self, mep_id: str) -> PersonIdentity:
        try:
            identity = await self._fetch(mep_id)
        finally:
            self._pending.pop(mep_id, None)
        self._resolved[mep_id] = identity
        return identity

    async def resolve(self, mep_id: str) -> PersonIdentity:
        if mep_id in self._resolved:
            return self._resolved[mep_id]
        task = self._pending.get(mep_id)
        if task is None:
            task = asyncio.ensure_future(self._load(mep_id))
            self._pending[mep_id] = task
        return await task

    async def resolve_many(self, mep_ids: Iterable[str]) -> Dict[str, PersonIdentity]:
        """Resolve a batch concurrently; a failed id maps to its raw id."""
        unique = list(dict.fromkeys(mep_ids))
        results = await asyncio.gather(
            *(self.resolve(mep_id) for mep_id in unique), return_exceptions=True
        )
        identities: Dict[str, PersonIdentity] = {}
        for mep_id, result in zip(unique, results):
            if isinstance(result, Exception):
                logger.warning(f"Could not resolve MEP {mep_id}: {result}")
                identities[mep_id] = PersonIdentity.unresolved(mep_id)
            else:
                identities[mep_id] = result
        return identities
