from fastapi import APIRouter

from app.core.dependencies import CacheDependency
from app.schemas.cache import CacheCleared, CacheStatus

router = APIRouter(prefix="/cache", tags=["cache"])


@router.get("/status", response_model=CacheStatus, response_model_by_alias=True)
async def cache_status(response_cache: CacheDependency):
    return response_cache.stats()


@router.delete("", response_model=CacheCleared)
async def clear_cache(response_cache: CacheDependency):
    cleared = response_cache.clear()
    return CacheCleared(message=f"Cache cleared: {cleared} entries removed")
