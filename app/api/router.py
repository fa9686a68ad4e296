from fastapi import APIRouter

from app.api.endpoints.cache import router as cache_router
from app.api.endpoints.meetings import router as meetings_router
from app.api.endpoints.meps import router as meps_router

router = APIRouter(prefix="/api")
router.include_router(cache_router)
router.include_router(meetings_router)
router.include_router(meps_router)
