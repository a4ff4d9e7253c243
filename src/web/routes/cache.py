"""Evidence cache admin routes."""

import structlog
from fastapi import APIRouter, Depends

from evidence.cache import EvidenceCache
from web.deps import get_cache
from web.models import Envelope

logger = structlog.get_logger()

router = APIRouter(prefix="/api/cache", tags=["cache"])


@router.get("/stats", response_model=Envelope)
async def cache_stats(cache: EvidenceCache = Depends(get_cache)):
    return Envelope(data=cache.stats())


# TODO: gate behind an admin token once the API is exposed beyond localhost
@router.post("/clear", response_model=Envelope)
async def clear_cache(cache: EvidenceCache = Depends(get_cache)):
    cache.clear()
    logger.info("cache.cleared_via_api")
    return Envelope(message="Cache cleared successfully")
