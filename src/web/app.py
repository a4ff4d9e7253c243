"""FastAPI application entry point."""

import platform
import time
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request

from cli.logging_config import setup_logging
from cli.utils import build_analyzer, build_cache
from evidence.models import utc_timestamp
from observability import log_run_summary
from shared_types import ROADMAP_LAST_UPDATED, ROADMAP_SOURCE_URL, ROADMAP_VERSION
from web.deps import get_config
from web.models import HealthResponse
from web.routes import cache, skills, validation

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = get_config()
    setup_logging(json_mode=config.logging.json_mode, level=config.logging.level)

    app.state.cache = build_cache(config)
    app.state.analyzer = build_analyzer(config, cache=app.state.cache)
    app.state.started_at = time.monotonic()
    app.state.cache.start_sweeper(config.cache.sweep_interval_seconds)
    logger.info("web.startup", cache_max_size=config.cache.max_size)
    yield
    app.state.cache.stop_sweeper()
    await app.state.analyzer.close()
    log_run_summary()
    logger.info("web.shutdown")


app = FastAPI(
    title="Skillgap",
    version="0.1.0",
    lifespan=lifespan,
)

# Mount routes
app.include_router(validation.router)
app.include_router(skills.router)
app.include_router(cache.router)


@app.get("/api/health", response_model=HealthResponse)
async def health(request: Request):
    started_at = getattr(request.app.state, "started_at", time.monotonic())
    return HealthResponse(
        timestamp=utc_timestamp(),
        uptime=round(time.monotonic() - started_at, 3),
        python_version=platform.python_version(),
        roadmap_version=ROADMAP_VERSION,
        roadmap_last_updated=ROADMAP_LAST_UPDATED,
        roadmap_source=ROADMAP_SOURCE_URL,
    )
