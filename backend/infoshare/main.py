"""InfoShare Posts API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Error handlers map InfoShareError → {"error", "details"?} JSON responses
    - CORS configured from settings (not hardcoded)
    - Store connection opened once on startup; failing to reach it aborts startup
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from infoshare.api.error_handlers import register_error_handlers
from infoshare.api.routes import health, posts
from infoshare.config import get_settings
from infoshare.core.errors import StoreError
from infoshare.infrastructure.database import init_db
from infoshare.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if not await manager.health_check():
        await manager.dispose()
        raise StoreError(
            "Could not connect to the database", "connect",
            details=settings.database_url.rsplit("@", 1)[-1],
        )
    logger.info("Connected to database; InfoShare API started")
    yield
    await manager.dispose()
    logger.info("InfoShare API shutting down")


app = FastAPI(
    title="InfoShare Posts API", version=health.SERVICE_VERSION, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(posts.router)

register_error_handlers(app)


def run() -> None:
    """Console entry point: serve the app on the configured host and port."""
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
