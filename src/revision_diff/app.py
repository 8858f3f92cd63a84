"""Web application factory — wires settings, Cosmos DB, templates and routes."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.templating import Jinja2Templates

from revision_diff.config import load_settings
from revision_diff.database.client import CosmosClient
from revision_diff.health import check_emulators
from revision_diff.logging import configure_logging
from revision_diff.routes import revisions, settings as settings_routes

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable

    from fastapi import Response

    from revision_diff.config import Settings

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

logger = logging.getLogger(__name__)


async def init_database(settings: Settings) -> CosmosClient:
    """Connect to Cosmos DB, refusing to start when the emulator is down."""
    if settings.app.is_development and not await check_emulators(settings):
        raise ConnectionError("Cosmos DB is unreachable — see errors above")
    cosmos = CosmosClient(settings.cosmos)
    await cosmos.initialize(create_containers=settings.app.is_development)
    return cosmos


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = app.state.settings
    cosmos = await init_database(settings)
    app.state.cosmos = cosmos
    app.state.start_time = time.monotonic()
    logger.info("Web app started — env=%s", settings.app.env)
    try:
        yield
    finally:
        await cosmos.close()
        logger.info("Web app shutdown complete")


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    settings = load_settings()
    configure_logging(settings.app.log_level)

    app = FastAPI(title="Revision diff", lifespan=lifespan)
    app.state.settings = settings
    app.state.templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

    slow_request_ms = settings.app.slow_request_ms

    @app.middleware("http")
    async def log_slow_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        started_at = time.monotonic()
        response = await call_next(request)
        duration_ms = (time.monotonic() - started_at) * 1000
        if duration_ms > slow_request_ms:
            logger.warning(
                "Slow request — method=%s path=%s status=%d duration_ms=%.0f",
                request.method,
                request.url.path,
                response.status_code,
                duration_ms,
            )
        return response

    app.include_router(settings_routes.router)
    app.include_router(revisions.router)
    return app
