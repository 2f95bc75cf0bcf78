"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from macro_tracker.api.account import router as account_router
from macro_tracker.api.entries import router as entries_router
from macro_tracker.api.goals import router as goals_router
from macro_tracker.api.insights import router as insights_router
from macro_tracker.app_logging import configure_logging
from macro_tracker.containers import AppContainer
from macro_tracker.domain.errors import AIProviderError, EntryNotFoundError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(entries_router)
    app.include_router(goals_router)
    app.include_router(insights_router)
    app.include_router(account_router)

    @app.exception_handler(EntryNotFoundError)
    async def entry_not_found(
        _request: Request, _exc: EntryNotFoundError
    ) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": "Not found"})

    @app.exception_handler(AIProviderError)
    async def provider_error(_request: Request, exc: AIProviderError) -> JSONResponse:
        logger.warning("AI provider error: code=%s status=%s", exc.code, exc.status)
        return JSONResponse(
            status_code=exc.status,
            content={"error": exc.message, "code": str(exc.code)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
