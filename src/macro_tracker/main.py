"""Console entry point for serving the API."""

import uvicorn

from macro_tracker.config import Settings


def run() -> None:
    """Serve the ASGI app with uvicorn using host and port from settings."""
    settings = Settings()
    uvicorn.run(
        "macro_tracker.api.asgi:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=settings.environment == "local",
    )
