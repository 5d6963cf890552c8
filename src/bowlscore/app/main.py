from __future__ import annotations

from typing import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request, Response

from bowlscore.api import router as api_router
from bowlscore.core.config.settings import settings
from bowlscore.core.logging.setup import bind_context, clear_context, configure_logging

log = structlog.get_logger()


async def request_log_context(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """
    Fresh logging context per request; route handlers (and the worker
    threads sync routes run on) inherit it from here.
    """
    clear_context()
    bind_context(component="api", method=request.method, path=request.url.path)
    try:
        return await call_next(request)
    finally:
        clear_context()


def create_app() -> FastAPI:
    """
    Application factory.

    The single place where the FastAPI app is created and configured.
    """
    configure_logging(level=settings.log_level)

    app = FastAPI(
        title="bowlscore",
        version="0.1.0",
    )

    @app.on_event("startup")
    async def on_startup() -> None:
        log.info(
            "app.startup",
            environment=settings.env,
            total_frames=settings.total_frames,
        )

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        log.info("app.shutdown")

    app.middleware("http")(request_log_context)
    app.include_router(api_router, prefix="/api")

    return app


# ASGI entrypoint
app = create_app()
