"""Punto de entrada del servidor de vista previa de Try Habitat."""

from __future__ import annotations

import logging
from typing import Optional
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tryhab.api.routes import health, tutorial
from tryhab.common.config import Settings, get_settings
from tryhab.common.errors import ContentValidationError, RenderError
from tryhab.common.logging import PageRequestLoggingMiddleware, configure_logging


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Crea y configura la instancia de FastAPI."""
    settings = settings or get_settings()
    logger = configure_logging(settings)

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.logger = logger

    app.add_middleware(PageRequestLoggingMiddleware, logger=logger)

    app.include_router(health.router)
    app.include_router(tutorial.router, prefix=settings.base_url.rstrip("/"))

    registrar_manejadores(app, logger)
    return app


def registrar_manejadores(app: FastAPI, logger: logging.Logger) -> None:
    """Registra manejadores de errores consistentes."""

    @app.exception_handler(ContentValidationError)
    async def content_error_handler(
        request: Request, exc: ContentValidationError
    ) -> JSONResponse:
        logger.error("contenido_invalido", extra={"errors": exc.errors, "path": request.url.path})
        return JSONResponse(
            status_code=422,
            content={"detail": "Contenido inválido.", "errors": exc.errors},
        )

    @app.exception_handler(RenderError)
    async def render_error_handler(request: Request, exc: RenderError) -> JSONResponse:
        logger.error("error_renderizado", extra={"detail": str(exc), "path": request.url.path})
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = str(uuid4())
        logger.error("error_no_controlado", exc_info=exc, extra={"request_id": request_id})
        return JSONResponse(
            status_code=500,
            content={"detail": "Error interno del servidor.", "request_id": request_id},
        )


app = create_app()
