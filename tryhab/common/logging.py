"""Logging JSON de los eventos de construcción y de la vista previa."""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from .config import Settings

PREVIEW_LOGGER = "tryhab.preview"

# Campos de contexto que emiten los eventos sequence_loaded, page_rendered,
# site_built, build_failed y page_served.
CONTEXT_FIELDS = (
    "sequence",
    "slug",
    "pages",
    "pages_written",
    "content_dir",
    "output_dir",
    "detail",
    "errors",
    "method",
    "path",
    "status",
    "latency_ms",
    "request_id",
)


class JsonFormatter(logging.Formatter):
    """Emite cada evento como una línea JSON con su contexto conocido."""

    def __init__(self, app_name: str, env: str) -> None:
        super().__init__()
        self.app_name = app_name
        self.env = env

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
            "app": self.app_name,
            "env": self.env,
        }
        for campo in CONTEXT_FIELDS:
            valor = getattr(record, campo, None)
            if valor is not None:
                payload[campo] = valor
        if record.exc_info:
            payload["error"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(settings: Settings) -> logging.Logger:
    """Instala el formateador JSON en el logger raíz y devuelve el de la vista previa.

    Puede llamarse varias veces: reemplaza solo el manejador JSON anterior.
    """
    raiz = logging.getLogger()
    raiz.setLevel(settings.log_level)
    for existente in list(raiz.handlers):
        if isinstance(existente.formatter, JsonFormatter):
            raiz.removeHandler(existente)
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter(app_name=settings.app_name, env=settings.env))
    raiz.addHandler(handler)
    # page_served ya cubre cada solicitud.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    return logging.getLogger(PREVIEW_LOGGER)


class PageRequestLoggingMiddleware(BaseHTTPMiddleware):
    """Registra las páginas servidas por la vista previa con su secuencia y slug."""

    def __init__(self, app: Any, logger: logging.Logger) -> None:  # pragma: no cover
        super().__init__(app)
        self.logger = logger

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        inicio = time.perf_counter()
        response = await call_next(request)
        extra: Dict[str, Any] = {
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "latency_ms": round((time.perf_counter() - inicio) * 1000, 2),
        }
        request_id = request.headers.get("x-request-id")
        if request_id:
            extra["request_id"] = request_id
        # El router completa path_params en el mismo scope al resolver la ruta.
        parametros = request.scope.get("path_params") or {}
        if "sequence" in parametros:
            extra["sequence"] = parametros["sequence"]
            if "slug" in parametros:
                extra["slug"] = parametros["slug"]
            self.logger.info("page_served", extra=extra)
        else:
            self.logger.info("request", extra=extra)
        return response
