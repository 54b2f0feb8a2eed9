"""Script para construir el sitio estático de tutoriales."""

from __future__ import annotations

import logging
import sys

from tryhab.build.site_builder import build_from_settings
from tryhab.common.config import get_settings
from tryhab.common.errors import ContentValidationError, RenderError
from tryhab.common.logging import configure_logging


def construir(clean: bool = True) -> int:
    """Construye el sitio y devuelve el código de salida del proceso."""
    settings = get_settings()
    configure_logging(settings)
    logger = logging.getLogger("tryhab.scripts.build_site")
    try:
        reporte = build_from_settings(settings, clean=clean)
    except (ContentValidationError, RenderError) as exc:
        errores = getattr(exc, "errors", [str(exc)])
        logger.error("construccion_fallida", extra={"errors": errores})
        return 1
    logger.info("construccion_completa", extra={"pages_written": reporte.pages_written})
    return 0


if __name__ == "__main__":  # pragma: no cover - ejecución manual
    sys.exit(construir())
