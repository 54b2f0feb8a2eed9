"""Construcción del sitio estático de tutoriales."""

from __future__ import annotations

import json
import logging
import shutil
import time
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel

from tryhab.common.config import Settings
from tryhab.common.errors import ContentValidationError, RenderError
from tryhab.content.loader import load_sequences
from tryhab.content.sequence import TutorialSequence
from tryhab.render.renderer import PageRenderer

logger = logging.getLogger("tryhab.build")

MANIFEST_NAME = "manifest.json"


class BuildReport(BaseModel):
    """Resumen de una construcción completada."""

    sequences: Dict[str, int]
    pages_written: int
    output_dir: Path
    duration_ms: float


def build_manifest(
    sequences: Dict[str, TutorialSequence], base_url: str = "/"
) -> Dict[str, List[Dict[str, object]]]:
    """Índice de secuencias con sus pasos ordenados."""
    return {nombre: secuencia.manifest(base_url) for nombre, secuencia in sequences.items()}


def render_site(
    sequences: Dict[str, TutorialSequence], renderer: PageRenderer
) -> Dict[Path, str]:
    """Renderiza todas las páginas en memoria, indexadas por ruta relativa."""
    salidas: Dict[Path, str] = {}
    for secuencia in sequences.values():
        for pagina in secuencia:
            ruta = Path(secuencia.name) / pagina.slug / "index.html"
            salidas[ruta] = renderer.render_page(secuencia, pagina)
    return salidas


def build_site(
    content_dir: Path,
    output_dir: Path,
    *,
    templates_dir: Optional[Path] = None,
    site_name: str = "Try Habitat",
    base_url: str = "/",
    clean: bool = False,
) -> BuildReport:
    """Valida el contenido, renderiza cada página y la escribe en disco.

    Nada se escribe hasta que todas las páginas se hayan renderizado, así que
    una construcción fallida deja intacto el directorio de salida.
    """
    inicio = time.perf_counter()
    try:
        secuencias = load_sequences(content_dir)
        renderer = PageRenderer(templates_dir, site_name=site_name, base_url=base_url)
        salidas = render_site(secuencias, renderer)
    except (ContentValidationError, RenderError) as exc:
        logger.error("build_failed", extra={"content_dir": str(content_dir), "detail": str(exc)})
        raise

    if clean and output_dir.exists():
        shutil.rmtree(output_dir)
    for ruta, html in salidas.items():
        destino = output_dir / ruta
        destino.parent.mkdir(parents=True, exist_ok=True)
        destino.write_text(html, encoding="utf-8")
    manifiesto = build_manifest(secuencias, base_url)
    output_dir.mkdir(parents=True, exist_ok=True)
    (output_dir / MANIFEST_NAME).write_text(
        json.dumps(manifiesto, ensure_ascii=False, indent=2), encoding="utf-8"
    )

    duracion_ms = round((time.perf_counter() - inicio) * 1000, 2)
    reporte = BuildReport(
        sequences={nombre: len(secuencia) for nombre, secuencia in secuencias.items()},
        pages_written=len(salidas),
        output_dir=output_dir,
        duration_ms=duracion_ms,
    )
    logger.info(
        "site_built",
        extra={
            "pages_written": reporte.pages_written,
            "output_dir": str(output_dir),
            "latency_ms": duracion_ms,
        },
    )
    return reporte


def build_from_settings(settings: Settings, *, clean: bool = False) -> BuildReport:
    return build_site(
        settings.content_dir,
        settings.output_dir,
        templates_dir=settings.templates_dir,
        site_name=settings.app_name,
        base_url=settings.base_url,
        clean=clean,
    )


__all__ = ["BuildReport", "MANIFEST_NAME", "build_from_settings", "build_manifest", "build_site"]
