"""Rutas de vista previa que renderizan el contenido bajo demanda."""

from __future__ import annotations

from typing import Dict, List

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from tryhab.build.site_builder import build_manifest
from tryhab.common.config import Settings
from tryhab.content.loader import load_sequences
from tryhab.content.sequence import TutorialSequence
from tryhab.render.renderer import PageRenderer

router = APIRouter(tags=["tutorial"])


def _cargar(settings: Settings) -> Dict[str, TutorialSequence]:
    # Se relee en cada solicitud: los autores editan mientras previsualizan.
    return load_sequences(settings.content_dir)


def _secuencia(secuencias: Dict[str, TutorialSequence], nombre: str) -> TutorialSequence:
    secuencia = secuencias.get(nombre)
    if secuencia is None:
        raise HTTPException(status_code=404, detail=f"Secuencia '{nombre}' no encontrada.")
    return secuencia


@router.get("/api/sequences")
def listar_secuencias(request: Request) -> Dict[str, List[Dict[str, object]]]:
    """Índice de secuencias y pasos del contenido actual."""
    settings: Settings = request.app.state.settings
    return build_manifest(_cargar(settings), settings.base_url)


@router.get("/{sequence}/")
def inicio_secuencia(request: Request, sequence: str) -> RedirectResponse:
    """Redirige al primer paso de la secuencia."""
    settings: Settings = request.app.state.settings
    secuencia = _secuencia(_cargar(settings), sequence)
    primera = secuencia.page_for_step(1)
    return RedirectResponse(url=secuencia.url_for(primera, settings.base_url), status_code=307)


@router.get("/{sequence}/{slug}/", response_class=HTMLResponse)
def ver_pagina(request: Request, sequence: str, slug: str) -> HTMLResponse:
    """Renderiza una página del tutorial tal como quedaría en el sitio."""
    settings: Settings = request.app.state.settings
    secuencia = _secuencia(_cargar(settings), sequence)
    try:
        pagina = secuencia.page_for_slug(slug)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=f"Página '{slug}' no encontrada.") from exc
    renderer = PageRenderer(
        settings.templates_dir, site_name=settings.app_name, base_url=settings.base_url
    )
    return HTMLResponse(renderer.render_page(secuencia, pagina))
