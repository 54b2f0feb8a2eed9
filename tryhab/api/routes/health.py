"""Ruta de salud de la vista previa."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Request

router = APIRouter(tags=["status"])


@router.get("/health")
async def health_check(request: Request) -> dict[str, str]:
    """Retorna el estado básico del servicio."""
    settings = request.app.state.settings
    return {
        "status": "ok",
        "app": settings.app_name,
        "time": datetime.now(timezone.utc).isoformat(),
    }
