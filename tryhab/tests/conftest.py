"""Configuraciones compartidas para las pruebas de Try Habitat."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from tryhab.tests.helpers import NAV_BODY, pagina

REPO_ROOT = Path(__file__).resolve().parents[2]


@pytest.fixture
def anyio_backend() -> str:
    """Limita las pruebas de AnyIO a usar asyncio."""
    return "asyncio"


@pytest.fixture
def sample_content() -> Path:
    """Contenido del tutorial incluido en el repositorio."""
    return REPO_ROOT / "content"


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Directorio de contenido vacío dentro de un directorio temporal."""
    directorio = tmp_path / "content"
    directorio.mkdir()
    return directorio


@pytest.fixture
def escribir_secuencia(content_dir: Path) -> Callable[..., Path]:
    """Escribe una secuencia completa de ``total`` pasos con navegación."""

    def _escribir(nombre: str = "try", total: int = 3, body: str = NAV_BODY) -> Path:
        directorio = content_dir / nombre
        directorio.mkdir()
        for step in range(1, total + 1):
            (directorio / f"step-{step}.html.md").write_text(
                pagina(step, total, body), encoding="utf-8"
            )
        return directorio

    return _escribir
