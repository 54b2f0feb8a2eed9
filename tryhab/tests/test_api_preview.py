"""Pruebas del servidor de vista previa."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from tryhab.api.main import create_app
from tryhab.common.config import Settings


def _cliente(content_dir: Path, **extra: str) -> TestClient:
    settings = Settings(CONTENT_DIR=str(content_dir), **extra)
    return TestClient(create_app(settings))


def test_health(content_dir: Path) -> None:
    respuesta = _cliente(content_dir).get("/health")
    assert respuesta.status_code == 200
    assert respuesta.json()["status"] == "ok"


def test_pagina_renderizada(sample_content: Path) -> None:
    """La vista previa entrega el mismo HTML que la construcción."""

    cliente = _cliente(sample_content)
    respuesta = cliente.get("/try/step-4/")
    assert respuesta.status_code == 200
    assert "text/html" in respuesta.headers["content-type"]
    assert respuesta.text.count('class="button previous"') == 1
    assert respuesta.text.count('class="button advance"') == 1
    assert "tcp-backlog = 128" in respuesta.text


def test_inicio_redirige_al_primer_paso(sample_content: Path) -> None:
    cliente = _cliente(sample_content)
    respuesta = cliente.get("/try/", follow_redirects=False)
    assert respuesta.status_code == 307
    assert respuesta.headers["location"] == "/try/step-1/"


def test_base_url_prefija_rutas(sample_content: Path) -> None:
    cliente = _cliente(sample_content, BASE_URL="/tutorial/")
    assert cliente.get("/tutorial/try/step-2/").status_code == 200
    assert cliente.get("/try/step-2/").status_code == 404


def test_no_encontrado(sample_content: Path) -> None:
    cliente = _cliente(sample_content)
    assert cliente.get("/otra/").status_code == 404
    assert cliente.get("/try/step-99/").status_code == 404


def test_contenido_invalido_devuelve_422(content_dir: Path) -> None:
    directorio = content_dir / "try"
    directorio.mkdir()
    (directorio / "step-1.md").write_text("---\ntitle: t\n---\n", encoding="utf-8")

    respuesta = _cliente(content_dir).get("/try/step-1/")
    assert respuesta.status_code == 422
    cuerpo = respuesta.json()
    assert "try/step-1.md: step: Field required" in cuerpo["errors"]


def test_error_de_render_devuelve_500(content_dir: Path) -> None:
    directorio = content_dir / "try"
    directorio.mkdir()
    (directorio / "step-1.md").write_text(
        "---\ntitle: t\ndescription: d\nstep: 1\ntotal_steps: 1\n---\n{{ partial('nada') }}\n",
        encoding="utf-8",
    )
    respuesta = _cliente(content_dir).get("/try/step-1/")
    assert respuesta.status_code == 500
    assert "parcial desconocido" in respuesta.json()["detail"]


@pytest.mark.anyio
async def test_listado_de_secuencias(
    escribir_secuencia: Callable[..., Path], content_dir: Path
) -> None:
    """El índice refleja los pasos de cada secuencia en orden."""

    escribir_secuencia("try", total=2)
    app = create_app(Settings(CONTENT_DIR=str(content_dir)))
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        respuesta = await client.get("/api/sequences")
    assert respuesta.status_code == 200
    cuerpo = respuesta.json()
    assert [p["slug"] for p in cuerpo["try"]] == ["step-1", "step-2"]


def test_error_no_controlado_devuelve_500_con_request_id(
    content_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Un fallo inesperado se responde con 500 y un identificador de solicitud."""

    from tryhab.api.routes import tutorial

    def _explota(_: Path) -> None:
        raise RuntimeError("disco no disponible")

    monkeypatch.setattr(tutorial, "load_sequences", _explota)
    app = create_app(Settings(CONTENT_DIR=str(content_dir)))
    cliente = TestClient(app, raise_server_exceptions=False)

    respuesta = cliente.get("/try/step-1/")
    assert respuesta.status_code == 500
    cuerpo = respuesta.json()
    assert cuerpo["detail"] == "Error interno del servidor."
    assert cuerpo["request_id"]


def test_rutas_de_pagina_usan_threadpool() -> None:
    """Las rutas que leen disco y renderizan no son corrutinas."""

    from tryhab.api.routes import tutorial

    for ruta in tutorial.router.routes:
        assert not inspect.iscoroutinefunction(ruta.endpoint)


def test_pagina_servida_registra_secuencia_y_slug(
    sample_content: Path, caplog: pytest.LogCaptureFixture
) -> None:
    cliente = _cliente(sample_content)
    with caplog.at_level(logging.INFO, logger="tryhab.preview"):
        respuesta = cliente.get("/try/step-4/")
    assert respuesta.status_code == 200
    registros = [r for r in caplog.records if r.getMessage() == "page_served"]
    assert registros
    assert registros[-1].sequence == "try"
    assert registros[-1].slug == "step-4"
    assert registros[-1].status == 200
