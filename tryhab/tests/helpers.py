"""Utilidades para escribir contenido de prueba."""

from __future__ import annotations

NAV_BODY = (
    '{{ partial("previous_button", label="Back") }}\n'
    '{{ partial("advance_button", label="Next") }}'
)


def pagina(step: int, total: int, body: str = "", *, title: str | None = None) -> str:
    """Construye el texto de una página con front-matter válido."""
    titulo = title or f"Paso {step}"
    return (
        "---\n"
        f"title: {titulo}\n"
        f"description: Descripción del paso {step}\n"
        f"step: {step}\n"
        f"total_steps: {total}\n"
        "---\n"
        f"{body}\n"
    )
