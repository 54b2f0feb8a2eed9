"""Errores de construcción del sitio de tutoriales."""

from __future__ import annotations

from collections.abc import Iterable


class TryHabError(ValueError):
    """Error base para fallos detectados al construir el sitio."""


class ContentValidationError(TryHabError):
    """Contenido mal formado: agrupa todos los problemas encontrados."""

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors = list(errors)
        if not self.errors:
            self.errors = ["contenido inválido"]
        super().__init__("\n".join(self.errors))


class FrontMatterError(ContentValidationError):
    """El bloque de front-matter no se pudo separar o interpretar."""


class RenderError(TryHabError):
    """Fallo al renderizar una página o uno de sus parciales."""


__all__ = ["ContentValidationError", "FrontMatterError", "RenderError", "TryHabError"]
