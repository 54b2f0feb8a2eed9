"""Renderizado de páginas de tutorial con plantillas Jinja2."""

from __future__ import annotations

import logging
import textwrap
import tomllib
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
    pass_context,
    select_autoescape,
)
from jinja2.runtime import Context
from markupsafe import Markup

from tryhab.common.errors import RenderError
from tryhab.content.models import TutorialPage
from tryhab.content.sequence import TutorialSequence

logger = logging.getLogger("tryhab.render")

TEMPLATES_DIR = Path(__file__).parent / "templates"
LAYOUT_TEMPLATE = "layout.html"


def _preparar_editor(locales: Dict[str, Any]) -> Dict[str, Any]:
    """Normaliza el fragmento literal que muestra el editor."""
    if "code" not in locales:
        raise RenderError("el parcial 'editor' requiere el argumento 'code'")
    codigo = locales["code"]
    # Un bloque {% set %} ya llega escapado; el parcial lo escapa de nuevo.
    codigo = codigo.unescape() if isinstance(codigo, Markup) else str(codigo)
    codigo = textwrap.dedent(codigo).strip("\n")
    lenguaje = locales.get("language")
    if lenguaje == "toml":
        try:
            tomllib.loads(codigo)
        except tomllib.TOMLDecodeError as exc:
            raise RenderError(f"el fragmento TOML del editor no es válido: {exc}") from exc
    return {**locales, "code": codigo}


def _preparar_boton(nombre: str) -> Callable[[Dict[str, Any]], Dict[str, Any]]:
    def preparar(locales: Dict[str, Any]) -> Dict[str, Any]:
        if not str(locales.get("label", "")).strip():
            raise RenderError(f"el parcial '{nombre}' requiere el argumento 'label'")
        return locales

    return preparar


_PREPARADORES: Dict[str, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    "editor": _preparar_editor,
    "previous_button": _preparar_boton("previous_button"),
    "advance_button": _preparar_boton("advance_button"),
}


class PageRenderer:
    """Convierte páginas validadas en HTML completo."""

    def __init__(
        self,
        templates_dir: Optional[Path] = None,
        *,
        site_name: str = "Try Habitat",
        base_url: str = "/",
    ) -> None:
        loaders: List[FileSystemLoader] = []
        if templates_dir is not None:
            loaders.append(FileSystemLoader(str(templates_dir)))
        loaders.append(FileSystemLoader(str(TEMPLATES_DIR)))
        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(["html"], default_for_string=True),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.globals["partial"] = self._partial
        self.site = {"name": site_name, "base_url": base_url}
        self.base_url = base_url

    @pass_context
    def _partial(self, context: Context, name: str, **locales: Any) -> Markup:
        """Incluye ``partials/<name>.html`` con la página y navegación actuales."""
        preparar = _PREPARADORES.get(name)
        if preparar is not None:
            locales = preparar(locales)
        try:
            plantilla = self.env.get_template(f"partials/{name}.html")
        except TemplateNotFound as exc:
            raise RenderError(f"parcial desconocido: '{name}'") from exc
        contexto = {
            "page": context.get("page"),
            "nav": context.get("nav"),
            "site": context.get("site"),
            **locales,
        }
        return Markup(plantilla.render(contexto))

    def render_body(self, sequence: TutorialSequence, page: TutorialPage) -> Markup:
        nav = sequence.navigation(page, self.base_url)
        plantilla = self.env.from_string(page.body)
        return Markup(plantilla.render(page=page, nav=nav, site=self.site))

    def render_page(self, sequence: TutorialSequence, page: TutorialPage) -> str:
        """Renderiza el cuerpo de la página y lo envuelve con el layout."""
        try:
            cuerpo = self.render_body(sequence, page)
            layout = self.env.get_template(LAYOUT_TEMPLATE)
            html = layout.render(
                page=page,
                nav=sequence.navigation(page, self.base_url),
                site=self.site,
                content=cuerpo,
            )
        except RenderError as exc:
            raise RenderError(f"{page.origin}: {exc}") from exc
        except TemplateError as exc:
            raise RenderError(f"{page.origin}: error de plantilla: {exc}") from exc
        logger.debug("page_rendered", extra={"sequence": sequence.name, "slug": page.slug})
        return html


__all__ = ["LAYOUT_TEMPLATE", "PageRenderer", "TEMPLATES_DIR"]
