"""Secuencias lineales de pasos y su validación en tiempo de construcción."""

from __future__ import annotations

from collections import Counter
from typing import Dict, List, Optional

from tryhab.common.errors import ContentValidationError
from tryhab.content.models import Navigation, TutorialPage


class TutorialSequence:
    """Conjunto ordenado de páginas con pasos ``1..total_steps``."""

    def __init__(self, name: str, pages: List[TutorialPage]) -> None:
        self.name = name
        self.pages = sorted(pages, key=lambda page: page.step)
        self._by_step: Dict[int, TutorialPage] = {page.step: page for page in self.pages}
        self._by_slug: Dict[str, TutorialPage] = {page.slug: page for page in self.pages}

    @property
    def total_steps(self) -> int:
        return self.pages[0].front_matter.total_steps

    def __len__(self) -> int:
        return len(self.pages)

    def __iter__(self):
        return iter(self.pages)

    def page_for_step(self, step: int) -> TutorialPage:
        return self._by_step[step]

    def page_for_slug(self, slug: str) -> TutorialPage:
        return self._by_slug[slug]

    def previous(self, page: TutorialPage) -> Optional[TutorialPage]:
        return self._by_step.get(page.step - 1)

    def next(self, page: TutorialPage) -> Optional[TutorialPage]:
        return self._by_step.get(page.step + 1)

    def url_for(self, page: TutorialPage, base_url: str = "/") -> str:
        return f"{base_url}{self.name}/{page.slug}/"

    def navigation(self, page: TutorialPage, base_url: str = "/") -> Navigation:
        """Calcula los enlaces estáticos anterior/siguiente de una página."""
        anterior = self.previous(page)
        siguiente = self.next(page)
        return Navigation(
            step=page.step,
            total_steps=self.total_steps,
            previous_url=self.url_for(anterior, base_url) if anterior else None,
            next_url=self.url_for(siguiente, base_url) if siguiente else None,
        )

    def manifest(self, base_url: str = "/") -> List[Dict[str, object]]:
        return [
            {
                "step": page.step,
                "slug": page.slug,
                "title": page.title,
                "url": self.url_for(page, base_url),
            }
            for page in self.pages
        ]


def build_sequence(name: str, pages: List[TutorialPage]) -> TutorialSequence:
    """Valida las invariantes de la secuencia y la construye.

    Todas las páginas comparten ``total_steps``, los pasos son únicos y cubren
    exactamente ``1..total_steps`` y los slugs no se repiten.
    """
    if not pages:
        raise ContentValidationError([f"{name}: la secuencia no contiene páginas"])

    errores: List[str] = []
    totales = Counter(page.front_matter.total_steps for page in pages)
    if len(totales) > 1:
        detalle = ", ".join(
            f"{page.origin}={page.front_matter.total_steps}"
            for page in sorted(pages, key=lambda p: p.origin)
        )
        errores.append(f"{name}: total_steps difiere entre páginas ({detalle})")

    por_paso: Dict[int, List[str]] = {}
    for page in pages:
        por_paso.setdefault(page.step, []).append(page.origin)
    for paso, origenes in sorted(por_paso.items()):
        if len(origenes) > 1:
            errores.append(f"{name}: step {paso} repetido en {', '.join(sorted(origenes))}")

    if len(totales) == 1:
        total = next(iter(totales))
        faltantes = [paso for paso in range(1, total + 1) if paso not in por_paso]
        if faltantes:
            errores.append(
                f"{name}: faltan pasos {', '.join(str(p) for p in faltantes)} de 1..{total}"
            )

    slugs = Counter(page.slug for page in pages)
    for slug, veces in sorted(slugs.items()):
        if veces > 1:
            errores.append(f"{name}: slug '{slug}' repetido {veces} veces")

    if errores:
        raise ContentValidationError(errores)
    return TutorialSequence(name, pages)


__all__ = ["TutorialSequence", "build_sequence"]
