"""Carga de páginas de tutorial desde el directorio de contenido."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List

from pydantic import ValidationError

from tryhab.common.errors import ContentValidationError
from tryhab.content.frontmatter import split_front_matter
from tryhab.content.models import FrontMatter, TutorialPage
from tryhab.content.sequence import TutorialSequence, build_sequence

logger = logging.getLogger("tryhab.content.loader")

PAGE_SUFFIXES = (".md", ".html")


def slug_for(path: Path) -> str:
    """Nombre de la página sin extensiones (``step-4.html.md`` -> ``step-4``)."""
    return path.name.split(".", 1)[0]


def is_page_file(path: Path) -> bool:
    if not path.is_file() or path.name.startswith(("_", ".")):
        return False
    return path.suffix in PAGE_SUFFIXES


def _describe(origin: str, exc: ValidationError) -> List[str]:
    mensajes = []
    for error in exc.errors():
        campo = ".".join(str(parte) for parte in error["loc"])
        mensaje = error["msg"]
        mensajes.append(f"{origin}: {campo}: {mensaje}" if campo else f"{origin}: {mensaje}")
    return mensajes


def load_page(path: Path, sequence: str) -> TutorialPage:
    """Lee y valida una página; cualquier problema es un error de construcción."""
    origin = f"{sequence}/{path.name}"
    try:
        texto = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ContentValidationError([f"{origin}: no se pudo leer el archivo: {exc}"]) from exc
    datos, cuerpo = split_front_matter(texto, origin=origin)
    try:
        front_matter = FrontMatter.model_validate(datos)
    except ValidationError as exc:
        raise ContentValidationError(_describe(origin, exc)) from exc
    return TutorialPage(
        front_matter=front_matter,
        body=cuerpo,
        source=path,
        sequence=sequence,
        slug=slug_for(path),
    )


def load_sequences(content_dir: Path) -> Dict[str, TutorialSequence]:
    """Carga cada subdirectorio del contenido como una secuencia validada.

    Se recogen los errores de todos los archivos antes de fallar, de modo que
    el autor vea todos los problemas de una sola construcción.
    """
    if not content_dir.is_dir():
        raise ContentValidationError([f"{content_dir}: el directorio de contenido no existe"])

    errores: List[str] = []
    secuencias: Dict[str, TutorialSequence] = {}
    for directorio in sorted(p for p in content_dir.iterdir() if p.is_dir()):
        if directorio.name.startswith(("_", ".")):
            continue
        paginas: List[TutorialPage] = []
        fallidas = 0
        for archivo in sorted(directorio.iterdir()):
            if not is_page_file(archivo):
                continue
            try:
                paginas.append(load_page(archivo, directorio.name))
            except ContentValidationError as exc:
                fallidas += 1
                errores.extend(exc.errors)
        # Una página inválida haría aparecer huecos falsos en la secuencia.
        if fallidas or not paginas:
            continue
        try:
            secuencias[directorio.name] = build_sequence(directorio.name, paginas)
        except ContentValidationError as exc:
            errores.extend(exc.errors)
        else:
            logger.info(
                "sequence_loaded",
                extra={"sequence": directorio.name, "pages": len(paginas)},
            )

    if errores:
        raise ContentValidationError(errores)
    return secuencias


__all__ = ["load_page", "load_sequences", "slug_for"]
