"""Separación del front-matter YAML y el cuerpo de una página."""

from __future__ import annotations

from typing import Any, Dict, Tuple

import yaml

from tryhab.common.errors import FrontMatterError

DELIMITER = "---"


def split_front_matter(text: str, *, origin: str = "<texto>") -> Tuple[Dict[str, Any], str]:
    """Devuelve los metadatos y el cuerpo de un documento con front-matter.

    El documento debe comenzar con una línea ``---``; el bloque termina en la
    siguiente línea que contenga únicamente ``---``.
    """
    normalizado = text.replace("\r\n", "\n")
    if normalizado.startswith("\ufeff"):
        normalizado = normalizado[1:]
    lineas = normalizado.split("\n")
    if not lineas or lineas[0].strip() != DELIMITER:
        raise FrontMatterError([f"{origin}: falta el bloque de front-matter inicial '---'"])

    cierre = None
    for indice, linea in enumerate(lineas[1:], start=1):
        if linea.strip() == DELIMITER:
            cierre = indice
            break
    if cierre is None:
        raise FrontMatterError([f"{origin}: el bloque de front-matter no está cerrado"])

    bloque = "\n".join(lineas[1:cierre])
    cuerpo = "\n".join(lineas[cierre + 1 :])
    try:
        datos = yaml.safe_load(bloque) if bloque.strip() else {}
    except yaml.YAMLError as exc:
        raise FrontMatterError([f"{origin}: YAML inválido en front-matter: {exc}"]) from exc
    if datos is None:
        datos = {}
    if not isinstance(datos, dict):
        raise FrontMatterError([f"{origin}: el front-matter debe ser un mapeo clave: valor"])
    return datos, cuerpo


__all__ = ["DELIMITER", "split_front_matter"]
