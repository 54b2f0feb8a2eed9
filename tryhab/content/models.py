"""Modelos de contenido de los tutoriales paso a paso."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator, model_validator


class FrontMatter(BaseModel):
    """Metadatos de presentación de una página del tutorial."""

    model_config = ConfigDict(extra="allow", frozen=True)

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    step: StrictInt = Field(..., ge=1)
    total_steps: StrictInt = Field(..., ge=1)

    @field_validator("title", "description")
    @classmethod
    def sin_espacios_vacios(cls, value: str) -> str:
        valor = value.strip()
        if not valor:
            raise ValueError("no puede estar vacío")
        return valor

    @model_validator(mode="after")
    def paso_en_rango(self) -> "FrontMatter":
        if self.step > self.total_steps:
            raise ValueError(
                f"step ({self.step}) no puede superar total_steps ({self.total_steps})"
            )
        return self


class TutorialPage(BaseModel):
    """Página de contenido ya separada en metadatos y cuerpo."""

    model_config = ConfigDict(frozen=True)

    front_matter: FrontMatter
    body: str
    source: Path
    sequence: str
    slug: str

    @property
    def step(self) -> int:
        return self.front_matter.step

    @property
    def title(self) -> str:
        return self.front_matter.title

    @property
    def origin(self) -> str:
        """Ruta legible usada en los mensajes de error."""
        return f"{self.sequence}/{self.source.name}"


class Navigation(BaseModel):
    """Enlaces anterior/siguiente fijados al construir la secuencia."""

    model_config = ConfigDict(frozen=True)

    step: int
    total_steps: int
    previous_url: Optional[str] = None
    next_url: Optional[str] = None

    @property
    def is_first(self) -> bool:
        return self.step == 1

    @property
    def is_last(self) -> bool:
        return self.step == self.total_steps

    @property
    def progress_pct(self) -> int:
        return round(self.step * 100 / self.total_steps)


__all__ = ["FrontMatter", "Navigation", "TutorialPage"]
