"""Configuraciones centrales para el generador de tutoriales Try Habitat."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configura la construcción y la vista previa mediante variables de entorno."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = Field(default="Try Habitat", validation_alias="APP_NAME")
    env: str = Field(default="dev", validation_alias="ENV")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    content_dir: Path = Field(default=Path("content"), validation_alias="CONTENT_DIR")
    output_dir: Path = Field(default=Path("build"), validation_alias="OUTPUT_DIR")
    templates_dir: Optional[Path] = Field(default=None, validation_alias="TEMPLATES_DIR")
    base_url: str = Field(default="/", validation_alias="BASE_URL")

    @field_validator("env")
    @classmethod
    def validar_env(cls, value: str) -> str:
        """Valida el entorno permitido."""
        if value not in {"dev", "prod"}:
            raise ValueError("ENV debe ser 'dev' o 'prod'.")
        return value

    @field_validator("log_level")
    @classmethod
    def validar_nivel(cls, value: str) -> str:
        """Valida el nivel de log permitido."""
        niveles = {"INFO", "DEBUG", "WARNING", "ERROR"}
        valor = value.upper()
        if valor not in niveles:
            raise ValueError("LOG_LEVEL debe ser INFO, DEBUG, WARNING o ERROR.")
        return valor

    @field_validator("templates_dir", mode="before")
    @classmethod
    def vaciar_templates_dir(cls, value: object) -> object:
        """Una cadena vacía equivale a no tener plantillas propias."""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("base_url")
    @classmethod
    def normalizar_base_url(cls, value: str) -> str:
        """Garantiza que la URL base empiece y termine con '/'."""
        valor = value.strip().strip("/")
        return f"/{valor}/" if valor else "/"


@lru_cache
def get_settings() -> Settings:
    """Obtiene una instancia cacheada de la configuración."""
    try:
        return Settings()
    except ValidationError as exc:  # pragma: no cover - configuración inválida debe ser evidente
        raise RuntimeError(f"Configuración inválida: {exc}") from exc
