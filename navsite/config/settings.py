"""Configuración del sitio de pruebas de navegación mejorada."""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Valores de configuración cargados desde variables de entorno."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
    )

    path_base: str = Field(
        default="/subdir",
        alias="NAVSITE_PATH_BASE",
        description="Prefijo bajo el que se sirven todas las páginas.",
    )
    external_redirect_url: str = Field(
        default="https://www.microsoft.com/",
        alias="NAVSITE_EXTERNAL_REDIRECT_URL",
        description="Destino de las redirecciones a otro origen.",
    )
    scroll_content_delay: float = Field(
        default=1.0,
        alias="NAVSITE_SCROLL_CONTENT_DELAY",
        description="Segundos antes de enviar el contenido asíncrono de scroll-to-hash.",
    )
    redirect_stream_delay: float = Field(
        default=0.5,
        alias="NAVSITE_REDIRECT_STREAM_DELAY",
        description="Segundos que una página en streaming se muestra antes de redirigir.",
    )
    streaming_max_wait: float = Field(
        default=60.0,
        alias="NAVSITE_STREAMING_MAX_WAIT",
        description="Tiempo máximo que la página de streaming espera la señal de fin.",
    )
    log_level: str = Field(
        default="info",
        alias="NAVSITE_LOG_LEVEL",
        description="Nivel de log para uvicorn y la aplicación.",
    )

    @field_validator("path_base")
    @classmethod
    def _normalize_path_base(cls, value: str) -> str:
        cleaned = (value or "").strip()
        if "?" in cleaned or "#" in cleaned:
            raise ValueError("path_base no puede contener query ni fragmento")
        cleaned = "/" + cleaned.strip("/")
        return cleaned.rstrip("/")


@lru_cache()
def get_settings() -> Settings:
    """Retorna instancia memoizada de configuración."""

    return Settings()


settings = get_settings()
