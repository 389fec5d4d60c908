# navsite/services/streaming.py
"""
Renderizado en streaming.

Las páginas en streaming envían primero el documento HTML completo y luego,
a medida que el servidor avanza, bloques ``<template>`` con actualizaciones o
redirecciones (ver ``navsite.services.navigation``).
"""
import asyncio
import logging
from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import Request
from fastapi.responses import StreamingResponse
from fastapi.templating import Jinja2Templates

from navsite.config.settings import settings

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent.parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))
templates.env.globals["path_base"] = settings.path_base


class StreamingGate:
    """
    Señal global de "fin de respuesta" compartida por las páginas en streaming.

    Es estado de proceso: dos pruebas que usen la página de streaming al mismo
    tiempo se interfieren, por eso esas pruebas se ejecutan en serie.
    """

    _event: Optional[asyncio.Event] = None
    _waiting: int = 0

    @classmethod
    def _current(cls) -> asyncio.Event:
        if cls._event is None:
            cls._event = asyncio.Event()
        return cls._event

    @classmethod
    def end_response(cls) -> None:
        """Libera la página que espera, o la próxima que empiece a esperar."""
        cls._current().set()
        logger.info(f"Señal de fin de respuesta recibida (esperando: {cls._waiting})")

    @classmethod
    def is_pending(cls) -> bool:
        return cls._event is not None and cls._event.is_set()

    @classmethod
    def waiting_count(cls) -> int:
        return cls._waiting

    @classmethod
    async def wait_for_end(cls, timeout: float) -> bool:
        """
        Espera la señal de fin.

        Returns:
            True si llegó la señal, False si expiró ``timeout``.
        """
        event = cls._current()
        cls._waiting += 1
        try:
            await asyncio.wait_for(event.wait(), timeout=timeout)
            return True
        except asyncio.TimeoutError:
            logger.warning(f"La respuesta en streaming no recibió la señal de fin en {timeout}s")
            return False
        finally:
            cls._waiting -= 1
            if cls._event is event:
                cls._event = None

    @classmethod
    def reset(cls) -> None:
        """Descarta cualquier señal pendiente."""
        cls._event = None
        cls._waiting = 0


class PageStreamer:
    """Construye respuestas en streaming a partir de plantillas Jinja2."""

    MEDIA_TYPE = "text/html; charset=utf-8"

    @staticmethod
    def render_document(request: Request, template_name: str, context: dict) -> str:
        """Renderiza el documento inicial completo."""
        return templates.get_template(template_name).render({"request": request, **context})

    @classmethod
    def stream_page(
        cls,
        document: str,
        updates: AsyncIterator[str],
        status_code: int = 200,
    ) -> StreamingResponse:
        """
        Envía ``document`` y luego cada bloque producido por ``updates``.

        Si el cliente se desconecta, Starlette cancela el generador.
        """

        async def body() -> AsyncIterator[str]:
            logger.info("Respuesta en streaming iniciada")
            try:
                yield document
                async for chunk in updates:
                    yield chunk
            finally:
                logger.info("Respuesta en streaming finalizada")

        return StreamingResponse(
            body(),
            status_code=status_code,
            media_type=cls.MEDIA_TYPE,
            headers={"Cache-Control": "no-store", "X-Content-Type-Options": "nosniff"},
        )
