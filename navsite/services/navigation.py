# navsite/services/navigation.py
"""
Lado servidor del protocolo de navegación mejorada.

El script del cliente (static/js/enhanced-nav.js) marca sus peticiones con la
cabecera ``x-enhanced-nav``. Con ella el servidor decide cómo redirigir:

- destino interno: 302 normal, el ``fetch`` del cliente lo sigue;
- destino externo en petición mejorada: 200 con la cabecera
  ``x-enhanced-nav-redirect-location``, porque un ``fetch`` no puede seguir
  una redirección a otro origen;
- respuesta ya en streaming: marcador ``<template data-stream-redirect>``
  al final del documento.
"""
from __future__ import annotations

import logging
from typing import Mapping
from urllib.parse import urlsplit

from fastapi import Request
from fastapi.responses import RedirectResponse, Response
from markupsafe import escape

logger = logging.getLogger(__name__)

ENHANCED_NAV_HEADER = "x-enhanced-nav"
REDIRECT_LOCATION_HEADER = "x-enhanced-nav-redirect-location"

_DEFAULT_PORTS = {"http": 80, "https": 443}


class RedirectTargetError(Exception):
    """Destino de redirección no soportado."""


def is_enhanced_request(headers: Mapping[str, str]) -> bool:
    """Indica si la petición proviene del script de navegación mejorada."""
    return (headers.get(ENHANCED_NAV_HEADER) or "").strip().lower() == "true"


def validate_target(target: str) -> str:
    """Acepta URLs absolutas http(s) o rutas que empiezan con ``/``."""
    cleaned = (target or "").strip()
    if cleaned.startswith("/") and not cleaned.startswith("//"):
        return cleaned

    parts = urlsplit(cleaned)
    if parts.scheme in _DEFAULT_PORTS and parts.netloc:
        return cleaned

    logger.warning(f"Destino de redirección rechazado: {target!r}")
    raise RedirectTargetError(f"Destino de redirección inválido: '{target}'")


def _origin(url: str) -> tuple[str, str, int | None]:
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    return scheme, (parts.hostname or "").lower(), parts.port or _DEFAULT_PORTS.get(scheme)


def is_external_target(target: str, base_url: str) -> bool:
    """True cuando el destino apunta a otro esquema, host o puerto."""
    target = validate_target(target)
    if target.startswith("/"):
        return False
    return _origin(target) != _origin(base_url)


def redirect_response(request: Request, target: str) -> Response:
    """Construye la respuesta de redirección adecuada para la petición."""
    target = validate_target(target)
    external = is_external_target(target, str(request.base_url))
    enhanced = is_enhanced_request(request.headers)

    if external and enhanced:
        logger.info(f"Redirección externa vía cabecera hacia {target}")
        return Response(status_code=200, headers={REDIRECT_LOCATION_HEADER: target})

    logger.info(f"Redirección {'externa' if external else 'interna'} (302) hacia {target}")
    return RedirectResponse(target, status_code=302)


def stream_update(target_id: str, html: str) -> str:
    """Bloque que reemplaza el contenido del elemento ``target_id``."""
    return f'<template data-stream-update="{escape(target_id)}">{html}</template>'


def stream_redirect(target: str) -> str:
    """Bloque que ordena al cliente navegar a ``target``."""
    target = validate_target(target)
    return f'<template data-stream-redirect="{escape(target)}"></template>'
