# navsite/routes/web.py
"""
Páginas del sitio de pruebas de navegación mejorada.

Todas cuelgan de ``settings.path_base`` y comparten ``layout.html``: un
``<nav>`` con los enlaces y un ``<main>`` cuyo primer hijo es el ``<h1>``.
"""
import asyncio
import logging
from typing import AsyncIterator

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from navsite.config.settings import settings
from navsite.services.navigation import (
    RedirectTargetError,
    redirect_response,
    stream_redirect,
    stream_update,
    validate_target,
)
from navsite.services.streaming import PageStreamer, StreamingGate, templates

router = APIRouter(prefix=settings.path_base, tags=["web"])
logger = logging.getLogger(__name__)

SCROLL_TARGET_ID = "some-content"
PLAIN_TEXT_BODY = "Hello, this is plain text"


def _internal_target(path: str) -> str:
    return f"{settings.path_base}{path}"


def _redirect(request: Request, target: str) -> Response:
    try:
        return redirect_response(request, target)
    except RedirectTargetError as e:
        raise HTTPException(status_code=400, detail=str(e))


async def _redirect_after_delay(target: str) -> AsyncIterator[str]:
    await asyncio.sleep(settings.redirect_stream_delay)
    yield stream_redirect(target)


def _streaming_redirect_page(request: Request, target: str) -> Response:
    try:
        target = validate_target(target)
    except RedirectTargetError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"Redirección durante streaming hacia {target}")
    document = PageStreamer.render_document(
        request,
        "pages/redirecting.html",
        {"title": "Redirecting", "target": target},
    )
    return PageStreamer.stream_page(document, _redirect_after_delay(target))


@router.get("" if settings.path_base else "/", response_class=HTMLResponse)
async def home_page(request: Request):
    return templates.TemplateResponse(
        request,
        "pages/home.html",
        {"title": "Home"},
    )


@router.get("/streaming", response_class=HTMLResponse)
async def streaming_page(request: Request):
    """Página que queda abierta hasta recibir la señal de fin (POST /streaming/end)."""

    async def updates() -> AsyncIterator[str]:
        ended = await StreamingGate.wait_for_end(settings.streaming_max_wait)
        if ended:
            yield stream_update("streaming-status", "Finished streaming")
        else:
            yield stream_update("streaming-status", "Timed out waiting for the end signal")

    document = PageStreamer.render_document(
        request,
        "pages/streaming.html",
        {"title": "Streaming Rendering"},
    )
    return PageStreamer.stream_page(document, updates())


@router.get("/error-with-content", response_class=HTMLResponse)
async def error_with_content_page(request: Request):
    return templates.TemplateResponse(
        request,
        "pages/not_found.html",
        {"title": "Not found"},
        status_code=404,
    )


@router.get("/error-no-content")
async def error_no_content_page():
    return Response(status_code=404)


@router.get("/non-html", response_class=PlainTextResponse)
async def non_html_page():
    return PlainTextResponse(PLAIN_TEXT_BODY)


@router.get("/scroll-to-hash", response_class=HTMLResponse)
async def scroll_to_hash_page(request: Request):
    """El destino del hash llega en streaming, después del documento inicial."""

    async def updates() -> AsyncIterator[str]:
        await asyncio.sleep(settings.scroll_content_delay)
        yield stream_update(
            "async-content",
            f'<h2 id="{SCROLL_TARGET_ID}">Some content</h2>',
        )

    document = PageStreamer.render_document(
        request,
        "pages/scroll_to_hash.html",
        {"title": "Scroll to hash"},
    )
    return PageStreamer.stream_page(document, updates())


@router.get("/redirect")
async def redirect(request: Request):
    # El hash se pierde cuando el fetch del cliente sigue el 302
    return _redirect(request, _internal_target(f"/scroll-to-hash#{SCROLL_TARGET_ID}"))


@router.get("/redirect-streaming", response_class=HTMLResponse)
async def redirect_while_streaming(request: Request):
    return _streaming_redirect_page(request, _internal_target(f"/scroll-to-hash#{SCROLL_TARGET_ID}"))


@router.get("/redirect-external")
async def redirect_external(request: Request):
    return _redirect(request, settings.external_redirect_url)


@router.get("/redirect-external-streaming", response_class=HTMLResponse)
async def redirect_external_while_streaming(request: Request):
    return _streaming_redirect_page(request, settings.external_redirect_url)
