import os
import socket
import threading
import time

import pytest
import uvicorn
from fastapi.testclient import TestClient
from playwright.sync_api import expect, sync_playwright

from navsite.config.settings import settings
from navsite.main import app
from navsite.services.streaming import StreamingGate


@pytest.fixture(autouse=True)
def reset_streaming_gate():
    """La señal de fin de streaming es global: se limpia antes y después de cada prueba."""
    StreamingGate.reset()
    yield
    StreamingGate.reset()


@pytest.fixture()
def fast_streaming(monkeypatch):
    """Reduce los retardos de streaming para pruebas de integración."""
    monkeypatch.setattr(settings, "scroll_content_delay", 0)
    monkeypatch.setattr(settings, "redirect_stream_delay", 0)
    monkeypatch.setattr(settings, "streaming_max_wait", 0.2)
    return settings


@pytest.fixture()
def client():
    """Cliente de pruebas FastAPI."""
    return TestClient(app)


def _free_port(host: str) -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind((host, 0))
        return sock.getsockname()[1]


@pytest.fixture(scope="session")
def base_url():
    """
    URL base para pruebas e2e.

    Usa E2E_BASE_URL si está definida; si no, levanta uvicorn en un hilo con
    un puerto libre durante toda la sesión.
    """
    if os.getenv("RUN_E2E") != "1":
        pytest.skip("RUN_E2E no está habilitado; omitiendo pruebas e2e")

    external = os.getenv("E2E_BASE_URL")
    if external:
        yield external.rstrip("/")
        return

    host = "127.0.0.1"
    port = _free_port(host)
    config = uvicorn.Config(
        app,
        host=host,
        port=port,
        log_level=settings.log_level,
        timeout_graceful_shutdown=5,
    )
    server = uvicorn.Server(config)
    thread = threading.Thread(target=server.run, name="e2e-uvicorn", daemon=True)
    thread.start()

    deadline = time.monotonic() + 10
    while not server.started:
        if not thread.is_alive() or time.monotonic() > deadline:
            raise RuntimeError("El servidor e2e no arrancó a tiempo")
        time.sleep(0.05)

    try:
        yield f"http://{host}:{port}"
    finally:
        server.should_exit = True
        thread.join(timeout=15)


@pytest.fixture(scope="session")
def e2e_timeout_ms():
    """Límite de cada espera del navegador (localizadores y expect)."""
    timeout = int(os.getenv("E2E_TIMEOUT_MS", "10000"))
    expect.set_options(timeout=timeout)
    return timeout


@pytest.fixture(scope="session")
def playwright_browser(base_url):
    """Inicializa Playwright si RUN_E2E=1; de lo contrario omite las pruebas."""
    with sync_playwright() as playwright:
        browser = playwright.chromium.launch(
            headless=os.getenv("E2E_HEADLESS", "1") == "1"
        )
        try:
            yield browser
        finally:
            browser.close()


@pytest.fixture()
def e2e_page(playwright_browser, base_url, e2e_timeout_ms):
    """Página Playwright aislada para cada prueba e2e."""
    context = playwright_browser.new_context(
        base_url=base_url,
        viewport={"width": 1280, "height": 720},
    )
    context.set_default_timeout(e2e_timeout_ms)
    page = context.new_page()
    try:
        yield page
    finally:
        page.close()
        context.close()
