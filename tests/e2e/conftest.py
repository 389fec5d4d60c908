from urllib.parse import urlsplit

import pytest
from playwright.sync_api import ElementHandle, Locator, Page

from navsite.config.settings import settings


class EnhancedNavPage:
    """Acciones y lecturas comunes de los escenarios de navegación mejorada."""

    def __init__(self, page: Page):
        self.page = page

    def open_home(self) -> None:
        self.page.goto(settings.path_base or "/")

    def nav_link(self, text: str) -> Locator:
        return self.page.locator("nav").get_by_role("link", name=text, exact=True)

    def click_nav_link(self, text: str) -> None:
        self.nav_link(text).click()

    def heading(self) -> ElementHandle:
        """Devuelve el nodo ``<h1>`` actual (no un localizador que se re-evalúa)."""
        return self.page.wait_for_selector("h1")

    def wait_for_element_text(self, element: ElementHandle, text: str) -> None:
        """Espera a que *ese mismo* nodo, aún conectado, muestre ``text``."""
        self.page.wait_for_function(
            "([el, text]) => el.isConnected && el.textContent.trim() === text",
            arg=[element, text],
        )

    @property
    def scroll_y(self) -> int:
        return int(self.page.evaluate("() => window.scrollY"))

    @scroll_y.setter
    def scroll_y(self, value: int) -> None:
        self.page.evaluate("(y) => window.scrollTo(0, y)", value)

    def wait_for_scroll_beyond(self, threshold: int) -> None:
        self.page.wait_for_function("(y) => window.scrollY > y", arg=threshold)

    def wait_for_scroll_top(self) -> None:
        self.page.wait_for_function("() => window.scrollY === 0")


@pytest.fixture()
def nav(e2e_page) -> EnhancedNavPage:
    return EnhancedNavPage(e2e_page)


@pytest.fixture()
def external_site(e2e_page):
    """Intercepta el host externo de redirección para no depender de la red."""
    host = urlsplit(settings.external_redirect_url).hostname

    def handle(route):
        route.fulfill(
            status=200,
            content_type="text/html",
            body="<html><body><h1>External site</h1></body></html>",
        )

    e2e_page.context.route(lambda url: urlsplit(url).hostname == host, handle)
    return host
