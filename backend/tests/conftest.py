from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from linkpreview.config import Settings

from helpers import og_page


@pytest.fixture
def settings(monkeypatch):
    monkeypatch.setenv("PREVIEW_MODE", "single")
    monkeypatch.setenv("SETTLE_DELAY_MS", "0")
    monkeypatch.setenv("NAVIGATION_TIMEOUT_MS", "30000")
    monkeypatch.delenv("CONTENT_CDN_FRAGMENTS", raising=False)
    monkeypatch.delenv("PROFILE_PIC_FRAGMENTS", raising=False)
    monkeypatch.delenv("MAX_CONTENT_ITEMS", raising=False)
    return Settings()


@pytest.fixture
def fake_browser():
    """
    Patch Playwright with mocks: one browser, one context, one page.
    Tests set ``page.content`` and ``page.url`` to shape the rendered page.
    """
    page = MagicMock()
    page.url = "https://example.com"
    page.goto = AsyncMock()
    page.content = AsyncMock(return_value=og_page())
    page.evaluate = AsyncMock()
    page.wait_for_timeout = AsyncMock()

    context = MagicMock()
    context.new_page = AsyncMock(return_value=page)

    browser = MagicMock()
    browser.new_context = AsyncMock(return_value=context)
    browser.close = AsyncMock()

    playwright = MagicMock()
    playwright.chromium.launch = AsyncMock(return_value=browser)
    playwright.stop = AsyncMock()

    manager = MagicMock()
    manager.start = AsyncMock(return_value=playwright)

    with patch("linkpreview.scraper.async_playwright", return_value=manager) as factory:
        yield SimpleNamespace(
            factory=factory,
            playwright=playwright,
            browser=browser,
            context=context,
            page=page,
        )
