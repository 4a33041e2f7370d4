import logging
from typing import Optional, Tuple, Union

from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
    TimeoutError as PlaywrightTimeoutError,
)

from .config import Settings, get_settings
from .errors import ExtractionFault, InvalidInput, LaunchFailure, NavigationError, NavigationTimeout
from .extractors import extract_metadata, harvest_content_images
from .models import ItemsResponse, PreviewResult
from .validators import detect_platform, extract_youtube_id, is_valid_url

logger = logging.getLogger(__name__)

BROWSER_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]


class SessionState:
    IDLE = "idle"
    LAUNCHING = "launching"
    FAILED = "failed"
    PAGE_READY = "page_ready"
    NAVIGATING = "navigating"
    NAVIGATED = "navigated"
    TIMED_OUT = "timed_out"
    CLOSED = "closed"


class BrowserSession:
    """
    One headless Chromium process with exactly one page.

    Use as ``async with BrowserSession(settings) as session``: the browser is
    closed on every exit path once launch succeeded, and never touched when
    launch itself failed.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.state = SessionState.IDLE
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None
        self.page: Optional[Page] = None

    async def __aenter__(self) -> "BrowserSession":
        await self.launch()
        try:
            await self.configure_page()
        except BaseException:
            await self.close()
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def launch(self):
        """Start the browser; sandbox flags are dropped for container runtimes"""
        self.state = SessionState.LAUNCHING
        try:
            self.playwright = await async_playwright().start()
        except Exception as e:
            self.state = SessionState.FAILED
            raise LaunchFailure(f"Could not start Playwright: {e}") from e

        try:
            self.browser = await self.playwright.chromium.launch(headless=True, args=BROWSER_ARGS)
        except Exception as e:
            self.state = SessionState.FAILED
            await self.playwright.stop()
            self.playwright = None
            raise LaunchFailure(f"Could not launch browser: {e}") from e

        logger.info("Browser launched")

    async def configure_page(self):
        """Open the single page under a desktop browser identity"""
        self.context = await self.browser.new_context(user_agent=self.settings.user_agent)
        self.page = await self.context.new_page()
        self.state = SessionState.PAGE_READY

    async def navigate(self, url: str):
        """Load ``url`` and wait for network idle, bounded by the navigation timeout"""
        self.state = SessionState.NAVIGATING
        timeout = self.settings.navigation_timeout_ms
        logger.info(f"Navigating to {url} (timeout {timeout}ms)...")
        try:
            await self.page.goto(url, wait_until="networkidle", timeout=timeout)
        except PlaywrightTimeoutError as e:
            self.state = SessionState.TIMED_OUT
            raise NavigationTimeout(f"Navigation to {url} exceeded {timeout}ms") from e
        except Exception as e:
            raise NavigationError(f"Navigation to {url} failed: {e}") from e
        self.state = SessionState.NAVIGATED

    async def snapshot(self) -> Tuple[str, str]:
        """Serialized DOM and current address of the page"""
        try:
            html = await self.page.content()
        except Exception as e:
            raise ExtractionFault(f"Could not read page content: {e}") from e
        return html, self.page.url

    async def scroll_and_settle(self, offset: int, delay_ms: int):
        try:
            await self.page.evaluate("(offset) => window.scrollBy(0, offset)", offset)
        except Exception as e:
            raise ExtractionFault(f"Could not scroll page: {e}") from e
        await self.page.wait_for_timeout(delay_ms)

    async def close(self):
        if self.state in (SessionState.CLOSED, SessionState.FAILED, SessionState.IDLE):
            return
        try:
            if self.browser:
                await self.browser.close()
        finally:
            if self.playwright:
                await self.playwright.stop()
            self.state = SessionState.CLOSED
            logger.info("Browser closed")


class PreviewScraper:
    def __init__(self, settings: Optional[Settings] = None, session_factory=BrowserSession):
        self.settings = settings or get_settings()
        self.session_factory = session_factory

    async def extract_preview(self, url: str, mode: Optional[str] = None) -> Union[PreviewResult, ItemsResponse]:
        """
        Render ``url`` in a fresh browser session and build its preview.

        ``single`` mode returns the Open Graph record alone. ``collection``
        mode also scrolls, waits for lazy images and returns the record
        followed by up to ``max_content_items`` content thumbnails.
        """
        if not is_valid_url(url):
            raise InvalidInput(f"Invalid URL: {url!r}")

        mode = mode or self.settings.preview_mode
        logger.info(f"Extracting {detect_platform(url)} preview for {url} ({mode} mode)")

        async with self.session_factory(self.settings) as session:
            await session.navigate(url)

            html, page_url = await session.snapshot()
            primary = self._build_primary(html, page_url, url)

            if mode != "collection":
                return primary

            await session.scroll_and_settle(self.settings.scroll_offset_px, self.settings.settle_delay_ms)
            html, page_url = await session.snapshot()
            try:
                items = harvest_content_images(
                    html,
                    page_url,
                    self.settings.content_cdn_fragments,
                    self.settings.profile_pic_fragments,
                    limit=self.settings.max_content_items,
                )
            except Exception as e:
                raise ExtractionFault(f"Content image harvest failed: {e}") from e

            logger.info(f"Harvested {len(items)} content images from {page_url}")
            return ItemsResponse(items=[primary, *items])

    def _build_primary(self, html: str, page_url: str, requested_url: str) -> PreviewResult:
        try:
            primary = extract_metadata(html, page_url or requested_url)
        except Exception as e:
            raise ExtractionFault(f"Metadata extraction failed: {e}") from e

        primary.youtubeId = extract_youtube_id(primary.url) or extract_youtube_id(requested_url)

        if primary.blocked:
            logger.warning(f"No og:title or og:image on {page_url}, treating as blocked")
        return primary
