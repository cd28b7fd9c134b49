# site_corpus/crawler/fetcher.py
"""
Fetcher module: owns the headless-browser session, navigates with a bounded
wait, lets late scripts settle and tries to reveal hover menus.
"""
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Optional, Protocol

from playwright.async_api import Browser, Error as PlaywrightError, Page, Playwright, async_playwright

from site_corpus.config import CrawlerConfig
from site_corpus.crawler.models import BrowserSessionError, PageLoadError
from site_corpus.logger import get_logger

log = get_logger("fetcher")

HOVER_SELECTORS = "nav a, nav button, .menu a, .navbar a, header a"

HOVER_SCRIPT = """
(selectors) => {
    document.querySelectorAll(selectors).forEach(item => {
        item.dispatchEvent(new MouseEvent('mouseover', { bubbles: true }));
        item.dispatchEvent(new MouseEvent('mouseenter', { bubbles: true }));
    });
}
"""


class BrowserSession(Protocol):
    """What the crawler needs from a rendering engine: one reusable tab."""

    async def goto(self, url: str, timeout_ms: float) -> None: ...

    async def evaluate(self, script: str, arg: Any = None) -> Any: ...

    async def close(self) -> None: ...


SessionFactory = Callable[[CrawlerConfig], Awaitable[BrowserSession]]


class PlaywrightSession:
    """Headless Chromium with a single page reused across navigations."""

    def __init__(self, playwright: Playwright, browser: Browser, page: Page) -> None:
        self._playwright = playwright
        self._browser = browser
        self._page = page

    @classmethod
    async def launch(cls, config: CrawlerConfig) -> PlaywrightSession:
        playwright = await async_playwright().start()
        try:
            browser = await playwright.chromium.launch(
                headless=config.headless, args=list(config.browser_args)
            )
            if config.user_agent:
                page = await browser.new_page(user_agent=config.user_agent)
            else:
                page = await browser.new_page()
        except PlaywrightError as exc:
            await playwright.stop()
            raise BrowserSessionError(f"Failed to launch browser: {exc}") from exc
        log.debug("Chromium launched (headless=%s)", config.headless)
        return cls(playwright, browser, page)

    async def goto(self, url: str, timeout_ms: float) -> None:
        try:
            await self._page.goto(url, wait_until="domcontentloaded", timeout=timeout_ms)
        except PlaywrightError as exc:
            raise PageLoadError(url, exc.message) from exc

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        try:
            return await self._page.evaluate(script, arg)
        except PlaywrightError as exc:
            raise PageLoadError(self._page.url, exc.message) from exc

    async def close(self) -> None:
        try:
            await self._browser.close()
        finally:
            await self._playwright.stop()
        log.debug("Chromium closed")


async def launch_playwright(config: CrawlerConfig) -> BrowserSession:
    """Default session factory."""
    return await PlaywrightSession.launch(config)


async def best_effort(step_name: str, step: Awaitable[Any]) -> Optional[Any]:
    """Run an optional sub-step; any failure is logged and ignored.

    Used for steps whose failure must never affect the crawl result, e.g.
    hover-revealed menus.
    """
    try:
        return await step
    except Exception as exc:  # noqa: BLE001
        log.debug("Best-effort step %r failed: %s", step_name, exc)
        return None


class Fetcher:
    """Loads one URL in the shared browser session and waits for it to settle."""

    def __init__(self, session: BrowserSession, config: CrawlerConfig) -> None:
        self.session = session
        self.config = config

    async def load(self, url: str) -> None:
        """
        Navigate to *url* and let the page settle.

        Raises PageLoadError (or asyncio.TimeoutError) if navigation fails;
        the hover step never raises.
        """
        await self.session.goto(url, self.config.navigation_timeout_ms)
        await asyncio.sleep(self.config.settle_delay)
        await best_effort("hover-reveal", self.reveal_menus())
        await asyncio.sleep(self.config.hover_settle_delay)

    async def reveal_menus(self) -> None:
        await self.session.evaluate(HOVER_SCRIPT, HOVER_SELECTORS)
