# File: tests/conftest.py
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Union

import pytest
from bs4 import BeautifulSoup

from site_corpus.config import CrawlerConfig
from site_corpus.crawler.fetcher import HOVER_SCRIPT
from site_corpus.crawler.link_extractor import EXTRACT_SCRIPT
from site_corpus.crawler.models import PageLoadError

SEED = "https://example.com"


def emulate_extract(html: str, selectors: Sequence[str]) -> Optional[Dict[str, Any]]:
    """Answer the extraction script contract from static HTML."""
    soup = BeautifulSoup(html, "html.parser")
    if soup.body is None:
        return None
    seen: set[int] = set()
    elements = []
    for selector in selectors:
        for el in soup.select(selector):
            if el.get("href") is None or id(el) in seen:
                continue
            seen.add(id(el))
            elements.append(el)
    return {
        "title": soup.title.get_text() if soup.title else "",
        "text": soup.body.get_text(" "),
        "links": [{"text": el.get_text(), "href": el.get("href")} for el in elements],
        "buttons": [b.get_text() for b in soup.find_all("button")],
    }


PageSource = Union[str, BaseException]


class StubBrowser:
    """In-memory browser session: URL -> HTML, or an exception raised on goto."""

    def __init__(
        self,
        pages: Dict[str, PageSource],
        *,
        fail_hover: bool = False,
        fail_close: bool = False,
    ) -> None:
        self.pages = pages
        self.fail_hover = fail_hover
        self.fail_close = fail_close
        self.navigations: List[str] = []
        self.hover_calls = 0
        self.closed = False
        self._current: Optional[str] = None

    async def goto(self, url: str, timeout_ms: float) -> None:
        self.navigations.append(url)
        source = self.pages.get(url)
        if isinstance(source, BaseException):
            raise source
        if source is None:
            raise PageLoadError(url, "net::ERR_NAME_NOT_RESOLVED")
        self._current = source

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        if script == HOVER_SCRIPT:
            self.hover_calls += 1
            if self.fail_hover:
                raise RuntimeError("Execution context was destroyed")
            return None
        if script == EXTRACT_SCRIPT:
            return emulate_extract(self._current or "", arg)
        raise AssertionError(f"unexpected script: {script[:40]}")

    async def close(self) -> None:
        self.closed = True
        if self.fail_close:
            raise RuntimeError("browser process already gone")


def make_factory(browser: StubBrowser, launches: Optional[List[CrawlerConfig]] = None):
    async def factory(config: CrawlerConfig) -> StubBrowser:
        if launches is not None:
            launches.append(config)
        return browser

    return factory


def page(title: str, body: str) -> str:
    return f"<html><head><title>{title}</title></head><body>{body}</body></html>"


@pytest.fixture()
def fast_config() -> CrawlerConfig:
    """Crawler config without settle pauses."""
    return CrawlerConfig(settle_delay=0, hover_settle_delay=0)
