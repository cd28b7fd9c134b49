# site_corpus/crawler/crawler.py
from __future__ import annotations

import time
from typing import Optional

from site_corpus.aggregator import CorpusBuffer
from site_corpus.config import CrawlerConfig
from site_corpus.crawler.fetcher import BrowserSession, Fetcher, SessionFactory, launch_playwright
from site_corpus.crawler.frontier import Frontier
from site_corpus.crawler.link_extractor import extract_page
from site_corpus.crawler.models import BrowserSessionError, CrawlSession, PageRecord
from site_corpus.logger import get_logger

__all__ = ("SiteCrawler", "crawl_site")


class SiteCrawler:
    """Последовательный обход одного сайта в одной вкладке браузера."""

    def __init__(self, config: Optional[CrawlerConfig] = None, session_factory: Optional[SessionFactory] = None) -> None:
        self.config = config or CrawlerConfig()
        self._session_factory = session_factory or launch_playwright
        self.browser: Optional[BrowserSession] = None
        self.state: Optional[CrawlSession] = None
        self.logger = get_logger("crawler")

    async def __aenter__(self) -> SiteCrawler:
        try:
            self.browser = await self._session_factory(self.config)
        except BrowserSessionError:
            raise
        except Exception as exc:
            raise BrowserSessionError(f"Failed to launch browser: {exc}") from exc
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.browser is None:
            return
        browser, self.browser = self.browser, None
        try:
            await browser.close()
        except Exception as close_exc:
            self.logger.error("Failed to close browser session: %s", close_exc)
            if exc is None:
                raise BrowserSessionError(f"Failed to close browser: {close_exc}") from close_exc

    def new_session(self, seed_url: str) -> CrawlSession:
        return CrawlSession.from_seed(
            seed_url,
            frontier=Frontier(self.config.priority_keywords),
            max_pages=self.config.max_pages,
        )

    async def crawl(self, seed_url: str) -> str:
        """Обходит сайт начиная с *seed_url* и возвращает обрезанный корпус."""
        state = self.new_session(seed_url)
        if self.browser is None:
            raise BrowserSessionError("Browser session not initialized")
        self.state = state
        fetcher = Fetcher(self.browser, self.config)
        corpus = CorpusBuffer()

        self.logger.info("Старт обхода: %s", seed_url)
        start = time.monotonic()
        while not state.exhausted:
            url = state.next_url()
            if url is None:
                break
            self.logger.info("Crawling page %d/%d: %s", state.page_count, state.max_pages, url)
            record = await self._process(fetcher, state, url)
            corpus.append(record)
            state.enqueue_links(record.links)

        duration = time.monotonic() - start
        self.logger.info(
            "Завершено: %d страниц с %s за %.2f с", state.page_count, state.base_domain, duration
        )
        self.logger.info("Объём текста: %d символов", len(corpus))
        return corpus.truncated(self.config.max_chars)

    async def _process(self, fetcher: Fetcher, state: CrawlSession, url: str) -> PageRecord:
        try:
            await fetcher.load(url)
            record = await extract_page(fetcher.session, url, state.base_url)
        except Exception as e:  # noqa: BLE001
            # any per-page failure degrades to an empty block, the crawl goes on
            self.logger.warning("Failed to crawl %s: %s", url, e)
            return PageRecord.placeholder(url)
        self.logger.info("Found %d links on %s", len(record.links), url)
        if 0 < len(record.links) <= 10:
            self.logger.info("Links: %s", ", ".join(link.display_text for link in record.links))
        return record


async def crawl_site(
    url: str,
    config: Optional[CrawlerConfig] = None,
    session_factory: Optional[SessionFactory] = None,
) -> str:
    """
    Validate *url*, open a browser session, crawl and always close the session.

    InvalidSeedURL is raised before any browser is launched.
    """
    crawler = SiteCrawler(config, session_factory)
    crawler.new_session(url)
    async with crawler:
        return await crawler.crawl(url)
