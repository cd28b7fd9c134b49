# site_corpus/crawler/models.py
"""
Data models and exceptions for the SiteCorpus crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Set
from urllib.parse import urlparse

from site_corpus.crawler.frontier import Frontier

PLACEHOLDER_TITLE = "Page Not Loaded"
UNTITLED_PAGE = "Untitled Page"


class InvalidSeedURL(ValueError):
    """Seed URL is missing or cannot be parsed into scheme and hostname."""


class PageLoadError(RuntimeError):
    """Navigation or in-page evaluation failed for a single URL."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class BrowserSessionError(RuntimeError):
    """The browser session could not be launched or released."""


@dataclass(slots=True)
class LinkRecord:
    """Ссылка, найденная на странице, в нормализованном виде."""

    display_text: str
    normalized_href: str

    @property
    def render_line(self) -> str:
        return f"- [Link] {self.display_text}: {self.normalized_href}"


@dataclass(slots=True)
class PageRecord:
    """Результат извлечения одной страницы."""

    title: str
    body_text: str
    source_url: str
    links: List[LinkRecord] = field(default_factory=list)
    buttons: List[str] = field(default_factory=list)

    @classmethod
    def placeholder(cls, source_url: str) -> PageRecord:
        """Пустая запись для страницы без body или с ошибкой загрузки."""
        return cls(title=PLACEHOLDER_TITLE, body_text="", source_url=source_url)


@dataclass
class CrawlSession:
    """
    Состояние одного обхода: посещённые URL, очередь и счётчик страниц.
    Создаётся на вызов и не разделяется между запросами.
    """

    base_domain: str
    base_url: str
    frontier: Frontier
    max_pages: int = 1500
    visited: Set[str] = field(default_factory=set)
    page_count: int = 0

    @classmethod
    def from_seed(cls, url: str, frontier: Frontier, max_pages: int = 1500) -> CrawlSession:
        """Parse *url* and build a fresh session seeded with it.

        Raises :class:`InvalidSeedURL` if the URL has no scheme or hostname.
        """
        if not isinstance(url, str) or not url.strip():
            raise InvalidSeedURL("URL is required")
        seed = url.strip()
        try:
            parsed = urlparse(seed)
            hostname = parsed.hostname
        except ValueError as exc:
            raise InvalidSeedURL(f"Cannot parse URL {seed!r}: {exc}") from exc
        if parsed.scheme not in ("http", "https") or not hostname:
            raise InvalidSeedURL(f"Cannot parse URL {seed!r}")
        session = cls(
            base_domain=hostname,
            base_url=f"{parsed.scheme}://{parsed.netloc}",
            frontier=frontier,
            max_pages=max_pages,
        )
        session.frontier.push(seed)
        return session

    @property
    def exhausted(self) -> bool:
        """True when the crawl loop must stop."""
        return not self.frontier or self.page_count >= self.max_pages

    def next_url(self) -> str | None:
        """Pop the highest-priority URL that has not been visited yet.

        The URL is marked visited and counted before it is fetched, so a page
        that fails to load is never retried.
        """
        while self.frontier:
            url = self.frontier.pop()
            if url in self.visited:
                continue
            self.visited.add(url)
            self.page_count += 1
            return url
        return None

    def is_same_domain(self, url: str) -> bool:
        try:
            return urlparse(url).hostname == self.base_domain
        except ValueError:
            return False

    def enqueue_links(self, links: List[LinkRecord]) -> int:
        """Push same-domain, not yet visited links. Returns how many were pushed."""
        pushed = 0
        for link in links:
            href = link.normalized_href
            if self.is_same_domain(href) and href not in self.visited:
                self.frontier.push(href)
                pushed += 1
        return pushed
