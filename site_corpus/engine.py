# File: site_corpus/engine.py
"""site_corpus.engine: точка входа сервиса, превращающая запрос {url} в ответ {text} или {error}."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple

from site_corpus.config import CrawlerConfig
from site_corpus.crawler.crawler import crawl_site
from site_corpus.crawler.fetcher import SessionFactory
from site_corpus.crawler.models import InvalidSeedURL
from site_corpus.logger import logger

__all__ = ["extract_url", "start_crawl"]

Response = Tuple[int, Dict[str, Any]]


async def start_crawl(
    url: str,
    config: Optional[CrawlerConfig] = None,
    session_factory: Optional[SessionFactory] = None,
) -> str:
    """Запускает обход сайта и возвращает агрегированный текст."""
    logger.info("Starting full website crawl from: %s", url)
    return await crawl_site(url, config, session_factory)


async def extract_url(
    payload: Any,
    config: Optional[CrawlerConfig] = None,
    session_factory: Optional[SessionFactory] = None,
) -> Response:
    """
    Обрабатывает запрос {"url": ...}.

    Возвращает пару (HTTP-статус, тело ответа): 200 с текстом, 400 при
    ошибке входных данных, 500 при сбое браузера или обхода.
    """
    url = payload.get("url") if isinstance(payload, Mapping) else None
    if not isinstance(url, str) or not url.strip():
        return 400, {"error": "URL is required"}

    try:
        text = await start_crawl(url, config, session_factory)
    except InvalidSeedURL as exc:
        logger.warning("Rejected seed URL %r: %s", url, exc)
        return 400, {"error": "Invalid URL", "details": str(exc)}
    except Exception as exc:
        logger.error("Scraping failed: %s", exc)
        return 500, {"error": "Failed to extract content", "details": str(exc)}
    return 200, {"text": text}
