# site_corpus/server.py
"""
HTTP-обёртка над краулером (aiohttp).

  POST /api/extract-url   {"url": "..."} -> {"text": "..."} | {"error": ..., "details": ...}
  GET  /health            {"status": "ok"}

CORS открыт для любого origin.
"""
from __future__ import annotations

import json
from typing import Optional

from aiohttp import web

from site_corpus.config import CrawlerConfig
from site_corpus.crawler.fetcher import SessionFactory
from site_corpus.engine import extract_url
from site_corpus.logger import logger

CONFIG_KEY = web.AppKey("config", CrawlerConfig)
FACTORY_KEY = web.AppKey("session_factory", object)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,HEAD,PUT,PATCH,POST,DELETE",
    "Access-Control-Allow-Headers": "Content-Type",
}


@web.middleware
async def cors_middleware(request: web.Request, handler):
    """Answers preflight requests and adds CORS headers to every response."""
    if request.method == "OPTIONS" and "Access-Control-Request-Method" in request.headers:
        return web.Response(status=204, headers=CORS_HEADERS)
    try:
        response = await handler(request)
    except web.HTTPException as exc:
        exc.headers.update(CORS_HEADERS)
        raise
    response.headers.update(CORS_HEADERS)
    return response


async def handle_extract(request: web.Request) -> web.Response:
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return web.json_response({"error": "Request body must be JSON"}, status=400)
    status, body = await extract_url(
        payload, request.app[CONFIG_KEY], request.app.get(FACTORY_KEY)
    )
    return web.json_response(body, status=status)


async def handle_health(_: web.Request) -> web.Response:
    return web.json_response({"status": "ok"})


def create_app(
    config: Optional[CrawlerConfig] = None, session_factory: Optional[SessionFactory] = None
) -> web.Application:
    """Собирает aiohttp-приложение; каждый запрос получает свой браузер и очередь."""
    app = web.Application(middlewares=[cors_middleware])
    app[CONFIG_KEY] = config or CrawlerConfig()
    if session_factory is not None:
        app[FACTORY_KEY] = session_factory
    app.router.add_post("/api/extract-url", handle_extract)
    app.router.add_get("/health", handle_health)
    return app


def run(host: str = "localhost", port: int = 3000, config: Optional[CrawlerConfig] = None) -> None:
    logger.info("Backend server running at http://%s:%d", host, port)
    logger.info("Endpoint: POST /api/extract-url")
    web.run_app(create_app(config), host=host, port=port, print=None)
