"""Логирование SiteCorpus.

Все сообщения идут через дерево логгеров с корнем ``SiteCorpus``. Обработчики
висят только на корне; модули берут дочерний логгер через :func:`get_logger`:

* ``SiteCorpus.crawler`` - цикл обхода (страницы, ссылки, итоговое время);
* ``SiteCorpus.fetcher`` - навигация и best-effort шаги браузера.

Корень настраивается один раз при импорте и повторно из CLI через
:func:`configure` (уровень, файл с ротацией, формат).
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "SiteCorpus"

# rotation of --log-file: 5 MB, three backups
_MAX_LOG_BYTES: Final[int] = 5 * 1024 * 1024
_LOG_BACKUPS: Final[int] = 3

_LevelT = Union[int, str]


def _formatted(handler: logging.Handler, fmt: str) -> logging.Handler:
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _build_handlers(log_file: str | Path | None, fmt: str) -> list[logging.Handler]:
    handlers = [_formatted(logging.StreamHandler(sys.stdout), fmt)]
    if log_file is not None:
        rotating = RotatingFileHandler(
            filename=str(log_file),
            maxBytes=_MAX_LOG_BYTES,
            backupCount=_LOG_BACKUPS,
            encoding="utf-8",
        )
        handlers.append(_formatted(rotating, fmt))
    return handlers


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Настраивает корневой логгер ``SiteCorpus`` и возвращает его.

    Дочерние логгеры (``SiteCorpus.crawler``, ``SiteCorpus.fetcher``) своих
    обработчиков не имеют и наследуют уровень и вывод отсюда. При
    ``replace_handlers=False`` новые обработчики добавляются к старым.
    """
    root = logging.getLogger(LOGGER_NAME)
    root.setLevel(level)
    if replace_handlers:
        root.handlers.clear()
    for handler in _build_handlers(log_file, log_format):
        root.addHandler(handler)
    # keep crawl output out of the host application's root logger
    root.propagate = False
    return root


def get_logger(suffix: str | None = None) -> logging.Logger:
    """``get_logger("crawler")`` -> ``SiteCorpus.crawler``; без аргумента корень."""
    return logging.getLogger(LOGGER_NAME if not suffix else f"{LOGGER_NAME}.{suffix}")


logger: logging.Logger = configure()

__all__ = ["logger", "configure", "get_logger", "DEFAULT_FORMAT", "LOGGER_NAME"]
