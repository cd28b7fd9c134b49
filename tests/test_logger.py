# tests/test_logger.py
from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

import pytest

from site_corpus.logger import LOGGER_NAME, configure, get_logger


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    configure()


def test_child_loggers_hang_off_project_root():
    assert get_logger().name == LOGGER_NAME
    assert get_logger("crawler").name == "SiteCorpus.crawler"
    assert get_logger("fetcher").parent is logging.getLogger(LOGGER_NAME)


def test_configure_with_file_adds_rotating_handler(tmp_path):
    log_file = tmp_path / "crawl.log"
    root = configure(level="DEBUG", log_file=log_file)

    assert root.level == logging.DEBUG
    assert root.propagate is False
    assert [type(h) for h in root.handlers] == [logging.StreamHandler, RotatingFileHandler]

    get_logger("crawler").debug("visited %s", "https://example.com")
    for handler in root.handlers:
        handler.flush()
    assert "SiteCorpus.crawler | visited https://example.com" in log_file.read_text(encoding="utf-8")


def test_configure_appends_when_not_replacing():
    configure()
    root = configure(replace_handlers=False)
    assert len(root.handlers) == 2
