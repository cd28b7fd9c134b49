# File: site_corpus/aggregator.py
"""site_corpus.aggregator: сборка текстового корпуса из записей страниц."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from site_corpus.crawler.models import PageRecord

MAX_CHARS = 200_000
SEPARATOR = "=" * 40


def format_page_block(record: PageRecord) -> str:
    """Форматирует одну страницу в фиксированный текстовый блок."""
    links = "\n".join(link.render_line for link in record.links)
    buttons = "\n".join(record.buttons)
    return (
        f"\n{SEPARATOR}\n"
        f"PAGE: {record.title}\n"
        f"URL: {record.source_url}\n"
        f"{SEPARATOR}\n"
        f"\n"
        f"CONTENT:\n"
        f"{record.body_text}\n"
        f"\n"
        f"INTERACTIVE ELEMENTS:\n"
        f"{links}\n"
        f"{buttons}\n"
        f"\n"
    )


def truncate(text: str, limit: int = MAX_CHARS) -> str:
    """Обрезает текст до *limit* символов, не считаясь с границами блоков."""
    return text[:limit]


@dataclass(slots=True)
class CorpusBuffer:
    """Накопитель блоков страниц за один обход."""

    blocks: List[str] = field(default_factory=list)
    pages: int = 0

    def append(self, record: PageRecord) -> None:
        self.blocks.append(format_page_block(record))
        self.pages += 1

    def text(self) -> str:
        return "".join(self.blocks)

    def __len__(self) -> int:
        return sum(len(b) for b in self.blocks)

    def truncated(self, limit: int = MAX_CHARS) -> str:
        return truncate(self.text(), limit)
