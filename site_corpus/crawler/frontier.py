# site_corpus/crawler/frontier.py
"""
Очередь URL с приоритетом по ключевым словам.

Перед каждым pop вся очередь пересортировывается на две корзины:
URL с ключевым словом идут первыми, остальные после. Порядок внутри
корзины определяется сортировкой и не является частью контракта.
"""
from __future__ import annotations

from typing import Iterable, List, Sequence

from site_corpus.config import DEFAULT_PRIORITY_KEYWORDS


class Frontier:
    """Pending URLs. No dedup on push: the visited check happens after pop."""

    def __init__(self, keywords: Sequence[str] = DEFAULT_PRIORITY_KEYWORDS) -> None:
        self._keywords = tuple(k.lower() for k in keywords)
        self._pending: List[str] = []

    def __len__(self) -> int:
        return len(self._pending)

    def __bool__(self) -> bool:
        return bool(self._pending)

    def __iter__(self):
        return iter(list(self._pending))

    def is_priority(self, url: str) -> bool:
        lowered = url.lower()
        return any(keyword in lowered for keyword in self._keywords)

    def push(self, url: str) -> None:
        self._pending.append(url)

    def push_many(self, urls: Iterable[str]) -> None:
        self._pending.extend(urls)

    def reorder(self) -> None:
        # full re-sort on every pop, O(n log n) each time
        self._pending.sort(key=lambda u: 0 if self.is_priority(u) else 1)

    def pop(self) -> str:
        """Reorder, then remove and return the front URL.

        Raises IndexError on an empty frontier.
        """
        if not self._pending:
            raise IndexError("pop from empty frontier")
        self.reorder()
        return self._pending.pop(0)
