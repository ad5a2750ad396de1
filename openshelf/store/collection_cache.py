"""Paginated collection cache: per-partition accumulation of summary rows.

Each partition key (a genre for books, a subject for authors) owns

* the ordered rows seen so far, deduplicated by ``id`` with the first
  occurrence kept,
* the total last reported by the backend (overwritten on every page),
* the index of the last page merged.

``has_more`` is derived from the first two and never stored.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Generic, Protocol, TypeVar


class _Identified(Protocol):
    @property
    def id(self) -> str: ...


ItemT = TypeVar("ItemT", bound=_Identified)


class CollectionCache(Generic[ItemT]):
    def __init__(self) -> None:
        self._items: dict[str, list[ItemT]] = {}
        self._seen: dict[str, set[str]] = {}
        self._totals: dict[str, int] = {}
        self._pages: dict[str, int] = {}

    def merge(self, key: str, items: Iterable[ItemT], total: int, page: int) -> int:
        """Append the unseen rows of a page to *key* and record its total and index.

        Rows whose id is already present, in the partition or earlier in the
        same page, are dropped.  Returns the number of rows appended.
        """
        existing = self._items.setdefault(key, [])
        seen = self._seen.setdefault(key, set())
        added = 0
        for item in items:
            if item.id in seen:
                continue
            seen.add(item.id)
            existing.append(item)
            added += 1
        self._totals[key] = total
        self._pages[key] = page
        return added

    def items(self, key: str) -> list[ItemT]:
        return list(self._items.get(key, ()))

    def total(self, key: str) -> int:
        return self._totals.get(key, 0)

    def page(self, key: str) -> int | None:
        return self._pages.get(key)

    def has_more(self, key: str) -> bool:
        return len(self._items.get(key, ())) < self.total(key)

    def items_by_key(self) -> dict[str, list[ItemT]]:
        return {key: list(rows) for key, rows in self._items.items()}

    def totals(self) -> dict[str, int]:
        return dict(self._totals)

    def pages(self) -> dict[str, int]:
        return dict(self._pages)
