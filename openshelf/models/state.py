"""Read-only snapshots of store state handed to observers.

These are plain frozen dataclasses rather than Pydantic models: they are
built by the store in one synchronous step and never parsed from input.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PartitionState(Generic[T]):
    """What a consumer sees for one partition key."""

    key: str
    items: tuple[T, ...] = ()
    total: int = 0
    page: int | None = None
    loading: bool = False
    error: str | None = None

    @property
    def has_more(self) -> bool:
        return len(self.items) < self.total

    @property
    def is_empty(self) -> bool:
        return not self.items


@dataclass(frozen=True)
class StoreSnapshot:
    """Copy of every map the store owns, taken without yielding."""

    books: dict[str, list] = field(default_factory=dict)
    authors: dict[str, list] = field(default_factory=dict)
    book_details: dict[str, object] = field(default_factory=dict)
    image_cache: dict[str, str] = field(default_factory=dict)
    book_totals: dict[str, int] = field(default_factory=dict)
    author_totals: dict[str, int] = field(default_factory=dict)
    book_pages: dict[str, int] = field(default_factory=dict)
    author_pages: dict[str, int] = field(default_factory=dict)
    book_loading: dict[str, bool] = field(default_factory=dict)
    author_loading: dict[str, bool] = field(default_factory=dict)
    error: str | None = None
