"""Catalog store: the single state container behind the browse service.

Composes the entity cache, image cache, the book and author collection
caches and one fetch coordinator.  All of them live in one private
``_CatalogState`` object; :meth:`CatalogStore.reset` replaces that object
in a single assignment, so a synchronous reader sees either the old state
or a completely empty one.

A fetch captures the state it started against.  When a reset lands while
the fetch is in flight, the result is applied to the detached state and is
therefore invisible to readers of the new one.

Book partitions are offset addressed (page index is ``offset // limit``);
author partitions are page addressed (page index is the page number).
Book and author partitions have separate in-flight guards but share the
store's single ``error`` field.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from openshelf.interfaces.catalog_provider import ICatalogProvider
from openshelf.models.catalog import AuthorSummary, BookDetails, BookSummary, CollectionPage
from openshelf.models.state import PartitionState, StoreSnapshot
from openshelf.store.collection_cache import CollectionCache
from openshelf.store.coordinator import FetchCoordinator
from openshelf.store.entity_cache import EntityCache
from openshelf.store.image_cache import ImageCache
from openshelf.utils.logging import get_logger

_BOOKS = "books"
_AUTHORS = "authors"

BOOKS_FAILURE = "Failed to fetch books"
AUTHORS_FAILURE = "Failed to fetch authors"


@dataclass
class _CatalogState:
    books: CollectionCache[BookSummary] = field(default_factory=CollectionCache)
    authors: CollectionCache[AuthorSummary] = field(default_factory=CollectionCache)
    details: EntityCache = field(default_factory=EntityCache)
    images: ImageCache = field(default_factory=ImageCache)
    fetches: FetchCoordinator = field(default_factory=FetchCoordinator)


class CatalogStore:
    """Cache-aside store for paginated book and author listings.

    Parameters
    ----------
    provider:
        Data-access collaborator used by :meth:`fetch_books` and
        :meth:`fetch_authors`.  The store never calls
        ``provider.get_book_details``; detail records are handed to
        :meth:`set_book_details` by the caller.
    """

    def __init__(self, provider: ICatalogProvider) -> None:
        self._provider = provider
        self._state = _CatalogState()
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Collection fetches
    # ------------------------------------------------------------------

    async def fetch_books(self, genre: str, limit: int, offset: int) -> None:
        """Fetch one page of *genre* and merge it, unless one is already in flight."""
        state = self._state

        def _apply(page: CollectionPage[BookSummary]) -> None:
            added = state.books.merge(
                genre, page.items, total=page.total, page=offset // limit if limit else 0
            )
            self._log_applied(state, _BOOKS, genre, len(page.items), added, page.total)

        await state.fetches.run(
            (_BOOKS, genre),
            lambda: self._provider.get_books_by_genre(genre, limit, offset),
            _apply,
            BOOKS_FAILURE,
        )

    async def fetch_authors(self, subject: str, limit: int, page: int) -> None:
        """Fetch page *page* of *subject*'s authors and merge it."""
        state = self._state

        def _apply(result: CollectionPage[AuthorSummary]) -> None:
            added = state.authors.merge(subject, result.items, total=result.total, page=page)
            self._log_applied(state, _AUTHORS, subject, len(result.items), added, result.total)

        await state.fetches.run(
            (_AUTHORS, subject),
            lambda: self._provider.get_authors_by_subject(subject, limit, page),
            _apply,
            AUTHORS_FAILURE,
        )

    def _log_applied(
        self, state: _CatalogState, collection: str, key: str, received: int, added: int, total: int
    ) -> None:
        if state is not self._state:
            self._logger.info("fetch_result_detached_by_reset", collection=collection, key=key)
            return
        self._logger.info(
            "collection_page_merged",
            collection=collection,
            key=key,
            received=received,
            added=added,
            duplicates=received - added,
            total=total,
        )

    # ------------------------------------------------------------------
    # Entity and image caches
    # ------------------------------------------------------------------

    def set_book_details(self, book_id: str, details: BookDetails) -> BookDetails:
        return self._state.details.set_details(book_id, details)

    def get_book_details(self, book_id: str) -> BookDetails | None:
        return self._state.details.get_details(book_id)

    def cache_image(self, image_id: str | int, url: str) -> None:
        self._state.images.cache_image(image_id, url)

    def get_image_from_cache(self, image_id: str | int) -> str | None:
        return self._state.images.get_image_from_cache(image_id)

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def error(self) -> str | None:
        """Last fetch failure across all partitions, ``None`` after any new fetch starts."""
        return self._state.fetches.error

    def book_partition(self, genre: str) -> PartitionState[BookSummary]:
        state = self._state
        return PartitionState(
            key=genre,
            items=tuple(state.books.items(genre)),
            total=state.books.total(genre),
            page=state.books.page(genre),
            loading=state.fetches.is_loading((_BOOKS, genre)),
            error=state.fetches.error,
        )

    def author_partition(self, subject: str) -> PartitionState[AuthorSummary]:
        state = self._state
        return PartitionState(
            key=subject,
            items=tuple(state.authors.items(subject)),
            total=state.authors.total(subject),
            page=state.authors.page(subject),
            loading=state.fetches.is_loading((_AUTHORS, subject)),
            error=state.fetches.error,
        )

    def snapshot(self) -> StoreSnapshot:
        state = self._state
        loading = state.fetches.loading()
        return StoreSnapshot(
            books=state.books.items_by_key(),
            authors=state.authors.items_by_key(),
            book_details=state.details.as_dict(),
            image_cache=state.images.as_dict(),
            book_totals=state.books.totals(),
            author_totals=state.authors.totals(),
            book_pages=state.books.pages(),
            author_pages=state.authors.pages(),
            book_loading={key[1]: flag for key, flag in loading.items() if key[0] == _BOOKS},
            author_loading={key[1]: flag for key, flag in loading.items() if key[0] == _AUTHORS},
            error=state.fetches.error,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Drop every cached row, record, URL, total, page, flag and the error at once."""
        self._state = _CatalogState()
        self._logger.info("store_reset")
