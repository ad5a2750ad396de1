"""Browse service: pagination and cache-aside lookups on top of the store.

Plays the part of the UI data hooks:

* ``open_genre`` / ``open_subject`` load the first page of a partition the
  first time it is shown, and reuse the cached rows afterwards.
* ``load_more_books`` / ``load_more_authors`` request the next page when the
  partition is idle and reports more rows.  Books are offset addressed
  (next offset = rows held), authors page addressed (next page = last + 1).
* ``get_book`` checks the entity cache before asking the provider and
  writes the answer back.
* ``cover_url`` checks the image cache before deriving a cover URL and
  writes the derived URL back.
"""

from __future__ import annotations

import structlog

from openshelf.config.settings import Settings
from openshelf.interfaces.catalog_provider import ICatalogProvider
from openshelf.models.catalog import AuthorSummary, BookDetails, BookSummary
from openshelf.models.state import PartitionState
from openshelf.providers.openlibrary_provider import normalize_work_id
from openshelf.services.covers import cover_url_for
from openshelf.store.catalog_store import CatalogStore
from openshelf.utils.logging import get_logger

_FIRST_AUTHOR_PAGE = 1


class CatalogBrowser:
    """Drives a :class:`CatalogStore` the way a paginated catalog view does."""

    def __init__(
        self,
        store: CatalogStore,
        provider: ICatalogProvider,
        settings: Settings | None = None,
    ) -> None:
        self._store = store
        self._provider = provider
        self._settings = settings or Settings()
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def store(self) -> CatalogStore:
        return self._store

    @property
    def page_size(self) -> int:
        return self._settings.page_size

    # -- Books -----------------------------------------------------------------

    async def open_genre(self, genre: str) -> PartitionState[BookSummary]:
        partition = self._store.book_partition(genre)
        if partition.is_empty and not partition.loading:
            await self._store.fetch_books(genre, self.page_size, 0)
        else:
            self._logger.debug("genre_served_from_cache", genre=genre, rows=len(partition.items))
        return self._store.book_partition(genre)

    async def load_more_books(self, genre: str) -> PartitionState[BookSummary]:
        partition = self._store.book_partition(genre)
        if partition.loading or not partition.has_more:
            return partition
        await self._store.fetch_books(genre, self.page_size, len(partition.items))
        return self._store.book_partition(genre)

    # -- Authors ---------------------------------------------------------------

    async def open_subject(self, subject: str) -> PartitionState[AuthorSummary]:
        partition = self._store.author_partition(subject)
        if partition.is_empty and not partition.loading:
            await self._store.fetch_authors(subject, self.page_size, _FIRST_AUTHOR_PAGE)
        else:
            self._logger.debug(
                "subject_served_from_cache", subject=subject, rows=len(partition.items)
            )
        return self._store.author_partition(subject)

    async def load_more_authors(self, subject: str) -> PartitionState[AuthorSummary]:
        partition = self._store.author_partition(subject)
        if partition.loading or not partition.has_more:
            return partition
        next_page = (partition.page or 0) + 1
        await self._store.fetch_authors(subject, self.page_size, next_page)
        return self._store.author_partition(subject)

    # -- Details and covers ----------------------------------------------------

    async def get_book(self, book_id: str) -> BookDetails:
        """Return details for *book_id*, from the entity cache when possible.

        Provider errors propagate; nothing is cached on failure.
        """
        key = normalize_work_id(book_id)
        cached = self._store.get_book_details(key)
        if cached is not None:
            self._logger.debug("cache_hit", cache="book_details", key=key)
            return cached

        self._logger.debug("cache_miss", cache="book_details", key=key)
        try:
            details = await self._provider.get_book_details(key)
        except Exception as exc:
            self._logger.warning("book_details_failed", key=key, error=str(exc))
            raise
        return self._store.set_book_details(key, details)

    def cover_url(self, details: BookDetails) -> str | None:
        cover_id = details.first_cover_id
        if cover_id is None:
            return None
        cached = self._store.get_image_from_cache(cover_id)
        if cached is not None:
            return cached
        url = cover_url_for(cover_id, self._settings)
        self._store.cache_image(cover_id, url)
        return url
