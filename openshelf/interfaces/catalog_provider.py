"""Abstract base class for bibliographic catalog providers.

Defines the data-access contract the store and browse service depend on:
page-shaped listings of books by genre and authors by subject, plus single
work lookups.  Implementations may talk to Open Library, a local fixture set,
or anything else returning the same shapes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from openshelf.models.catalog import AuthorSummary, BookDetails, BookSummary, CollectionPage


class ICatalogProvider(ABC):
    """Contract for catalog services used by :class:`~openshelf.store.catalog_store.CatalogStore`.

    All operations are async; a failure is reported by raising, never by
    returning a partial page.
    """

    @abstractmethod
    async def get_books_by_genre(
        self, genre: str, limit: int, offset: int
    ) -> CollectionPage[BookSummary]:
        """Return one offset-addressed page of works listed under *genre*.

        Parameters
        ----------
        genre:
            Subject slug, e.g. ``"fiction"`` or ``"science_fiction"``.
        limit:
            Maximum number of rows in the page.
        offset:
            Zero-based index of the first row.

        Raises
        ------
        openshelf.utils.errors.CatalogFetchError
            If the request or response decoding fails.
        """

    @abstractmethod
    async def get_authors_by_subject(
        self, subject: str, limit: int, page: int
    ) -> CollectionPage[AuthorSummary]:
        """Return one page-addressed page of authors matching *subject*.

        *page* is 1-based.
        """

    @abstractmethod
    async def get_book_details(self, book_id: str) -> BookDetails:
        """Return the detail record for the work identified by *book_id*."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier used in logs and error messages."""
