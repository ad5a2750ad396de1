"""Open Library catalog provider implementing ICatalogProvider.

Uses three public, key-less endpoints:

* ``/subjects/{genre}.json`` for offset-paged works by genre
* ``/search/authors.json`` for page-paged authors by subject
* ``/works/{id}.json`` (+ ``/authors/{key}.json``) for work details

The ``httpx.AsyncClient`` is injected for testability.  Transport failures
are raised as ``ProviderUnavailableError``; HTTP status and decoding
failures as ``CatalogFetchError``.
"""

from __future__ import annotations

import asyncio
from typing import Any
from urllib.parse import quote

import httpx

from openshelf.config.settings import Settings
from openshelf.interfaces.catalog_provider import ICatalogProvider
from openshelf.models.catalog import (
    AuthorRef,
    AuthorSummary,
    BookDetails,
    BookSummary,
    CollectionPage,
)
from openshelf.utils.errors import CatalogFetchError, ProviderUnavailableError
from openshelf.utils.logging import get_logger

_PROVIDER_NAME = "openlibrary"


def normalize_work_id(book_id: str) -> str:
    """Strip the ``/works/`` prefix so ``/works/OL45W`` and ``OL45W`` share a key."""
    return book_id.strip().replace("/works/", "").strip("/")


def _normalize_author_key(key: str) -> str:
    return key.strip().replace("/authors/", "").strip("/")


class OpenLibraryProvider(ICatalogProvider):
    """Catalog provider backed by the Open Library JSON API."""

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings | None = None) -> None:
        self._http = http_client
        self._settings = settings or Settings()
        self._logger = get_logger(__name__)

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME

    # -- Private helpers -------------------------------------------------------

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        url = f"{self._settings.api_base_url}{path}"
        headers = {"User-Agent": self._settings.user_agent, "Accept": "application/json"}
        try:
            response = await self._http.get(
                url,
                params=params,
                headers=headers,
                timeout=self._settings.http_timeout,
                follow_redirects=True,
            )
            response.raise_for_status()
            data = response.json()
        except (httpx.TimeoutException, httpx.TransportError) as exc:
            self._logger.warning("openlibrary_unreachable", url=url, error=str(exc))
            raise ProviderUnavailableError(
                message=f"Open Library unreachable for {path}: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc
        except httpx.HTTPStatusError as exc:
            self._logger.warning(
                "openlibrary_http_error", url=url, status=exc.response.status_code
            )
            raise CatalogFetchError(
                message=f"Open Library returned {exc.response.status_code} for {path}",
                provider_name=_PROVIDER_NAME,
            ) from exc
        except ValueError as exc:
            self._logger.warning("openlibrary_bad_json", url=url, error=str(exc))
            raise CatalogFetchError(
                message=f"Open Library sent an undecodable body for {path}",
                provider_name=_PROVIDER_NAME,
            ) from exc

        if not isinstance(data, dict):
            raise CatalogFetchError(
                message=f"Unexpected payload type for {path}: {type(data).__name__}",
                provider_name=_PROVIDER_NAME,
            )
        return data

    @staticmethod
    def _book_from_work(work: dict[str, Any], genre: str) -> BookSummary | None:
        key = work.get("key")
        if not key or not isinstance(key, str):
            return None
        names = [a.get("name", "") for a in work.get("authors") or [] if isinstance(a, dict)]
        cover_id = work.get("cover_id")
        return BookSummary(
            id=normalize_work_id(key),
            title=work.get("title") or "",
            author=", ".join(n for n in names if n),
            type=genre,
            cover_id=cover_id if isinstance(cover_id, int) else None,
        )

    @staticmethod
    def _author_from_doc(doc: dict[str, Any]) -> AuthorSummary | None:
        key = doc.get("key")
        if not key or not isinstance(key, str):
            return None
        work_count = doc.get("work_count")
        return AuthorSummary(
            key=_normalize_author_key(key),
            name=doc.get("name") or "",
            top_work=doc.get("top_work") or None,
            work_count=work_count if isinstance(work_count, int) else 0,
        )

    async def _resolve_author_name(self, author_key: str) -> str | None:
        """Look up an author's display name; ``None`` when the lookup fails."""
        key = _normalize_author_key(author_key)
        if not key:
            return None
        try:
            data = await self._get_json(f"/authors/{quote(key)}.json")
        except (CatalogFetchError, ProviderUnavailableError):
            return None
        name = data.get("name")
        return name if isinstance(name, str) and name else None

    # -- ICatalogProvider implementation ---------------------------------------

    async def get_books_by_genre(
        self, genre: str, limit: int, offset: int
    ) -> CollectionPage[BookSummary]:
        slug = genre.strip().lower().replace(" ", "_")
        data = await self._get_json(
            f"/subjects/{quote(slug)}.json", params={"limit": limit, "offset": offset}
        )

        books: list[BookSummary] = []
        for work in data.get("works") or []:
            if not isinstance(work, dict):
                continue
            book = self._book_from_work(work, genre)
            if book is not None:
                books.append(book)

        total = data.get("work_count")
        self._logger.info(
            "openlibrary_genre_page", genre=genre, offset=offset, count=len(books), total=total
        )
        return CollectionPage[BookSummary](
            items=books, total=total if isinstance(total, int) else len(books)
        )

    async def get_authors_by_subject(
        self, subject: str, limit: int, page: int
    ) -> CollectionPage[AuthorSummary]:
        data = await self._get_json(
            "/search/authors.json", params={"q": subject, "limit": limit, "page": page}
        )

        authors: list[AuthorSummary] = []
        for doc in data.get("docs") or []:
            if not isinstance(doc, dict):
                continue
            author = self._author_from_doc(doc)
            if author is not None:
                authors.append(author)

        total = data.get("numFound", data.get("num_found"))
        self._logger.info(
            "openlibrary_subject_page", subject=subject, page=page, count=len(authors), total=total
        )
        return CollectionPage[AuthorSummary](
            items=authors, total=total if isinstance(total, int) else len(authors)
        )

    async def get_book_details(self, book_id: str) -> BookDetails:
        work_id = normalize_work_id(book_id)
        if not work_id:
            raise CatalogFetchError(message="Empty work id", provider_name=_PROVIDER_NAME)
        data = await self._get_json(f"/works/{quote(work_id)}.json")

        author_keys: list[str] = []
        for entry in data.get("authors") or []:
            if not isinstance(entry, dict):
                continue
            info = entry.get("author")
            if isinstance(info, dict) and isinstance(info.get("key"), str):
                author_keys.append(info["key"])
        names = await asyncio.gather(*(self._resolve_author_name(k) for k in author_keys))

        covers = [c for c in data.get("covers") or [] if isinstance(c, int) and c > 0]
        description = data.get("description")
        if isinstance(description, dict):
            if not isinstance(description.get("value"), str):
                description = None
        elif not isinstance(description, str):
            description = None

        return BookDetails(
            id=work_id,
            title=data.get("title") or "",
            covers=covers or None,
            description=description,
            authors=[AuthorRef(name=n) for n in names if n],
        )
