"""Shared pytest fixtures for the openshelf test suite."""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from openshelf.config.settings import Settings
from openshelf.interfaces.catalog_provider import ICatalogProvider
from openshelf.models.catalog import (
    AuthorRef,
    AuthorSummary,
    BookDetails,
    BookSummary,
    CollectionPage,
)
from openshelf.store.catalog_store import CatalogStore


@pytest.fixture
def settings() -> Settings:
    """Settings with fixed values, independent of the environment."""
    return Settings(
        api_base_url="https://openlibrary.test",
        covers_base_url="https://covers.openlibrary.test",
        cover_size="M",
        page_size=9,
        app_env="test",
    )


@pytest.fixture
def make_book_page() -> Callable[..., CollectionPage[BookSummary]]:
    """Factory building a book page from ids, e.g. ``make_book_page(["1", "2"], total=100)``."""

    def _make(ids: list[str], total: int = 100, genre: str = "fiction") -> CollectionPage[BookSummary]:
        return CollectionPage[BookSummary](
            items=[
                BookSummary(id=i, title=f"Book {i}", author=f"Author {i}", type=genre)
                for i in ids
            ],
            total=total,
        )

    return _make


@pytest.fixture
def make_author_page() -> Callable[..., CollectionPage[AuthorSummary]]:
    def _make(keys: list[str], total: int = 100) -> CollectionPage[AuthorSummary]:
        return CollectionPage[AuthorSummary](
            items=[AuthorSummary(key=k, name=f"Writer {k}") for k in keys],
            total=total,
        )

    return _make


@pytest.fixture
def sample_details() -> BookDetails:
    return BookDetails(
        id="OL123W",
        title="Test Book",
        covers=[12345],
        description="A test book",
        authors=[AuthorRef(name="Test Author")],
    )


@pytest.fixture
def mock_catalog_provider() -> ICatalogProvider:
    """Mock ICatalogProvider; override return_value / side_effect per test."""
    mock = MagicMock(spec=ICatalogProvider)
    mock.get_provider_name.return_value = "mock-catalog"
    mock.get_books_by_genre = AsyncMock(
        return_value=CollectionPage[BookSummary](items=[], total=0)
    )
    mock.get_authors_by_subject = AsyncMock(
        return_value=CollectionPage[AuthorSummary](items=[], total=0)
    )
    mock.get_book_details = AsyncMock()
    return mock


@pytest.fixture
def store(mock_catalog_provider: ICatalogProvider) -> CatalogStore:
    """A fresh store per test."""
    return CatalogStore(provider=mock_catalog_provider)
