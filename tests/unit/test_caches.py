"""Unit tests for EntityCache, ImageCache and CollectionCache."""

from __future__ import annotations

from openshelf.models.catalog import AuthorRef, AuthorSummary, BookDetails, BookSummary
from openshelf.store.collection_cache import CollectionCache
from openshelf.store.entity_cache import EntityCache
from openshelf.store.image_cache import ImageCache


def _book(book_id: str) -> BookSummary:
    return BookSummary(id=book_id, title=f"Book {book_id}", author="A", type="fiction")


# ======================================================================
# EntityCache
# ======================================================================


class TestEntityCache:
    def test_get_missing_returns_none(self) -> None:
        assert EntityCache().get_details("nonexistent") is None

    def test_set_and_get(self, sample_details: BookDetails) -> None:
        cache = EntityCache()
        cache.set_details("OL123W", sample_details)
        assert cache.get_details("OL123W") == sample_details

    def test_id_is_stamped_with_key(self, sample_details: BookDetails) -> None:
        cache = EntityCache()
        stored = cache.set_details("OL999W", sample_details)

        assert stored.id == "OL999W"
        assert cache.get_details("OL999W").id == "OL999W"
        assert cache.get_details("OL999W").title == "Test Book"
        # the caller's record is not mutated
        assert sample_details.id == "OL123W"

    def test_record_without_id_is_stamped(self) -> None:
        cache = EntityCache()
        cache.set_details("OL5W", BookDetails(title="No id"))
        assert cache.get_details("OL5W").id == "OL5W"

    def test_repeated_write_is_idempotent(self, sample_details: BookDetails) -> None:
        cache = EntityCache()
        cache.set_details("OL123W", sample_details)
        cache.set_details("OL123W", sample_details)

        assert len(cache) == 1
        assert cache.get_details("OL123W") == sample_details.model_copy(update={"id": "OL123W"})

    def test_overwrite_replaces_value(self) -> None:
        cache = EntityCache()
        cache.set_details("OL1W", BookDetails(title="Old"))
        cache.set_details("OL1W", BookDetails(title="New", authors=[AuthorRef(name="X")]))
        assert cache.get_details("OL1W").title == "New"

    def test_multiple_keys(self) -> None:
        cache = EntityCache()
        cache.set_details("OL123W", BookDetails(title="Book 1", covers=[111]))
        cache.set_details("OL456W", BookDetails(title="Book 2", covers=[222]))

        assert cache.get_details("OL123W").covers == [111]
        assert cache.get_details("OL456W").covers == [222]
        assert "OL123W" in cache


# ======================================================================
# ImageCache
# ======================================================================


class TestImageCache:
    def test_set_and_get(self) -> None:
        cache = ImageCache()
        cache.cache_image("12345", "https://example.com/image.jpg")
        assert cache.get_image_from_cache("12345") == "https://example.com/image.jpg"

    def test_missing_returns_none(self) -> None:
        assert ImageCache().get_image_from_cache("nonexistent") is None

    def test_numeric_and_string_ids_share_entry(self) -> None:
        cache = ImageCache()
        cache.cache_image(111, "https://example.com/1.jpg")
        assert cache.get_image_from_cache("111") == "https://example.com/1.jpg"
        assert len(cache) == 1

    def test_url_is_not_validated(self) -> None:
        cache = ImageCache()
        cache.cache_image("1", "not a url")
        assert cache.get_image_from_cache("1") == "not a url"

    def test_multiple_images(self) -> None:
        cache = ImageCache()
        for image_id in ("111", "222", "333"):
            cache.cache_image(image_id, f"https://example.com/image{image_id}.jpg")

        assert cache.as_dict() == {
            "111": "https://example.com/image111.jpg",
            "222": "https://example.com/image222.jpg",
            "333": "https://example.com/image333.jpg",
        }


# ======================================================================
# CollectionCache
# ======================================================================


class TestCollectionCache:
    def test_empty_partition(self) -> None:
        cache: CollectionCache[BookSummary] = CollectionCache()
        assert cache.items("fiction") == []
        assert cache.total("fiction") == 0
        assert cache.page("fiction") is None
        assert cache.has_more("fiction") is False

    def test_merge_drops_duplicates_from_later_pages(self) -> None:
        cache: CollectionCache[BookSummary] = CollectionCache()
        cache.merge("fiction", [_book("1"), _book("2")], total=10, page=0)
        added = cache.merge("fiction", [_book("2"), _book("3")], total=10, page=1)

        assert added == 1
        assert [b.id for b in cache.items("fiction")] == ["1", "2", "3"]

    def test_first_occurrence_wins(self) -> None:
        cache: CollectionCache[BookSummary] = CollectionCache()
        cache.merge("fiction", [BookSummary(id="1", title="Original")], total=2, page=0)
        cache.merge("fiction", [BookSummary(id="1", title="Shifted copy")], total=2, page=1)

        assert cache.items("fiction")[0].title == "Original"

    def test_duplicates_within_one_page_are_dropped(self) -> None:
        cache: CollectionCache[BookSummary] = CollectionCache()
        cache.merge("fiction", [_book("1"), _book("1")], total=5, page=0)
        assert len(cache.items("fiction")) == 1

    def test_total_and_page_are_overwritten(self) -> None:
        cache: CollectionCache[BookSummary] = CollectionCache()
        cache.merge("fiction", [_book("1")], total=100, page=0)
        cache.merge("fiction", [_book("2")], total=90, page=1)

        assert cache.total("fiction") == 90
        assert cache.page("fiction") == 1

    def test_has_more_is_derived(self) -> None:
        cache: CollectionCache[BookSummary] = CollectionCache()
        cache.merge("fiction", [_book(str(i)) for i in range(9)], total=100, page=0)
        assert cache.has_more("fiction") is True

        cache.merge("fiction", [_book(str(i)) for i in range(9, 100)], total=100, page=1)
        assert len(cache.items("fiction")) == 100
        assert cache.has_more("fiction") is False

    def test_partitions_are_independent(self) -> None:
        cache: CollectionCache[BookSummary] = CollectionCache()
        cache.merge("fiction", [_book("1")], total=1, page=0)
        cache.merge("science", [_book("1")], total=1, page=0)

        assert len(cache.items("fiction")) == 1
        assert len(cache.items("science")) == 1

    def test_items_returns_copy(self) -> None:
        cache: CollectionCache[BookSummary] = CollectionCache()
        cache.merge("fiction", [_book("1")], total=1, page=0)
        cache.items("fiction").append(_book("x"))
        assert len(cache.items("fiction")) == 1

    def test_author_rows_deduplicate_by_key(self) -> None:
        cache: CollectionCache[AuthorSummary] = CollectionCache()
        cache.merge("poetry", [AuthorSummary(key="OL1A", name="A")], total=3, page=1)
        cache.merge(
            "poetry",
            [AuthorSummary(key="OL1A", name="A"), AuthorSummary(key="OL2A", name="B")],
            total=3,
            page=2,
        )
        assert [a.key for a in cache.items("poetry")] == ["OL1A", "OL2A"]
