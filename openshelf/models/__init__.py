"""openshelf domain models.

    - catalog.py -- book/author summaries, book details, description variant, pages
    - state.py   -- read-only partition and store snapshots
"""

from __future__ import annotations

from openshelf.models.catalog import (
    AuthorRef,
    AuthorSummary,
    BookDetails,
    BookSummary,
    CollectionPage,
    Description,
    PlainText,
    StructuredText,
    describe,
)
from openshelf.models.state import PartitionState, StoreSnapshot

__all__ = [
    "AuthorRef",
    "AuthorSummary",
    "BookDetails",
    "BookSummary",
    "CollectionPage",
    "Description",
    "PartitionState",
    "PlainText",
    "StoreSnapshot",
    "StructuredText",
    "describe",
]
