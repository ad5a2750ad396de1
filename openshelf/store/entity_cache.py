"""Entity cache: work id -> fully resolved :class:`BookDetails`.

Entries never expire.  Writes are idempotent overwrites, and the stored
record's ``id`` is always the key it was written under.
"""

from __future__ import annotations

from openshelf.models.catalog import BookDetails


class EntityCache:
    """Plain dict-backed detail cache."""

    def __init__(self) -> None:
        self._records: dict[str, BookDetails] = {}

    def set_details(self, entity_id: str, record: BookDetails) -> BookDetails:
        """Store *record* under *entity_id*, stamping its id, and return the stored copy."""
        stamped = record if record.id == entity_id else record.model_copy(update={"id": entity_id})
        self._records[entity_id] = stamped
        return stamped

    def get_details(self, entity_id: str) -> BookDetails | None:
        return self._records.get(entity_id)

    def as_dict(self) -> dict[str, BookDetails]:
        return dict(self._records)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._records

    def __len__(self) -> int:
        return len(self._records)
