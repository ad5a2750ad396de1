"""Client-side cache-and-fetch coordination layer.

    - entity_cache.py     -- work id -> BookDetails
    - image_cache.py      -- cover id -> display URL
    - collection_cache.py -- per-partition deduplicated rows, totals, pages
    - coordinator.py      -- per-key in-flight guard and shared error
    - catalog_store.py    -- the facade composing all of the above
"""

from openshelf.store.catalog_store import CatalogStore

__all__ = ["CatalogStore"]
