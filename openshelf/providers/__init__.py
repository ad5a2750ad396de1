"""Catalog providers.

OpenLibraryProvider talks to the public Open Library JSON API over an
injected ``httpx.AsyncClient``.  Swap in another ICatalogProvider to point
the store at a different backend without touching the caches.
"""

from openshelf.providers.openlibrary_provider import OpenLibraryProvider

__all__ = ["OpenLibraryProvider"]
