"""Image URL cache: cover id -> display URL.

Keyed by the stringified numeric cover id, not by the URL, so one source
image referenced by several works resolves to a single entry.  The cache
does not build or validate URLs.
"""

from __future__ import annotations


class ImageCache:
    def __init__(self) -> None:
        self._urls: dict[str, str] = {}

    def cache_image(self, image_id: str | int, url: str) -> None:
        self._urls[str(image_id)] = url

    def get_image_from_cache(self, image_id: str | int) -> str | None:
        return self._urls.get(str(image_id))

    def as_dict(self) -> dict[str, str]:
        return dict(self._urls)

    def __len__(self) -> int:
        return len(self._urls)
