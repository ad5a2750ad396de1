"""Cover URL templating.

Open Library serves covers at ``<host>/b/id/<coverId>-<size>.jpg`` with size
``S``, ``M`` or ``L``.  The image cache stores whatever this returns.
"""

from __future__ import annotations

from openshelf.config.settings import Settings


def cover_url_for(cover_id: int | str, settings: Settings | None = None) -> str:
    cfg = settings or Settings()
    return f"{cfg.covers_base_url}/b/id/{cover_id}-{cfg.cover_size}.jpg"
