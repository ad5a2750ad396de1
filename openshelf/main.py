"""openshelf wiring.

Builds the httpx client, the Open Library provider, the catalog store and
the browse service from one :class:`Settings` object.  Each call returns a
fresh, independent store; there is no module-level instance.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from openshelf.config.settings import Settings
from openshelf.providers.openlibrary_provider import OpenLibraryProvider
from openshelf.services.browse_service import CatalogBrowser
from openshelf.store.catalog_store import CatalogStore
from openshelf.utils.errors import ConfigurationError
from openshelf.utils.logging import get_logger

_logger = get_logger(__name__)


def load_settings(**overrides: Any) -> Settings:
    """Read settings from the environment, re-raising validation failures as ConfigurationError."""
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        raise ConfigurationError(message=f"Invalid openshelf settings: {exc}") from exc


def build_catalog(
    custom_settings: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """Construct the provider, store and browse service with injected dependencies.

    Parameters
    ----------
    custom_settings:
        Application settings.  Read from the environment when omitted.
    http_client:
        Client shared by provider requests.  A new one is created when
        omitted; the caller owns closing it (``await client.aclose()``).

    Returns
    -------
    dict
        Instances keyed by role: ``settings``, ``http_client``, ``provider``,
        ``store`` and ``browser``.
    """
    s = custom_settings or load_settings()
    client = http_client or httpx.AsyncClient(
        timeout=s.http_timeout,
        headers={"User-Agent": s.user_agent},
    )

    provider = OpenLibraryProvider(http_client=client, settings=s)
    store = CatalogStore(provider=provider)
    browser = CatalogBrowser(store=store, provider=provider, settings=s)

    _logger.debug("catalog_built", api=s.api_base_url, page_size=s.page_size)
    return {
        "settings": s,
        "http_client": client,
        "provider": provider,
        "store": store,
        "browser": browser,
    }
