"""Unit tests for settings loading and the build_catalog factory."""

from __future__ import annotations

from unittest.mock import AsyncMock

import httpx
import pytest

from openshelf.config.settings import Settings
from openshelf.main import build_catalog, load_settings
from openshelf.providers.openlibrary_provider import OpenLibraryProvider
from openshelf.services.browse_service import CatalogBrowser
from openshelf.store.catalog_store import CatalogStore
from openshelf.utils.errors import ConfigurationError


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)
        assert settings.api_base_url == "https://openlibrary.org"
        assert settings.covers_base_url == "https://covers.openlibrary.org"
        assert settings.cover_size == "M"
        assert settings.page_size == 9

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OPENSHELF_PAGE_SIZE", "12")
        monkeypatch.setenv("OPENSHELF_API_BASE_URL", "https://mirror.example/")
        settings = Settings(_env_file=None)
        assert settings.page_size == 12
        assert settings.api_base_url == "https://mirror.example"

    def test_load_settings_wraps_validation_errors(self) -> None:
        with pytest.raises(ConfigurationError):
            load_settings(page_size=0)
        with pytest.raises(ConfigurationError):
            load_settings(cover_size="XL")


class TestBuildCatalog:
    def test_wires_components(self, settings: Settings) -> None:
        client = AsyncMock(spec=httpx.AsyncClient)
        components = build_catalog(settings, http_client=client)

        assert components["settings"] is settings
        assert components["http_client"] is client
        assert isinstance(components["provider"], OpenLibraryProvider)
        assert isinstance(components["store"], CatalogStore)
        assert isinstance(components["browser"], CatalogBrowser)
        assert components["browser"].store is components["store"]

    @pytest.mark.asyncio
    async def test_creates_client_when_missing(self, settings: Settings) -> None:
        components = build_catalog(settings)
        try:
            assert isinstance(components["http_client"], httpx.AsyncClient)
        finally:
            await components["http_client"].aclose()

    def test_each_build_has_its_own_store(self, settings: Settings) -> None:
        client = AsyncMock(spec=httpx.AsyncClient)
        first = build_catalog(settings, http_client=client)
        second = build_catalog(settings, http_client=client)
        assert first["store"] is not second["store"]
