"""Application settings loaded from environment variables via pydantic-settings.

Values are read, in priority order, from:

  1. Environment variables prefixed ``OPENSHELF_`` (e.g. ``OPENSHELF_PAGE_SIZE=12``)
  2. A ``.env`` file in the working directory
  3. The defaults below
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_COVER_SIZES = {"S", "M", "L"}


class Settings(BaseSettings):
    """openshelf settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(
        env_prefix="OPENSHELF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Open Library ===
    api_base_url: str = "https://openlibrary.org"
    covers_base_url: str = "https://covers.openlibrary.org"
    cover_size: str = "M"  # S, M or L suffix in the covers URL template
    user_agent: str = "openshelf/0.1.0"
    http_timeout: float = 10.0  # seconds, applied to every provider request

    # === Browsing ===
    page_size: int = 9  # items requested per page by the browse service

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"

    @field_validator("cover_size")
    @classmethod
    def _check_cover_size(cls, value: str) -> str:
        size = value.upper()
        if size not in _COVER_SIZES:
            raise ValueError(f"cover_size must be one of {sorted(_COVER_SIZES)}, got {value!r}")
        return size

    @field_validator("page_size")
    @classmethod
    def _check_page_size(cls, value: int) -> int:
        if value < 1:
            raise ValueError("page_size must be at least 1")
        return value

    @field_validator("api_base_url", "covers_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")
