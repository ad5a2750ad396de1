"""Configuration: environment-driven settings via pydantic-settings."""

from openshelf.config.settings import Settings

__all__ = ["Settings"]
