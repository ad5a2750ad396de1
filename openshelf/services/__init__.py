"""Presentation-side services built on the catalog store."""
