"""openshelf: cached, paginated browsing of the Open Library catalog."""

__version__ = "0.1.0"
