"""Custom exception hierarchy for openshelf.

All application exceptions inherit from :class:`OpenShelfError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "openlibrary") caused the failure.

    OpenShelfError  (base -- catch-all for any openshelf error)
    +-- CatalogFetchError        (a catalog page or record could not be fetched)
    +-- ProviderUnavailableError (external service down / unreachable)
    +-- ConfigurationError       (startup / invalid settings)

The store itself never raises these: fetch failures are recorded in its
shared ``error`` field.  They are raised by providers and propagate through
the browse service's cache-aside lookups.
"""


class OpenShelfError(Exception):
    """Base exception for all openshelf errors.

    ``__str__`` prefixes the provider name in brackets for log output,
    e.g. ``[openlibrary] Subject lookup failed``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


class CatalogFetchError(OpenShelfError):
    """Raised when a collection page or entity record cannot be fetched or decoded."""

    def __init__(
        self,
        message: str = "Catalog fetch failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ProviderUnavailableError(OpenShelfError):
    """Raised when the catalog service is unreachable (connection refused, timeout)."""

    def __init__(
        self,
        message: str = "External service is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(OpenShelfError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
