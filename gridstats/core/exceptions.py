"""Custom exceptions for the stats dashboard.

Exceptions are raised inside the store, ingestion and client layers and are
caught at the service boundary, where they become structured error results.
The ranking engine never raises on malformed data, so nothing here is used by it.
"""


class GridstatsError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, details=None):
        super().__init__(message)
        self.message = message
        self.details = details


class RecordNotFoundError(GridstatsError):
    """Raised when a game or player stat id does not exist."""


class ValidationError(GridstatsError):
    """Raised when a request body is missing or malformed."""


class IngestionError(GridstatsError):
    """Raised when the seed data source is unreachable or returns bad data.

    Example:
    ```python
    raise IngestionError("API returned status 500", details=response.text[:200])
    ```
    """


class ConfigurationError(GridstatsError):
    """Raised for unusable configuration values."""


class NoChangesError(GridstatsError):
    """Raised when an update leaves a record exactly as it was."""
