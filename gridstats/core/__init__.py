"""Shared building blocks used across the gridstats packages."""

from .exceptions import (
    ConfigurationError,
    GridstatsError,
    IngestionError,
    NoChangesError,
    RecordNotFoundError,
    ValidationError,
)

__all__ = [
    "ConfigurationError",
    "GridstatsError",
    "IngestionError",
    "NoChangesError",
    "RecordNotFoundError",
    "ValidationError",
]
