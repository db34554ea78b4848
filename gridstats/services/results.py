"""Tagged results returned by the service layer.

Service functions never let exceptions escape. They return either
``Ok(value)`` or ``Err(ServiceError)``, and the caller branches on the tag
instead of poking at the payload for an "error" key.

Usage:
    result = crud.get_game(session, 7)
    if result.ok:
        game = result.value
    else:
        print(result.error.kind, result.error.message)
"""

import functools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar, Union

from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import (
    GridstatsError,
    IngestionError,
    NoChangesError,
    RecordNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure categories surfaced to API clients."""

    CONNECTION = "connection"  # Store unreachable
    NOT_FOUND = "not_found"  # Entity id absent
    UNCHANGED = "unchanged"  # Update matched a row but changed nothing
    VALIDATION = "validation"  # Missing or malformed request data
    UPSTREAM = "upstream"  # Seed data source unreachable or malformed
    INTERNAL = "internal"  # Anything else


@dataclass(frozen=True)
class ServiceError:
    kind: ErrorKind
    message: str
    details: Any = None

    def to_payload(self) -> dict[str, Any]:
        payload = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    ok = True


@dataclass(frozen=True)
class Err:
    error: ServiceError

    ok = False

    @classmethod
    def of(cls, kind: ErrorKind, message: str, details: Any = None) -> "Err":
        return cls(ServiceError(kind, message, details))


Result = Union[Ok[T], Err]

CONNECTION_FAILED = "Database connection failed"


def error_from_exception(exc: Exception) -> ServiceError:
    """Map an exception raised below the service boundary to a ServiceError."""
    if isinstance(exc, RecordNotFoundError):
        return ServiceError(ErrorKind.NOT_FOUND, exc.message, exc.details)
    if isinstance(exc, NoChangesError):
        return ServiceError(ErrorKind.UNCHANGED, exc.message, exc.details)
    if isinstance(exc, ValidationError):
        return ServiceError(ErrorKind.VALIDATION, exc.message, exc.details)
    if isinstance(exc, IngestionError):
        return ServiceError(ErrorKind.UPSTREAM, exc.message, exc.details)
    if isinstance(exc, GridstatsError):
        return ServiceError(ErrorKind.INTERNAL, exc.message, exc.details)
    if isinstance(exc, OperationalError):
        return ServiceError(ErrorKind.CONNECTION, CONNECTION_FAILED, str(exc.orig))
    if isinstance(exc, SQLAlchemyError):
        return ServiceError(ErrorKind.INTERNAL, f"Database error: {exc}")
    return ServiceError(ErrorKind.INTERNAL, f"Server error: {exc}")


def service_boundary(action: str):
    """Decorator that turns raised exceptions into ``Err`` results.

    The wrapped function's first argument must be the Session; it is rolled
    back before the error result is returned, so a failed multi-statement
    operation leaves nothing half-applied.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(session: Session, *args, **kwargs):
            try:
                return func(session, *args, **kwargs)
            except Exception as exc:
                session.rollback()
                error = error_from_exception(exc)
                if error.kind in (ErrorKind.INTERNAL, ErrorKind.CONNECTION):
                    logger.exception(f"{action} failed")
                else:
                    logger.info(f"{action}: {error.message}")
                return Err(error)

        return wrapper

    return decorator
