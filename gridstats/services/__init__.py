"""Service layer: CRUD operations and diagnostics returning tagged results."""

from .results import Err, ErrorKind, Ok, Result, ServiceError, service_boundary

__all__ = ["Err", "ErrorKind", "Ok", "Result", "ServiceError", "service_boundary"]
