"""
db/errors.py
------------
Gateway error taxonomy.

Every database failure surfaces to callers as a GatewayError subclass
tagged with an ErrorKind. "Not found" is never an error: lookups return None.
"""

from enum import Enum

import psycopg2


class ErrorKind(Enum):
    CONSTRAINT = "constraint"
    CONNECTION = "connection"
    MALFORMED = "malformed"


class GatewayError(Exception):
    """Base class for all errors raised by the query gateway."""

    kind: ErrorKind = ErrorKind.MALFORMED

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(message)
        self.operation = operation

    def __str__(self) -> str:
        base = super().__str__()
        return f"{self.operation}: {base}" if self.operation else base


class ConstraintViolationError(GatewayError):
    """A row was rejected by a database constraint (unique, FK, check, not-null)."""

    kind = ErrorKind.CONSTRAINT


class DatabaseConnectionError(GatewayError):
    """The database could not be reached, or the pool is unavailable."""

    kind = ErrorKind.CONNECTION


class MalformedQueryError(GatewayError):
    """The statement or one of its bound values was rejected."""

    kind = ErrorKind.MALFORMED


def translate_error(exc: Exception, operation: str | None = None) -> GatewayError:
    """
    Map a driver (or coercion) exception to the matching GatewayError.

    Args:
        exc: The exception raised while building or running a query.
        operation: Name of the gateway operation, kept for log context.

    Returns:
        A GatewayError instance. The caller raises it ``from exc``.
    """
    if isinstance(exc, GatewayError):
        return exc
    message = str(exc).strip() or exc.__class__.__name__
    if isinstance(exc, psycopg2.IntegrityError):
        return ConstraintViolationError(message, operation)
    if isinstance(exc, (psycopg2.OperationalError, psycopg2.InterfaceError)):
        return DatabaseConnectionError(message, operation)
    return MalformedQueryError(message, operation)
