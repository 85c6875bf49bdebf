"""
Exceptions raised by the simulation core.

Storage failures are translated into these types at the transaction
boundary, after rollback, so callers never handle raw driver errors.
"""

from typing import Optional


class SchemaLabError(Exception):
    """Base class for all errors raised by the simulation core."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class ValidationError(SchemaLabError):
    """Caller-supplied input is incomplete or malformed. Never reaches storage."""


class ConstraintViolation(SchemaLabError):
    """Uniqueness, foreign-key or not-null failure reported by storage."""


class TransientStorageError(SchemaLabError):
    """Connectivity to the storage backend was lost."""


class InternalInconsistencyError(SchemaLabError):
    """Unexpected state, e.g. a referenced menu item vanished mid-transaction."""


# SQLite reports constraint failures by message only; map them onto the
# SQLSTATE codes PostgreSQL uses so classification deals in one vocabulary.
SQLITE_MESSAGE_CODES = (
    ("UNIQUE constraint failed", "23505"),
    ("FOREIGN KEY constraint failed", "23503"),
    ("NOT NULL constraint failed", "23502"),
    ("no such table", "42P01"),
    ("no such column", "42703"),
    ("unable to open database", "08006"),
)


def storage_error_code(exc: BaseException) -> Optional[str]:
    """
    Extract the SQLSTATE-style code from a storage exception.

    Accepts either a SQLAlchemy ``DBAPIError`` (the driver error is on
    ``.orig``) or a raw driver exception. Returns None when no code can be
    determined.
    """
    orig = getattr(exc, "orig", None) or exc

    # psycopg2 exposes pgcode, psycopg 3 exposes sqlstate
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code:
        return str(code)

    message = str(orig)
    for fragment, mapped in SQLITE_MESSAGE_CODES:
        if fragment in message:
            return mapped
    return None


def is_connectivity_code(code: Optional[str]) -> bool:
    """SQLSTATE class 08 covers connection exceptions."""
    return bool(code) and code.startswith("08")
