"""
Error Classifier

Maps storage error codes and core exceptions onto a small, fixed taxonomy
of user-facing categories, each with an HTTP status class. Pure functions,
no side effects.

User messages are fixed strings; raw storage text is never exposed, only
the storage code for diagnostics.
"""

from typing import Dict, Optional
from dataclasses import dataclass
from enum import Enum

from sqlalchemy.exc import DBAPIError

from app.core.errors import (
    SchemaLabError,
    ValidationError,
    ConstraintViolation,
    TransientStorageError,
    InternalInconsistencyError,
    is_connectivity_code,
    storage_error_code,
)


class ErrorCategory(str, Enum):
    DUPLICATE_DATA = "duplicate_data"
    MISSING_REFERENCE = "missing_reference"
    INCOMPLETE_INPUT = "incomplete_input"
    INTERNAL_MISCONFIGURATION = "internal_misconfiguration"
    STORAGE_UNAVAILABLE = "storage_unavailable"
    FAILURE = "failure"


@dataclass(frozen=True)
class CategoryInfo:
    status_code: int
    message: str
    user_fault: bool
    retryable: bool


CATEGORY_INFO: Dict[ErrorCategory, CategoryInfo] = {
    ErrorCategory.DUPLICATE_DATA: CategoryInfo(
        409, "Duplicate data: a record with the same unique value already exists.", True, True
    ),
    ErrorCategory.MISSING_REFERENCE: CategoryInfo(
        400, "Missing referenced record: the customer, store, employee or menu item does not exist.", True, False
    ),
    ErrorCategory.INCOMPLETE_INPUT: CategoryInfo(
        400, "Incomplete input: a required field is missing.", True, False
    ),
    ErrorCategory.INTERNAL_MISCONFIGURATION: CategoryInfo(
        500, "Internal misconfiguration: the database schema is not set up as expected.", False, False
    ),
    ErrorCategory.STORAGE_UNAVAILABLE: CategoryInfo(
        503, "The database is currently unavailable.", False, True
    ),
    ErrorCategory.FAILURE: CategoryInfo(
        500, "The operation failed.", False, False
    ),
}

# SQLSTATE codes (PostgreSQL naming)
STORAGE_CODE_CATEGORIES: Dict[str, ErrorCategory] = {
    "23505": ErrorCategory.DUPLICATE_DATA,          # unique_violation
    "23503": ErrorCategory.MISSING_REFERENCE,       # foreign_key_violation
    "23502": ErrorCategory.INCOMPLETE_INPUT,        # not_null_violation
    "42P01": ErrorCategory.INTERNAL_MISCONFIGURATION,  # undefined_table
    "42703": ErrorCategory.INTERNAL_MISCONFIGURATION,  # undefined_column
}


@dataclass(frozen=True)
class ClassifiedError:
    """A storage or core failure translated for presentation."""
    category: ErrorCategory
    status_code: int
    message: str
    user_fault: bool
    retryable: bool
    code: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            "category": self.category.value,
            "message": self.message,
            "code": self.code,
            "user_fault": self.user_fault,
            "retryable": self.retryable,
        }


def category_for_code(code: Optional[str]) -> ErrorCategory:
    """Map a SQLSTATE-style code to its category; unknown codes are generic failures."""
    if not code:
        return ErrorCategory.FAILURE
    if code in STORAGE_CODE_CATEGORIES:
        return STORAGE_CODE_CATEGORIES[code]
    if is_connectivity_code(code):
        return ErrorCategory.STORAGE_UNAVAILABLE
    return ErrorCategory.FAILURE


def _build(category: ErrorCategory, code: Optional[str], message: Optional[str] = None) -> ClassifiedError:
    info = CATEGORY_INFO[category]
    return ClassifiedError(
        category=category,
        status_code=info.status_code,
        message=message or info.message,
        user_fault=info.user_fault,
        retryable=info.retryable,
        code=code,
    )


def classify_code(code: Optional[str]) -> ClassifiedError:
    """Classify a bare storage error code."""
    return _build(category_for_code(code), code)


def classify_exception(exc: BaseException) -> ClassifiedError:
    """
    Classify any exception raised by the core or the storage layer.

    Validation messages are written by the core itself and are safe to show;
    every other category uses its fixed message.
    """
    if isinstance(exc, ValidationError):
        return _build(ErrorCategory.INCOMPLETE_INPUT, exc.code, exc.message)
    if isinstance(exc, TransientStorageError):
        return _build(ErrorCategory.STORAGE_UNAVAILABLE, exc.code)
    if isinstance(exc, ConstraintViolation):
        return _build(category_for_code(exc.code), exc.code)
    if isinstance(exc, InternalInconsistencyError):
        return _build(ErrorCategory.FAILURE, exc.code)
    if isinstance(exc, DBAPIError):
        code = storage_error_code(exc)
        if exc.connection_invalidated:
            return _build(ErrorCategory.STORAGE_UNAVAILABLE, code)
        return _build(category_for_code(code), code)
    if isinstance(exc, SchemaLabError):
        return _build(ErrorCategory.FAILURE, exc.code)
    return _build(ErrorCategory.FAILURE, None)
