"""Tests for error classification."""

import sqlite3

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from app.core.errors import (
    ConstraintViolation,
    InternalInconsistencyError,
    TransientStorageError,
    ValidationError,
    storage_error_code,
)
from app.models.customer import Customer
from app.services.error_classifier import (
    ErrorCategory,
    classify_code,
    classify_exception,
)


class FakePgError(Exception):
    """Stands in for a psycopg2 error carrying a SQLSTATE."""

    def __init__(self, message, pgcode):
        super().__init__(message)
        self.pgcode = pgcode


class TestClassifyCode:
    """Tests for the code-to-category mapping."""

    def test_uniqueness_violation_is_conflict(self):
        classified = classify_code("23505")
        assert classified.category == ErrorCategory.DUPLICATE_DATA
        assert classified.status_code == 409
        assert classified.user_fault is True
        assert classified.retryable is True

    def test_foreign_key_violation_is_bad_request(self):
        classified = classify_code("23503")
        assert classified.category == ErrorCategory.MISSING_REFERENCE
        assert classified.status_code == 400
        assert classified.user_fault is True

    def test_not_null_violation_is_incomplete_input(self):
        classified = classify_code("23502")
        assert classified.category == ErrorCategory.INCOMPLETE_INPUT
        assert classified.status_code == 400

    @pytest.mark.parametrize("code", ["42P01", "42703"])
    def test_missing_schema_object_is_operator_fault(self, code):
        classified = classify_code(code)
        assert classified.category == ErrorCategory.INTERNAL_MISCONFIGURATION
        assert classified.status_code == 500
        assert classified.user_fault is False
        assert classified.retryable is False

    def test_connection_exception_is_unavailable(self):
        classified = classify_code("08006")
        assert classified.category == ErrorCategory.STORAGE_UNAVAILABLE
        assert classified.status_code == 503

    @pytest.mark.parametrize("code", [None, "", "P0001"])
    def test_unknown_is_generic_failure(self, code):
        classified = classify_code(code)
        assert classified.category == ErrorCategory.FAILURE
        assert classified.status_code == 500

    def test_code_kept_for_diagnostics(self):
        assert classify_code("23505").to_dict()["code"] == "23505"


class TestStorageErrorCode:

    def test_postgres_code(self):
        exc = IntegrityError("INSERT INTO customers ...", {}, FakePgError("duplicate key", "23505"))
        assert storage_error_code(exc) == "23505"

    @pytest.mark.parametrize("message,code", [
        ("UNIQUE constraint failed: customers.email", "23505"),
        ("FOREIGN KEY constraint failed", "23503"),
        ("NOT NULL constraint failed: orders.store_id", "23502"),
        ("no such table: orders", "42P01"),
    ])
    def test_sqlite_messages(self, message, code):
        assert storage_error_code(sqlite3.IntegrityError(message)) == code

    def test_unknown(self):
        assert storage_error_code(RuntimeError("nothing useful")) is None


class TestClassifyException:
    """Tests for classifying exceptions raised by the core and storage."""

    def test_raw_integrity_error(self):
        exc = IntegrityError(
            "INSERT INTO customers ...", {},
            FakePgError('duplicate key value violates unique constraint "ix_customers_email"', "23505"),
        )
        classified = classify_exception(exc)

        assert classified.category == ErrorCategory.DUPLICATE_DATA
        assert classified.status_code == 409
        assert "ix_customers_email" not in classified.message

    def test_constraint_violation(self):
        classified = classify_exception(ConstraintViolation("FOREIGN KEY constraint failed", code="23503"))
        assert classified.category == ErrorCategory.MISSING_REFERENCE
        assert classified.status_code == 400
        assert "FOREIGN KEY" not in classified.message

    def test_validation_error_keeps_its_message(self):
        classified = classify_exception(ValidationError("Missing required fields: items"))
        assert classified.category == ErrorCategory.INCOMPLETE_INPUT
        assert classified.status_code == 400
        assert classified.message == "Missing required fields: items"

    def test_transient_storage_error(self):
        classified = classify_exception(TransientStorageError("server closed the connection", code="08006"))
        assert classified.category == ErrorCategory.STORAGE_UNAVAILABLE
        assert classified.status_code == 503
        assert classified.retryable is True

    def test_internal_inconsistency_is_generic_failure(self):
        classified = classify_exception(InternalInconsistencyError("Menu item 9 could not be resolved"))
        assert classified.category == ErrorCategory.FAILURE
        assert classified.status_code == 500
        assert "Menu item" not in classified.message

    def test_operational_error_without_code(self):
        exc = OperationalError("SELECT 1", {}, sqlite3.OperationalError("disk I/O error"))
        assert classify_exception(exc).category == ErrorCategory.FAILURE

    def test_unrelated_exception(self):
        classified = classify_exception(ZeroDivisionError("division by zero"))
        assert classified.category == ErrorCategory.FAILURE
        assert classified.code is None


class TestTransactionTranslation:
    """Storage errors raised inside a transaction arrive as core exceptions."""

    def test_duplicate_email_is_conflict(self, database, reference_data):
        with pytest.raises(ConstraintViolation) as exc_info:
            with database.transaction() as db:
                db.add(Customer(first_name="Ada", last_name="Clone", email="ada@example.com"))

        assert exc_info.value.code == "23505"
        classified = classify_exception(exc_info.value)
        assert classified.category == ErrorCategory.DUPLICATE_DATA
        assert classified.status_code == 409

    def test_rollback_leaves_no_rows(self, database, reference_data):
        with pytest.raises(ConstraintViolation):
            with database.transaction() as db:
                db.add(Customer(first_name="New", last_name="Person", email="new@example.com"))
                db.flush()
                db.add(Customer(first_name="Ada", last_name="Clone", email="ada@example.com"))

        with database.session() as db:
            assert db.query(Customer).filter(Customer.email == "new@example.com").count() == 0
