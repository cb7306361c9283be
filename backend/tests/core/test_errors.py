"""Error Hierarchy — verifies codes, statuses and response envelopes."""

from libris.core.errors import (
    ActiveLoansError, ConflictError, ConstraintViolationError, DatabaseError,
    DuplicateEmailError, ErrorCategory, FieldValidationError, ItemUnavailableError,
    LibrisError, LoanAlreadyReturnedError, ResourceNotFoundError,
)
from libris.core.field_errors import FieldError, ValidationRule


def test_field_validation_error_lists_details():
    err = FieldValidationError([
        FieldError("email", ValidationRule.INVALID_EMAIL, "Enter a valid email address"),
    ])
    body = err.to_response()["error"]
    assert err.http_status == 400
    assert body["code"] == "VALIDATION_ERROR"
    assert body["category"] == "validation"
    assert body["details"] == [{
        "field": "email", "code": "invalid_email",
        "message": "Enter a valid email address",
    }]


def test_not_found_carries_entity_context():
    err = ResourceNotFoundError("User", 42)
    body = err.to_response()["error"]
    assert err.http_status == 404
    assert body["context"]["entity"] == "User"
    assert body["context"]["entity_id"] == 42


def test_conflicts_are_409():
    for err in (
        ConstraintViolationError("commit"),
        DuplicateEmailError("a@b.com"),
        ItemUnavailableError("book", 1),
        LoanAlreadyReturnedError("book", 1),
        ActiveLoansError(1, 2),
    ):
        assert isinstance(err, ConflictError)
        assert isinstance(err, LibrisError)
        assert err.http_status == 409
        assert err.category is ErrorCategory.CONFLICT


def test_active_loans_counts_open_loans():
    err = ActiveLoansError(7, 2)
    assert err.open_loans == 2
    assert err.context.user_id == 7


def test_database_error_is_503():
    err = DatabaseError("boom", "query")
    assert err.http_status == 503
    assert err.message == "Database query failed: boom"
