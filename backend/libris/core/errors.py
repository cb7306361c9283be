"""Error Hierarchy — typed, categorized exceptions for all Libris failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the error envelope consumed by the outer HTTP layer
    - No internal details leaked in user-facing messages
    - ErrorContext.debug_info is for logs and debugging; to_response() omits it

Design Decisions:
    - Single hierarchy with LibrisError base: one handler catches all
    - Validation failures are NOT raised by the validation layer itself;
      FieldValidationError exists for callers that prefer ValidationResult.unwrap()
    - ErrorContext as dataclass: rich observability without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from libris.core.field_errors import FieldError


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: int | None = None
    entity: str | None = None
    entity_id: int | None = None
    debug_info: dict[str, Any] | None = None


class LibrisError(Exception):
    """Base exception for all Libris errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "user_id": self.context.user_id,
                    "entity": self.context.entity,
                    "entity_id": self.context.entity_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class FieldValidationError(LibrisError):
    """One or more payload fields failed a declared rule."""
    def __init__(self, errors: list[FieldError], context: ErrorContext | None = None):
        super().__init__(
            "Invalid request data", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.errors = errors

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = [e.to_dict() for e in self.errors]
        return response


class ResourceNotFoundError(LibrisError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: int, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext(entity=resource_type, entity_id=resource_id)
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class InvalidCredentialsError(LibrisError):
    """Email/password pair (or current password) did not match."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid credentials", "INVALID_CREDENTIALS",
            ErrorCategory.BUSINESS_RULE, ErrorSeverity.WARNING, context, 400,
        )


class InvalidReturnDateError(LibrisError):
    """Return date precedes the borrow date."""
    def __init__(
        self, borrow_date: datetime, return_date: datetime,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Return date {return_date.isoformat()} is before "
            f"borrow date {borrow_date.isoformat()}",
            "INVALID_RETURN_DATE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


# ─── Conflict Errors (409) ──────────────────────────────────────

class ConflictError(LibrisError):
    """A write conflicts with existing state."""
    def __init__(self, message: str, code: str, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class ConstraintViolationError(ConflictError):
    """Unique or foreign-key constraint rejected a write."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Integrity constraint violated during {operation}",
            "CONSTRAINT_VIOLATION", context,
        )
        self.operation = operation


class DuplicateEmailError(ConflictError):
    """Email already belongs to another user."""
    def __init__(self, email: str, context: ErrorContext | None = None):
        super().__init__(
            f"Email '{email}' is already registered", "DUPLICATE_EMAIL", context,
        )
        self.email = email


class ItemUnavailableError(ConflictError):
    """Item already has an open loan."""
    def __init__(self, kind: str, item_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext(entity=kind, entity_id=item_id)
        super().__init__(
            f"{kind} '{item_id}' is already borrowed", "ITEM_UNAVAILABLE", ctx,
        )


class LoanAlreadyReturnedError(ConflictError):
    """Loan was closed before."""
    def __init__(self, kind: str, loan_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext(entity=kind, entity_id=loan_id)
        super().__init__(
            f"{kind} loan '{loan_id}' is already returned", "LOAN_ALREADY_RETURNED", ctx,
        )


class ActiveLoansError(ConflictError):
    """User still holds unreturned items."""
    def __init__(self, user_id: int, open_loans: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext(user_id=user_id)
        super().__init__(
            f"User '{user_id}' has {open_loans} unreturned loan(s)",
            "ACTIVE_LOANS", ctx,
        )
        self.open_loans = open_loans


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(LibrisError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
