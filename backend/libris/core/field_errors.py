"""Field Errors — the validation error taxonomy and its field-addressed record.

Invariants:
    - ValidationRule is closed: every rejected field maps to exactly one rule
    - FieldError.field is the payload key the client sent (camelCase)
    - message text may change per locale; rule never does

Design Decisions:
    - Taxonomy as str Enum: tests and callers branch on the rule, not the text
"""

from dataclasses import dataclass
from enum import Enum


class ValidationRule(str, Enum):
    """Which declared rule a field failed."""
    REQUIRED = "required"
    INVALID_TYPE = "invalid_type"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    INVALID_EMAIL = "invalid_email"
    PASSWORD_COMPLEXITY = "password_complexity"
    PASSWORDS_MISMATCH = "passwords_mismatch"
    INVALID_UUID = "invalid_uuid"
    INVALID_CHOICE = "invalid_choice"
    NOT_AN_INTEGER = "not_an_integer"
    OUT_OF_RANGE = "out_of_range"
    INVALID = "invalid"


@dataclass(frozen=True)
class FieldError:
    """One rejected field."""
    field: str
    rule: ValidationRule
    message: str

    def to_dict(self) -> dict:
        return {
            "field": self.field,
            "code": self.rule.value,
            "message": self.message,
        }
