"""Field Types — reusable Annotated field pipelines for request schemas.

Invariants:
    - Pipeline order per field: normalize (before) -> type + length checks -> predicates (after)
    - Normalizers leave non-string input untouched so the type check reports it
    - Passwords are never trimmed: they are opaque secrets
    - Integer params accept int or a base-10 string; bool, float and null are rejected
    - Positive integers are capped at MAX_DB_INT (32-bit INTEGER columns)
    - Every custom error type is a ValidationRule value

Design Decisions:
    - Field constraints placed first in Annotated so they attach to the str/int
      schema and run before any AfterValidator predicate
    - email-validator for syntax (same library pydantic's EmailStr uses) without
      deliverability checks: validation is pure, no DNS
"""

import re
from typing import Annotated, Any

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from libris.core.domain_types import Role
from libris.core.field_errors import ValidationRule

_INTEGER = re.compile(r"[+-]?[0-9]+")
_UUID = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}",
)
_HAS_LOWER = re.compile(r"[a-z]")
_HAS_UPPER = re.compile(r"[A-Z]")
_HAS_DIGIT = re.compile(r"[0-9]")

MAX_DB_INT = 2**31 - 1


class RequestSchema(BaseModel):
    """Base for request payload schemas: camelCase keys, snake_case attributes."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True,
    )

    def to_payload(self) -> dict:
        """Normalized value in wire shape; re-validating it is a no-op."""
        return self.model_dump(by_alias=True, mode="json", exclude_unset=True)


def error(rule: ValidationRule, message: str) -> PydanticCustomError:
    return PydanticCustomError(rule.value, message)


# --- Normalizers (before) -----------------------------------------------------


def strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def strip_lower(value: Any) -> Any:
    return value.strip().lower() if isinstance(value, str) else value


def parse_int(value: Any) -> Any:
    """String-or-int -> int; anything unparseable fails before defaults apply."""
    if isinstance(value, bool):
        raise error(ValidationRule.INVALID_TYPE, "Value must be a whole number")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if _INTEGER.fullmatch(text):
            return int(text)
        raise error(ValidationRule.NOT_AN_INTEGER, "Value must be a whole number")
    raise error(ValidationRule.INVALID_TYPE, "Value must be a whole number")


def reject_null(value: Any) -> Any:
    """Optional fields may be absent but never explicitly null."""
    if value is None:
        raise error(ValidationRule.INVALID_TYPE, "Value must not be null")
    return value


# --- Predicates (after) -------------------------------------------------------


def check_email(value: str) -> str:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise error(ValidationRule.INVALID_EMAIL, "Enter a valid email address")
    return value


def check_password_complexity(value: str) -> str:
    """Conjunctive predicate: any extra symbols are allowed."""
    if not (
        _HAS_LOWER.search(value)
        and _HAS_UPPER.search(value)
        and _HAS_DIGIT.search(value)
    ):
        raise error(
            ValidationRule.PASSWORD_COMPLEXITY,
            "Password must contain a lowercase letter, an uppercase letter and a digit",
        )
    return value


def check_uuid(value: str) -> str:
    if not _UUID.fullmatch(value):
        raise error(ValidationRule.INVALID_UUID, "Invalid token format")
    return value


# --- Field pipelines ----------------------------------------------------------

PersonName = Annotated[
    str, Field(min_length=2, max_length=100), BeforeValidator(strip),
]
Email = Annotated[
    str, Field(min_length=1), BeforeValidator(strip_lower), AfterValidator(check_email),
]
Password = Annotated[
    str, Field(min_length=6, max_length=128), AfterValidator(check_password_complexity),
]
NonEmptySecret = Annotated[str, Field(min_length=1)]
ResetToken = Annotated[
    str, Field(min_length=1), BeforeValidator(strip), AfterValidator(check_uuid),
]
RoleField = Annotated[Role, BeforeValidator(strip)]
SearchTerm = Annotated[str, Field(min_length=1), BeforeValidator(strip)]
Title = Annotated[
    str, Field(min_length=1, max_length=500), BeforeValidator(strip),
]
ShortText = Annotated[
    str, Field(min_length=1, max_length=255), BeforeValidator(strip),
]
Year = Annotated[int, Field(ge=1, le=9999), BeforeValidator(parse_int)]
PositiveInt = Annotated[int, Field(gt=0, le=MAX_DB_INT), BeforeValidator(parse_int)]
NotNull = BeforeValidator(reject_null)
