"""Validation Runner — payload -> ValidationResult, never raising for bad input.

Invariants:
    - validate() returns ok XOR errors; expected rule violations never raise
    - Every pydantic error becomes exactly one FieldError addressed by payload key
    - Errors on the payload itself (not a mapping) are addressed to "payload"
    - Passing something that is not a RequestSchema class raises TypeError
      (misconfiguration aborts, bad input does not)

Design Decisions:
    - Taxonomy mapped from pydantic error types: built-in length/range/type
      errors and our PydanticCustomError types collapse onto ValidationRule
    - Messages rendered here, not in validators: one place picks the locale
    - Default locale is module state set once by bootstrap (configure_locale);
      validate() itself never reads settings or the environment
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from libris.core.errors import FieldValidationError
from libris.core.field_errors import FieldError, ValidationRule
from libris.core.validation_messages import (
    DEFAULT_LOCALE, Locale, get_message, parse_locale,
)
from libris.schemas.fields import RequestSchema

SchemaT = TypeVar("SchemaT", bound=RequestSchema)

PAYLOAD_FIELD = "payload"

_default_locale: Locale = DEFAULT_LOCALE

_TYPE_TO_RULE: dict[str, ValidationRule] = {
    "missing": ValidationRule.REQUIRED,
    "string_type": ValidationRule.INVALID_TYPE,
    "int_type": ValidationRule.INVALID_TYPE,
    "model_type": ValidationRule.INVALID_TYPE,
    "model_attributes_type": ValidationRule.INVALID_TYPE,
    "dict_type": ValidationRule.INVALID_TYPE,
    "string_too_short": ValidationRule.TOO_SHORT,
    "string_too_long": ValidationRule.TOO_LONG,
    "enum": ValidationRule.INVALID_CHOICE,
    "literal_error": ValidationRule.INVALID_CHOICE,
    "greater_than": ValidationRule.OUT_OF_RANGE,
    "greater_than_equal": ValidationRule.OUT_OF_RANGE,
    "less_than": ValidationRule.OUT_OF_RANGE,
    "less_than_equal": ValidationRule.OUT_OF_RANGE,
    "int_parsing": ValidationRule.NOT_AN_INTEGER,
    "int_from_float": ValidationRule.NOT_AN_INTEGER,
}


@dataclass(frozen=True)
class ValidationResult(Generic[SchemaT]):
    """Discriminated result of one checker call."""
    value: SchemaT | None = None
    errors: tuple[FieldError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> SchemaT:
        """Return the value or raise FieldValidationError for callers that prefer exceptions."""
        if self.errors:
            raise FieldValidationError(list(self.errors))
        return self.value

    def error_for(self, field: str) -> FieldError | None:
        return next((e for e in self.errors if e.field == field), None)


def rule_for(error_type: str) -> ValidationRule:
    if error_type in _TYPE_TO_RULE:
        return _TYPE_TO_RULE[error_type]
    try:
        return ValidationRule(error_type)
    except ValueError:
        return ValidationRule.INVALID


def to_field_errors(exc: ValidationError, locale: Locale) -> list[FieldError]:
    """Flatten a pydantic ValidationError into field-addressed errors."""
    errors = []
    for e in exc.errors(include_url=False):
        field = ".".join(str(part) for part in e["loc"]) or PAYLOAD_FIELD
        rule = rule_for(e["type"])
        ctx = {str(k): v for k, v in (e.get("ctx") or {}).items()}
        errors.append(FieldError(
            field=field, rule=rule,
            message=get_message(rule, field, locale, **ctx),
        ))
    return errors


def configure_locale(locale: Locale | str | None) -> Locale:
    """Set the locale used when validate() is called without one."""
    global _default_locale
    _default_locale = parse_locale(locale)
    return _default_locale


def validate(
    schema: type[SchemaT], payload: Any, locale: Locale | str | None = None,
) -> ValidationResult[SchemaT]:
    """Run one checker over a loosely-typed payload."""
    if not (isinstance(schema, type) and issubclass(schema, RequestSchema)):
        raise TypeError(f"{schema!r} is not a request schema")
    try:
        value = schema.model_validate(payload)
    except ValidationError as exc:
        resolved = parse_locale(locale) if locale is not None else _default_locale
        return ValidationResult(errors=tuple(to_field_errors(exc, resolved)))
    return ValidationResult(value=value)
