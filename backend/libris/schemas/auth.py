"""Auth Schemas — request validation for registration, login, profile and passwords.

Invariants:
    - RegisterUser: name 2-100 (trimmed), email trimmed + lower-cased + valid,
      password 6-128 with lowercase/uppercase/digit, role in Role
    - UpdateUser: every field optional, same per-field rules when present
    - Confirmation mismatch is always reported on confirmPassword, even when
      newPassword itself is also invalid
    - UserQuery: 1 <= page <= MAX_DB_INT (default 1), 1 <= limit <= 100 (default 10);
      defaults apply only when the key is absent
    - UserIdParam: 1 <= id <= MAX_DB_INT, so an accepted id always fits users.id

Design Decisions:
    - Wrap model validator for the confirmation rule: an "after" validator
      would be skipped whenever another field fails, hiding the mismatch
    - AUTH_SCHEMAS registry lets the outer layer pick a checker by name
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field, ValidationError, model_validator
from pydantic_core import InitErrorDetails, PydanticCustomError

from libris.core.domain_types import Role
from libris.core.field_errors import ValidationRule
from libris.schemas.fields import (
    Email, NonEmptySecret, NotNull, Password, PersonName, PositiveInt,
    RequestSchema, ResetToken, RoleField, SearchTerm, error, parse_int,
)


class RegisterUser(RequestSchema):
    """User registration payload."""
    name: PersonName
    email: Email
    password: Password
    role: RoleField


class LoginUser(RequestSchema):
    """User login payload."""
    email: Email
    password: NonEmptySecret


class UpdateUser(RequestSchema):
    """Partial profile update — only provided fields are applied."""
    name: Annotated[PersonName | None, NotNull] = None
    email: Annotated[Email | None, NotNull] = None
    role: Annotated[RoleField | None, NotNull] = None

    def changes(self) -> dict[str, Any]:
        """Fields the client actually sent, by attribute name."""
        return self.model_dump(exclude_unset=True)


# --- Password confirmation ----------------------------------------------------


def _confirmation_mismatch(data: Any) -> InitErrorDetails | None:
    """Mismatch computed on raw input so it does not depend on newPassword passing."""
    if not isinstance(data, dict):
        return None
    new = data.get("newPassword", data.get("new_password"))
    confirm = data.get("confirmPassword", data.get("confirm_password"))
    if not isinstance(new, str) or not isinstance(confirm, str) or new == confirm:
        return None
    return InitErrorDetails(
        type=error(ValidationRule.PASSWORDS_MISMATCH, "Passwords do not match"),
        loc=("confirmPassword",),
        input=confirm,
    )


def _rebuild(exc: ValidationError) -> list[InitErrorDetails]:
    """Carry inner errors over, keeping their type, message and scalar context."""
    details = []
    for e in exc.errors(include_url=False):
        ctx = {
            k: v for k, v in (e.get("ctx") or {}).items()
            if isinstance(v, (str, int, float))
        }
        # msg is already rendered; braces must not be re-interpreted
        template = e["msg"].replace("{", "{{").replace("}", "}}")
        details.append(InitErrorDetails(
            type=PydanticCustomError(e["type"], template, ctx or None),
            loc=e["loc"],
            input=e["input"],
        ))
    return details


class _ConfirmedPassword(RequestSchema):
    new_password: Password
    confirm_password: str

    @model_validator(mode="wrap")
    @classmethod
    def passwords_match(cls, data: Any, handler):
        mismatch = _confirmation_mismatch(data)
        try:
            model = handler(data)
        except ValidationError as exc:
            if mismatch is None:
                raise
            raise ValidationError.from_exception_data(
                exc.title, [*_rebuild(exc), mismatch],
            )
        if mismatch is not None:
            raise ValidationError.from_exception_data(cls.__name__, [mismatch])
        return model


class ChangePassword(_ConfirmedPassword):
    """Authenticated password change."""
    current_password: NonEmptySecret


class PasswordResetRequest(RequestSchema):
    """Request a reset link for an email."""
    email: Email


class PasswordResetConfirm(_ConfirmedPassword):
    """Confirm a reset with the emailed token."""
    token: ResetToken


# --- Query / path params ------------------------------------------------------


class UserQuery(RequestSchema):
    """List/search query parameters (string values from a query string)."""
    page: PositiveInt = 1
    limit: Annotated[int, Field(gt=0, le=100), BeforeValidator(parse_int)] = 10
    role: Annotated[RoleField | None, NotNull] = None
    search: Annotated[SearchTerm | None, NotNull] = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class UserIdParam(RequestSchema):
    """User id path parameter."""
    id: PositiveInt


AUTH_SCHEMAS: dict[str, type[RequestSchema]] = {
    "register": RegisterUser,
    "login": LoginUser,
    "update": UpdateUser,
    "change_password": ChangePassword,
    "password_reset_request": PasswordResetRequest,
    "password_reset_confirm": PasswordResetConfirm,
    "user_query": UserQuery,
    "user_id": UserIdParam,
}

__all__ = [
    "Role", "RegisterUser", "LoginUser", "UpdateUser", "ChangePassword",
    "PasswordResetRequest", "PasswordResetConfirm", "UserQuery", "UserIdParam",
    "AUTH_SCHEMAS",
]
