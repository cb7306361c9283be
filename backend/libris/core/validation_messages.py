"""Validation Messages — centralized locale-specific text for field errors.

Invariants:
    - All strings are pure data (no IO, no computation beyond formatting)
    - Every ValidationRule has a generic entry for every Locale
    - Field-specific entries override the generic one for that (rule, field)
    - Unknown placeholders are left verbatim, never raise

Design Decisions:
    - Keyed by (rule, field) instead of per-schema text: the same field shares
      its wording across register/update/reset checkers
    - Turkish wording mirrors the messages the library front-end already shows
"""

from enum import Enum

from libris.core.field_errors import ValidationRule


class Locale(str, Enum):
    """Supported message locales."""
    EN = "en"
    TR = "tr"


DEFAULT_LOCALE = Locale.EN


# --- Generic per-rule text ---------------------------------------------------

_GENERIC: dict[ValidationRule, dict[Locale, str]] = {
    ValidationRule.REQUIRED: {
        Locale.EN: "This field is required",
        Locale.TR: "Bu alan zorunludur",
    },
    ValidationRule.INVALID_TYPE: {
        Locale.EN: "Invalid value type",
        Locale.TR: "Geçersiz değer tipi",
    },
    ValidationRule.TOO_SHORT: {
        Locale.EN: "Must be at least {min_length} characters",
        Locale.TR: "En az {min_length} karakter olmalı",
    },
    ValidationRule.TOO_LONG: {
        Locale.EN: "Must be at most {max_length} characters",
        Locale.TR: "En fazla {max_length} karakter olabilir",
    },
    ValidationRule.INVALID_EMAIL: {
        Locale.EN: "Enter a valid email address",
        Locale.TR: "Geçerli bir email adresi girin",
    },
    ValidationRule.PASSWORD_COMPLEXITY: {
        Locale.EN: (
            "Password must contain at least one lowercase letter, "
            "one uppercase letter and one digit"
        ),
        Locale.TR: (
            "Şifre en az bir küçük harf, bir büyük harf ve bir rakam içermelidir"
        ),
    },
    ValidationRule.PASSWORDS_MISMATCH: {
        Locale.EN: "Passwords do not match",
        Locale.TR: "Şifreler eşleşmiyor",
    },
    ValidationRule.INVALID_UUID: {
        Locale.EN: "Invalid token format",
        Locale.TR: "Geçersiz token formatı",
    },
    ValidationRule.INVALID_CHOICE: {
        Locale.EN: "Invalid choice",
        Locale.TR: "Geçersiz seçim",
    },
    ValidationRule.NOT_AN_INTEGER: {
        Locale.EN: "Must be a whole number",
        Locale.TR: "Tam sayı olmalı",
    },
    ValidationRule.OUT_OF_RANGE: {
        Locale.EN: "Value is out of range",
        Locale.TR: "Değer izin verilen aralığın dışında",
    },
    ValidationRule.INVALID: {
        Locale.EN: "Invalid value",
        Locale.TR: "Geçersiz değer",
    },
}


# --- Field-specific overrides ------------------------------------------------

_BY_FIELD: dict[tuple[ValidationRule, str], dict[Locale, str]] = {
    # name
    (ValidationRule.REQUIRED, "name"): {
        Locale.EN: "Name is required",
        Locale.TR: "İsim alanı zorunludur",
    },
    (ValidationRule.TOO_SHORT, "name"): {
        Locale.EN: "Name must be at least 2 characters",
        Locale.TR: "İsim en az 2 karakter olmalı",
    },
    (ValidationRule.TOO_LONG, "name"): {
        Locale.EN: "Name must be at most 100 characters",
        Locale.TR: "İsim en fazla 100 karakter olabilir",
    },
    # email
    (ValidationRule.REQUIRED, "email"): {
        Locale.EN: "Email is required",
        Locale.TR: "Email alanı zorunludur",
    },
    (ValidationRule.TOO_SHORT, "email"): {
        Locale.EN: "Email cannot be empty",
        Locale.TR: "Email boş olamaz",
    },
    # password
    (ValidationRule.REQUIRED, "password"): {
        Locale.EN: "Password is required",
        Locale.TR: "Şifre alanı zorunludur",
    },
    (ValidationRule.TOO_SHORT, "password"): {
        Locale.EN: "Password must be at least 6 characters",
        Locale.TR: "Şifre en az 6 karakter olmalı",
    },
    (ValidationRule.TOO_LONG, "password"): {
        Locale.EN: "Password must be at most 128 characters",
        Locale.TR: "Şifre en fazla 128 karakter olabilir",
    },
    # role
    (ValidationRule.REQUIRED, "role"): {
        Locale.EN: "Role is required",
        Locale.TR: "Rol alanı zorunludur",
    },
    (ValidationRule.INVALID_CHOICE, "role"): {
        Locale.EN: "Invalid role selection",
        Locale.TR: "Geçersiz rol seçimi",
    },
    # currentPassword
    (ValidationRule.REQUIRED, "currentPassword"): {
        Locale.EN: "Current password is required",
        Locale.TR: "Mevcut şifre alanı zorunludur",
    },
    (ValidationRule.TOO_SHORT, "currentPassword"): {
        Locale.EN: "Current password cannot be empty",
        Locale.TR: "Mevcut şifre boş olamaz",
    },
    # newPassword
    (ValidationRule.REQUIRED, "newPassword"): {
        Locale.EN: "New password is required",
        Locale.TR: "Yeni şifre alanı zorunludur",
    },
    (ValidationRule.TOO_SHORT, "newPassword"): {
        Locale.EN: "New password must be at least 6 characters",
        Locale.TR: "Yeni şifre en az 6 karakter olmalı",
    },
    (ValidationRule.TOO_LONG, "newPassword"): {
        Locale.EN: "New password must be at most 128 characters",
        Locale.TR: "Yeni şifre en fazla 128 karakter olabilir",
    },
    (ValidationRule.PASSWORD_COMPLEXITY, "newPassword"): {
        Locale.EN: (
            "New password must contain at least one lowercase letter, "
            "one uppercase letter and one digit"
        ),
        Locale.TR: (
            "Yeni şifre en az bir küçük harf, bir büyük harf ve bir rakam içermelidir"
        ),
    },
    # confirmPassword
    (ValidationRule.REQUIRED, "confirmPassword"): {
        Locale.EN: "Password confirmation is required",
        Locale.TR: "Şifre onayı zorunludur",
    },
    # token
    (ValidationRule.REQUIRED, "token"): {
        Locale.EN: "Token is required",
        Locale.TR: "Token alanı zorunludur",
    },
    (ValidationRule.TOO_SHORT, "token"): {
        Locale.EN: "Token cannot be empty",
        Locale.TR: "Token boş olamaz",
    },
    # query params
    (ValidationRule.OUT_OF_RANGE, "page"): {
        Locale.EN: "Page number must be between 1 and 2147483647",
        Locale.TR: "Sayfa numarası 1 ile 2147483647 arasında olmalı",
    },
    (ValidationRule.OUT_OF_RANGE, "limit"): {
        Locale.EN: "Limit must be between 1 and 100",
        Locale.TR: "Limit 1-100 arasında olmalı",
    },
    (ValidationRule.TOO_SHORT, "search"): {
        Locale.EN: "Search term must be at least 1 character",
        Locale.TR: "Arama terimi en az 1 karakter olmalı",
    },
    # id param
    (ValidationRule.OUT_OF_RANGE, "id"): {
        Locale.EN: "Invalid user ID",
        Locale.TR: "Geçersiz kullanıcı ID'si",
    },
    (ValidationRule.NOT_AN_INTEGER, "id"): {
        Locale.EN: "Invalid user ID",
        Locale.TR: "Geçersiz kullanıcı ID'si",
    },
}


class _KeepMissing(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def get_message(
    rule: ValidationRule,
    field: str | None = None,
    locale: Locale = DEFAULT_LOCALE,
    **ctx: object,
) -> str:
    """Return the message for a failed rule, most specific entry first."""
    table = _BY_FIELD.get((rule, field)) if field else None
    if table is None:
        table = _GENERIC[rule]
    template = table.get(locale) or table[DEFAULT_LOCALE]
    return template.format_map(_KeepMissing(ctx))


def parse_locale(value: str | Locale | None) -> Locale:
    """Map a config/request value to a Locale, falling back to the default."""
    if isinstance(value, Locale):
        return value
    if not value:
        return DEFAULT_LOCALE
    try:
        return Locale(value.strip().lower())
    except ValueError:
        return DEFAULT_LOCALE
