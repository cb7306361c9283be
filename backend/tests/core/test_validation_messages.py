"""Validation Messages — verifies lookup order and locale fallback.

Tests:
    - Every rule has a generic message in every locale
    - Field-specific text overrides the generic one
    - Placeholders render from ctx, unknown ones stay verbatim
    - parse_locale falls back to English
"""

import pytest

from libris.core.field_errors import ValidationRule
from libris.core.validation_messages import (
    DEFAULT_LOCALE, Locale, get_message, parse_locale,
)


@pytest.mark.parametrize("rule", list(ValidationRule))
@pytest.mark.parametrize("locale", list(Locale))
def test_every_rule_has_generic_text(rule, locale):
    assert get_message(rule, None, locale)


def test_field_override_wins():
    assert get_message(ValidationRule.TOO_SHORT, "name") == (
        "Name must be at least 2 characters"
    )


def test_turkish_field_override():
    msg = get_message(ValidationRule.INVALID_CHOICE, "role", Locale.TR)
    assert msg == "Geçersiz rol seçimi"


def test_unknown_field_uses_generic_with_ctx():
    msg = get_message(ValidationRule.TOO_LONG, "title", max_length=500)
    assert msg == "Must be at most 500 characters"


def test_missing_placeholder_left_verbatim():
    assert "{min_length}" in get_message(ValidationRule.TOO_SHORT, "title")


def test_parse_locale():
    assert parse_locale("TR") is Locale.TR
    assert parse_locale(" en ") is Locale.EN
    assert parse_locale("de") is DEFAULT_LOCALE
    assert parse_locale(None) is DEFAULT_LOCALE
    assert parse_locale(Locale.TR) is Locale.TR
