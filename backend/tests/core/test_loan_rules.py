"""Loan Rules — verifies pure borrowing rules.

Tests:
    - Return date may equal but never precede the borrow date
    - Item status derived from open-loan count
    - Overdue only while open and past due
    - Target category matching (None = any, case-insensitive otherwise)
    - Naive datetimes treated as UTC
"""

from datetime import datetime, timedelta, timezone

import pytest

from libris.core.domain_types import ItemStatus
from libris.core.errors import InvalidReturnDateError
from libris.core.loan_rules import (
    as_utc, check_return_date, default_due_date, derive_item_status,
    is_overdue, target_counts_book,
)

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


def test_as_utc_attaches_utc_to_naive():
    naive = datetime(2026, 3, 10, 12, 0)
    assert as_utc(naive) == NOW
    assert as_utc(naive).tzinfo is timezone.utc


def test_as_utc_converts_aware():
    plus_three = timezone(timedelta(hours=3))
    assert as_utc(datetime(2026, 3, 10, 15, 0, tzinfo=plus_three)) == NOW


def test_default_due_date_adds_loan_period():
    assert default_due_date(NOW, 14) == NOW + timedelta(days=14)


def test_return_on_borrow_instant_is_allowed():
    check_return_date(NOW, NOW)


def test_return_before_borrow_rejected():
    with pytest.raises(InvalidReturnDateError) as exc_info:
        check_return_date(NOW, NOW - timedelta(seconds=1))
    assert exc_info.value.http_status == 400
    assert exc_info.value.code == "INVALID_RETURN_DATE"


def test_return_check_mixes_naive_and_aware():
    check_return_date(datetime(2026, 3, 10, 12, 0), NOW + timedelta(hours=1))


def test_item_status_follows_open_loans():
    assert derive_item_status(0) is ItemStatus.AVAILABLE
    assert derive_item_status(1) is ItemStatus.BORROWED


def test_open_loan_past_due_is_overdue():
    assert is_overdue(NOW - timedelta(days=1), None, NOW)


def test_open_loan_not_yet_due_is_not_overdue():
    assert not is_overdue(NOW + timedelta(days=1), None, NOW)


def test_returned_loan_is_never_overdue():
    assert not is_overdue(NOW - timedelta(days=30), NOW, NOW)


def test_target_without_category_counts_any_book():
    assert target_counts_book(None, "Fiction")


def test_target_category_match_ignores_case():
    assert target_counts_book("fiction", "Fiction")
    assert not target_counts_book("History", "Fiction")
