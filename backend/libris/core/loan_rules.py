"""Loan Rules — pure business rules for borrowing records.

Invariants:
    - return_date >= borrow_date for every closed loan
    - Item status is derived from loan state: BORROWED iff an open loan exists
    - A reading target counts a returned book when user and year match and the
      target category is None or equals the book category
    - Naive datetimes are interpreted as UTC (SQLite drops tzinfo on read)

Design Decisions:
    - Loan state is authoritative, the stored status column is a cache
      refreshed by the loan service in the same transaction
"""

from datetime import datetime, timedelta, timezone

from libris.core.domain_types import ItemStatus
from libris.core.errors import InvalidReturnDateError


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def default_due_date(borrow_date: datetime, loan_period_days: int) -> datetime:
    """Due date when the caller does not supply one."""
    return as_utc(borrow_date) + timedelta(days=loan_period_days)


def check_return_date(borrow_date: datetime, return_date: datetime) -> None:
    """Raise InvalidReturnDateError if the loan would close before it opened."""
    if as_utc(return_date) < as_utc(borrow_date):
        raise InvalidReturnDateError(borrow_date, return_date)


def derive_item_status(open_loans: int) -> ItemStatus:
    return ItemStatus.BORROWED if open_loans > 0 else ItemStatus.AVAILABLE


def is_overdue(
    due_date: datetime, return_date: datetime | None, now: datetime,
) -> bool:
    """True if the loan is still open and past its due date."""
    if return_date is not None:
        return False
    return as_utc(due_date) < as_utc(now)


def target_counts_book(target_category: str | None, book_category: str) -> bool:
    """Whether a returned book advances a target with this category filter."""
    if target_category is None:
        return True
    return target_category.strip().casefold() == book_category.strip().casefold()
