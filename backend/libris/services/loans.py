"""Loan Service — borrow/return for books, journals and research reports.

Invariants:
    - At most one open loan per item: borrowing an item with an open loan
      raises ItemUnavailableError
    - return_date >= borrow_date (InvalidReturnDateError), and a loan closes once
    - Item status is recomputed from open loans in the same transaction as
      every borrow/return, so the cached column never drifts
    - A book return advances every matching BookTarget by exactly 1

Design Decisions:
    - One service for three lendable kinds: LENDABLES maps LendableKind to the
      item model, loan model and item FK column (tables share LoanMixin)
    - Overdue filtering done on as_utc() values in Python: SQLite drops tzinfo
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from libris.config import get_settings
from libris.core.domain_types import (
    AuditAction, ItemStatus, LendableKind, LoanId, UserId,
)
from libris.core.errors import (
    ItemUnavailableError, LoanAlreadyReturnedError, ResourceNotFoundError,
)
from libris.core.loan_rules import (
    as_utc, check_return_date, default_due_date, derive_item_status,
    is_overdue, target_counts_book,
)
from libris.db.base import Base
from libris.infrastructure.database import flush_or_conflict
from libris.models.book import Book
from libris.models.book_target import BookTarget
from libris.models.journal import Journal
from libris.models.research_report import ResearchReport
from libris.models.user import User
from libris.models.user_book import UserBook
from libris.models.user_journal import UserJournal
from libris.models.user_report import UserReport
from libris.services.audit import record_audit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Lendable:
    item_model: type[Base]
    loan_model: type[Base]
    item_column: str

    def item_fk(self):
        return getattr(self.loan_model, self.item_column)


LENDABLES: dict[LendableKind, Lendable] = {
    LendableKind.BOOK: Lendable(Book, UserBook, "book_id"),
    LendableKind.JOURNAL: Lendable(Journal, UserJournal, "journal_id"),
    LendableKind.REPORT: Lendable(ResearchReport, UserReport, "report_id"),
}


async def count_open_loans_for_user(db: AsyncSession, user_id: UserId) -> int:
    """Open loans of any kind held by one user."""
    total = 0
    for lendable in LENDABLES.values():
        loan = lendable.loan_model
        total += await db.scalar(
            select(func.count()).select_from(loan).where(
                loan.user_id == user_id, loan.return_date.is_(None),
            ),
        ) or 0
    return total


class LoanService:
    """Borrowing records and the item status they drive."""

    def __init__(self, db: AsyncSession, loan_period_days: int | None = None):
        self.db = db
        self.loan_period_days = (
            loan_period_days
            if loan_period_days is not None
            else get_settings().loan_period_days
        )

    async def _open_loans_for_item(self, kind: LendableKind, item_id: int) -> int:
        lendable = LENDABLES[kind]
        loan = lendable.loan_model
        count = await self.db.scalar(
            select(func.count()).select_from(loan).where(
                lendable.item_fk() == item_id, loan.return_date.is_(None),
            ),
        )
        return count or 0

    async def _get_item(self, kind: LendableKind, item_id: int, *, lock: bool = False):
        item_model = LENDABLES[kind].item_model
        query = select(item_model).where(item_model.id == item_id)
        if lock:
            query = query.with_for_update()
        item = (await self.db.execute(query)).scalar_one_or_none()
        if item is None:
            raise ResourceNotFoundError(item_model.__name__, item_id)
        return item

    async def refresh_item_status(self, kind: LendableKind, item_id: int) -> ItemStatus:
        """Recompute the cached status column from open loans."""
        item = await self._get_item(kind, item_id)
        item.status = derive_item_status(
            await self._open_loans_for_item(kind, item_id),
        )
        return item.status

    async def borrow_item(
        self,
        kind: LendableKind,
        user_id: UserId,
        item_id: int,
        due_date: datetime | None = None,
        now: datetime | None = None,
    ):
        """Open a loan; returns the new UserBook/UserJournal/UserReport row."""
        lendable = LENDABLES[kind]
        if await self.db.get(User, user_id) is None:
            raise ResourceNotFoundError("User", user_id)
        await self._get_item(kind, item_id, lock=True)

        if await self._open_loans_for_item(kind, item_id):
            logger.warning(
                f"Borrow rejected: {kind.value} {item_id} already on loan",
                extra={"user_id": user_id, "entity": kind.value,
                       "entity_id": item_id, "error_code": "ITEM_UNAVAILABLE"},
            )
            raise ItemUnavailableError(kind.value, item_id)

        borrowed_at = as_utc(now or datetime.now(timezone.utc))
        loan = lendable.loan_model(
            user_id=user_id,
            borrow_date=borrowed_at,
            due_date=(
                as_utc(due_date) if due_date is not None
                else default_due_date(borrowed_at, self.loan_period_days)
            ),
            **{lendable.item_column: item_id},
        )
        self.db.add(loan)
        await flush_or_conflict(self.db, f"borrow_{kind.value}")
        await self.refresh_item_status(kind, item_id)
        record_audit(
            self.db, user_id, AuditAction.BORROW, lendable.loan_model.__tablename__,
            details=f"{lendable.item_column}={item_id} loan={loan.id}",
        )
        await self.db.commit()
        logger.info(
            f"Loan {loan.id} opened for {kind.value} {item_id}",
            extra={"user_id": user_id, "entity": kind.value, "entity_id": item_id},
        )
        return loan

    async def return_item(
        self,
        kind: LendableKind,
        loan_id: LoanId,
        returned_at: datetime | None = None,
    ):
        """Close an open loan and release the item."""
        lendable = LENDABLES[kind]
        loan = await self.db.get(lendable.loan_model, loan_id)
        if loan is None:
            raise ResourceNotFoundError(lendable.loan_model.__name__, loan_id)
        if not loan.is_open:
            raise LoanAlreadyReturnedError(kind.value, loan_id)

        returned_at = as_utc(returned_at or datetime.now(timezone.utc))
        check_return_date(loan.borrow_date, returned_at)
        loan.return_date = returned_at
        await flush_or_conflict(self.db, f"return_{kind.value}")

        item_id = loan.item_id
        await self.refresh_item_status(kind, item_id)
        if kind is LendableKind.BOOK:
            await self._advance_targets(loan.user_id, item_id, returned_at.year)
        record_audit(
            self.db, loan.user_id, AuditAction.RETURN,
            lendable.loan_model.__tablename__,
            details=f"{lendable.item_column}={item_id} loan={loan.id}",
        )
        await self.db.commit()
        logger.info(
            f"Loan {loan.id} returned",
            extra={"user_id": loan.user_id, "entity": kind.value, "entity_id": item_id},
        )
        return loan

    async def _advance_targets(self, user_id: UserId, book_id: int, year: int) -> int:
        book = await self.db.get(Book, book_id)
        result = await self.db.execute(
            select(BookTarget).where(
                BookTarget.user_id == user_id, BookTarget.year == year,
            ),
        )
        advanced = 0
        for target in result.scalars().all():
            if target_counts_book(target.category, book.category):
                target.progress += 1
                advanced += 1
        return advanced

    async def list_open_loans(self, user_id: UserId) -> dict[LendableKind, list]:
        """Open loans per kind, oldest first."""
        loans = {}
        for kind, lendable in LENDABLES.items():
            loan = lendable.loan_model
            result = await self.db.execute(
                select(loan)
                .where(loan.user_id == user_id, loan.return_date.is_(None))
                .order_by(loan.borrow_date, loan.id),
            )
            loans[kind] = list(result.scalars().all())
        return loans

    async def list_overdue_loans(
        self, kind: LendableKind, now: datetime | None = None,
    ) -> list:
        """Open loans of one kind whose due date has passed."""
        now = as_utc(now or datetime.now(timezone.utc))
        loan = LENDABLES[kind].loan_model
        result = await self.db.execute(
            select(loan).where(loan.return_date.is_(None)).order_by(loan.due_date),
        )
        return [
            row for row in result.scalars().all()
            if is_overdue(row.due_date, row.return_date, now)
        ]
