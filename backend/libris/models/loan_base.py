"""Loan Columns — shared shape of the three borrowing tables.

Invariants:
    - One row per checkout-to-return cycle, never per holding
    - return_date IS NULL means the loan is open
    - return_date >= borrow_date is enforced by the loan service, not the schema
    - user_id is ON DELETE RESTRICT ON UPDATE CASCADE

Design Decisions:
    - Mixin with declared_attr: UserBook, UserJournal and UserReport differ only
      in their item column, which each subclass declares itself
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, declared_attr, relationship


class LoanMixin:
    """Columns common to every borrowing record."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    borrow_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    due_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    return_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    @declared_attr
    def user_id(cls) -> Mapped[int]:
        return mapped_column(
            Integer,
            ForeignKey("users.id", ondelete="RESTRICT", onupdate="CASCADE"),
            nullable=False,
        )

    @declared_attr
    def user(cls) -> Mapped["User"]:
        return relationship("User")

    @property
    def is_open(self) -> bool:
        return self.return_date is None
