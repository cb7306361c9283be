"""UserJournal ORM — a journal borrowing record."""

from sqlalchemy import Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from libris.db.base import Base
from libris.models.loan_base import LoanMixin


class UserJournal(LoanMixin, Base):
    """One checkout-to-return cycle of a Journal."""
    __tablename__ = "user_journals"

    journal_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("journals.id", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )

    journal: Mapped["Journal"] = relationship("Journal")

    @property
    def item_id(self) -> int:
        return self.journal_id
