"""UserBook ORM — a book borrowing record."""

from sqlalchemy import Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from libris.db.base import Base
from libris.models.loan_base import LoanMixin


class UserBook(LoanMixin, Base):
    """One checkout-to-return cycle of a Book."""
    __tablename__ = "user_books"

    book_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("books.id", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )

    book: Mapped["Book"] = relationship("Book")

    @property
    def item_id(self) -> int:
        return self.book_id
