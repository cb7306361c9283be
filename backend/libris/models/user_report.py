"""UserReport ORM — a research report borrowing record."""

from sqlalchemy import Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from libris.db.base import Base
from libris.models.loan_base import LoanMixin


class UserReport(LoanMixin, Base):
    """One checkout-to-return cycle of a ResearchReport."""
    __tablename__ = "user_reports"

    report_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("research_reports.id", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )

    report: Mapped["ResearchReport"] = relationship("ResearchReport")

    @property
    def item_id(self) -> int:
        return self.report_id
