"""ResearchReport ORM — a lendable thesis or dissertation.

Invariants:
    - type is one of ReportType (PHD, MASTER, BACHELOR)
    - supervisor is optional
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from libris.core.domain_types import ItemStatus, ReportType
from libris.db.base import Base
from libris.db.types import ItemStatusType, ReportTypeType


class ResearchReport(Base):
    """Research report entity."""
    __tablename__ = "research_reports"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False)
    supervisor: Mapped[str | None] = mapped_column(String(255), nullable=True)
    institution: Mapped[str] = mapped_column(String(255), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    type: Mapped[ReportType] = mapped_column(
        ReportTypeType, nullable=False,
    )
    status: Mapped[ItemStatus] = mapped_column(
        ItemStatusType,
        nullable=False,
        default=ItemStatus.AVAILABLE,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
