"""Journal ORM — a lendable journal issue."""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from libris.core.domain_types import ItemStatus
from libris.db.base import Base
from libris.db.types import ItemStatusType


class Journal(Base):
    """Journal entity — one issue of one volume."""
    __tablename__ = "journals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    volume: Mapped[int] = mapped_column(Integer, nullable=False)
    issue: Mapped[int] = mapped_column(Integer, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    issn: Mapped[str | None] = mapped_column(String(20), nullable=True)
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
