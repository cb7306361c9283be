"""Book ORM — a lendable book.

Invariants:
    - status is a cache of "an open UserBook row exists"
    - isbn is optional and not unique (multiple copies share an ISBN)
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from libris.core.domain_types import ItemStatus
from libris.db.base import Base
from libris.db.types import ItemStatusType


class Book(Base):
    """Book entity — one physical copy."""
    __tablename__ = "books"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    isbn: Mapped[str | None] = mapped_column(String(20), nullable=True)
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
