"""User ORM — the root identity entity.

Invariants:
    - email is globally unique (unique index users_email_key)
    - password holds an opaque hash produced by an external PasswordHasher
    - role is one of Role (ADMIN, LIBRARIAN, STUDENT)

Design Decisions:
    - No one-to-many relationships declared here: deleting a user must reach
      the database untouched so ON DELETE RESTRICT decides, instead of the ORM
      nulling or cascading child rows first
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from libris.core.domain_types import Role
from libris.db.base import Base
from libris.db.types import RoleType


class User(Base):
    """Registered library user."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    password: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[Role] = mapped_column(
        RoleType, nullable=False,
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
