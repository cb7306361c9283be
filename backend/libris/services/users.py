"""User Service — the write path for validated auth payloads.

Invariants:
    - Inputs are already-normalized schema values (validation happened upstream)
    - Duplicate emails are pre-screened, but the unique index stays the authority:
      a race surfaces as ConstraintViolationError via flush_or_conflict
    - Passwords are stored only as hasher.hash(...) output
    - delete_user refuses while any loan is open; otherwise ON DELETE RESTRICT
      decides, so any user with history cannot be physically deleted

Design Decisions:
    - Hasher injected (PasswordHasher protocol): algorithm choice lives outside
    - Every state change audited in the same transaction it commits
"""

import logging

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from libris.core.domain_types import AuditAction, UserId
from libris.core.errors import (
    ActiveLoansError, DuplicateEmailError, InvalidCredentialsError,
    ResourceNotFoundError,
)
from libris.core.repository_protocols import PasswordHasher
from libris.infrastructure.database import flush_or_conflict
from libris.models.user import User
from libris.schemas.auth import (
    ChangePassword, LoginUser, RegisterUser, UpdateUser, UserQuery,
)
from libris.services.audit import record_audit
from libris.services.loans import count_open_loans_for_user

logger = logging.getLogger(__name__)


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class UserService:
    """Registration, lookup, profile and password operations."""

    def __init__(self, db: AsyncSession, hasher: PasswordHasher):
        self.db = db
        self.hasher = hasher

    async def _email_taken(self, email: str, exclude_id: int | None = None) -> bool:
        query = select(User.id).where(User.email == email)
        if exclude_id is not None:
            query = query.where(User.id != exclude_id)
        result = await self.db.execute(query)
        return result.first() is not None

    async def register_user(self, data: RegisterUser) -> User:
        """Create a user from a validated registration payload."""
        if await self._email_taken(data.email):
            logger.warning(
                "Registration rejected: duplicate email",
                extra={"error_code": "DUPLICATE_EMAIL", "entity": "users"},
            )
            raise DuplicateEmailError(data.email)
        user = User(
            name=data.name,
            email=data.email,
            password=self.hasher.hash(data.password),
            role=data.role,
        )
        self.db.add(user)
        await flush_or_conflict(self.db, "register_user")
        record_audit(self.db, user.id, AuditAction.REGISTER, "users")
        await self.db.commit()
        logger.info(f"User {user.id} registered", extra={"user_id": user.id})
        return user

    async def authenticate(self, data: LoginUser) -> User:
        result = await self.db.execute(
            select(User).where(User.email == data.email),
        )
        user = result.scalar_one_or_none()
        if user is None or not self.hasher.verify(data.password, user.password):
            raise InvalidCredentialsError()
        return user

    async def get_user(self, user_id: UserId) -> User:
        user = await self.db.get(User, user_id)
        if user is None:
            raise ResourceNotFoundError("User", user_id)
        return user

    async def list_users(self, query: UserQuery) -> tuple[list[User], int]:
        """Filtered, paginated users ordered by id, plus the unpaginated total."""
        filtered = select(User)
        if query.role is not None:
            filtered = filtered.where(User.role == query.role)
        if query.search is not None:
            pattern = _like_pattern(query.search)
            filtered = filtered.where(or_(
                User.name.ilike(pattern, escape="\\"),
                User.email.ilike(pattern, escape="\\"),
            ))

        total = await self.db.scalar(
            select(func.count()).select_from(filtered.subquery()),
        )
        result = await self.db.execute(
            filtered.order_by(User.id).limit(query.limit).offset(query.offset),
        )
        return list(result.scalars().all()), total or 0

    async def update_user(
        self, user_id: UserId, data: UpdateUser, actor_id: UserId | None = None,
    ) -> User:
        """Apply only the fields present in the payload."""
        user = await self.get_user(user_id)
        changes = data.changes()
        if "email" in changes and await self._email_taken(changes["email"], user_id):
            raise DuplicateEmailError(changes["email"])
        for attr, value in changes.items():
            setattr(user, attr, value)
        await flush_or_conflict(self.db, "update_user")
        if changes:
            record_audit(
                self.db, actor_id or user_id, AuditAction.UPDATE, "users",
                details=f"id={user_id} fields={','.join(sorted(changes))}",
            )
        await self.db.commit()
        return user

    async def change_password(self, user_id: UserId, data: ChangePassword) -> None:
        user = await self.get_user(user_id)
        if not self.hasher.verify(data.current_password, user.password):
            logger.warning(
                "Password change rejected: current password mismatch",
                extra={"user_id": user_id, "error_code": "INVALID_CREDENTIALS"},
            )
            raise InvalidCredentialsError()
        user.password = self.hasher.hash(data.new_password)
        record_audit(self.db, user_id, AuditAction.CHANGE_PASSWORD, "users")
        await self.db.commit()

    async def delete_user(self, user_id: UserId, actor_id: UserId | None = None) -> None:
        """Physically delete a user if nothing references them."""
        user = await self.get_user(user_id)
        open_loans = await count_open_loans_for_user(self.db, user_id)
        if open_loans:
            logger.warning(
                f"Delete of user {user_id} rejected: {open_loans} open loan(s)",
                extra={"user_id": user_id, "error_code": "ACTIVE_LOANS"},
            )
            raise ActiveLoansError(user_id, open_loans)
        # register_user audits under the new user, so RESTRICT on audit_logs.user_id
        # blocks deleting any user created through the service.
        if actor_id is not None and actor_id != user_id:
            record_audit(
                self.db, actor_id, AuditAction.DELETE, "users", details=f"id={user_id}",
            )
        await self.db.delete(user)
        await flush_or_conflict(self.db, "delete_user")
        await self.db.commit()
        logger.info(f"User {user_id} deleted", extra={"user_id": user_id})
