"""Target Service — annual reading goals.

Invariants:
    - progress starts at 0; only book returns advance it (services/loans.py)
    - A target belongs to an existing user
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from libris.core.domain_types import AuditAction, UserId
from libris.core.errors import ResourceNotFoundError
from libris.infrastructure.database import flush_or_conflict
from libris.models.book_target import BookTarget
from libris.models.user import User
from libris.schemas.catalog import BookTargetCreate
from libris.services.audit import record_audit

logger = logging.getLogger(__name__)


class TargetService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def set_reading_target(self, user_id: UserId, data: BookTargetCreate) -> BookTarget:
        if await self.db.get(User, user_id) is None:
            raise ResourceNotFoundError("User", user_id)
        target = BookTarget(
            user_id=user_id,
            year=data.year,
            category=data.category,
            target=data.target,
            progress=0,
        )
        self.db.add(target)
        await flush_or_conflict(self.db, "set_reading_target")
        record_audit(
            self.db, user_id, AuditAction.SET_TARGET, "book_targets",
            details=f"year={data.year} target={data.target}",
        )
        await self.db.commit()
        logger.info(
            f"Reading target {target.id} set for {data.year}",
            extra={"user_id": user_id, "entity": "book_targets", "entity_id": target.id},
        )
        return target

    async def list_targets(self, user_id: UserId, year: int | None = None) -> list[BookTarget]:
        query = select(BookTarget).where(BookTarget.user_id == user_id)
        if year is not None:
            query = query.where(BookTarget.year == year)
        result = await self.db.execute(query.order_by(BookTarget.year, BookTarget.id))
        return list(result.scalars().all())
