"""Catalog Service — intake of lendable items.

Invariants:
    - New items start AVAILABLE (no loan can reference them yet)
    - Every intake is audited against the acting user
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from libris.core.domain_types import AuditAction, ItemStatus, UserId
from libris.infrastructure.database import flush_or_conflict
from libris.models.book import Book
from libris.models.journal import Journal
from libris.models.research_report import ResearchReport
from libris.schemas.catalog import BookCreate, JournalCreate, ResearchReportCreate
from libris.services.audit import record_audit

logger = logging.getLogger(__name__)


class CatalogService:
    """Adds books, journals and research reports."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _add(self, item, actor_id: UserId, operation: str):
        item.status = ItemStatus.AVAILABLE
        self.db.add(item)
        await flush_or_conflict(self.db, operation)
        record_audit(
            self.db, actor_id, AuditAction.CREATE, item.__tablename__,
            details=f"id={item.id}",
        )
        await self.db.commit()
        logger.info(
            f"{type(item).__name__} {item.id} added",
            extra={"user_id": actor_id, "entity": item.__tablename__, "entity_id": item.id},
        )
        return item

    async def add_book(self, data: BookCreate, actor_id: UserId) -> Book:
        return await self._add(Book(**data.model_dump()), actor_id, "add_book")

    async def add_journal(self, data: JournalCreate, actor_id: UserId) -> Journal:
        return await self._add(Journal(**data.model_dump()), actor_id, "add_journal")

    async def add_report(self, data: ResearchReportCreate, actor_id: UserId) -> ResearchReport:
        return await self._add(
            ResearchReport(**data.model_dump()), actor_id, "add_report",
        )
