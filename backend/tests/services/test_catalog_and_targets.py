"""Catalog and Target services — verifies intake and reading-goal creation."""

import pytest
from sqlalchemy import select

from libris.core.domain_types import AuditAction, ItemStatus, ReportType
from libris.core.errors import ResourceNotFoundError
from libris.models.audit_log import AuditLog
from libris.schemas.catalog import (
    BookCreate, BookTargetCreate, JournalCreate, ResearchReportCreate,
)
from libris.schemas.validation import validate
from libris.services.catalog import CatalogService
from libris.services.targets import TargetService


async def test_add_book_starts_available_and_is_audited(test_db, librarian):
    data = validate(BookCreate, {
        "title": " Solaris ", "author": "Stanislaw Lem", "year": "1961",
        "category": "Fiction", "isbn": " 978-0156027601 ",
    }).unwrap()

    book = await CatalogService(test_db).add_book(data, actor_id=librarian.id)

    assert book.id is not None
    assert book.title == "Solaris"
    assert book.isbn == "978-0156027601"
    assert book.status == ItemStatus.AVAILABLE
    audit = (await test_db.execute(
        select(AuditLog).where(AuditLog.user_id == librarian.id),
    )).scalar_one()
    assert audit.action == AuditAction.CREATE.value
    assert audit.entity == "books"
    assert audit.details == f"id={book.id}"


async def test_add_journal_and_report(test_db, librarian):
    service = CatalogService(test_db)
    journal = await service.add_journal(
        JournalCreate(title="Science", volume=12, issue=4, year=2023),
        actor_id=librarian.id,
    )
    report = await service.add_report(
        ResearchReportCreate(
            title="Thesis", author="C. Demir", institution="ITU",
            year=2020, type="BACHELOR",
        ),
        actor_id=librarian.id,
    )
    assert journal.status == ItemStatus.AVAILABLE
    assert report.type == ReportType.BACHELOR
    assert report.supervisor is None


async def test_set_reading_target(test_db, student):
    data = validate(BookTargetCreate, {"year": "2026", "target": "12", "category": " Fiction "}).unwrap()
    service = TargetService(test_db)

    target = await service.set_reading_target(student.id, data)

    assert target.progress == 0
    assert target.category == "Fiction"
    assert [t.id for t in await service.list_targets(student.id, year=2026)] == [target.id]
    assert await service.list_targets(student.id, year=2025) == []


async def test_target_for_unknown_user(test_db):
    with pytest.raises(ResourceNotFoundError):
        await TargetService(test_db).set_reading_target(
            999, BookTargetCreate(year=2026, target=3),
        )
