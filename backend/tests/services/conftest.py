"""Service test fixtures — async in-memory DB with enforced foreign keys.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - PRAGMA foreign_keys=ON (via create_session_factory) so RESTRICT/CASCADE hold
    - Users seeded directly have no audit history and stay deletable

Design Decisions:
    - SQLite in-memory: fast, no external dependency; the FK semantics exercised
      here (RESTRICT, CASCADE, UNIQUE) behave the same on PostgreSQL
    - FakeHasher instead of a real KDF: hashing cost is irrelevant to the rules
"""

import pytest

from libris.core.domain_types import ItemStatus, ReportType, Role
from libris.db.base import Base
from libris.db.session import create_session_factory
from libris.models.book import Book
from libris.models.journal import Journal
from libris.models.research_report import ResearchReport
from libris.models.user import User
import libris.models  # noqa: F401


class FakeHasher:
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, password_hash: str) -> bool:
        return password_hash == f"hashed:{password}"


@pytest.fixture
async def test_engine():
    engine, factory = create_session_factory("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine, factory
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_db(test_engine):
    _, factory = test_engine
    async with factory() as session:
        yield session


@pytest.fixture
def hasher():
    return FakeHasher()


async def _seed(db, row):
    db.add(row)
    await db.commit()
    await db.refresh(row)
    return row


@pytest.fixture
def seed(test_db):
    """Insert an ORM row directly, bypassing services (no audit rows)."""
    async def _insert(row):
        return await _seed(test_db, row)
    return _insert


@pytest.fixture
async def student(seed):
    return await seed(User(
        name="Ada Student", email="ada@example.com",
        password="hashed:Secret1", role=Role.STUDENT,
    ))


@pytest.fixture
async def librarian(seed):
    return await seed(User(
        name="Lib Rarian", email="lib@example.com",
        password="hashed:Secret1", role=Role.LIBRARIAN,
    ))


@pytest.fixture
async def book(seed):
    return await seed(Book(
        title="Dune", author="Frank Herbert", year=1965, category="Fiction",
        status=ItemStatus.AVAILABLE,
    ))


@pytest.fixture
async def journal(seed):
    return await seed(Journal(title="Nature", volume=600, issue=3, year=2024))


@pytest.fixture
async def report(seed):
    return await seed(ResearchReport(
        title="Graph Coloring", author="B. Yilmaz", institution="METU",
        year=2021, type=ReportType.MASTER,
    ))
