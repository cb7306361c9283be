"""Async Session Factory — provides async DB sessions for direct usage outside the manager.

Invariants:
    - Uses the same engine construction as DatabaseSessionManager (build_engine)
    - Meant for scripts, migrations, and test fixtures

Design Decisions:
    - Returns the engine too: fixtures need it for metadata create_all/drop_all
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from libris.infrastructure.database import build_engine


def create_session_factory(
    database_url: str,
) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    """Create an engine and async session factory for the given database URL."""
    engine = build_engine(database_url, echo=False)
    return engine, async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
