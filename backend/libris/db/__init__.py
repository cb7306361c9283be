"""Database Infrastructure — SQLAlchemy Base and async session factory.

Invariants:
    - All sessions are async (AsyncSession)
    - Base.metadata is the single source of truth for the schema

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for tests
"""
