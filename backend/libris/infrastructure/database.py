"""Database Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - IntegrityError is always surfaced as ConstraintViolationError (409), never raw
    - Other SQLAlchemy exceptions mapped to DatabaseError (core/errors.py)
    - SQLite connections run with PRAGMA foreign_keys=ON so RESTRICT/CASCADE hold

Design Decisions:
    - Singleton db_manager initialized by bootstrap (no global import side effects)
    - expire_on_commit=False: prevents lazy-load issues in async context
    - flush_or_conflict() for services: they run on a caller-owned session
      and must translate constraint failures at write time
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)

from libris.core.errors import ConstraintViolationError, DatabaseError, ErrorContext

logger = logging.getLogger(__name__)


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Turn on FK enforcement for every new SQLite connection."""

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(database_url: str, **kwargs) -> AsyncEngine:
    """Create an async engine; SQLite gets FK enforcement and no pool sizing."""
    if make_url(database_url).get_backend_name() == "sqlite":
        kwargs.pop("pool_size", None)
        kwargs.pop("max_overflow", None)
        kwargs.pop("pool_recycle", None)
        engine = create_async_engine(database_url, **kwargs)
        enable_sqlite_foreign_keys(engine)
        return engine
    return create_async_engine(database_url, **kwargs)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = build_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}")
            raise ConstraintViolationError("commit")
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}")
            raise DatabaseError("Connection or operational error", "execute")
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}")
            raise DatabaseError("Database driver error", "query")
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise DatabaseError("Database operation failed", "unknown")
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


async def flush_or_conflict(db: AsyncSession, operation: str) -> None:
    """Flush pending writes; a constraint failure rolls back and raises 409."""
    try:
        await db.flush()
    except IntegrityError as e:
        await db.rollback()
        logger.warning(
            f"Constraint violation during {operation}: {e.orig}",
            extra={"error_code": "CONSTRAINT_VIOLATION", "action": operation},
        )
        raise ConstraintViolationError(
            operation, ErrorContext(debug_info={"driver_error": str(e.orig)}),
        ) from e


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency-injection friendly session provider."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
