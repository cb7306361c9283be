"""Libris bootstrap — process-level setup for embedding the library core.

Invariants:
    - Logging configured before the database so engine startup is captured
    - db_manager singleton initialized exactly from Settings (no import side effects)
    - Validation default locale resolved here once; checkers never read settings

Design Decisions:
    - Plain bootstrap()/shutdown() pair instead of a web lifespan: the transport
      layer is left to the embedding application
"""

import logging

from libris.config import Settings, get_settings
from libris.infrastructure.database import DatabaseSessionManager, init_db
from libris.infrastructure.observability import setup_logging
from libris.schemas.validation import configure_locale

logger = logging.getLogger(__name__)


def bootstrap(settings: Settings | None = None) -> DatabaseSessionManager:
    """Configure logging, the validation locale and the database session manager."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)
    configure_locale(settings.validation_locale)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Libris started")
    return manager


async def shutdown(manager: DatabaseSessionManager) -> None:
    logger.info("Libris shutting down")
    await manager.dispose()
