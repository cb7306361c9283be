"""Audit Trail — append-only AuditLog writes.

Invariants:
    - record_audit only adds; it never flushes or commits (caller's transaction)
    - user_id is the acting user and must exist (FK)
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from libris.core.domain_types import AuditAction, UserId
from libris.models.audit_log import AuditLog

logger = logging.getLogger(__name__)


def record_audit(
    db: AsyncSession,
    user_id: UserId,
    action: AuditAction,
    entity: str,
    details: str | None = None,
) -> AuditLog:
    """Stage one audit row in the caller's transaction."""
    entry = AuditLog(
        user_id=user_id, action=action.value, entity=entity, details=details,
    )
    db.add(entry)
    logger.info(
        f"Audit {action.value} on {entity}",
        extra={"user_id": user_id, "action": action.value, "entity": entity},
    )
    return entry
