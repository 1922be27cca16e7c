import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rent_ledger.core.auth import User
from rent_ledger.models.audit_log import AuditLog

logger = logging.getLogger(__name__)


def log_audit(
    db: Session,
    *,
    actor: User,
    action: str,
    entity_type: str,
    entity_id: str,
    tenant_id: Optional[str] = None,
    source: str = "api",
    status: Optional[str] = None,
    description: Optional[str] = None,
) -> Optional[AuditLog]:
    """Record an audit entry. The audited change is already committed, so a
    failure here is logged and does not propagate."""
    log = AuditLog(
        actor_id=actor.id,
        actor_email=actor.email,
        actor_role=actor.role,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        tenant_id=tenant_id,
        source=source,
        status=status,
        description=description,
    )
    db.add(log)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to write audit log for %s %s %s", action, entity_type, entity_id)
        return None
    db.refresh(log)
    return log
