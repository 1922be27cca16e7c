from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from rent_ledger.api.deps import get_db
from rent_ledger.core.auth import get_current_user, User
from rent_ledger.core.errors import ValidationError
from rent_ledger.models.audit_log import AuditLog
from rent_ledger.schemas.audit_log import AuditLogOut

router = APIRouter(prefix="/audit-logs", tags=["audit-logs"])


def _parse_bound(value: str, name: str) -> datetime:
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise ValidationError(f"{name} must be an ISO date-time") from e
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


@router.get("", response_model=List[AuditLogOut])
def list_audit_logs(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    start_date: Optional[str] = Query(None, description="ISO date-time"),
    end_date: Optional[str] = Query(None, description="ISO date-time"),
    actor: Optional[str] = Query(None, description="Filter by actor email"),
    entity_type: Optional[str] = Query(None, description="payment|tenant"),
    action: Optional[str] = Query(None),
    tenant_id: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    q = db.query(AuditLog)

    if start_date:
        q = q.filter(AuditLog.created_at >= _parse_bound(start_date, "start_date"))
    if end_date:
        q = q.filter(AuditLog.created_at <= _parse_bound(end_date, "end_date"))
    if actor:
        q = q.filter(AuditLog.actor_email == actor)
    if entity_type:
        q = q.filter(AuditLog.entity_type == entity_type)
    if action:
        q = q.filter(AuditLog.action == action)
    if tenant_id:
        q = q.filter(AuditLog.tenant_id == tenant_id)

    return q.order_by(AuditLog.created_at.desc(), AuditLog.id.desc()).offset(offset).limit(limit).all()
