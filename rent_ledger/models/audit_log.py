from sqlalchemy import Column, String, DateTime, Integer

from rent_ledger.core.database import Base, utcnow


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    actor_id = Column(String, nullable=False, index=True)
    actor_email = Column(String, nullable=True, index=True)
    actor_role = Column(String, nullable=True)
    action = Column(String, nullable=False, index=True)  # created/updated/deleted/backfilled/repaired
    entity_type = Column(String, nullable=False, index=True)  # payment/tenant
    entity_id = Column(String, nullable=False, index=True)
    tenant_id = Column(String, nullable=True, index=True)
    source = Column(String, nullable=True, index=True)  # api/system
    status = Column(String, nullable=True, index=True)
    description = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
