"""Tenant records: lookup, CRUD and the rent update used by the ledger."""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import uuid4

from sqlalchemy.orm import Session

from rent_ledger.core.database import commit
from rent_ledger.core.errors import ConflictError, NotFoundError
from rent_ledger.models.payment import PaymentRecord
from rent_ledger.models.tenant import Tenant

logger = logging.getLogger(__name__)


class TenantDirectory:
    """Tenant store bound to one session."""

    def __init__(self, db: Session):
        self.db = db

    def get_tenant(self, tenant_id: Optional[str]) -> Optional[Tenant]:
        if not tenant_id:
            return None
        return self.db.query(Tenant).filter(Tenant.id == tenant_id).first()

    def require_tenant(self, tenant_id: Optional[str]) -> Tenant:
        tenant = self.get_tenant(tenant_id)
        if tenant is None:
            raise NotFoundError(f"Tenant not found: {tenant_id}")
        return tenant

    def set_rent(self, tenant_id: str, rent: Decimal) -> Tenant:
        """Set the standing rent and mark it confirmed.

        Raises:
            NotFoundError: Unknown tenant
            StoreError: The update could not be committed
        """
        tenant = self.require_tenant(tenant_id)
        old_rent = tenant.rent
        tenant.rent = rent
        tenant.rent_confirmed = True
        commit(self.db, f"set rent for tenant {tenant_id}")
        self.db.refresh(tenant)
        logger.info("Tenant %s rent changed: %s -> %s", tenant_id, old_rent, rent)
        return tenant

    def list_tenants(self) -> List[Tenant]:
        return self.db.query(Tenant).order_by(Tenant.room, Tenant.name).all()

    def create_tenant(self, data: Dict[str, Any]) -> Tenant:
        tenant = Tenant(id=uuid4().hex, **data)
        self.db.add(tenant)
        commit(self.db, "create tenant")
        self.db.refresh(tenant)
        logger.info("Created tenant %s (%s, room %s)", tenant.id, tenant.name, tenant.room)
        return tenant

    def update_tenant(self, tenant_id: str, changes: Dict[str, Any]) -> Tenant:
        """Apply profile changes; an explicit rent becomes the confirmed rent."""
        tenant = self.require_tenant(tenant_id)
        for k, v in changes.items():
            setattr(tenant, k, v)
        if "rent" in changes:
            tenant.rent_confirmed = changes["rent"] is not None
        commit(self.db, f"update tenant {tenant_id}")
        self.db.refresh(tenant)
        return tenant

    def delete_tenant(self, tenant_id: str) -> Tenant:
        tenant = self.require_tenant(tenant_id)
        has_payments = (
            self.db.query(PaymentRecord.id).filter(PaymentRecord.tenant_id == tenant_id).first()
        )
        if has_payments:
            raise ConflictError("Tenant has payment history and cannot be deleted")
        self.db.delete(tenant)
        commit(self.db, f"delete tenant {tenant_id}")
        return tenant
