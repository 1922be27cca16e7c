from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rent_ledger.api.deps import get_db
from rent_ledger.core.audit import log_audit
from rent_ledger.core.auth import User, get_current_user
from rent_ledger.schemas.payment import PaymentOut
from rent_ledger.schemas.tenant import TenantCreate, TenantOut, TenantUpdate
from rent_ledger.services.ledger_facade import LedgerFacade
from rent_ledger.services.tenant_directory import TenantDirectory

router = APIRouter(prefix="/tenants", tags=["tenants"])


@router.get("", response_model=List[TenantOut])
def list_tenants(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return TenantDirectory(db).list_tenants()


@router.post("", response_model=TenantOut, status_code=201)
def create_tenant(
    payload: TenantCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    tenant = TenantDirectory(db).create_tenant(payload.model_dump())
    log_audit(
        db,
        actor=current_user,
        action="created",
        entity_type="tenant",
        entity_id=tenant.id,
        tenant_id=tenant.id,
        description=f"Tenant created: {tenant.name} (room {tenant.room})",
    )
    return tenant


@router.get("/{tenant_id}", response_model=TenantOut)
def get_tenant(
    tenant_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return TenantDirectory(db).require_tenant(tenant_id)


@router.get("/{tenant_id}/payments", response_model=List[PaymentOut])
def get_tenant_payments(
    tenant_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    The tenant's ledger in month order, placeholders included.
    """
    return LedgerFacade(db).list_tenant_payments(tenant_id)


@router.patch("/{tenant_id}", response_model=TenantOut)
def update_tenant(
    tenant_id: str,
    payload: TenantUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    changes = payload.model_dump(exclude_unset=True)
    tenant = TenantDirectory(db).update_tenant(tenant_id, changes)
    log_audit(
        db,
        actor=current_user,
        action="updated",
        entity_type="tenant",
        entity_id=tenant.id,
        tenant_id=tenant.id,
        description=f"Tenant updated: {', '.join(sorted(changes)) or 'no fields'}",
    )
    return tenant


@router.delete("/{tenant_id}", status_code=204)
def delete_tenant(
    tenant_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Delete a tenant. Refused with 409 while payments reference the tenant.
    """
    directory = TenantDirectory(db)
    name = directory.require_tenant(tenant_id).name
    directory.delete_tenant(tenant_id)
    log_audit(
        db,
        actor=current_user,
        action="deleted",
        entity_type="tenant",
        entity_id=tenant_id,
        tenant_id=tenant_id,
        description=f"Tenant deleted: {name}",
    )
    return None
