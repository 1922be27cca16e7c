from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from rent_ledger.api.deps import get_db
from rent_ledger.core.audit import log_audit
from rent_ledger.core.auth import SYSTEM_USER, User, get_current_user
from rent_ledger.core.google_sheets import append_payment_rows, delete_payment_row, update_payment_row
from rent_ledger.schemas.payment import PaymentCreate, PaymentOut, PaymentSubmissionOut, PaymentUpdate
from rent_ledger.services.ledger_engine import PaymentLedgerEngine, SubmissionResult
from rent_ledger.services.ledger_facade import LedgerFacade

router = APIRouter(prefix="/payments", tags=["payments"])

PARTIAL_SUCCESS = 207


def _submission_body(result: SubmissionResult, message: str) -> dict:
    return {
        "message": message,
        "created": result.record,
        "backfilled": result.backfilled,
        "backfilled_months": result.backfilled_months,
        "side_effects": result.side_effects,
        "warnings": result.warnings,
        "partial": result.partial,
    }


def _audit_side_effects(db: Session, result: SubmissionResult) -> None:
    # Written by the ledger itself, so credited to the system actor
    record = result.record
    for effect in result.side_effects:
        if effect.status == "skipped":
            continue
        log_audit(
            db,
            actor=SYSTEM_USER,
            action=effect.name,
            entity_type="tenant" if effect.name == "rent_adoption" else "payment",
            entity_id=record.tenant_id if effect.name == "rent_adoption" else record.id,
            tenant_id=record.tenant_id,
            source="system",
            status=effect.status,
            description=effect.detail,
        )


@router.post("", response_model=PaymentSubmissionOut, status_code=201)
def submit_payment(
    payload: PaymentCreate,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Record a payment for one tenant and month.

    Rejects a second record for the same tenant/month/year with 409.
    Due months between the tenant's join date and this month are backfilled
    as "pending" records. Answers 207 when the payment was saved but rent
    adoption or backfill failed; the failures are listed in `warnings`.
    """
    result = PaymentLedgerEngine(db).submit_payment(
        tenant_id=payload.tenant_id,
        month=payload.month,
        year=payload.year,
        rent=payload.rent,
        deposit=payload.deposit,
        maintenance=payload.maintenance,
        method=payload.method,
        status=payload.status,
        paid_on=payload.paid_on,
    )
    record = result.record
    log_audit(
        db,
        actor=current_user,
        action="created",
        entity_type="payment",
        entity_id=record.id,
        tenant_id=record.tenant_id,
        status=record.status,
        description=f"Payment recorded: {record.month} {record.year}, rent {record.rent}",
    )
    _audit_side_effects(db, result)
    append_payment_rows([record] + result.backfilled)

    if result.partial:
        response.status_code = PARTIAL_SUCCESS
        return _submission_body(result, "Payment saved with warnings")
    return _submission_body(result, "Payment saved")


@router.get("", response_model=List[PaymentOut])
def list_payments(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return LedgerFacade(db).list_payments()


@router.get("/{payment_id}", response_model=PaymentOut)
def get_payment(
    payment_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return LedgerFacade(db).get_payment(payment_id)


@router.patch("/{payment_id}", response_model=PaymentOut)
def update_payment(
    payment_id: str,
    payload: PaymentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Correct amounts, status, method or paid-on date of a record.
    Tenant, month and year cannot be changed.
    """
    changes = payload.model_dump(exclude_unset=True)
    record = LedgerFacade(db).update_payment(payment_id, changes)
    log_audit(
        db,
        actor=current_user,
        action="updated",
        entity_type="payment",
        entity_id=record.id,
        tenant_id=record.tenant_id,
        status=record.status,
        description=f"Payment updated: {', '.join(sorted(changes))}",
    )
    update_payment_row(record)
    return record


@router.delete("/{payment_id}", status_code=204)
def delete_payment(
    payment_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    summary = LedgerFacade(db).delete_payment(payment_id)
    log_audit(
        db,
        actor=current_user,
        action="deleted",
        entity_type="payment",
        entity_id=payment_id,
        tenant_id=summary["tenant_id"],
        status=summary["status"],
        description=f"Payment deleted: {summary['month']} {summary['year']}",
    )
    delete_payment_row(payment_id)
    return None


@router.post("/{payment_id}/repair", response_model=PaymentSubmissionOut)
def repair_payment(
    payment_id: str,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Re-apply rent adoption and due-month backfill for a stored payment.
    Safe to repeat: months that already have a record are left alone.
    """
    result = PaymentLedgerEngine(db).repair_payment(payment_id)
    log_audit(
        db,
        actor=current_user,
        action="repaired",
        entity_type="payment",
        entity_id=payment_id,
        tenant_id=result.record.tenant_id,
        status="partial" if result.partial else "ok",
        description=f"Repair added {len(result.backfilled)} due month(s)",
    )
    _audit_side_effects(db, result)
    append_payment_rows(result.backfilled)

    if result.partial:
        response.status_code = PARTIAL_SUCCESS
        return _submission_body(result, "Repair finished with warnings")
    return _submission_body(result, "Repair finished")
