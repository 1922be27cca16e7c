"""Reads, corrections and deletion of stored payment records.

Updates go through a closed set of named mutations. Tenant, month and year
are never editable here, so a correction cannot create a duplicate month or
open a gap in a tenant's ledger.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from rent_ledger.core.database import utcnow
from rent_ledger.core.errors import NotFoundError, ValidationError
from rent_ledger.models.payment import PENDING, PaymentRecord
from rent_ledger.services.ledger_engine import parse_amount, parse_paid_on
from rent_ledger.services.ledger_store import LedgerStore
from rent_ledger.services.tenant_directory import TenantDirectory

logger = logging.getLogger(__name__)

MUTABLE_FIELDS = {"rent", "deposit", "maintenance", "status", "method", "paid_on"}


class LedgerFacade:
    def __init__(self, db: Session):
        self.db = db
        self.store = LedgerStore(db)
        self.tenants = TenantDirectory(db)

    def list_payments(self) -> List[PaymentRecord]:
        return self.store.list_all()

    def list_tenant_payments(self, tenant_id: str) -> List[PaymentRecord]:
        self.tenants.require_tenant(tenant_id)
        return self.store.list_by_tenant(tenant_id)

    def get_payment(self, payment_id: str) -> PaymentRecord:
        record = self.store.get(payment_id)
        if record is None:
            raise NotFoundError(f"Payment not found: {payment_id}")
        return record

    def correct_amount(
        self,
        payment_id: str,
        rent: Any = None,
        deposit: Any = None,
        maintenance: Any = None,
    ) -> PaymentRecord:
        """Correct the amounts on a record.

        Deposit and maintenance may only be non-zero on the tenant's first
        record.
        """
        record = self.get_payment(payment_id)
        changes = self._amount_changes(record, rent, deposit, maintenance)
        return self.store.update(record, changes) if changes else record

    def change_status(self, payment_id: str, status: str) -> PaymentRecord:
        record = self.get_payment(payment_id)
        return self.store.update(record, self._status_changes(record, status, None))

    def change_method(self, payment_id: str, method: str) -> PaymentRecord:
        record = self.get_payment(payment_id)
        return self.store.update(record, {"method": self._required_text(method, "method")})

    def change_paid_on(self, payment_id: str, paid_on: Any) -> PaymentRecord:
        record = self.get_payment(payment_id)
        return self.store.update(record, {"paid_on": parse_paid_on(paid_on)})

    def update_payment(self, payment_id: str, changes: Dict[str, Any]) -> PaymentRecord:
        """
        Apply several named mutations in one write.

        Raises:
            ValidationError: Unknown field, empty update or invalid value
            NotFoundError: Unknown payment
        """
        unknown = set(changes) - MUTABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")
        if not changes:
            raise ValidationError("No fields to update")
        for name in ("rent", "deposit", "maintenance"):
            if name in changes and changes[name] is None:
                raise ValidationError(f"{name} cannot be null")

        record = self.get_payment(payment_id)
        updates: Dict[str, Any] = {}
        if {"rent", "deposit", "maintenance"} & set(changes):
            updates.update(
                self._amount_changes(
                    record, changes.get("rent"), changes.get("deposit"), changes.get("maintenance")
                )
            )
        if "method" in changes:
            updates["method"] = self._required_text(changes["method"], "method")
        if "paid_on" in changes:
            updates["paid_on"] = parse_paid_on(changes["paid_on"])
        if "status" in changes:
            updates.update(self._status_changes(record, changes["status"], updates.get("paid_on")))

        logger.info("Updating payment %s: %s", payment_id, ", ".join(sorted(updates)))
        return self.store.update(record, updates)

    def delete_payment(self, payment_id: str) -> Dict[str, Any]:
        """Delete a record and return a summary of what was removed."""
        record = self.get_payment(payment_id)
        summary = {
            "id": record.id,
            "tenant_id": record.tenant_id,
            "month": record.month,
            "year": record.year,
            "status": record.status,
        }
        self.store.delete(record)
        logger.info("Deleted payment %(id)s (tenant=%(tenant_id)s %(month)s %(year)s, status=%(status)s)", summary)
        return summary

    def _amount_changes(self, record: PaymentRecord, rent: Any, deposit: Any, maintenance: Any) -> Dict[str, Decimal]:
        changes: Dict[str, Decimal] = {}
        for name, value in (("rent", rent), ("deposit", deposit), ("maintenance", maintenance)):
            amount = parse_amount(value, name)
            if amount is not None:
                changes[name] = amount

        extras = [name for name in ("deposit", "maintenance") if changes.get(name)]
        if extras:
            earliest = self.store.earliest_for_tenant(record.tenant_id)
            if earliest is None or earliest.id != record.id:
                raise ValidationError(
                    f"{' and '.join(extras)} can only be set on the tenant's first payment"
                )
        return changes

    def _status_changes(self, record: PaymentRecord, status: Any, paid_on: Optional[date]) -> Dict[str, Any]:
        status = self._required_text(status, "status")
        changes: Dict[str, Any] = {"status": status}
        if status == PENDING:
            if paid_on is not None:
                raise ValidationError("A pending payment cannot have a paid-on date")
            changes["paid_on"] = None
        elif paid_on is None and record.paid_on is None:
            changes["paid_on"] = utcnow().date()
        return changes

    @staticmethod
    def _required_text(value: Any, name: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"{name} must be a non-empty string")
        return value.strip()
