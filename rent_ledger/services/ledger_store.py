"""Persistence for payment records.

Inserts are conditional on the (tenant_id, month, year) unique constraint, so
a second record for the same month is rejected by the database even when two
writers pass the existence check at the same time.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from rent_ledger.core.database import commit
from rent_ledger.core.errors import ConflictError, StoreError
from rent_ledger.models.payment import PaymentRecord
from rent_ledger.services.months import month_seq

logger = logging.getLogger(__name__)


def ledger_order(record: PaymentRecord) -> int:
    return month_seq(record.month, record.year)


class LedgerStore:
    """Payment record store bound to one session."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_tenant_month_year(self, tenant_id: str, month: str, year: int) -> Optional[PaymentRecord]:
        """Return the record for this tenant and month, whatever its status."""
        try:
            return (
                self.db.query(PaymentRecord)
                .filter(
                    PaymentRecord.tenant_id == tenant_id,
                    PaymentRecord.month == month,
                    PaymentRecord.year == year,
                )
                .first()
            )
        except SQLAlchemyError as e:
            logger.exception("Lookup failed for tenant=%s %s %s", tenant_id, month, year)
            raise StoreError("Could not read payments") from e

    def find_any_by_tenant(self, tenant_id: str) -> Optional[PaymentRecord]:
        """Existence probe: any record at all for the tenant."""
        try:
            return self.db.query(PaymentRecord).filter(PaymentRecord.tenant_id == tenant_id).first()
        except SQLAlchemyError as e:
            logger.exception("Lookup failed for tenant=%s", tenant_id)
            raise StoreError("Could not read payments") from e

    def earliest_for_tenant(self, tenant_id: str) -> Optional[PaymentRecord]:
        """The first record ever created for the tenant."""
        return (
            self.db.query(PaymentRecord)
            .filter(PaymentRecord.tenant_id == tenant_id)
            .order_by(PaymentRecord.created_at, PaymentRecord.id)
            .first()
        )

    def insert(self, record: PaymentRecord) -> PaymentRecord:
        """
        Persist a new record.

        Raises:
            ConflictError: The tenant already has a record for that month
            StoreError: Any other database failure
        """
        self.db.add(record)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(
                "Insert rejected by unique constraint: tenant=%s %s %s",
                record.tenant_id, record.month, record.year,
            )
            raise ConflictError("Payment already exists for this tenant and month/year") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Insert failed for payment %s", record.id)
            raise StoreError("Could not save payment") from e
        self.db.refresh(record)
        return record

    def list_all(self) -> List[PaymentRecord]:
        records = self.db.query(PaymentRecord).all()
        return sorted(records, key=lambda r: (r.tenant_id, ledger_order(r)))

    def list_by_tenant(self, tenant_id: str) -> List[PaymentRecord]:
        records = self.db.query(PaymentRecord).filter(PaymentRecord.tenant_id == tenant_id).all()
        return sorted(records, key=ledger_order)

    def get(self, payment_id: str) -> Optional[PaymentRecord]:
        return self.db.query(PaymentRecord).filter(PaymentRecord.id == payment_id).first()

    def update(self, record: PaymentRecord, changes: Dict[str, Any]) -> PaymentRecord:
        for k, v in changes.items():
            setattr(record, k, v)
        commit(self.db, f"update payment {record.id}")
        self.db.refresh(record)
        return record

    def delete(self, record: PaymentRecord) -> None:
        self.db.delete(record)
        commit(self.db, f"delete payment {record.id}")
