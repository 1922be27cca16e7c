"""Payment ledger engine.

Admits new payments and keeps each tenant's ledger consistent:

- one record per tenant and calendar month, whatever its status
- deposit and maintenance only on the tenant's first record
- the first payment's rent becomes the tenant's standing rent
- every month from the join month up to a paid month has a record; missing
  months get a "pending" placeholder

The payment write is the primary action. Rent adoption and backfill run after
it has been committed; their failures are logged and reported on the result
instead of undoing the payment. ``repair_payment`` re-derives those side
effects from a stored payment.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional
from uuid import uuid4

from sqlalchemy.orm import Session

from rent_ledger.core.database import utcnow
from rent_ledger.core.errors import ConflictError, LedgerError, NotFoundError, StoreError, ValidationError
from rent_ledger.models.payment import PENDING, PaymentRecord
from rent_ledger.models.tenant import Tenant
from rent_ledger.services.ledger_store import LedgerStore
from rent_ledger.services.months import MONTHS, date_seq, month_seq, months_between, normalize_month
from rent_ledger.services.tenant_directory import TenantDirectory

logger = logging.getLogger(__name__)

DEFAULT_METHOD = "Cash"
DEFAULT_STATUS = "paid"
ZERO = Decimal("0")

APPLIED = "applied"
SKIPPED = "skipped"
FAILED = "failed"


@dataclass
class SideEffect:
    """Outcome of one post-write step."""

    name: str  # rent_adoption | backfill
    status: str  # applied | skipped | failed
    detail: Optional[str] = None


@dataclass
class SubmissionResult:
    record: PaymentRecord
    backfilled: List[PaymentRecord] = field(default_factory=list)
    side_effects: List[SideEffect] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def partial(self) -> bool:
        """True when the payment is stored but a side effect failed."""
        return any(effect.status == FAILED for effect in self.side_effects)

    @property
    def backfilled_months(self) -> List[str]:
        return [f"{r.month} {r.year}" for r in self.backfilled]


def parse_amount(value: Any, name: str) -> Optional[Decimal]:
    """Convert an optional amount to Decimal.

    Raises:
        ValidationError: Not a number, or negative
    """
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a number")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValidationError(f"{name} must be a number") from e
    if not amount.is_finite():
        raise ValidationError(f"{name} must be a number")
    if amount < 0:
        raise ValidationError(f"{name} cannot be negative")
    return amount


def parse_year(value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError("year must be a positive integer")
    if isinstance(value, str):
        value = value.strip()
        if not value.isdigit():
            raise ValidationError("year must be a positive integer")
        value = int(value)
    if not isinstance(value, int) or value <= 0:
        raise ValidationError("year must be a positive integer")
    return value


def parse_paid_on(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError as e:
        raise ValidationError("paidOn must be an ISO date (YYYY-MM-DD)") from e


def _differs(current: Optional[Decimal], new: Decimal) -> bool:
    return current is None or Decimal(current) != new


class PaymentLedgerEngine:
    """Admits payments and applies their ledger side effects."""

    def __init__(self, db: Session):
        self.db = db
        self.store = LedgerStore(db)
        self.tenants = TenantDirectory(db)

    def submit_payment(
        self,
        tenant_id: Optional[str],
        month: Optional[str],
        year: Any,
        rent: Any = None,
        deposit: Any = None,
        maintenance: Any = None,
        method: Optional[str] = None,
        status: Optional[str] = None,
        paid_on: Any = None,
    ) -> SubmissionResult:
        """
        Record a payment for one tenant and month.

        Args:
            tenant_id: Tenant the payment belongs to
            month: Month name, e.g. "April" (case-insensitive)
            year: Calendar year
            rent: Rent paid; defaults to the tenant's rent on file
            deposit: Kept only on the tenant's first payment
            maintenance: Kept only on the tenant's first payment
            method: Payment method (default "Cash")
            status: Payment status (default "paid")
            paid_on: Payment date (default today)

        Returns:
            SubmissionResult with the stored record and side-effect outcomes

        Raises:
            ValidationError: Missing or malformed tenant_id, month or year
            NotFoundError: Unknown tenant
            ConflictError: The tenant already has a record for that month
            StoreError: The payment could not be written
        """
        if not tenant_id or month in (None, "") or year in (None, ""):
            raise ValidationError("tenantId, month and year are required")
        canonical_month = normalize_month(month)
        if canonical_month is None:
            raise ValidationError(f"month must be one of: {', '.join(MONTHS)}")
        year = parse_year(year)
        caller_rent = parse_amount(rent, "rent")
        caller_deposit = parse_amount(deposit, "deposit")
        caller_maintenance = parse_amount(maintenance, "maintenance")
        paid_on = parse_paid_on(paid_on)
        tenant_id = str(tenant_id)

        tenant = self.tenants.require_tenant(tenant_id)

        if self.store.find_by_tenant_month_year(tenant_id, canonical_month, year) is not None:
            logger.warning("Duplicate payment rejected: tenant=%s %s %s", tenant_id, canonical_month, year)
            raise ConflictError("Payment already exists for this tenant and month/year")

        is_first = self.store.find_any_by_tenant(tenant_id) is None
        latest_seq = None
        if not is_first and caller_rent is not None:
            latest_seq = max(month_seq(r.month, r.year) for r in self.store.list_by_tenant(tenant_id))

        # Snapshot before any commit expires the instance
        tenant_name = tenant.name
        room = tenant.room
        join_date = tenant.join_date
        rent_on_file = Decimal(tenant.rent) if tenant.rent is not None else None

        if caller_rent is not None:
            effective_rent = caller_rent
        elif rent_on_file is not None:
            effective_rent = rent_on_file
        else:
            effective_rent = ZERO

        created_at = utcnow()
        record = PaymentRecord(
            id=uuid4().hex,
            tenant_id=tenant_id,
            tenant_name=tenant_name,
            room=room,
            month=canonical_month,
            year=year,
            rent=effective_rent,
            deposit=(caller_deposit or ZERO) if is_first else ZERO,
            maintenance=(caller_maintenance or ZERO) if is_first else ZERO,
            method=method or DEFAULT_METHOD,
            status=status or DEFAULT_STATUS,
            paid_on=paid_on or created_at.date(),
            created_at=created_at,
        )
        record = self.store.insert(record)
        logger.info(
            "Payment %s saved: tenant=%s %s %s rent=%s first=%s",
            record.id, tenant_id, canonical_month, year, effective_rent, is_first,
        )

        result = SubmissionResult(record=record)
        paid_seq = month_seq(canonical_month, year)

        if is_first:
            should_set = _differs(rent_on_file, effective_rent)
            reason = "first payment"
        else:
            should_set = (
                caller_rent is not None
                and latest_seq is not None
                and paid_seq > latest_seq
                and _differs(rent_on_file, effective_rent)
            )
            reason = "rent revision"
        result.side_effects.append(self._apply_rent(tenant_id, effective_rent, should_set, reason, result))

        created, effect = self._backfill(tenant_id, tenant_name, room, join_date, paid_seq, effective_rent, result)
        result.backfilled = created
        result.side_effects.append(effect)
        return result

    def repair_payment(self, payment_id: str) -> SubmissionResult:
        """
        Re-apply missing side effects of a stored payment.

        Rent adoption is redone when the payment is the tenant's first record
        and the tenant's rent was never confirmed. Backfill is re-run up to
        the payment's month with the payment's rent; months already present
        are left alone.

        Raises:
            NotFoundError: Unknown payment or tenant
        """
        record = self.store.get(payment_id)
        if record is None:
            raise NotFoundError(f"Payment not found: {payment_id}")
        tenant: Tenant = self.tenants.require_tenant(record.tenant_id)

        result = SubmissionResult(record=record)
        earliest = self.store.earliest_for_tenant(tenant.id)
        rent = Decimal(record.rent)
        should_set = (
            earliest is not None
            and earliest.id == record.id
            and not tenant.rent_confirmed
            and _differs(tenant.rent, rent)
        )
        tenant_id, tenant_name, room, join_date = tenant.id, tenant.name, tenant.room, tenant.join_date
        paid_seq = month_seq(record.month, record.year)
        result.side_effects.append(self._apply_rent(tenant_id, rent, should_set, "repair", result))

        created, effect = self._backfill(tenant_id, tenant_name, room, join_date, paid_seq, rent, result)
        result.backfilled = created
        result.side_effects.append(effect)
        self.db.refresh(record)
        logger.info(
            "Repair of payment %s done: %d placeholder(s) added, partial=%s",
            payment_id, len(created), result.partial,
        )
        return result

    def _apply_rent(
        self, tenant_id: str, rent: Decimal, should_set: bool, reason: str, result: SubmissionResult
    ) -> SideEffect:
        if not should_set:
            return SideEffect("rent_adoption", SKIPPED)
        try:
            self.tenants.set_rent(tenant_id, rent)
        except LedgerError as e:
            logger.exception("Rent update (%s) failed for tenant %s", reason, tenant_id)
            result.warnings.append(f"Tenant rent could not be updated to {rent}: {e.message}")
            return SideEffect("rent_adoption", FAILED, e.message)
        return SideEffect("rent_adoption", APPLIED, f"{reason}: rent set to {rent}")

    def _backfill(
        self,
        tenant_id: str,
        tenant_name: str,
        room: Optional[str],
        join_date: Optional[date],
        paid_seq: int,
        rent: Decimal,
        result: SubmissionResult,
    ):
        """Insert placeholders for unrecorded months from the join month up to paid_seq."""
        start_seq = date_seq(join_date)
        if start_seq is None:
            start_seq = paid_seq

        created: List[PaymentRecord] = []
        failed: List[str] = []
        for month, year in months_between(start_seq, paid_seq):
            try:
                if self.store.find_by_tenant_month_year(tenant_id, month, year) is not None:
                    continue
                placeholder = PaymentRecord(
                    id=uuid4().hex,
                    tenant_id=tenant_id,
                    tenant_name=tenant_name,
                    room=room,
                    month=month,
                    year=year,
                    rent=rent,
                    deposit=ZERO,
                    maintenance=ZERO,
                    method=PENDING,
                    status=PENDING,
                    paid_on=None,
                    created_at=utcnow(),
                )
                created.append(self.store.insert(placeholder))
            except ConflictError:
                # Written by a concurrent submission in the meantime
                continue
            except StoreError:
                logger.exception("Backfill failed for tenant %s %s %s", tenant_id, month, year)
                failed.append(f"{month} {year}")

        if created:
            logger.info("Backfilled %d due month(s) for tenant %s", len(created), tenant_id)
        if failed:
            result.warnings.append(f"Due records could not be created for: {', '.join(failed)}")
            return created, SideEffect("backfill", FAILED, ", ".join(failed))
        if created:
            return created, SideEffect("backfill", APPLIED, f"{len(created)} due month(s) added")
        return created, SideEffect("backfill", SKIPPED)
