"""Unit tests for payment record persistence."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from rent_ledger.core.database import utcnow
from rent_ledger.core.errors import ConflictError
from rent_ledger.models.payment import PaymentRecord
from rent_ledger.services.ledger_store import LedgerStore


def _record(tenant_id, month, year, created_at=None, **overrides):
    data = {
        "id": uuid4().hex,
        "tenant_id": tenant_id,
        "month": month,
        "year": year,
        "rent": Decimal("5000"),
        "deposit": Decimal("0"),
        "maintenance": Decimal("0"),
        "method": "Cash",
        "status": "paid",
        "paid_on": date(2024, 1, 1),
        "created_at": created_at or datetime.now(timezone.utc),
    }
    data.update(overrides)
    return PaymentRecord(**data)


@pytest.fixture
def store(db_session):
    return LedgerStore(db_session)


class TestLedgerStore:
    def test_insert_and_find(self, store, make_tenant):
        tenant = make_tenant()
        saved = store.insert(_record(tenant.id, "May", 2024))
        assert store.find_by_tenant_month_year(tenant.id, "May", 2024).id == saved.id
        assert store.find_by_tenant_month_year(tenant.id, "May", 2025) is None
        assert store.find_any_by_tenant(tenant.id).id == saved.id

    def test_second_record_for_month_conflicts(self, store, make_tenant, db_session):
        tenant = make_tenant()
        store.insert(_record(tenant.id, "May", 2024))
        with pytest.raises(ConflictError):
            store.insert(_record(tenant.id, "May", 2024, status="pending"))
        # Session is usable after the rollback
        assert len(store.list_by_tenant(tenant.id)) == 1

    def test_list_by_tenant_is_in_month_order(self, store, make_tenant):
        tenant = make_tenant()
        for month, year in [("February", 2025), ("December", 2024), ("March", 2024)]:
            store.insert(_record(tenant.id, month, year))
        assert [(r.month, r.year) for r in store.list_by_tenant(tenant.id)] == [
            ("March", 2024),
            ("December", 2024),
            ("February", 2025),
        ]

    def test_earliest_is_by_creation_not_month(self, store, make_tenant):
        tenant = make_tenant()
        now = datetime.now(timezone.utc)
        first = store.insert(_record(tenant.id, "June", 2024, created_at=now))
        store.insert(_record(tenant.id, "April", 2024, created_at=now + timedelta(seconds=5)))
        assert store.earliest_for_tenant(tenant.id).id == first.id

    def test_timestamps_are_utc(self):
        assert utcnow().tzinfo == timezone.utc

    def test_update_and_delete(self, store, make_tenant):
        tenant = make_tenant()
        saved = store.insert(_record(tenant.id, "May", 2024))
        store.update(saved, {"method": "UPI"})
        assert store.get(saved.id).method == "UPI"
        store.delete(saved)
        assert store.get(saved.id) is None
        assert store.find_any_by_tenant(tenant.id) is None
