"""Unit tests for the tenant directory."""

from datetime import date
from decimal import Decimal

import pytest

from rent_ledger.core.errors import ConflictError, NotFoundError
from rent_ledger.services.ledger_engine import PaymentLedgerEngine
from rent_ledger.services.tenant_directory import TenantDirectory


@pytest.fixture
def directory(db_session):
    return TenantDirectory(db_session)


class TestTenantDirectory:
    def test_create_assigns_id_and_defaults(self, make_tenant):
        tenant = make_tenant(phone="9876543210")
        assert tenant.id
        assert tenant.rent_confirmed is False
        assert tenant.id_front == ""
        assert tenant.join_date == date(2024, 1, 10)

    def test_get_tenant_absent(self, directory):
        assert directory.get_tenant("missing") is None
        assert directory.get_tenant(None) is None
        with pytest.raises(NotFoundError):
            directory.require_tenant("missing")

    def test_set_rent_confirms(self, directory, make_tenant):
        tenant = make_tenant(rent=None)
        updated = directory.set_rent(tenant.id, Decimal("5500"))
        assert updated.rent == Decimal("5500")
        assert updated.rent_confirmed is True

    def test_set_rent_unknown_tenant(self, directory):
        with pytest.raises(NotFoundError):
            directory.set_rent("missing", Decimal("1"))

    def test_update_with_rent_confirms(self, directory, make_tenant):
        tenant = make_tenant()
        updated = directory.update_tenant(tenant.id, {"rent": Decimal("5200"), "room": "102"})
        assert updated.rent == Decimal("5200")
        assert updated.room == "102"
        assert updated.rent_confirmed is True

    def test_update_without_rent_leaves_confirmation(self, directory, make_tenant):
        tenant = make_tenant()
        updated = directory.update_tenant(tenant.id, {"phone": "123"})
        assert updated.rent_confirmed is False

    def test_delete_tenant_without_payments(self, directory, make_tenant):
        tenant = make_tenant()
        directory.delete_tenant(tenant.id)
        assert directory.get_tenant(tenant.id) is None

    def test_delete_tenant_with_payments_refused(self, directory, make_tenant, db_session):
        tenant = make_tenant()
        PaymentLedgerEngine(db_session).submit_payment(tenant.id, "January", 2024)
        with pytest.raises(ConflictError):
            directory.delete_tenant(tenant.id)

    def test_list_tenants(self, directory, make_tenant):
        make_tenant(name="B", room="201")
        make_tenant(name="A", room="101")
        assert [t.name for t in directory.list_tenants()] == ["A", "B"]
