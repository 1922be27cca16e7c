"""Pytest configuration and shared fixtures."""

import os

# Set before any import from rent_ledger so settings and the engine pick them up
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["ENV"] = "test"
os.environ["GOOGLE_SHEETS_ENABLED"] = "false"

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rent_ledger.api.deps import get_db
from rent_ledger.core.auth import create_access_token
from rent_ledger.core.database import Base
from rent_ledger.main import app
from rent_ledger.services.tenant_directory import TenantDirectory

test_engine = create_engine(
    "sqlite:///:memory:",
    poolclass=StaticPool,
    connect_args={"check_same_thread": False},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="function")
def db_session():
    """Provide a session on a fresh schema; routes share it through get_db."""
    Base.metadata.create_all(bind=test_engine)
    session = TestingSessionLocal()

    def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db

    yield session

    session.close()
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session):
    return TestClient(app)


@pytest.fixture
def auth_headers():
    token = create_access_token("owner@example.com", "owner@example.com", "PG Owner")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_tenant(db_session):
    """Factory creating tenants through the directory."""
    directory = TenantDirectory(db_session)

    def _make(name="Ravi Kumar", room="101", bed="A", rent=Decimal("5000"), join_date=date(2024, 1, 10), **extra):
        data = {"name": name, "room": room, "bed": bed, "rent": rent, "join_date": join_date}
        data.update(extra)
        return directory.create_tenant(data)

    return _make
