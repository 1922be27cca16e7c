"""Tests for owner registration, login and token checks."""

from datetime import datetime, timedelta, timezone

from jose import jwt

from rent_ledger.core.auth import create_access_token, hash_password, verify_password, verify_token
from rent_ledger.core.config import settings


class TestPasswords:
    def test_hash_round_trip(self):
        hashed = hash_password("s3cret")
        assert hashed != "s3cret"
        assert verify_password("s3cret", hashed)
        assert not verify_password("wrong", hashed)

    def test_empty_or_malformed_hash(self):
        assert not verify_password("s3cret", "")
        assert not verify_password("s3cret", "not-a-hash")


class TestTokens:
    def test_token_carries_owner(self):
        payload = verify_token(create_access_token("owner@example.com", "owner@example.com", "Owner"))
        assert payload["sub"] == "owner@example.com"
        assert payload["name"] == "Owner"


class TestAuthRoutes:
    def test_register_then_login(self, client):
        resp = client.post(
            "/auth/register",
            json={"name": "Asha", "email": "Asha@Example.com ", "password": "pw"},
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["owner"]["id"] == "asha@example.com"
        assert body["token"]

        resp = client.post("/auth/login", json={"email": "asha@example.com", "password": "pw"})
        assert resp.status_code == 200
        assert verify_token(resp.json()["token"])["sub"] == "asha@example.com"

    def test_register_duplicate(self, client):
        payload = {"name": "Asha", "email": "asha@example.com", "password": "pw"}
        assert client.post("/auth/register", json=payload).status_code == 201
        resp = client.post("/auth/register", json=payload)
        assert resp.status_code == 409
        assert resp.json()["error"]["code"] == "conflict"

    def test_register_missing_fields(self, client):
        resp = client.post("/auth/register", json={"email": "asha@example.com"})
        assert resp.status_code == 400

    def test_login_wrong_password(self, client):
        client.post("/auth/register", json={"name": "Asha", "email": "asha@example.com", "password": "pw"})
        resp = client.post("/auth/login", json={"email": "asha@example.com", "password": "nope"})
        assert resp.status_code == 401

    def test_login_unknown_owner(self, client):
        resp = client.post("/auth/login", json={"email": "ghost@example.com", "password": "pw"})
        assert resp.status_code == 401

    def test_routes_require_token(self, client):
        assert client.get("/payments").status_code == 401
        assert client.get("/tenants", headers={"Authorization": "Bearer garbage"}).status_code == 401

    def test_expired_token_rejected(self, client):
        expired = jwt.encode(
            {"sub": "owner@example.com", "exp": int((datetime.now(timezone.utc) - timedelta(days=1)).timestamp())},
            settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )
        resp = client.get("/payments", headers={"Authorization": f"Bearer {expired}"})
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Token has expired"
