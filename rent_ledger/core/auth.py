"""
Owner authentication: password hashing and signed bearer tokens.

Owners log in with email and password and receive an HS256 JWT. Every
ledger route depends on get_current_user, which verifies that token. The
ledger services themselves never authenticate; they trust the route layer.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.hash import pbkdf2_sha256 as hasher

from rent_ledger.core.config import settings

# Security scheme for Bearer token
security = HTTPBearer(auto_error=False)


class User:
    """Authenticated owner extracted from a token."""
    def __init__(self, user_id: str, email: Optional[str] = None, name: Optional[str] = None, role: Optional[str] = None):
        self.id = user_id
        self.email = email
        self.name = name
        self.role = role or "owner"


SYSTEM_USER = User(user_id="system", role="system")


def hash_password(raw: str) -> str:
    return hasher.hash(raw)


def verify_password(raw: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    try:
        return hasher.verify(raw, password_hash)
    except ValueError:
        # Malformed stored hash
        return False


def create_access_token(owner_id: str, email: str, name: str) -> str:
    """
    Issue a signed token for an owner.

    Args:
        owner_id: Owner identifier (the lower-cased email)
        email: Owner email
        name: Display name

    Returns:
        Encoded JWT expiring after JWT_EXPIRE_DAYS
    """
    now = datetime.now(timezone.utc)
    payload = {
        "sub": owner_id,
        "email": email,
        "name": name,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(days=settings.JWT_EXPIRE_DAYS)).timestamp()),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> dict:
    """
    Verify an owner token and return its payload.

    Raises:
        HTTPException: If token is invalid or expired
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> User:
    """
    FastAPI dependency returning the owner behind the Authorization header.

    Usage in route:
        @router.get("/payments")
        def list_payments(current_user: User = Depends(get_current_user)):
            ...
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing Authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )
    payload = verify_token(credentials.credentials)

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate owner",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return User(user_id=user_id, email=payload.get("email"), name=payload.get("name"))
