"""Owner registration and login."""

import logging
from typing import Tuple

from sqlalchemy.orm import Session

from rent_ledger.core.auth import create_access_token, hash_password, verify_password
from rent_ledger.core.database import commit
from rent_ledger.core.errors import AuthenticationError, ConflictError, ValidationError
from rent_ledger.models.owner import Owner

logger = logging.getLogger(__name__)


def register_owner(db: Session, name: str, email: str, password: str) -> Tuple[Owner, str]:
    """
    Create an owner account and return it with a fresh token.

    Raises:
        ValidationError: name, email or password missing
        ConflictError: An owner with this email exists
    """
    name = (name or "").strip()
    email = (email or "").strip().lower()
    if not name or not email or not password:
        raise ValidationError("name, email and password are required.")

    if db.query(Owner).filter(Owner.id == email).first():
        raise ConflictError("Owner with this email already exists.")

    owner = Owner(id=email, name=name, email=email, password_hash=hash_password(password))
    db.add(owner)
    commit(db, "register owner")
    db.refresh(owner)
    logger.info("Registered owner %s", owner.id)
    return owner, create_access_token(owner.id, owner.email, owner.name)


def login_owner(db: Session, email: str, password: str) -> Tuple[Owner, str]:
    """
    Check credentials and return the owner with a fresh token.

    Raises:
        ValidationError: email or password missing
        AuthenticationError: Unknown email or wrong password
    """
    email = (email or "").strip().lower()
    if not email or not password:
        raise ValidationError("email and password are required.")

    owner = db.query(Owner).filter(Owner.id == email).first()
    if owner is None or not verify_password(password, owner.password_hash):
        logger.warning("Failed login for %s", email)
        raise AuthenticationError("Invalid credentials")
    return owner, create_access_token(owner.id, owner.email, owner.name)
