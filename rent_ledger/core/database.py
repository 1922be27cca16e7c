"""Database engine and session factory."""

import logging
from datetime import datetime, timezone
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from rent_ledger.core.config import settings
from rent_ledger.core.errors import StoreError

logger = logging.getLogger(__name__)


def build_engine(database_url: str):
    """Create an engine; in-memory SQLite shares one connection across threads."""
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url:
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)
    return create_engine(database_url, pool_pre_ping=True)


engine = build_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def utcnow() -> datetime:
    """Timezone-aware current time used for record timestamps."""
    return datetime.now(timezone.utc)


def session_scope() -> Generator[Session, None, None]:
    """Yield a session and always close it."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def commit(db: Session, action: str) -> None:
    """Commit the session; on failure roll back and raise StoreError."""
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Store rejected: %s", action)
        raise StoreError(f"Could not {action}") from e
