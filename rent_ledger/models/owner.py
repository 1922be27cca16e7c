from sqlalchemy import Column, DateTime, String

from rent_ledger.core.database import Base, utcnow


class Owner(Base):
    __tablename__ = "owners"

    id = Column(String, primary_key=True, index=True)  # lower-cased email
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
