from sqlalchemy import Boolean, Column, Date, DateTime, Numeric, String
from sqlalchemy.orm import relationship

from rent_ledger.core.database import Base, utcnow


class Tenant(Base):
    __tablename__ = "tenants"

    id = Column(String, primary_key=True, index=True)

    name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    room = Column(String, nullable=True)
    bed = Column(String, nullable=True)

    join_date = Column(Date, nullable=True)  # backfill starts at this month
    rent = Column(Numeric(10, 2), nullable=True)  # current monthly rent
    # True once rent came from a first payment or an explicit tenant update
    rent_confirmed = Column(Boolean, nullable=False, default=False)

    # Document references (uploaded elsewhere)
    id_front = Column(String, nullable=False, default="")
    id_back = Column(String, nullable=False, default="")
    profile = Column(String, nullable=False, default="")

    payments = relationship("PaymentRecord", back_populates="tenant")

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
