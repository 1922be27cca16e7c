from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import relationship

from rent_ledger.core.database import Base, utcnow

PENDING = "pending"


class PaymentRecord(Base):
    __tablename__ = "payments"
    __table_args__ = (
        # One record per tenant and calendar month, whatever its status
        UniqueConstraint("tenant_id", "month", "year", name="uq_payments_tenant_month_year"),
    )

    id = Column(String, primary_key=True, index=True)

    tenant_id = Column(String, ForeignKey("tenants.id"), nullable=False, index=True)
    tenant = relationship("Tenant", back_populates="payments")

    # Denormalised for read convenience
    tenant_name = Column(String, nullable=True)
    room = Column(String, nullable=True)

    month = Column(String, nullable=False)  # "January" .. "December"
    year = Column(Integer, nullable=False)

    rent = Column(Numeric(10, 2), nullable=False, default=0)
    deposit = Column(Numeric(10, 2), nullable=False, default=0)  # first payment only
    maintenance = Column(Numeric(10, 2), nullable=False, default=0)  # first payment only

    method = Column(String, nullable=False, default="Cash")  # Cash / UPI / ... / pending
    status = Column(String, nullable=False, default="paid")  # paid / pending / ...
    paid_on = Column(Date, nullable=True)  # null for placeholders

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
