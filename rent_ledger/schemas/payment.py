from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class PaymentCreate(BaseModel):
    # Required fields are checked by the ledger engine so that a missing
    # tenantId/month/year gets the ledger's own validation message
    tenant_id: Optional[str] = Field(None, validation_alias=AliasChoices("tenantId", "tenant_id", "tenantID"))
    month: Optional[str] = None  # "January" .. "December"
    year: Optional[int] = None
    rent: Optional[Decimal] = None  # defaults to the tenant's rent
    deposit: Optional[Decimal] = None  # first payment only
    maintenance: Optional[Decimal] = None  # first payment only
    method: Optional[str] = None
    status: Optional[str] = None
    paid_on: Optional[date] = Field(None, validation_alias=AliasChoices("paidOn", "paid_on", "date"))


class PaymentUpdate(BaseModel):
    """Closed set of correctable fields; tenant, month and year are fixed."""
    rent: Optional[Decimal] = None
    deposit: Optional[Decimal] = None
    maintenance: Optional[Decimal] = None
    method: Optional[str] = None
    status: Optional[str] = None
    paid_on: Optional[date] = Field(None, validation_alias=AliasChoices("paidOn", "paid_on", "date"))

    model_config = ConfigDict(extra="forbid")


class PaymentOut(BaseModel):
    id: str
    tenant_id: str
    tenant_name: Optional[str] = None
    room: Optional[str] = None
    month: str
    year: int
    rent: Decimal
    deposit: Decimal
    maintenance: Decimal
    method: str
    status: str
    paid_on: Optional[date] = None
    created_at: datetime

    class Config:
        from_attributes = True


class SideEffectOut(BaseModel):
    name: str
    status: str  # applied | skipped | failed
    detail: Optional[str] = None

    class Config:
        from_attributes = True


class PaymentSubmissionOut(BaseModel):
    message: str
    created: PaymentOut
    backfilled: List[PaymentOut] = []
    backfilled_months: List[str] = []
    side_effects: List[SideEffectOut] = []
    warnings: List[str] = []
    partial: bool = False
