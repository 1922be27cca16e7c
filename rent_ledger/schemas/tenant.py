from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class TenantBase(BaseModel):
    name: str
    phone: Optional[str] = None
    room: Optional[str] = None
    bed: Optional[str] = None
    rent: Optional[Decimal] = None
    join_date: Optional[date] = Field(None, validation_alias=AliasChoices("joinDate", "join_date"))
    id_front: str = Field("", validation_alias=AliasChoices("idFront", "id_front", "aadhaarFront"))
    id_back: str = Field("", validation_alias=AliasChoices("idBack", "id_back", "aadhaarBack"))
    profile: str = ""


class TenantCreate(TenantBase):
    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v):
        if not v.strip():
            raise ValueError("name cannot be blank")
        return v.strip()

    @field_validator("rent")
    @classmethod
    def rent_must_be_non_negative(cls, v):
        if v is not None and v < 0:
            raise ValueError("rent cannot be negative")
        return v


class TenantUpdate(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    room: Optional[str] = None
    bed: Optional[str] = None
    rent: Optional[Decimal] = None  # an explicit rent becomes the confirmed rent
    join_date: Optional[date] = Field(None, validation_alias=AliasChoices("joinDate", "join_date"))
    id_front: Optional[str] = Field(None, validation_alias=AliasChoices("idFront", "id_front", "aadhaarFront"))
    id_back: Optional[str] = Field(None, validation_alias=AliasChoices("idBack", "id_back", "aadhaarBack"))
    profile: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

    # Omit a field to leave it alone; these columns cannot be cleared
    @field_validator("name", "id_front", "id_back", "profile")
    @classmethod
    def must_not_be_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v):
        if v is None:
            return v
        if not v.strip():
            raise ValueError("name cannot be blank")
        return v.strip()

    @field_validator("rent")
    @classmethod
    def rent_must_be_non_negative(cls, v):
        if v is not None and v < 0:
            raise ValueError("rent cannot be negative")
        return v


class TenantOut(BaseModel):
    id: str
    name: str
    phone: Optional[str] = None
    room: Optional[str] = None
    bed: Optional[str] = None
    rent: Optional[Decimal] = None
    rent_confirmed: bool
    join_date: Optional[date] = None
    id_front: str
    id_back: str
    profile: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
