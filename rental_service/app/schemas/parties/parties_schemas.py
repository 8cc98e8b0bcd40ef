from datetime import datetime
from typing import Any, List, Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from shared.core.schemas import CommonQueryParams
from shared.helpers.address_helper import decode_address, decode_guarantor
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel


class AddressSchema(EmptyStringModel):
    zipCode: str
    street: str
    number: str
    complement: Optional[str] = None
    neighborhood: str
    city: str
    state: str


class OptionalAddressSchema(EmptyStringModel):
    zipCode: Optional[str] = None
    street: Optional[str] = None
    number: Optional[str] = None
    complement: Optional[str] = None
    neighborhood: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None


class GuarantorSchema(EmptyStringModel):
    name: Optional[str] = None
    document: Optional[str] = Field(
        None, pattern=r"^\d{3}\.\d{3}\.\d{3}-\d{2}$")
    rg: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    nationality: Optional[str] = None
    profession: Optional[str] = None
    maritalStatus: Optional[str] = None
    spouseName: Optional[str] = None
    address: Optional[OptionalAddressSchema] = None


class PartyBase(EmptyStringModel):
    name: Optional[str] = None
    document: Optional[str] = Field(
        None, pattern=r"^\d{3}\.\d{3}\.\d{3}-\d{2}$")
    rg: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, pattern=r"^\(\d{2}\) \d{4,5}-\d{4}$")
    nationality: Optional[str] = None
    profession: Optional[str] = None
    marital_status: Optional[str] = None
    spouse_name: Optional[str] = None
    address: Optional[AddressSchema] = None


class OwnerCreate(PartyBase):
    name: str
    document: str = Field(pattern=r"^\d{3}\.\d{3}\.\d{3}-\d{2}$")
    email: EmailStr
    phone: str = Field(pattern=r"^\(\d{2}\) \d{4,5}-\d{4}$")
    address: AddressSchema


class OwnerUpdate(PartyBase):
    id: int


class TenantCreate(OwnerCreate):
    guarantor: Optional[GuarantorSchema] = None


class TenantUpdate(PartyBase):
    id: int
    guarantor: Optional[GuarantorSchema] = None


class PartyOut(BaseModel):
    id: int
    name: str
    document: str
    rg: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    nationality: Optional[str] = None
    profession: Optional[str] = None
    marital_status: Optional[str] = None
    spouse_name: Optional[str] = None
    address: Optional[Any] = None
    is_active: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @field_validator("address", mode="before")
    @classmethod
    def decode_stored_address(cls, v):
        return decode_address(v)


class OwnerOut(PartyOut):
    pass


class TenantOut(PartyOut):
    guarantor: Optional[Any] = None

    @field_validator("guarantor", mode="before")
    @classmethod
    def decode_stored_guarantor(cls, v):
        return decode_guarantor(v)


class PartyRequest(CommonQueryParams):
    status: Optional[str] = None   # "all" | "active" | "inactive"


class OwnerListResponse(BaseModel):
    owners: List[OwnerOut]
    total: int


class TenantListResponse(BaseModel):
    tenants: List[TenantOut]
    total: int
