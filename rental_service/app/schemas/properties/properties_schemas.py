from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional
from pydantic import BaseModel, Field, field_validator

from shared.core.schemas import CommonQueryParams
from shared.helpers.address_helper import decode_address
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from ...enum.rental_enum import PropertyType
from ..parties.parties_schemas import AddressSchema


class PropertyBase(EmptyStringModel):
    owner_id: Optional[int] = None
    name: Optional[str] = None
    type: Optional[PropertyType] = None
    address: Optional[AddressSchema] = None
    rent_value: Optional[Decimal] = Field(None, ge=1)
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    area: Optional[int] = None
    description: Optional[str] = None
    available_for_rent: Optional[bool] = None
    water_company: Optional[str] = None
    water_account_number: Optional[str] = None
    electricity_company: Optional[str] = None
    electricity_account_number: Optional[str] = None


class PropertyCreate(PropertyBase):
    owner_id: int
    type: PropertyType
    address: AddressSchema
    rent_value: Decimal = Field(ge=1)


class PropertyUpdate(PropertyBase):
    id: int


class PropertyOut(BaseModel):
    id: int
    owner_id: int
    name: Optional[str] = None
    type: str
    address: Optional[Any] = None
    rent_value: Decimal
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    area: Optional[int] = None
    description: Optional[str] = None
    available_for_rent: Optional[bool] = None
    water_company: Optional[str] = None
    water_account_number: Optional[str] = None
    electricity_company: Optional[str] = None
    electricity_account_number: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @field_validator("address", mode="before")
    @classmethod
    def decode_stored_address(cls, v):
        return decode_address(v)


class PropertyRequest(CommonQueryParams):
    owner_id: Optional[int] = None
    available: Optional[bool] = None


class PropertyListResponse(BaseModel):
    properties: List[PropertyOut]
    total: int
