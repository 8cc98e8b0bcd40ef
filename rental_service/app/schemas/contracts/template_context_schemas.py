from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional
from pydantic import AliasChoices, Field

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel


class PartyData(EmptyStringModel):
    # documents and phones typed into the guarantor JSON may arrive as numbers
    model_config = {**EmptyStringModel.model_config, "coerce_numbers_to_str": True}

    id: Optional[int] = None
    name: Optional[str] = None
    document: Optional[str] = None
    rg: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    nationality: Optional[str] = None
    profession: Optional[str] = None
    # guarantor JSON is stored with camelCase keys
    marital_status: Optional[str] = Field(
        None, validation_alias=AliasChoices("marital_status", "maritalStatus"))
    spouse_name: Optional[str] = Field(
        None, validation_alias=AliasChoices("spouse_name", "spouseName"))
    address: Optional[Any] = None     # JSON text or dict


class TenantData(PartyData):
    guarantor: Optional[Any] = None   # JSON text or dict


class PropertyData(EmptyStringModel):
    id: Optional[int] = None
    name: Optional[str] = None
    type: Optional[str] = None
    address: Optional[Any] = None
    area: Optional[int] = None
    description: Optional[str] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    water_company: Optional[str] = None
    water_account_number: Optional[str] = None
    electricity_company: Optional[str] = None
    electricity_account_number: Optional[str] = None


class ContractData(EmptyStringModel):
    id: Optional[int] = None
    type: Optional[str] = None
    duration: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    rent_value: Optional[Decimal] = None
    deposit_value: Optional[Decimal] = None
    payment_day: Optional[int] = None
    first_payment_date: Optional[date] = None
    status: Optional[str] = None
    observations: Optional[str] = None
    is_renewal: Optional[bool] = False
    original_contract_id: Optional[int] = None
    # cache buster for the HTTP response, no tag reads it
    generated_at: Optional[datetime] = None


class TemplateRenderContext(EmptyStringModel):
    """Everything one render needs, loaded up front. Never persisted."""
    owner: PartyData
    tenant: TenantData
    property: PropertyData
    contract: ContractData
    guarantor: Optional[PartyData] = None
    original_contract: Optional[ContractData] = None
