from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, model_validator

from shared.core.schemas import CommonQueryParams
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from ...enum.rental_enum import AdjustmentIndex, ContractStatus


class ContractBase(EmptyStringModel):
    owner_id: Optional[int] = None
    tenant_id: Optional[int] = None
    property_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    duration: Optional[int] = Field(None, ge=1)   # months
    rent_value: Optional[Decimal] = None
    deposit_value: Optional[Decimal] = None
    payment_day: Optional[int] = Field(None, ge=1, le=31)
    first_payment_date: Optional[date] = None
    status: Optional[ContractStatus] = None
    observations: Optional[str] = None


class ContractCreate(ContractBase):
    owner_id: int = Field(ge=1)
    tenant_id: int = Field(ge=1)
    property_id: int = Field(ge=1)
    start_date: date
    end_date: date
    duration: int = Field(ge=1)
    rent_value: Decimal
    first_payment_date: date
    status: ContractStatus = ContractStatus.ativo

    @model_validator(mode="after")
    def check_period(self):
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self


class ContractUpdate(ContractBase):
    id: int


class ContractOut(BaseModel):
    id: int
    owner_id: int
    tenant_id: int
    property_id: int
    start_date: date
    end_date: date
    duration: int
    rent_value: Decimal
    deposit_value: Optional[Decimal] = None
    payment_day: Optional[int] = None
    first_payment_date: date
    status: str
    observations: Optional[str] = None
    is_renewal: Optional[bool] = False
    original_contract_id: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ContractRequest(CommonQueryParams):
    owner_id: Optional[int] = None
    tenant_id: Optional[int] = None
    property_id: Optional[int] = None
    status: Optional[str] = None       # "all" | "ativo" | ...


class ContractListResponse(BaseModel):
    contracts: List[ContractOut]
    total: int


# RENEWALS


class ContractRenewalCreate(EmptyStringModel):
    original_contract_id: int = Field(ge=1)
    renewal_date: date
    start_date: date
    end_date: date
    new_rent_value: Decimal = Field(ge=1)
    first_payment_date: Optional[date] = None
    adjustment_index: AdjustmentIndex = AdjustmentIndex.igpm
    observations: Optional[str] = None

    @model_validator(mode="after")
    def check_period(self):
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self


class ContractRenewalOut(BaseModel):
    id: int
    contract_id: int
    original_contract_id: int
    renewal_date: date
    start_date: date
    end_date: date
    new_rent_value: Decimal
    adjustment_index: str
    observations: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ContractRenewalResult(BaseModel):
    renewal: ContractRenewalOut
    contract: ContractOut
