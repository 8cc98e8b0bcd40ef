from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from ..parties.parties_schemas import OwnerOut, TenantOut
from ..properties.properties_schemas import PropertyOut
from .contracts_schemas import ContractOut


class PaymentCreate(EmptyStringModel):
    contract_id: int
    due_date: date
    value: Decimal
    installment_number: Optional[int] = 0
    observations: Optional[str] = None


class PaymentUpdate(EmptyStringModel):
    id: int
    due_date: Optional[date] = None
    value: Optional[Decimal] = None
    is_paid: Optional[bool] = None
    payment_date: Optional[date] = None
    interest_amount: Optional[Decimal] = None
    late_payment_fee: Optional[Decimal] = None
    payment_method: Optional[str] = None
    receipt_number: Optional[str] = None
    observations: Optional[str] = None


class PaymentOut(BaseModel):
    id: int
    contract_id: int
    due_date: date
    value: Decimal
    is_paid: Optional[bool] = False
    payment_date: Optional[date] = None
    interest_amount: Optional[Decimal] = None
    late_payment_fee: Optional[Decimal] = None
    payment_method: Optional[str] = None
    receipt_number: Optional[str] = None
    observations: Optional[str] = None
    installment_number: Optional[int] = None
    is_restored: Optional[bool] = False
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class PaymentListResponse(BaseModel):
    payments: List[PaymentOut]
    total: int


class DeletedPaymentOut(BaseModel):
    id: int
    original_id: Optional[int] = None
    contract_id: int
    due_date: date
    value: Decimal
    is_paid: Optional[bool] = False
    payment_date: Optional[date] = None
    interest_amount: Optional[Decimal] = None
    late_payment_fee: Optional[Decimal] = None
    payment_method: Optional[str] = None
    receipt_number: Optional[str] = None
    observations: Optional[str] = None
    installment_number: Optional[int] = None
    deleted_by: Optional[str] = None
    deleted_at: Optional[datetime] = None
    original_created_at: Optional[datetime] = None
    was_restored: Optional[bool] = False

    model_config = {"from_attributes": True}


class DeletedPaymentListResponse(BaseModel):
    deleted_payments: List[DeletedPaymentOut]
    total: int


class PaymentReceiptData(BaseModel):
    """Everything a receipt needs, in one call."""
    payment: PaymentOut
    contract: ContractOut
    owner: OwnerOut
    tenant: TenantOut
    property: PropertyOut
