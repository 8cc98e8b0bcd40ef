# app/crud/contracts/contracts_crud.py
import logging
from datetime import date
from typing import List, Optional
from dateutil.relativedelta import relativedelta
from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.helpers.json_response_helper import error_response
from shared.utils.app_status_code import AppStatusCode

from ...models.contracts.contract_renewals import ContractRenewal
from ...models.contracts.contracts import Contract
from ...models.contracts.deleted_payments import DeletedPayment
from ...models.contracts.payments import Payment
from ...models.parties.owners import Owner
from ...models.parties.tenants import Tenant
from ...models.properties.properties import Property
from ...enum.rental_enum import ContractStatus
from ...schemas.contracts.contracts_schemas import (
    ContractCreate,
    ContractListResponse,
    ContractOut,
    ContractRequest,
    ContractUpdate,
)

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# installments
# ----------------------------------------------------------------------

def build_due_dates(first_payment_date: date, count: int,
                    payment_day: Optional[int] = None) -> List[date]:
    """
    Monthly due dates starting at first_payment_date.

    relativedelta keeps the day of month and clamps it to the last day of
    shorter months (31/01 -> 28/02 -> 31/03).
    """
    due_dates = []
    for month in range(count):
        due = first_payment_date + relativedelta(months=month)
        if payment_day:
            due = due + relativedelta(day=payment_day)
        due_dates.append(due)
    return due_dates


def generate_payments(db: Session, contract: Contract) -> List[Payment]:
    payments = []
    due_dates = build_due_dates(contract.first_payment_date, contract.duration,
                                contract.payment_day)
    for number, due in enumerate(due_dates, start=1):
        payment = Payment(
            contract_id=contract.id,
            due_date=due,
            value=contract.rent_value,
            is_paid=False,
            installment_number=number,
        )
        db.add(payment)
        payments.append(payment)
    logger.info("Generated %s installments for contract %s",
                len(payments), contract.id)
    return payments


# ----------------------------------------------------------------------
# queries
# ----------------------------------------------------------------------

def get_contract(db: Session, contract_id: int) -> Contract:
    contract = db.query(Contract).filter(Contract.id == contract_id).first()
    if not contract:
        return error_response(
            message="Contrato não encontrado",
            status_code=AppStatusCode.RESOURCE_NOT_FOUND,
            http_status=404
        )
    return contract


def get_all_contracts(db: Session, params: ContractRequest) -> ContractListResponse:
    query = db.query(Contract)

    if params.owner_id:
        query = query.filter(Contract.owner_id == params.owner_id)
    if params.tenant_id:
        query = query.filter(Contract.tenant_id == params.tenant_id)
    if params.property_id:
        query = query.filter(Contract.property_id == params.property_id)
    if params.status and params.status.lower() != "all":
        query = query.filter(Contract.status == params.status.lower())

    if params.search:
        search_term = f"%{params.search}%"
        query = (
            query.join(Tenant, Tenant.id == Contract.tenant_id)
            .filter(Tenant.name.ilike(search_term))
        )

    total = query.with_entities(func.count(Contract.id)).scalar()
    contracts = (
        query.order_by(Contract.id.desc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )

    return ContractListResponse(
        contracts=[ContractOut.model_validate(c) for c in contracts],
        total=total
    )


def _ensure_references(db: Session, owner_id: int, tenant_id: int, property_id: int):
    if not db.query(Owner).filter(Owner.id == owner_id).first():
        return error_response(
            message="Proprietário informado não existe",
            status_code=AppStatusCode.INVALID_INPUT
        )
    if not db.query(Tenant).filter(Tenant.id == tenant_id).first():
        return error_response(
            message="Inquilino informado não existe",
            status_code=AppStatusCode.INVALID_INPUT
        )
    prop = db.query(Property).filter(Property.id == property_id).first()
    if not prop:
        return error_response(
            message="Imóvel informado não existe",
            status_code=AppStatusCode.INVALID_INPUT
        )
    return prop


# ----------------------------------------------------------------------
# create / update / delete
# ----------------------------------------------------------------------

def create_contract(db: Session, contract: ContractCreate) -> Contract:
    prop = _ensure_references(
        db, contract.owner_id, contract.tenant_id, contract.property_id)

    data = contract.model_dump()
    data["status"] = contract.status.value
    db_contract = Contract(**data)
    db.add(db_contract)
    db.flush()

    generate_payments(db, db_contract)
    if db_contract.status == ContractStatus.ativo.value:
        prop.available_for_rent = False

    db.commit()
    db.refresh(db_contract)
    return db_contract


def update_contract(db: Session, contract: ContractUpdate) -> Contract:
    db_contract = get_contract(db, contract.id)

    update_data = contract.model_dump(exclude_unset=True, exclude={"id"})
    if update_data.get("status") is not None:
        update_data["status"] = contract.status.value
        # a renewed contract stays closed, its successor carries on
        if db_contract.status == ContractStatus.renovado.value \
                and update_data["status"] != ContractStatus.renovado.value:
            return error_response(
                message=f"O contrato #{db_contract.id} já foi renovado e não pode mudar de situação",
                status_code=AppStatusCode.INVALID_INPUT
            )

    start = update_data.get("start_date", db_contract.start_date)
    end = update_data.get("end_date", db_contract.end_date)
    if start and end and end <= start:
        return error_response(
            message="A data de término deve ser posterior à data de início",
            status_code=AppStatusCode.INVALID_INPUT
        )

    for key, value in update_data.items():
        setattr(db_contract, key, value)

    if db_contract.status == ContractStatus.encerrado.value and db_contract.property:
        db_contract.property.available_for_rent = True

    db.commit()
    db.refresh(db_contract)
    return db_contract


def delete_contract(db: Session, contract_id: int) -> dict:
    db_contract = get_contract(db, contract_id)

    paid = db.query(func.count(Payment.id)).filter(
        Payment.contract_id == contract_id,
        Payment.is_paid == True
    ).scalar()
    if paid:
        return error_response(
            message="Contrato possui parcelas pagas e não pode ser removido"
        )

    renewed_by = db.query(func.count(Contract.id)).filter(
        Contract.original_contract_id == contract_id).scalar()
    if renewed_by:
        return error_response(
            message="Contrato possui renovações e não pode ser removido"
        )

    db.query(ContractRenewal).filter(
        ContractRenewal.contract_id == contract_id).delete()
    db.query(DeletedPayment).filter(
        DeletedPayment.contract_id == contract_id).delete()
    original = db_contract.original_contract
    if original and original.status == ContractStatus.renovado.value:
        original.status = ContractStatus.ativo.value
    if db_contract.status == ContractStatus.ativo.value and db_contract.property:
        db_contract.property.available_for_rent = True
    db.delete(db_contract)
    db.commit()
    return {"id": contract_id, "deleted": True}
