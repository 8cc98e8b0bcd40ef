# app/crud/contracts/contract_renewals_crud.py
import logging
from datetime import date
from typing import List
from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.helpers.json_response_helper import error_response
from shared.utils.app_status_code import AppStatusCode

from ...models.contracts.contract_renewals import ContractRenewal
from ...models.contracts.contracts import Contract
from ...models.contracts.deleted_payments import DeletedPayment
from ...models.contracts.payments import Payment
from ...enum.rental_enum import ContractStatus
from ...schemas.contracts.contracts_schemas import (
    ContractOut,
    ContractRenewalCreate,
    ContractRenewalOut,
    ContractRenewalResult,
)
from .contracts_crud import generate_payments

logger = logging.getLogger(__name__)


def months_between(start: date, end: date) -> int:
    # calendar months only, days are ignored
    return max(1, (end.year - start.year) * 12 + end.month - start.month)


def get_renewal(db: Session, renewal_id: int) -> ContractRenewal:
    renewal = db.query(ContractRenewal).filter(
        ContractRenewal.id == renewal_id).first()
    if not renewal:
        return error_response(
            message="Renovação de contrato não encontrada",
            status_code=AppStatusCode.RESOURCE_NOT_FOUND,
            http_status=404
        )
    return renewal


def get_renewal_by_contract(db: Session, contract_id: int) -> ContractRenewal:
    """Renewal that created `contract_id`."""
    renewal = db.query(ContractRenewal).filter(
        ContractRenewal.contract_id == contract_id).first()
    if not renewal:
        return error_response(
            message="Renovação de contrato não encontrada para este contrato",
            status_code=AppStatusCode.RESOURCE_NOT_FOUND,
            http_status=404
        )
    return renewal


def get_all_renewals(db: Session) -> List[ContractRenewal]:
    return db.query(ContractRenewal).order_by(ContractRenewal.id.desc()).all()


def get_renewals_by_original(db: Session, original_contract_id: int) -> List[ContractRenewal]:
    return (
        db.query(ContractRenewal)
        .filter(ContractRenewal.original_contract_id == original_contract_id)
        .order_by(ContractRenewal.id.asc())
        .all()
    )


def create_renewal(db: Session, renewal: ContractRenewalCreate) -> ContractRenewalResult:
    """
    Renew a contract: a new active contract is created for the same parties
    and property, the original is marked as renewed and the new installments
    are generated.
    """
    original = db.query(Contract).filter(
        Contract.id == renewal.original_contract_id).first()
    if not original:
        return error_response(
            message="Contrato original não encontrado",
            status_code=AppStatusCode.RESOURCE_NOT_FOUND,
            http_status=404
        )

    already_renewed = db.query(ContractRenewal.id).filter(
        ContractRenewal.original_contract_id == original.id).first()
    if already_renewed or original.status == ContractStatus.renovado.value:
        return error_response(
            message=f"O contrato #{original.id} já foi renovado",
            status_code=AppStatusCode.INVALID_INPUT
        )

    new_contract = Contract(
        owner_id=original.owner_id,
        tenant_id=original.tenant_id,
        property_id=original.property_id,
        start_date=renewal.start_date,
        end_date=renewal.end_date,
        duration=months_between(renewal.start_date, renewal.end_date),
        rent_value=renewal.new_rent_value,
        deposit_value=original.deposit_value,
        payment_day=original.payment_day,
        first_payment_date=renewal.first_payment_date or renewal.start_date,
        status=ContractStatus.ativo.value,
        observations=f"Renovação do contrato #{original.id}. {renewal.observations or ''}".strip(),
        is_renewal=True,
        original_contract_id=original.id,
    )
    db.add(new_contract)
    db.flush()

    original.status = ContractStatus.renovado.value

    db_renewal = ContractRenewal(
        contract_id=new_contract.id,
        original_contract_id=original.id,
        renewal_date=renewal.renewal_date,
        start_date=renewal.start_date,
        end_date=renewal.end_date,
        new_rent_value=renewal.new_rent_value,
        adjustment_index=renewal.adjustment_index.value,
        observations=renewal.observations,
    )
    db.add(db_renewal)

    payments = generate_payments(db, new_contract)
    for payment in payments:
        payment.observations = (
            f"Parcela {payment.installment_number}/{new_contract.duration} (Contrato Renovado)")

    db.commit()
    db.refresh(db_renewal)
    db.refresh(new_contract)
    logger.info("Contract %s renewed as %s", original.id, new_contract.id)

    return ContractRenewalResult(
        renewal=ContractRenewalOut.model_validate(db_renewal),
        contract=ContractOut.model_validate(new_contract)
    )


def delete_renewal(db: Session, renewal_id: int) -> dict:
    """
    Undo a renewal: the contract it created is removed with its installments
    and the original contract goes back to active.
    """
    db_renewal = get_renewal(db, renewal_id)
    new_contract = db_renewal.contract
    original = db_renewal.original_contract

    if new_contract:
        paid = db.query(func.count(Payment.id)).filter(
            Payment.contract_id == new_contract.id,
            Payment.is_paid == True
        ).scalar()
        if paid:
            return error_response(
                message="O contrato renovado possui parcelas pagas e a renovação não pode ser removida"
            )
        renewed_again = db.query(func.count(ContractRenewal.id)).filter(
            ContractRenewal.original_contract_id == new_contract.id).scalar()
        if renewed_again:
            return error_response(
                message="O contrato renovado já foi renovado novamente e a renovação não pode ser removida"
            )

    db.delete(db_renewal)
    db.flush()
    if new_contract:
        db.query(DeletedPayment).filter(
            DeletedPayment.contract_id == new_contract.id).delete()
        db.delete(new_contract)
    if original and original.status == ContractStatus.renovado.value:
        original.status = ContractStatus.ativo.value

    db.commit()
    logger.info("Renewal %s removed, contract %s reactivated",
                renewal_id, original.id if original else None)
    return {"id": renewal_id, "deleted": True}
