# app/crud/contracts/payments_crud.py
import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from shared.helpers.json_response_helper import error_response
from shared.utils.app_status_code import AppStatusCode

from ...models.contracts.contracts import Contract
from ...models.contracts.deleted_payments import DeletedPayment
from ...models.contracts.payments import Payment
from ...schemas.contracts.payments_schemas import (
    PaymentCreate,
    PaymentListResponse,
    PaymentOut,
    PaymentReceiptData,
    PaymentUpdate,
)
from ...schemas.contracts.contracts_schemas import ContractOut
from ...schemas.parties.parties_schemas import OwnerOut, TenantOut
from ...schemas.properties.properties_schemas import PropertyOut

logger = logging.getLogger(__name__)


def get_payment(db: Session, payment_id: int) -> Payment:
    payment = db.query(Payment).filter(Payment.id == payment_id).first()
    if not payment:
        return error_response(
            message="Parcela não encontrada",
            status_code=AppStatusCode.RESOURCE_NOT_FOUND,
            http_status=404
        )
    return payment


def get_payments_by_contract(db: Session, contract_id: int) -> PaymentListResponse:
    payments = (
        db.query(Payment)
        .filter(Payment.contract_id == contract_id)
        .order_by(Payment.due_date.asc(), Payment.id.asc())
        .all()
    )
    return PaymentListResponse(
        payments=[PaymentOut.model_validate(p) for p in payments],
        total=len(payments)
    )


def get_pending_payments(db: Session, contract_id: int) -> List[Payment]:
    return (
        db.query(Payment)
        .filter(
            Payment.contract_id == contract_id,
            Payment.is_paid == False
        )
        .order_by(Payment.due_date.asc(), Payment.id.asc())
        .all()
    )


def create_payment(db: Session, payment: PaymentCreate) -> Payment:
    contract = db.query(Contract).filter(
        Contract.id == payment.contract_id).first()
    if not contract:
        return error_response(
            message="Contrato informado não existe",
            status_code=AppStatusCode.INVALID_INPUT
        )

    db_payment = Payment(**payment.model_dump(), is_paid=False)
    db.add(db_payment)
    db.commit()
    db.refresh(db_payment)
    return db_payment


def update_payment(db: Session, payment: PaymentUpdate) -> Payment:
    db_payment = get_payment(db, payment.id)

    update_data = payment.model_dump(exclude_unset=True, exclude={"id"})
    if update_data.get("is_paid") and not update_data.get("payment_date") \
            and not db_payment.payment_date:
        return error_response(
            message="Informe a data do pagamento",
            status_code=AppStatusCode.INVALID_INPUT
        )
    if update_data.get("is_paid") is False:
        update_data["payment_date"] = None

    for key, value in update_data.items():
        setattr(db_payment, key, value)

    db.commit()
    db.refresh(db_payment)
    return db_payment


def delete_payment(db: Session, payment_id: int, deleted_by: Optional[str] = None) -> dict:
    """Remove an unpaid installment, keeping a copy in the deleted history."""
    db_payment = get_payment(db, payment_id)
    if db_payment.is_paid:
        return error_response(
            message="Parcela paga não pode ser removida"
        )

    db.add(DeletedPayment(
        original_id=db_payment.id,
        contract_id=db_payment.contract_id,
        due_date=db_payment.due_date,
        value=db_payment.value,
        is_paid=bool(db_payment.is_paid),
        payment_date=db_payment.payment_date,
        interest_amount=db_payment.interest_amount,
        late_payment_fee=db_payment.late_payment_fee,
        payment_method=db_payment.payment_method,
        receipt_number=db_payment.receipt_number,
        observations=db_payment.observations,
        installment_number=db_payment.installment_number or 0,
        deleted_by=deleted_by,
        original_created_at=db_payment.created_at,
        was_restored=bool(db_payment.is_restored),
    ))
    contract_id = db_payment.contract_id
    db.delete(db_payment)
    db.commit()
    logger.info("Payment %s of contract %s deleted by user %s",
                payment_id, contract_id, deleted_by)
    return {"id": payment_id, "deleted": True}


# ----------------------------------------------------------------------
# receipts
# ----------------------------------------------------------------------

def get_receipt_payment(db: Session, payment_id: int) -> Payment:
    """Installment with its contract, parties and property all present."""
    payment = get_payment(db, payment_id)
    contract = payment.contract
    for related, message in (
        (contract, "Contrato não encontrado"),
        (contract and contract.owner, "Proprietário não encontrado"),
        (contract and contract.tenant, "Inquilino não encontrado"),
        (contract and contract.property, "Imóvel não encontrado"),
    ):
        if not related:
            return error_response(
                message=message,
                status_code=AppStatusCode.RESOURCE_NOT_FOUND,
                http_status=404
            )
    return payment


def get_receipt_data(db: Session, payment_id: int) -> PaymentReceiptData:
    payment = get_receipt_payment(db, payment_id)
    contract = payment.contract
    return PaymentReceiptData(
        payment=PaymentOut.model_validate(payment),
        contract=ContractOut.model_validate(contract),
        owner=OwnerOut.model_validate(contract.owner),
        tenant=TenantOut.model_validate(contract.tenant),
        property=PropertyOut.model_validate(contract.property),
    )
