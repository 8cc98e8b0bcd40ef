# app/crud/contracts/deleted_payments_crud.py
import logging
from sqlalchemy.orm import Session

from shared.helpers.json_response_helper import error_response
from shared.utils.app_status_code import AppStatusCode

from ...models.contracts.contracts import Contract
from ...models.contracts.deleted_payments import DeletedPayment
from ...models.contracts.payments import Payment
from ...schemas.contracts.payments_schemas import (
    DeletedPaymentListResponse,
    DeletedPaymentOut,
)

logger = logging.getLogger(__name__)


def _listing(query) -> DeletedPaymentListResponse:
    # most recent deletions first
    rows = query.order_by(DeletedPayment.deleted_at.desc(),
                          DeletedPayment.id.desc()).all()
    return DeletedPaymentListResponse(
        deleted_payments=[DeletedPaymentOut.model_validate(r) for r in rows],
        total=len(rows)
    )


def get_deleted_payments(db: Session) -> DeletedPaymentListResponse:
    return _listing(db.query(DeletedPayment))


def get_deleted_payments_by_contract(db: Session, contract_id: int) -> DeletedPaymentListResponse:
    return _listing(db.query(DeletedPayment).filter(
        DeletedPayment.contract_id == contract_id))


def get_deleted_payments_by_user(db: Session, user_id: str) -> DeletedPaymentListResponse:
    return _listing(db.query(DeletedPayment).filter(
        DeletedPayment.deleted_by == user_id))


def restore_deleted_payment(db: Session, deleted_id: int) -> Payment:
    """
    Put a deleted installment back on its contract as a new, unpaid row.
    Payment details (date, method, receipt, interest) are not carried over.
    """
    deleted = db.query(DeletedPayment).filter(
        DeletedPayment.id == deleted_id).first()
    if not deleted:
        return error_response(
            message="Parcela excluída não encontrada",
            status_code=AppStatusCode.RESOURCE_NOT_FOUND,
            http_status=404
        )

    contract = db.query(Contract).filter(
        Contract.id == deleted.contract_id).first()
    if not contract:
        return error_response(
            message="Contrato da parcela não existe mais",
            status_code=AppStatusCode.INVALID_INPUT
        )

    payment = Payment(
        contract_id=deleted.contract_id,
        due_date=deleted.due_date,
        value=deleted.value,
        is_paid=False,
        observations=deleted.observations,
        installment_number=deleted.installment_number or 0,
        is_restored=True,
    )
    if deleted.original_created_at:
        payment.created_at = deleted.original_created_at
    db.add(payment)
    db.delete(deleted)
    db.commit()
    db.refresh(payment)
    logger.info("Deleted payment %s restored as payment %s", deleted_id, payment.id)
    return payment
