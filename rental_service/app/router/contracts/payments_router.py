# app/router/contracts/payments_router.py
from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin, validate_current_token
from shared.core.database import get_rental_db as get_db
from shared.core.schemas import UserToken
from shared.utils.payment_slips_pdf import generate_payment_receipt_pdf

from ...schemas.contracts.payments_schemas import (
    PaymentCreate,
    PaymentOut,
    PaymentReceiptData,
    PaymentUpdate,
)
from ...crud.contracts import payments_crud as crud

router = APIRouter(
    prefix="/api/payments",
    tags=["payments"],
    dependencies=[Depends(validate_current_token)],
)


@router.get("/{payment_id}", response_model=PaymentOut)
def get_payment(payment_id: int, db: Session = Depends(get_db)):
    return crud.get_payment(db, payment_id)


@router.get("/{payment_id}/receipt-data", response_model=PaymentReceiptData)
def get_receipt_data(payment_id: int, db: Session = Depends(get_db)):
    return crud.get_receipt_data(db, payment_id)


@router.get("/{payment_id}/pdf")
def payment_receipt_pdf(payment_id: int, db: Session = Depends(get_db)):
    payment = crud.get_receipt_payment(db, payment_id)
    contract = payment.contract
    buffer = generate_payment_receipt_pdf(
        payment, contract, contract.owner, contract.tenant, contract.property)
    headers = {
        "Cache-Control": "no-store, no-cache, must-revalidate",
        "Content-Disposition": f'attachment; filename="recibo_{payment_id}.pdf"',
    }
    return StreamingResponse(buffer, media_type="application/pdf", headers=headers)


@router.post("/", response_model=PaymentOut)
def create_payment(
    payment: PaymentCreate,
    db: Session = Depends(get_db),
):
    return crud.create_payment(db, payment)


@router.put("/", response_model=PaymentOut)
def update_payment(
    payment: PaymentUpdate,
    db: Session = Depends(get_db),
):
    return crud.update_payment(db, payment)


@router.delete("/{payment_id}")
def delete_payment(
    payment_id: int,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_admin)
):
    return crud.delete_payment(db, payment_id, current_user.user_id)
