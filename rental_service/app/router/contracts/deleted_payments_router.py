# app/router/contracts/deleted_payments_router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin, validate_current_token
from shared.core.database import get_rental_db as get_db
from shared.core.schemas import UserToken

from ...schemas.contracts.payments_schemas import DeletedPaymentListResponse, PaymentOut
from ...crud.contracts import deleted_payments_crud as crud

router = APIRouter(
    prefix="/api/deleted-payments",
    tags=["deleted-payments"],
    dependencies=[Depends(validate_current_token)],
)


@router.get("/all", response_model=DeletedPaymentListResponse)
def deleted_payments_all(db: Session = Depends(get_db)):
    return crud.get_deleted_payments(db)


@router.get("/contract/{contract_id}", response_model=DeletedPaymentListResponse)
def deleted_payments_by_contract(contract_id: int, db: Session = Depends(get_db)):
    return crud.get_deleted_payments_by_contract(db, contract_id)


@router.get("/user/{user_id}", response_model=DeletedPaymentListResponse)
def deleted_payments_by_user(user_id: str, db: Session = Depends(get_db)):
    return crud.get_deleted_payments_by_user(db, user_id)


@router.post("/restore/{deleted_id}", response_model=PaymentOut)
def restore_deleted_payment(
    deleted_id: int,
    db: Session = Depends(get_db),
    _: UserToken = Depends(allow_admin)
):
    return crud.restore_deleted_payment(db, deleted_id)
