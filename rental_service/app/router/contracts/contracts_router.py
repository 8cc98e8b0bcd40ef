# app/router/contracts/contracts_router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin, validate_current_token
from shared.core.database import get_rental_db as get_db
from shared.core.schemas import UserToken

from ...schemas.contracts.contracts_schemas import (
    ContractCreate,
    ContractListResponse,
    ContractOut,
    ContractRequest,
    ContractUpdate,
)
from ...schemas.contracts.payments_schemas import PaymentListResponse
from ...crud.contracts import contracts_crud as crud
from ...crud.contracts import payments_crud

router = APIRouter(
    prefix="/api/contracts",
    tags=["contracts"],
    dependencies=[Depends(validate_current_token)],
)


@router.get("/all", response_model=ContractListResponse)
def contracts_all(
    params: ContractRequest = Depends(),
    db: Session = Depends(get_db),
):
    return crud.get_all_contracts(db, params)


@router.get("/{contract_id}", response_model=ContractOut)
def get_contract(contract_id: int, db: Session = Depends(get_db)):
    return crud.get_contract(db, contract_id)


@router.get("/{contract_id}/payments", response_model=PaymentListResponse)
def get_contract_payments(contract_id: int, db: Session = Depends(get_db)):
    crud.get_contract(db, contract_id)
    return payments_crud.get_payments_by_contract(db, contract_id)

# ----------------- Create Contract -----------------


@router.post("/", response_model=ContractOut)
def create_contract(
    contract: ContractCreate,
    db: Session = Depends(get_db),
):
    return crud.create_contract(db, contract)

# ----------------- Update Contract -----------------


@router.put("/", response_model=ContractOut)
def update_contract(
    contract: ContractUpdate,
    db: Session = Depends(get_db),
):
    return crud.update_contract(db, contract)

# ---------------- Delete Contract ----------------


@router.delete("/{contract_id}")
def delete_contract(
    contract_id: int,
    db: Session = Depends(get_db),
    _: UserToken = Depends(allow_admin)
):
    return crud.delete_contract(db, contract_id)
