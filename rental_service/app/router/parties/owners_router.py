# app/router/parties/owners_router.py
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin, validate_current_token
from shared.core.database import get_rental_db as get_db
from shared.core.schemas import Lookup, UserToken

from ...schemas.parties.parties_schemas import (
    OwnerCreate,
    OwnerListResponse,
    OwnerOut,
    OwnerUpdate,
    PartyRequest,
)
from ...crud.parties import owners_crud as crud

router = APIRouter(
    prefix="/api/owners",
    tags=["owners"],
    dependencies=[Depends(validate_current_token)],
)

# ------------all


@router.get("/all", response_model=OwnerListResponse)
def owners_all(
    params: PartyRequest = Depends(),
    db: Session = Depends(get_db),
):
    return crud.get_all_owners(db, params)


@router.get("/lookup", response_model=List[Lookup])
def owner_lookup(db: Session = Depends(get_db)):
    return crud.owner_lookup(db)


@router.get("/{owner_id}", response_model=OwnerOut)
def get_owner(owner_id: int, db: Session = Depends(get_db)):
    return crud.get_owner(db, owner_id)

# ----------------- Create Owner -----------------


@router.post("/", response_model=OwnerOut)
def create_owner(
    owner: OwnerCreate,
    db: Session = Depends(get_db),
):
    return crud.create_owner(db, owner)

# ----------------- Update Owner -----------------


@router.put("/", response_model=OwnerOut)
def update_owner(
    owner: OwnerUpdate,
    db: Session = Depends(get_db),
):
    return crud.update_owner(db, owner)

# ---------------- Delete Owner ----------------


@router.delete("/{owner_id}")
def delete_owner(
    owner_id: int,
    db: Session = Depends(get_db),
    _: UserToken = Depends(allow_admin)
):
    return crud.delete_owner(db, owner_id)
