# app/router/properties/properties_router.py
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin, validate_current_token
from shared.core.database import get_rental_db as get_db
from shared.core.schemas import Lookup, UserToken

from ...schemas.properties.properties_schemas import (
    PropertyCreate,
    PropertyListResponse,
    PropertyOut,
    PropertyRequest,
    PropertyUpdate,
)
from ...crud.properties import properties_crud as crud

router = APIRouter(
    prefix="/api/properties",
    tags=["properties"],
    dependencies=[Depends(validate_current_token)],
)


@router.get("/all", response_model=PropertyListResponse)
def properties_all(
    params: PropertyRequest = Depends(),
    db: Session = Depends(get_db),
):
    return crud.get_all_properties(db, params)


@router.get("/lookup", response_model=List[Lookup])
def property_lookup(db: Session = Depends(get_db)):
    return crud.property_lookup(db)


@router.get("/{property_id}", response_model=PropertyOut)
def get_property(property_id: int, db: Session = Depends(get_db)):
    return crud.get_property(db, property_id)


@router.post("/", response_model=PropertyOut)
def create_property(
    prop: PropertyCreate,
    db: Session = Depends(get_db),
):
    return crud.create_property(db, prop)


@router.put("/", response_model=PropertyOut)
def update_property(
    prop: PropertyUpdate,
    db: Session = Depends(get_db),
):
    return crud.update_property(db, prop)


@router.delete("/{property_id}")
def delete_property(
    property_id: int,
    db: Session = Depends(get_db),
    _: UserToken = Depends(allow_admin)
):
    return crud.delete_property(db, property_id)
