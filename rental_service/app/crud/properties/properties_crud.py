# app/crud/properties/properties_crud.py
from typing import List
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from shared.core.schemas import Lookup
from shared.helpers.address_helper import encode_address
from shared.helpers.json_response_helper import error_response
from shared.utils.app_status_code import AppStatusCode

from ...models.contracts.contracts import Contract
from ...models.parties.owners import Owner
from ...models.properties.properties import Property
from ...enum.rental_enum import ContractStatus
from ...schemas.properties.properties_schemas import (
    PropertyCreate,
    PropertyListResponse,
    PropertyOut,
    PropertyRequest,
    PropertyUpdate,
)


def get_property(db: Session, property_id: int) -> Property:
    prop = db.query(Property).filter(Property.id == property_id).first()
    if not prop:
        return error_response(
            message="Imóvel não encontrado",
            status_code=AppStatusCode.RESOURCE_NOT_FOUND,
            http_status=404
        )
    return prop


def _ensure_owner(db: Session, owner_id: int):
    owner = db.query(Owner).filter(
        Owner.id == owner_id,
        Owner.is_active == True
    ).first()
    if not owner:
        return error_response(
            message="Proprietário informado não existe",
            status_code=AppStatusCode.INVALID_INPUT
        )
    return owner


def get_all_properties(db: Session, params: PropertyRequest) -> PropertyListResponse:
    query = db.query(Property).filter(Property.is_active == True)

    if params.owner_id:
        query = query.filter(Property.owner_id == params.owner_id)

    if params.available is not None:
        query = query.filter(Property.available_for_rent == params.available)

    if params.search:
        search_term = f"%{params.search}%"
        query = query.filter(
            or_(
                Property.name.ilike(search_term),
                Property.address.ilike(search_term),
                Property.description.ilike(search_term),
            )
        )

    total = query.with_entities(func.count(Property.id)).scalar()
    properties = (
        query.order_by(Property.id.desc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )

    return PropertyListResponse(
        properties=[PropertyOut.model_validate(p) for p in properties],
        total=total
    )


def property_lookup(db: Session) -> List[Lookup]:
    rows = (
        db.query(Property.id, Property.name)
        .filter(Property.is_active == True)
        .order_by(Property.id.asc())
        .all()
    )
    return [Lookup(id=r.id, name=r.name or f"Imóvel {r.id}") for r in rows]


def create_property(db: Session, prop: PropertyCreate) -> Property:
    _ensure_owner(db, prop.owner_id)

    data = prop.model_dump()
    data["type"] = prop.type.value
    data["address"] = encode_address(prop.address)
    if data.get("available_for_rent") is None:
        data["available_for_rent"] = True
    db_property = Property(**data)
    db.add(db_property)
    db.commit()
    db.refresh(db_property)
    return db_property


def update_property(db: Session, prop: PropertyUpdate) -> Property:
    db_property = get_property(db, prop.id)

    update_data = prop.model_dump(exclude_unset=True, exclude={"id"})
    if "owner_id" in update_data:
        _ensure_owner(db, update_data["owner_id"])
    if update_data.get("type") is not None:
        update_data["type"] = prop.type.value
    if "address" in update_data:
        update_data["address"] = encode_address(update_data["address"])

    for key, value in update_data.items():
        setattr(db_property, key, value)

    db.commit()
    db.refresh(db_property)
    return db_property


def delete_property(db: Session, property_id: int) -> dict:
    db_property = get_property(db, property_id)

    active_contracts = db.query(func.count(Contract.id)).filter(
        Contract.property_id == property_id,
        Contract.status == ContractStatus.ativo.value
    ).scalar()
    if active_contracts:
        return error_response(
            message="Imóvel possui contrato ativo e não pode ser removido"
        )

    db_property.is_active = False
    db.commit()
    return {"id": property_id, "deleted": True}
