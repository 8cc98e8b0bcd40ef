# app/crud/parties/owners_crud.py
from typing import List
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from shared.core.schemas import Lookup
from shared.helpers.address_helper import encode_address
from shared.helpers.json_response_helper import error_response
from shared.utils.app_status_code import AppStatusCode

from ...models.contracts.contracts import Contract
from ...models.parties.owners import Owner
from ...enum.rental_enum import ContractStatus
from ...schemas.parties.parties_schemas import (
    OwnerCreate,
    OwnerListResponse,
    OwnerOut,
    OwnerUpdate,
    PartyRequest,
)


def get_owner(db: Session, owner_id: int) -> Owner:
    owner = db.query(Owner).filter(Owner.id == owner_id).first()
    if not owner:
        return error_response(
            message="Proprietário não encontrado",
            status_code=AppStatusCode.RESOURCE_NOT_FOUND,
            http_status=404
        )
    return owner


def get_all_owners(db: Session, params: PartyRequest) -> OwnerListResponse:
    query = db.query(Owner)

    if params.status == "inactive":
        query = query.filter(Owner.is_active == False)
    elif params.status != "all":
        query = query.filter(Owner.is_active == True)

    if params.search:
        search_term = f"%{params.search}%"
        query = query.filter(
            or_(
                Owner.name.ilike(search_term),
                Owner.document.ilike(search_term),
                Owner.email.ilike(search_term),
            )
        )

    total = query.with_entities(func.count(Owner.id)).scalar()
    owners = (
        query.order_by(Owner.name.asc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )

    return OwnerListResponse(
        owners=[OwnerOut.model_validate(o) for o in owners],
        total=total
    )


def owner_lookup(db: Session) -> List[Lookup]:
    owners = (
        db.query(Owner.id, Owner.name)
        .filter(Owner.is_active == True)
        .order_by(Owner.name.asc())
        .all()
    )
    return [Lookup(id=o.id, name=o.name) for o in owners]


def create_owner(db: Session, owner: OwnerCreate) -> Owner:
    existing = db.query(Owner).filter(
        Owner.document == owner.document).first()
    if existing:
        return error_response(
            message=f"Já existe um proprietário com o documento {owner.document}",
            status_code=AppStatusCode.DUPLICATE_RESOURCE
        )

    data = owner.model_dump()
    data["address"] = encode_address(owner.address)
    db_owner = Owner(**data)
    db.add(db_owner)
    db.commit()
    db.refresh(db_owner)
    return db_owner


def update_owner(db: Session, owner: OwnerUpdate) -> Owner:
    db_owner = get_owner(db, owner.id)

    update_data = owner.model_dump(exclude_unset=True, exclude={"id"})
    if "document" in update_data and update_data["document"] != db_owner.document:
        existing = db.query(Owner).filter(
            Owner.id != owner.id,
            Owner.document == update_data["document"]
        ).first()
        if existing:
            return error_response(
                message=f"Já existe um proprietário com o documento {update_data['document']}",
                status_code=AppStatusCode.DUPLICATE_RESOURCE
            )

    if "address" in update_data:
        update_data["address"] = encode_address(update_data["address"])

    for key, value in update_data.items():
        setattr(db_owner, key, value)

    db.commit()
    db.refresh(db_owner)
    return db_owner


def delete_owner(db: Session, owner_id: int) -> dict:
    db_owner = get_owner(db, owner_id)

    active_contracts = db.query(func.count(Contract.id)).filter(
        Contract.owner_id == owner_id,
        Contract.status == ContractStatus.ativo.value
    ).scalar()
    if active_contracts:
        return error_response(
            message="Proprietário possui contratos ativos e não pode ser removido"
        )

    db_owner.is_active = False
    db.commit()
    return {"id": owner_id, "deleted": True}
