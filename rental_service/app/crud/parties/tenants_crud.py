# app/crud/parties/tenants_crud.py
from typing import List
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from shared.core.schemas import Lookup
from shared.helpers.address_helper import encode_address
from shared.helpers.json_response_helper import error_response
from shared.utils.app_status_code import AppStatusCode

from ...models.contracts.contracts import Contract
from ...models.parties.tenants import Tenant
from ...enum.rental_enum import ContractStatus
from ...schemas.parties.parties_schemas import (
    PartyRequest,
    TenantCreate,
    TenantListResponse,
    TenantOut,
    TenantUpdate,
)


def get_tenant(db: Session, tenant_id: int) -> Tenant:
    tenant = db.query(Tenant).filter(Tenant.id == tenant_id).first()
    if not tenant:
        return error_response(
            message="Inquilino não encontrado",
            status_code=AppStatusCode.RESOURCE_NOT_FOUND,
            http_status=404
        )
    return tenant


def get_all_tenants(db: Session, params: PartyRequest) -> TenantListResponse:
    query = db.query(Tenant)

    if params.status == "inactive":
        query = query.filter(Tenant.is_active == False)
    elif params.status != "all":
        query = query.filter(Tenant.is_active == True)

    if params.search:
        search_term = f"%{params.search}%"
        query = query.filter(
            or_(
                Tenant.name.ilike(search_term),
                Tenant.document.ilike(search_term),
                Tenant.email.ilike(search_term),
                Tenant.phone.ilike(search_term),
            )
        )

    total = query.with_entities(func.count(Tenant.id)).scalar()
    tenants = (
        query.order_by(Tenant.name.asc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )

    return TenantListResponse(
        tenants=[TenantOut.model_validate(t) for t in tenants],
        total=total
    )


def tenant_lookup(db: Session) -> List[Lookup]:
    tenants = (
        db.query(Tenant.id, Tenant.name)
        .filter(Tenant.is_active == True)
        .order_by(Tenant.name.asc())
        .all()
    )
    return [Lookup(id=t.id, name=t.name) for t in tenants]


def create_tenant(db: Session, tenant: TenantCreate) -> Tenant:
    existing = db.query(Tenant).filter(
        Tenant.document == tenant.document).first()
    if existing:
        return error_response(
            message=f"Já existe um inquilino com o documento {tenant.document}",
            status_code=AppStatusCode.DUPLICATE_RESOURCE
        )

    data = tenant.model_dump()
    data["address"] = encode_address(tenant.address)
    # guarantor is embedded on the tenant row as JSON text
    data["guarantor"] = encode_address(tenant.guarantor)
    db_tenant = Tenant(**data)
    db.add(db_tenant)
    db.commit()
    db.refresh(db_tenant)
    return db_tenant


def update_tenant(db: Session, tenant: TenantUpdate) -> Tenant:
    db_tenant = get_tenant(db, tenant.id)

    update_data = tenant.model_dump(exclude_unset=True, exclude={"id"})
    if "document" in update_data and update_data["document"] != db_tenant.document:
        existing = db.query(Tenant).filter(
            Tenant.id != tenant.id,
            Tenant.document == update_data["document"]
        ).first()
        if existing:
            return error_response(
                message=f"Já existe um inquilino com o documento {update_data['document']}",
                status_code=AppStatusCode.DUPLICATE_RESOURCE
            )

    for field in ("address", "guarantor"):
        if field in update_data:
            update_data[field] = encode_address(update_data[field])

    for key, value in update_data.items():
        setattr(db_tenant, key, value)

    db.commit()
    db.refresh(db_tenant)
    return db_tenant


def delete_tenant(db: Session, tenant_id: int) -> dict:
    db_tenant = get_tenant(db, tenant_id)

    active_contracts = db.query(func.count(Contract.id)).filter(
        Contract.tenant_id == tenant_id,
        Contract.status == ContractStatus.ativo.value
    ).scalar()
    if active_contracts:
        return error_response(
            message="Inquilino possui contratos ativos e não pode ser removido"
        )

    db_tenant.is_active = False
    db.commit()
    return {"id": tenant_id, "deleted": True}
