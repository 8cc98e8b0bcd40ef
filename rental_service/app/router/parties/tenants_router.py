# app/router/parties/tenants_router.py
from typing import List
from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin, validate_current_token
from shared.core.database import get_rental_db as get_db
from shared.core.schemas import Lookup, UserToken
from shared.utils.registration_form_pdf import generate_tenant_registration_form_pdf

from ...schemas.parties.parties_schemas import (
    PartyRequest,
    TenantCreate,
    TenantListResponse,
    TenantOut,
    TenantUpdate,
)
from ...crud.parties import tenants_crud as crud

router = APIRouter(
    prefix="/api/tenants",
    tags=["tenants"],
    dependencies=[Depends(validate_current_token)],
)

# ------------all


@router.get("/all", response_model=TenantListResponse)
def tenants_all(
    params: PartyRequest = Depends(),
    db: Session = Depends(get_db),
):
    return crud.get_all_tenants(db, params)


@router.get("/lookup", response_model=List[Lookup])
def tenant_lookup(db: Session = Depends(get_db)):
    return crud.tenant_lookup(db)


@router.get("/{tenant_id}", response_model=TenantOut)
def get_tenant(tenant_id: int, db: Session = Depends(get_db)):
    return crud.get_tenant(db, tenant_id)


@router.get("/{tenant_id}/registration-form")
def tenant_registration_form(tenant_id: int, db: Session = Depends(get_db)):
    tenant = crud.get_tenant(db, tenant_id)
    buffer = generate_tenant_registration_form_pdf(tenant)
    headers = {
        "Content-Disposition": f'attachment; filename="ficha-cadastral-{tenant_id}.pdf"',
    }
    return StreamingResponse(buffer, media_type="application/pdf", headers=headers)

# ----------------- Create Tenant -----------------


@router.post("/", response_model=TenantOut)
def create_tenant(
    tenant: TenantCreate,
    db: Session = Depends(get_db),
):
    return crud.create_tenant(db, tenant)

# ----------------- Update Tenant -----------------


@router.put("/", response_model=TenantOut)
def update_tenant(
    tenant: TenantUpdate,
    db: Session = Depends(get_db),
):
    return crud.update_tenant(db, tenant)

# ---------------- Delete Tenant ----------------


@router.delete("/{tenant_id}")
def delete_tenant(
    tenant_id: int,
    db: Session = Depends(get_db),
    _: UserToken = Depends(allow_admin)
):
    return crud.delete_tenant(db, tenant_id)
