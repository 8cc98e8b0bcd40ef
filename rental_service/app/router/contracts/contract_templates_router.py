# app/router/contracts/contract_templates_router.py
from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin, validate_current_token
from shared.core.database import get_rental_db as get_db
from shared.core.schemas import UserToken

from ...enum.rental_enum import TemplateType
from ...schemas.contracts.contract_templates_schemas import (
    ContractTemplateCreate,
    ContractTemplateListResponse,
    ContractTemplateOut,
    ContractTemplateUpdate,
    TemplateTagOut,
)
from ...crud.contracts import contract_templates_crud as crud

router = APIRouter(
    prefix="/api/contract-templates",
    tags=["contract-templates"],
    dependencies=[Depends(validate_current_token)],
)


@router.get("/all", response_model=ContractTemplateListResponse)
def templates_all(
    type: Optional[TemplateType] = None,
    db: Session = Depends(get_db),
):
    return crud.get_all_templates(db, type.value if type else None)


@router.get("/tags", response_model=List[TemplateTagOut])
def template_tags():
    return crud.get_template_tags()


@router.get("/{template_id}", response_model=ContractTemplateOut)
def get_template(template_id: int, db: Session = Depends(get_db)):
    return crud.get_template(db, template_id)

# ----------------- admin only -----------------


@router.post("/", response_model=ContractTemplateOut)
def create_template(
    template: ContractTemplateCreate,
    db: Session = Depends(get_db),
    _: UserToken = Depends(allow_admin)
):
    return crud.create_template(db, template)


@router.put("/", response_model=ContractTemplateOut)
def update_template(
    template: ContractTemplateUpdate,
    db: Session = Depends(get_db),
    _: UserToken = Depends(allow_admin)
):
    return crud.update_template(db, template)


@router.delete("/{template_id}")
def delete_template(
    template_id: int,
    db: Session = Depends(get_db),
    _: UserToken = Depends(allow_admin)
):
    return crud.delete_template(db, template_id)
