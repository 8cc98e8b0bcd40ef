# app/crud/contracts/contract_templates_crud.py
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.helpers.json_response_helper import error_response
from shared.utils.app_status_code import AppStatusCode

from ...models.contracts.contract_templates import ContractTemplate
from ...schemas.contracts.contract_templates_schemas import (
    ContractTemplateCreate,
    ContractTemplateListResponse,
    ContractTemplateOut,
    ContractTemplateUpdate,
    TemplateTagOut,
)
from ...services.template_tags import TemplateTag, find_unknown_tags


def _check_tags(content: str):
    unknown = find_unknown_tags(content)
    if unknown:
        tags = ", ".join("{{" + name + "}}" for name in unknown)
        return error_response(
            message=f"Tags desconhecidas no modelo: {tags}",
            status_code=AppStatusCode.TEMPLATE_UNKNOWN_TAG
        )


def get_all_templates(db: Session, type: Optional[str] = None) -> ContractTemplateListResponse:
    query = db.query(ContractTemplate).filter(
        ContractTemplate.is_active == True)
    if type:
        query = query.filter(ContractTemplate.type == type)

    templates = query.order_by(ContractTemplate.id.asc()).all()
    return ContractTemplateListResponse(
        templates=[ContractTemplateOut.model_validate(t) for t in templates],
        total=len(templates)
    )


def get_template(db: Session, template_id: int) -> ContractTemplate:
    # soft-deleted templates stay readable by id
    template = db.query(ContractTemplate).filter(
        ContractTemplate.id == template_id).first()
    if not template:
        return error_response(
            message="Modelo de contrato não encontrado",
            status_code=AppStatusCode.RESOURCE_NOT_FOUND,
            http_status=404
        )
    return template


def get_template_tags() -> List[TemplateTagOut]:
    return [TemplateTagOut(tag=t.value, placeholder=t.placeholder) for t in TemplateTag]


def create_template(db: Session, template: ContractTemplateCreate) -> ContractTemplate:
    _check_tags(template.content)

    existing = db.query(ContractTemplate).filter(
        ContractTemplate.is_active == True,
        func.lower(ContractTemplate.name) == template.name.lower()
    ).first()
    if existing:
        return error_response(
            message=f"Já existe um modelo chamado '{template.name}'",
            status_code=AppStatusCode.DUPLICATE_RESOURCE
        )

    db_template = ContractTemplate(
        name=template.name,
        type=template.type.value,
        content=template.content,
        is_active=True,
    )
    db.add(db_template)
    db.commit()
    db.refresh(db_template)
    return db_template


def update_template(db: Session, template: ContractTemplateUpdate) -> ContractTemplate:
    db_template = get_template(db, template.id)
    if not db_template.is_active:
        return error_response(
            message="Modelo de contrato removido não pode ser alterado",
            status_code=AppStatusCode.INVALID_INPUT
        )

    update_data = template.model_dump(exclude_unset=True, exclude={"id"})
    if update_data.get("content") is not None:
        _check_tags(update_data["content"])
    if update_data.get("type") is not None:
        update_data["type"] = template.type.value

    for key, value in update_data.items():
        if value is not None:
            setattr(db_template, key, value)

    db.commit()
    db.refresh(db_template)
    return db_template


def delete_template(db: Session, template_id: int) -> dict:
    db_template = get_template(db, template_id)
    db_template.is_active = False
    db.commit()
    return {"id": template_id, "deleted": True}
