# app/router/contracts/contract_documents_router.py
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, StreamingResponse
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_rental_db as get_db
from shared.helpers.json_response_helper import error_response
from shared.utils.app_status_code import AppStatusCode
from shared.utils.contract_pdf import generate_contract_pdf
from shared.utils.payment_slips_pdf import generate_payment_slips_pdf

from ...enum.rental_enum import TemplateType
from ...crud.contracts import contracts_crud, payments_crud
from ...services import contract_templates_service as service
from ...services.html_output_service import (
    render_contract_html,
    render_contract_preview_html,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/contracts",
    tags=["contract-documents"],
    dependencies=[Depends(validate_current_token)],
)

NO_CACHE = {"Cache-Control": "no-store, no-cache, must-revalidate"}


def _process(db: Session, contract_id: int, type: TemplateType, template_id: Optional[int]):
    context = service.build_render_context(db, contract_id)
    if template_id:
        content = service.get_processed_template(db, template_id, context)
    else:
        content = service.get_processed_template_by_type(
            db, type.value, context)
    return context, content


def _file_prefix(type: TemplateType) -> str:
    return "contrato" if type == TemplateType.residential else "contrato_comercial"


@router.get("/{contract_id}/html/{type}", response_class=HTMLResponse)
def contract_html(
    contract_id: int,
    type: TemplateType,
    template_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    context, content = _process(db, contract_id, type, template_id)
    html = render_contract_html(
        content, f"Contrato de Locação - {context.tenant.name}")
    headers = {
        **NO_CACHE,
        "Content-Disposition": f'inline; filename="{_file_prefix(type)}_{contract_id}.html"',
    }
    return HTMLResponse(content=html, headers=headers)


@router.get("/{contract_id}/preview/{type}", response_class=HTMLResponse)
def contract_preview(
    contract_id: int,
    type: TemplateType,
    template_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    context, content = _process(db, contract_id, type, template_id)
    html = render_contract_preview_html(
        content,
        f"Visualização de Contrato - {context.owner.name} e {context.tenant.name}",
        contract_id,
        type.value,
        template_id,
    )
    return HTMLResponse(content=html, headers=NO_CACHE)


@router.get("/{contract_id}/pdf/{type}")
def contract_pdf(
    contract_id: int,
    type: TemplateType,
    template_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    context, content = _process(db, contract_id, type, template_id)
    buffer = generate_contract_pdf(
        content, f"Contrato de Locação - {context.tenant.name}")
    headers = {
        **NO_CACHE,
        "Content-Disposition": f'attachment; filename="{_file_prefix(type)}_{contract_id}.pdf"',
    }
    return StreamingResponse(buffer, media_type="application/pdf", headers=headers)


@router.get("/{contract_id}/payment-slips")
def payment_slips(
    contract_id: int,
    db: Session = Depends(get_db),
):
    contract = contracts_crud.get_contract(db, contract_id)
    if not (contract.owner and contract.tenant and contract.property):
        return error_response(
            message="Dados relacionados não encontrados",
            status_code=AppStatusCode.RESOURCE_NOT_FOUND,
            http_status=404
        )

    pending = payments_crud.get_pending_payments(db, contract_id)
    if not pending:
        return error_response(
            message="Não há parcelas pendentes para gerar carnês",
            status_code=AppStatusCode.RESOURCE_NOT_FOUND,
            http_status=404
        )

    logger.info("Generating %s payment slips for contract %s",
                len(pending), contract_id)
    buffer = generate_payment_slips_pdf(
        contract, contract.owner, contract.tenant, contract.property, pending)
    headers = {
        **NO_CACHE,
        "Content-Disposition": f'attachment; filename="carnes_contrato_{contract_id}.pdf"',
    }
    return StreamingResponse(buffer, media_type="application/pdf", headers=headers)
