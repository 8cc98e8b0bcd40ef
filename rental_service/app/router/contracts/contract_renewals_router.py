# app/router/contracts/contract_renewals_router.py
from typing import List
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, StreamingResponse
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin, validate_current_token
from shared.core.database import get_rental_db as get_db
from shared.core.schemas import UserToken
from shared.utils.contract_pdf import generate_contract_pdf

from ...schemas.contracts.contracts_schemas import (
    ContractRenewalCreate,
    ContractRenewalOut,
    ContractRenewalResult,
)
from ...crud.contracts import contract_renewals_crud as crud
from ...services.html_output_service import render_contract_html
from ...services.renewal_documents_service import render_renewal_term

router = APIRouter(
    prefix="/api/contract-renewals",
    tags=["contract-renewals"],
    dependencies=[Depends(validate_current_token)],
)

NO_CACHE = {"Cache-Control": "no-store, no-cache, must-revalidate"}


def _term_pdf(db: Session, renewal):
    context, content = render_renewal_term(db, renewal)
    buffer = generate_contract_pdf(
        content,
        f"Termo Aditivo de Renovação - {context.owner.name} e {context.tenant.name}")
    headers = {
        **NO_CACHE,
        "Content-Disposition": f'inline; filename="termo_aditivo_{renewal.id}.pdf"',
    }
    return StreamingResponse(buffer, media_type="application/pdf", headers=headers)


@router.get("/all", response_model=List[ContractRenewalOut])
def renewals_all(db: Session = Depends(get_db)):
    return crud.get_all_renewals(db)


@router.get("/original/{original_contract_id}", response_model=List[ContractRenewalOut])
def renewals_by_original(original_contract_id: int, db: Session = Depends(get_db)):
    return crud.get_renewals_by_original(db, original_contract_id)


@router.get("/by-contract/{contract_id}/pdf")
def renewal_term_pdf_by_contract(contract_id: int, db: Session = Depends(get_db)):
    return _term_pdf(db, crud.get_renewal_by_contract(db, contract_id))


@router.get("/{renewal_id}", response_model=ContractRenewalOut)
def get_renewal(renewal_id: int, db: Session = Depends(get_db)):
    return crud.get_renewal(db, renewal_id)


@router.get("/{renewal_id}/html", response_class=HTMLResponse)
def renewal_term_html(renewal_id: int, db: Session = Depends(get_db)):
    context, content = render_renewal_term(db, crud.get_renewal(db, renewal_id))
    html = render_contract_html(
        content, f"Termo Aditivo de Renovação - {context.tenant.name}")
    return HTMLResponse(content=html, headers=NO_CACHE)


@router.get("/{renewal_id}/pdf")
def renewal_term_pdf(renewal_id: int, db: Session = Depends(get_db)):
    return _term_pdf(db, crud.get_renewal(db, renewal_id))


@router.post("/", response_model=ContractRenewalResult)
def create_renewal(
    renewal: ContractRenewalCreate,
    db: Session = Depends(get_db),
    _: UserToken = Depends(allow_admin)
):
    return crud.create_renewal(db, renewal)


@router.delete("/{renewal_id}")
def delete_renewal(
    renewal_id: int,
    db: Session = Depends(get_db),
    _: UserToken = Depends(allow_admin)
):
    return crud.delete_renewal(db, renewal_id)
