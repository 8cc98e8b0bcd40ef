import logging
from datetime import datetime, timezone
from functools import partial
from typing import Callable, List, Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from shared.core.exceptions import NotFoundError
from shared.helpers.address_helper import decode_guarantor, format_address
from shared.helpers.currency_helper import format_currency
from shared.helpers.date_helper import (
    day_of, format_date_short, format_long_date, format_time,
    format_today_short, now_civil)
from shared.helpers.number_words_helper import to_words

from ..models.contracts.contract_templates import ContractTemplate
from ..models.contracts.contracts import Contract
from ..models.parties.owners import Owner
from ..models.parties.tenants import Tenant
from ..models.properties.properties import Property
from ..schemas.contracts.template_context_schemas import (
    ContractData, PartyData, PropertyData, TemplateRenderContext, TenantData)
from .template_tags import (
    RENEWAL_TAGS, RG_TAGS, TemplateTag, placeholder, remove_family,
    substitute_conditional, substitute_labelled, substitute_plain)

logger = logging.getLogger(__name__)

Rule = Callable[[str], str]

PAGE_FRAGMENT = (
    '<div style="position: absolute; bottom: 1cm; right: 1.5cm; '
    'font-size: 10pt;">Página {page} de {total}</div>'
)

DEFAULT_CONTRACT_TYPE = "residencial"


# ----------------------------------------------------------------------
# rules
# ----------------------------------------------------------------------

def _plain(tag, value) -> Rule:
    return partial(substitute_plain, tag=tag, value=value)


def _conditional(label, tag, value) -> Rule:
    return partial(substitute_conditional, label=label, tag=tag, value=value)


def _party_rules(role: str, party: PartyData) -> List[Rule]:
    def tag(field):
        return f"{role}.{field}"

    return [
        _plain(tag("name"), party.name),
        # "CPF: {{x.document}}" in the template keeps a single label
        partial(substitute_labelled, label="CPF:",
                tag=tag("document"), value=party.document),
        _plain(tag("document"), party.document),
        _conditional("RG nº:", tag("rg"), party.rg),
        _plain(tag("address"), "Endereço: " + format_address(party.address)),
        _plain(tag("phone"), party.phone),
        _plain(tag("email"), party.email),
        _plain(tag("nationality"), party.nationality),
        _plain(tag("profession"), party.profession),
        _plain(tag("maritalStatus"), party.marital_status),
        _conditional("Cônjuge:", tag("spouseName"), party.spouse_name),
    ]


def _guarantor_rules(guarantor: PartyData) -> List[Rule]:
    # guarantor fields are optional, so each carries its own label
    address = format_address(guarantor.address)
    return [
        _plain(TemplateTag.GUARANTOR_NAME, guarantor.name),
        partial(substitute_labelled, label="CPF:",
                tag=TemplateTag.GUARANTOR_DOCUMENT, value=guarantor.document),
        _conditional("CPF:", TemplateTag.GUARANTOR_DOCUMENT, guarantor.document),
        _conditional("RG nº:", TemplateTag.GUARANTOR_RG, guarantor.rg),
        _plain(TemplateTag.GUARANTOR_ADDRESS,
               "Endereço: " + address if address else ""),
        _conditional("Telefone:", TemplateTag.GUARANTOR_PHONE, guarantor.phone),
        _conditional("Email:", TemplateTag.GUARANTOR_EMAIL, guarantor.email),
        _conditional("Nacionalidade:", TemplateTag.GUARANTOR_NATIONALITY,
                     guarantor.nationality),
        _conditional("Profissão:", TemplateTag.GUARANTOR_PROFESSION,
                     guarantor.profession),
        _conditional("Estado Civil:", TemplateTag.GUARANTOR_MARITAL_STATUS,
                     guarantor.marital_status),
        _conditional("Cônjuge:", TemplateTag.GUARANTOR_SPOUSE_NAME,
                     guarantor.spouse_name),
    ]


def _property_rules(prop: PropertyData) -> List[Rule]:
    return [
        _plain(TemplateTag.PROPERTY_NAME, prop.name),
        _plain(TemplateTag.PROPERTY_ADDRESS,
               "Endereço: " + format_address(prop.address)),
        _plain(TemplateTag.PROPERTY_AREA, prop.area),
        _plain(TemplateTag.PROPERTY_DESCRIPTION, prop.description),
        _plain(TemplateTag.PROPERTY_TYPE, prop.type),
        _plain(TemplateTag.PROPERTY_BEDROOMS, prop.bedrooms),
        _plain(TemplateTag.PROPERTY_BATHROOMS, prop.bathrooms),
        _plain(TemplateTag.PROPERTY_WATER_COMPANY, prop.water_company),
        _plain(TemplateTag.PROPERTY_WATER_ACCOUNT_NUMBER,
               prop.water_account_number),
        _plain(TemplateTag.PROPERTY_ELECTRICITY_COMPANY,
               prop.electricity_company),
        _plain(TemplateTag.PROPERTY_ELECTRICITY_ACCOUNT_NUMBER,
               prop.electricity_account_number),
    ]


def _contract_rules(contract: ContractData) -> List[Rule]:
    return [
        _plain(TemplateTag.CONTRACT_DURATION, contract.duration),
        _plain(TemplateTag.CONTRACT_START_DATE,
               format_date_short(contract.start_date)),
        _plain(TemplateTag.CONTRACT_END_DATE,
               format_date_short(contract.end_date)),
        _plain(TemplateTag.CONTRACT_RENT_VALUE,
               format_currency(contract.rent_value)),
        _plain(TemplateTag.CONTRACT_NUMBER, contract.id),
        _plain(TemplateTag.CONTRACT_STATUS, contract.status),
        _plain(TemplateTag.CONTRACT_OBSERVATIONS, contract.observations),
    ]


def _macro_rules(now: datetime) -> List[Rule]:
    return [
        _plain(TemplateTag.DATA_LONGA, format_long_date(now)),
        _plain(TemplateTag.DATA_ATUAL, format_today_short(now)),
        _plain(TemplateTag.HORA, format_time(now)),
    ]


def payment_day_of(contract: ContractData) -> Optional[int]:
    if contract.payment_day is not None:
        return contract.payment_day
    return day_of(contract.first_payment_date)


def _contract_extra_rules(contract: ContractData) -> List[Rule]:
    rent_in_words = ""
    if contract.rent_value is not None:
        rent_in_words = to_words(contract.rent_value) + " reais"

    return [
        _plain(TemplateTag.CONTRACT_PAYMENT_DAY, payment_day_of(contract)),
        _plain(TemplateTag.CONTRACT_ID, contract.id),
        _plain(TemplateTag.CONTRACT_TYPE,
               contract.type or DEFAULT_CONTRACT_TYPE),
        _plain(TemplateTag.CONTRACT_RENT_VALUE_IN_WORDS, rent_in_words),
        _plain(TemplateTag.CONTRACT_FIRST_PAYMENT_DATE,
               format_date_short(contract.first_payment_date)),
        _plain(TemplateTag.CONTRACT_DEPOSIT_VALUE,
               format_currency(contract.deposit_value)),
    ]


def _renewal_rules(contract: ContractData,
                   original: Optional[ContractData]) -> List[Rule]:
    if not (contract.is_renewal and contract.original_contract_id):
        return [_plain(tag, "") for tag in RENEWAL_TAGS]

    if original is None:
        logger.warning(
            "Original contract %s of renewal %s not found, renewal tags left empty",
            contract.original_contract_id, contract.id)
        return [_plain(tag, "") for tag in RENEWAL_TAGS]

    start = format_date_short(original.start_date)
    end = format_date_short(original.end_date)
    return [
        _plain(TemplateTag.CONTRACT_ORIGINAL_CONTRACT_ID, original.id),
        _plain(TemplateTag.CONTRACT_ORIGINAL_START_DATE, start),
        _plain(TemplateTag.CONTRACT_ORIGINAL_END_DATE, end),
        _plain(TemplateTag.CONTRACT_ORIGINAL_PERIOD, f"{start} a {end}"),
    ]


def resolve_guarantor(context: TemplateRenderContext) -> Optional[PartyData]:
    if context.guarantor is not None:
        return context.guarantor

    embedded = decode_guarantor(context.tenant.guarantor)
    if not embedded:
        return None
    try:
        return PartyData.model_validate(embedded)
    except ValidationError as exc:
        logger.warning("Ignoring malformed guarantor of tenant %s: %s",
                       context.tenant.id, exc.errors()[0].get("msg"))
        return None


def build_rules(context: TemplateRenderContext,
                now: Optional[datetime] = None) -> List[Rule]:
    """The whole substitution pipeline, in the order it must run."""
    now = now or now_civil()
    guarantor = resolve_guarantor(context)

    rules = _party_rules("owner", context.owner)
    rules += _party_rules("tenant", context.tenant)
    if guarantor is not None:
        rules += _guarantor_rules(guarantor)
    else:
        rules.append(partial(remove_family, family="guarantor"))
    rules += _property_rules(context.property)
    rules += _contract_rules(context.contract)
    rules += _macro_rules(now)
    rules += _contract_extra_rules(context.contract)
    rules += _renewal_rules(context.contract, context.original_contract)
    return rules


# ----------------------------------------------------------------------
# processing
# ----------------------------------------------------------------------

def _clear_leftovers(text: str) -> str:
    # RG and renewal tags must never reach the document
    for tag in RG_TAGS + RENEWAL_TAGS:
        marker = placeholder(tag)
        if marker in text:
            logger.warning(
                "Tag %s survived substitution, clearing it", marker)
            text = text.replace(marker, "")
    return text


def number_pages(text: str) -> str:
    marker = TemplateTag.PAGINA.placeholder
    total = text.count(marker)
    if total == 0:
        return text

    pieces = text.split(marker)
    numbered = [pieces[0]]
    for page, piece in enumerate(pieces[1:], start=1):
        numbered.append(PAGE_FRAGMENT.format(page=page, total=total))
        numbered.append(piece)
    return "".join(numbered)


def process_template_content(content: str, context: TemplateRenderContext,
                             now: Optional[datetime] = None) -> str:
    """
    Merge a template body with the rendering context.

    Pure text transformation: every recognised tag is resolved (absent
    values become empty strings), unknown {{...}} text is left as is and
    page numbers are applied last.
    """
    if not content:
        return content or ""

    rules = build_rules(context, now)
    text = content
    for rule in rules:
        text = rule(text)
    logger.debug("Applied %s substitution rules for contract %s",
                 len(rules), context.contract.id)

    text = _clear_leftovers(text)
    return number_pages(text)


# ----------------------------------------------------------------------
# context
# ----------------------------------------------------------------------

def build_render_context(db: Session, contract_id: int) -> TemplateRenderContext:
    contract = db.query(Contract).filter(Contract.id == contract_id).first()
    if not contract:
        raise NotFoundError("Contrato não encontrado")

    owner = db.query(Owner).filter(Owner.id == contract.owner_id).first()
    if not owner:
        raise NotFoundError("Proprietário não encontrado")

    tenant = db.query(Tenant).filter(Tenant.id == contract.tenant_id).first()
    if not tenant:
        raise NotFoundError("Inquilino não encontrado")

    prop = db.query(Property).filter(
        Property.id == contract.property_id).first()
    if not prop:
        raise NotFoundError("Imóvel não encontrado")

    original = None
    if contract.is_renewal and contract.original_contract_id:
        original = db.query(Contract).filter(
            Contract.id == contract.original_contract_id).first()

    contract_data = ContractData.model_validate(contract)
    contract_data.generated_at = datetime.now(timezone.utc)

    return TemplateRenderContext(
        owner=PartyData.model_validate(owner),
        tenant=TenantData.model_validate(tenant),
        property=PropertyData.model_validate(prop),
        contract=contract_data,
        original_contract=(ContractData.model_validate(original)
                           if original else None),
    )


# ----------------------------------------------------------------------
# selection
# ----------------------------------------------------------------------

def get_active_templates(db: Session, type: Optional[str] = None) -> List[ContractTemplate]:
    query = db.query(ContractTemplate).filter(
        ContractTemplate.is_active == True)
    if type:
        query = query.filter(ContractTemplate.type == type)
    return query.order_by(ContractTemplate.id.asc()).all()


def get_template_for_render(db: Session, template_id: int) -> ContractTemplate:
    template = (
        db.query(ContractTemplate)
        .filter(ContractTemplate.id == template_id,
                ContractTemplate.is_active == True)
        .first()
    )
    if not template:
        raise NotFoundError(f"Modelo de contrato {template_id} não encontrado")
    return template


def get_default_template(db: Session, type: str) -> ContractTemplate:
    templates = get_active_templates(db, type)
    if not templates:
        raise NotFoundError(
            f"Nenhum modelo de contrato ativo do tipo {type} encontrado")
    return templates[0]


def get_processed_template(db: Session, template_id: int,
                           context: TemplateRenderContext) -> str:
    template = get_template_for_render(db, template_id)
    logger.debug("Rendering template %s for contract %s",
                 template.id, context.contract.id)
    return process_template_content(template.content, context)


def get_processed_template_by_type(db: Session, type: str,
                                   context: TemplateRenderContext) -> str:
    template = get_default_template(db, type)
    logger.debug("Rendering default %s template %s for contract %s",
                 type, template.id, context.contract.id)
    return process_template_content(template.content, context)
