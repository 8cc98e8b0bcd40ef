import json
import logging
from datetime import date, datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from shared.core.exceptions import NotFoundError
from rental_service.app.models.contracts.contract_templates import ContractTemplate
from rental_service.app.schemas.contracts.template_context_schemas import (
    ContractData, PartyData, PropertyData, TemplateRenderContext, TenantData)
from rental_service.app.services import contract_templates_service as service
from rental_service.app.services.contract_templates_service import (
    PAGE_FRAGMENT, process_template_content)
from rental_service.app.services.template_tags import TAG_PATTERN, TemplateTag

NOW = datetime(2026, 10, 17, 9, 5, tzinfo=ZoneInfo("America/Sao_Paulo"))

ADDRESS = {
    "zipCode": "01000-000",
    "street": "Rua A",
    "number": "10",
    "neighborhood": "Centro",
    "city": "São Paulo",
    "state": "SP",
}


def make_context(owner=None, tenant=None, contract=None, **extra):
    return TemplateRenderContext(
        owner=owner or PartyData(name="Ana Silva", document="111.222.333-44", rg=""),
        tenant=tenant or TenantData(name="Bruno Costa", document="555.666.777-88"),
        property=PropertyData(name="Apto 12", address=json.dumps(ADDRESS)),
        contract=contract or ContractData(
            id=7, duration=12,
            start_date=date(2024, 3, 15), end_date=date(2025, 3, 15),
            rent_value=Decimal("1000.00"),
            first_payment_date=date(2024, 4, 10),
        ),
        **extra,
    )


def render(content, context=None):
    return process_template_content(content, context or make_context(), now=NOW)


# ---- parties ----

ROLES = ["owner", "tenant", "guarantor"]


def context_with(role, **fields):
    if role == "tenant":
        return make_context(tenant=TenantData(**fields))
    if role == "guarantor":
        return make_context(guarantor=PartyData(**fields))
    return make_context(owner=PartyData(**fields))


def test_owner_without_rg():
    content = "Locador: {{owner.name}}, CPF: {{owner.document}}{{owner.rg}}"
    assert render(content) == "Locador: Ana Silva, CPF: 111.222.333-44"


@pytest.mark.parametrize("role", ROLES)
def test_rg_gets_label(role):
    context = context_with(role, name="Ana", rg="12.345-6")
    assert render("{{" + role + ".rg}}", context) == "RG nº: 12.345-6"


@pytest.mark.parametrize("rg", [None, "", "   "])
@pytest.mark.parametrize("role", ROLES)
def test_missing_rg_leaves_no_label(role, rg):
    context = context_with(role, name="Ana", document="111.222.333-44", rg=rg)
    content = "CPF: {{" + role + ".document}}{{" + role + ".rg}}."
    assert render(content, context) == "CPF: 111.222.333-44."


def test_bare_document_tag():
    assert render("Doc {{tenant.document}}") == "Doc 555.666.777-88"


def test_address_is_prefixed():
    context = make_context(owner=PartyData(name="Ana", address=ADDRESS))
    assert render("{{owner.address}}", context) == \
        "Endereço: Rua A, 10, Centro, São Paulo - SP, CEP: 01000-000"
    assert render("{{property.address}}") == \
        "Endereço: Rua A, 10, Centro, São Paulo - SP, CEP: 01000-000"


def test_spouse_name_is_conditional():
    married = make_context(owner=PartyData(name="Ana", spouse_name="João"))
    assert render("[{{owner.spouseName}}]", married) == "[Cônjuge: João]"
    assert render("[{{owner.spouseName}}]") == "[]"


# ---- guarantor ----

def test_guarantor_tags_removed_without_guarantor():
    content = "Fiador: {{guarantor.name}}{{guarantor.rg}}{{guarantor.phone}}."
    assert render(content) == "Fiador: ."


def test_guarantor_from_tenant_json():
    tenant = TenantData(name="Bruno", guarantor=json.dumps({
        "name": "Carla",
        "document": "999.888.777-66",
        "maritalStatus": "casada",
    }))
    content = "{{guarantor.name}} CPF: {{guarantor.document}} {{guarantor.maritalStatus}}"
    assert render(content, make_context(tenant=tenant)) == \
        "Carla CPF: 999.888.777-66 Estado Civil: casada"


def test_guarantor_json_with_numeric_document():
    tenant = TenantData(name="Bruno", guarantor=json.dumps({
        "name": "Carla",
        "document": 12345678900,
    }))
    assert render("{{guarantor.name}} {{guarantor.document}}",
                  make_context(tenant=tenant)) == "Carla CPF: 12345678900"


def test_guarantor_json_with_unusable_fields_is_ignored(caplog):
    tenant = TenantData(name="Bruno", id=4, guarantor=json.dumps({
        "name": ["Carla", "Souza"],
    }))
    with caplog.at_level(logging.WARNING):
        assert render("Fiador: {{guarantor.name}}.", make_context(tenant=tenant)) == "Fiador: ."
    assert "malformed guarantor" in caplog.text


def test_guarantor_bare_document_gets_label():
    context = make_context(guarantor=PartyData(name="Carla", document="999.888.777-66"))
    assert render("{{guarantor.document}}", context) == "CPF: 999.888.777-66"


def test_explicit_guarantor_wins_over_embedded():
    tenant = TenantData(name="Bruno", guarantor='{"name": "Embutido"}')
    context = make_context(tenant=tenant, guarantor=PartyData(name="Explícito"))
    assert render("{{guarantor.name}}", context) == "Explícito"


def test_guarantor_optional_fields_vanish():
    context = make_context(guarantor=PartyData(name="Carla"))
    content = "{{guarantor.name}}{{guarantor.phone}}{{guarantor.email}}{{guarantor.address}}"
    assert render(content, context) == "Carla"


# ---- contract ----

def test_contract_fields():
    content = ("{{contract.number}}|{{contract.startDate}}|{{contract.endDate}}|"
               "{{contract.rentValue}}|{{contract.rentValueInWords}}|{{contract.type}}")
    assert render(content) == \
        "7|14/03/2024|14/03/2025|R$ 1.000,00|mil reais|residencial"


def test_payment_day_falls_back_to_first_payment_date():
    assert render("{{contract.paymentDay}}") == "9"


def test_payment_day_explicit():
    contract = ContractData(id=1, payment_day=5, first_payment_date=date(2024, 4, 10))
    assert render("{{contract.paymentDay}}", make_context(contract=contract)) == "5"


def test_missing_rent_renders_empty():
    contract = ContractData(id=1)
    assert render("[{{contract.rentValue}}|{{contract.rentValueInWords}}]",
                  make_context(contract=contract)) == "[|]"


# ---- renewals ----

RENEWAL_CONTENT = ("[{{contract.originalContractId}}|{{contract.originalStartDate}}|"
                   "{{contract.originalEndDate}}|{{contract.originalPeriod}}]")


def test_renewal_tags_empty_for_regular_contract():
    assert render(RENEWAL_CONTENT) == "[|||]"


def test_renewal_tags_empty_when_not_flagged_as_renewal():
    contract = ContractData(id=8, is_renewal=False, original_contract_id=3)
    original = ContractData(id=3, start_date=date(2023, 3, 15), end_date=date(2024, 3, 15))
    context = make_context(contract=contract, original_contract=original)
    assert render(RENEWAL_CONTENT, context) == "[|||]"


def test_renewal_tags_filled_from_original():
    contract = ContractData(id=8, is_renewal=True, original_contract_id=3)
    original = ContractData(id=3, start_date=date(2023, 3, 15), end_date=date(2024, 3, 15))
    context = make_context(contract=contract, original_contract=original)
    assert render(RENEWAL_CONTENT, context) == \
        "[3|14/03/2023|14/03/2024|14/03/2023 a 14/03/2024]"


def test_renewal_tags_empty_when_original_missing(caplog):
    contract = ContractData(id=8, is_renewal=True, original_contract_id=3)
    with caplog.at_level(logging.WARNING):
        assert render(RENEWAL_CONTENT, make_context(contract=contract)) == "[|||]"
    assert "renewal tags left empty" in caplog.text


# ---- macros and pages ----

def test_macros_use_given_clock():
    assert render("{{DATA_LONGA}} {{DATA_ATUAL}} {{HORA}}") == \
        "sábado, 17 de outubro de 2026 17/10/2026 09:05"


def test_pages_numbered_in_order():
    result = render("A{{PAGINA}}B{{PAGINA}}C{{PAGINA}}")
    assert result == (
        "A" + PAGE_FRAGMENT.format(page=1, total=3)
        + "B" + PAGE_FRAGMENT.format(page=2, total=3)
        + "C" + PAGE_FRAGMENT.format(page=3, total=3)
    )


# ---- general ----

def test_text_without_known_tags_is_unchanged():
    content = "Texto sem marcadores {{desconhecido}}"
    assert render(content) == content


def test_empty_content():
    assert render("") == ""


def test_no_known_tag_survives():
    content = " ".join(t.placeholder for t in TemplateTag)
    result = render(content, make_context(guarantor=PartyData(name="Carla")))
    assert TAG_PATTERN.findall(result) == []


# ---- selection ----

def _template(db, name, type, active=True):
    template = ContractTemplate(
        name=name, type=type, content="Olá {{tenant.name}}", is_active=active)
    db.add(template)
    db.commit()
    return template


def test_default_template_is_first_active_of_type(db):
    _template(db, "inativo", "residential", active=False)
    first = _template(db, "primeiro", "residential")
    _template(db, "segundo", "residential")
    _template(db, "comercial", "commercial")

    assert service.get_default_template(db, "residential").id == first.id
    assert [t.name for t in service.get_active_templates(db)] == \
        ["primeiro", "segundo", "comercial"]


def test_default_template_missing_type(db):
    _template(db, "comercial", "commercial")
    with pytest.raises(NotFoundError, match="residential"):
        service.get_default_template(db, "residential")


def test_inactive_template_not_rendered(db):
    template = _template(db, "inativo", "residential", active=False)
    with pytest.raises(NotFoundError):
        service.get_template_for_render(db, template.id)


def test_processed_template_by_id(db):
    template = _template(db, "modelo", "residential")
    assert service.get_processed_template(db, template.id, make_context()) == \
        "Olá Bruno Costa"


# ---- context ----

def test_build_render_context(db, contract):
    context = service.build_render_context(db, contract.id)
    assert context.owner.name == "Ana Silva"
    assert context.tenant.name == "Bruno Costa"
    assert context.property.name == "Apto 12"
    assert context.contract.generated_at is not None
    assert service.resolve_guarantor(context).name == "Carla Souza"


def test_build_render_context_unknown_contract(db):
    with pytest.raises(NotFoundError, match="Contrato não encontrado"):
        service.build_render_context(db, 999)
