from types import SimpleNamespace

from shared.utils.contract_pdf import generate_contract_pdf, html_to_story
from shared.utils.payment_slips_pdf import (
    generate_payment_receipt_pdf, generate_payment_slips_pdf)
from shared.utils.registration_form_pdf import generate_tenant_registration_form_pdf
from rental_service.app.services.html_output_service import (
    render_contract_html, render_contract_preview_html)


def test_print_document_embeds_content_unchanged():
    content = '<p class="ql-align-center">Cláusula <strong>1ª</strong></p>'
    html = render_contract_html(content, "Contrato de Locação - Bruno")
    assert content in html
    assert "<title>Contrato de Locação - Bruno</title>" in html
    assert "window.print()" in html


def test_print_document_escapes_title():
    html = render_contract_html("<p>x</p>", "<script>")
    assert "<title>&lt;script&gt;</title>" in html


def test_preview_converts_newlines_and_links_pdf():
    html = render_contract_preview_html(
        "linha 1\nlinha 2", "Visualização", 7, "commercial", template_id=3)
    assert "linha 1<br>linha 2" in html
    assert "/api/contracts/7/pdf/commercial?template_id=3" in html
    assert "Baixar PDF" in html


def test_html_to_story_one_flowable_per_block():
    story = html_to_story("<h2>Título</h2><p>Um</p><p></p><ul><li>a</li><li>b</li></ul>")
    assert len(story) == 5


def test_contract_pdf():
    buffer = generate_contract_pdf(
        '<p class="ql-align-justify">Olá <b>mundo</b> &amp; <i>todos</i><br>fim</p>',
        "Contrato")
    assert buffer.getvalue().startswith(b"%PDF")


def test_payment_slips_pdf(contract):
    payments = sorted(contract.payments, key=lambda p: p.due_date)
    buffer = generate_payment_slips_pdf(
        contract, contract.owner, contract.tenant, contract.property, payments)
    assert buffer.getvalue().startswith(b"%PDF")


def test_payment_slips_pdf_tolerates_missing_and_markup_documents(contract):
    payments = sorted(contract.payments, key=lambda p: p.due_date)
    owner = SimpleNamespace(name="Ana & Filhos", document=None)
    tenant = SimpleNamespace(name="Bruno <Jr>", document="<555.666.777-88>")
    buffer = generate_payment_slips_pdf(
        contract, owner, tenant, contract.property, payments)
    assert buffer.getvalue().startswith(b"%PDF")


def test_payment_receipt_pdf(contract):
    payment = sorted(contract.payments, key=lambda p: p.due_date)[0]
    payment.interest_amount = 12.5
    payment.observations = "Pago com atraso <3 dias>"
    buffer = generate_payment_receipt_pdf(
        payment, contract, contract.owner, contract.tenant, contract.property)
    assert buffer.getvalue().startswith(b"%PDF")


def test_tenant_registration_form_pdf(contract):
    buffer = generate_tenant_registration_form_pdf(contract.tenant)
    assert buffer.getvalue().startswith(b"%PDF")


def test_tenant_registration_form_pdf_without_address():
    tenant = SimpleNamespace(
        name="Bruno", document="555.666.777-88", rg=None, phone=None, email=None,
        nationality=None, profession=None, marital_status=None, spouse_name=None,
        address=None, guarantor="not json")
    buffer = generate_tenant_registration_form_pdf(tenant)
    assert buffer.getvalue().startswith(b"%PDF")
