from io import BytesIO
from html import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from shared.helpers.address_helper import decode_address, decode_guarantor

FULL_WIDTH = 495
HALF_WIDTH = FULL_WIDTH / 2


def _styles():
    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(name="FieldLabel", fontSize=8, leading=10,
                              textColor=colors.grey))
    styles.add(ParagraphStyle(name="FieldValue", fontSize=11, leading=14))
    return styles


def _field(label, value, styles):
    return [Paragraph(label, styles["FieldLabel"]),
            Paragraph(escape(str(value)) if value else "&nbsp;", styles["FieldValue"])]


def _grid(rows, styles):
    """Rows of (label, value) pairs, one or two boxed fields per row."""
    data, spans = [], []
    for index, row in enumerate(rows):
        cells = [_field(label, value, styles) for label, value in row]
        if len(cells) == 1:
            cells.append("")
            spans.append(("SPAN", (0, index), (1, index)))
        data.append(cells)

    table = Table(data, colWidths=[HALF_WIDTH, HALF_WIDTH])
    table.setStyle(TableStyle([
        ("BOX", (0, 0), (-1, -1), 0.8, colors.black),
        ("INNERGRID", (0, 0), (-1, -1), 0.5, colors.black),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
        *spans,
    ]))
    return table


def _party_rows(party):
    return [
        [("Nome completo", party.get("name"))],
        [("CPF", party.get("document")), ("RG", party.get("rg"))],
        [("Telefone", party.get("phone")), ("E-mail", party.get("email"))],
        [("Nacionalidade", party.get("nationality")),
         ("Profissão", party.get("profession"))],
        [("Estado Civil", party.get("maritalStatus") or party.get("marital_status")),
         ("Nome do Cônjuge", party.get("spouseName") or party.get("spouse_name"))],
    ]


def _address_rows(address):
    address = address if isinstance(address, dict) else {}
    return [
        [("CEP", address.get("zipCode")), ("Rua", address.get("street"))],
        [("Número", address.get("number")),
         ("Complemento", address.get("complement"))],
        [("Bairro", address.get("neighborhood")), ("Cidade", address.get("city"))],
        [("Estado", address.get("state"))],
    ]


def generate_tenant_registration_form_pdf(tenant):
    """
    Printable registration form of a tenant and, when informed, of the
    guarantor. Missing values print as empty boxes.
    """
    buffer = BytesIO()

    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=50,
        leftMargin=50,
        topMargin=50,
        bottomMargin=50,
        title=f"Ficha Cadastral - {tenant.name}",
    )

    styles = _styles()
    party = {
        "name": tenant.name,
        "document": tenant.document,
        "rg": tenant.rg,
        "phone": tenant.phone,
        "email": tenant.email,
        "nationality": tenant.nationality,
        "profession": tenant.profession,
        "maritalStatus": tenant.marital_status,
        "spouseName": tenant.spouse_name,
    }

    elements = [
        Paragraph("FICHA CADASTRAL DO INQUILINO", styles["Title"]),
        Spacer(1, 10),
        Paragraph("Dados do Inquilino", styles["Heading2"]),
        _grid(_party_rows(party), styles),
        Spacer(1, 15),
        Paragraph("Endereço do Inquilino", styles["Heading2"]),
        _grid(_address_rows(decode_address(tenant.address)), styles),
    ]

    guarantor = decode_guarantor(tenant.guarantor)
    if guarantor and (guarantor.get("name") or guarantor.get("document")):
        elements.append(Spacer(1, 15))
        elements.append(Paragraph("Dados do Fiador", styles["Heading2"]))
        elements.append(_grid(_party_rows(guarantor), styles))
        if guarantor.get("address"):
            elements.append(Spacer(1, 10))
            elements.append(Paragraph("Endereço do Fiador", styles["Heading3"]))
            elements.append(_grid(
                _address_rows(decode_address(guarantor["address"])), styles))

    doc.build(elements)
    buffer.seek(0)
    return buffer
