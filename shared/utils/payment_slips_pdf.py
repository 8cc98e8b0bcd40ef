from io import BytesIO
from decimal import Decimal
from html import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import (
    KeepTogether, PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
)

from shared.helpers.address_helper import format_address, format_address_short
from shared.helpers.currency_helper import format_amount, format_currency
from shared.helpers.date_helper import format_date_short, month_name, year_of
from shared.helpers.number_words_helper import amount_in_words

SLIPS_PER_PAGE = 2
CUT_LINE = "- " * 60
SIGNATURE_LINE = "_" * 45


def _styles():
    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(name="Center", alignment=TA_CENTER))
    styles.add(ParagraphStyle(name="Justify", alignment=TA_JUSTIFY))
    styles.add(ParagraphStyle(name="Small", fontSize=7, leading=9))
    styles.add(ParagraphStyle(name="Cut", fontSize=8, alignment=TA_CENTER,
                              textColor=colors.grey))
    styles.add(ParagraphStyle(name="SlipTitle", fontName="Helvetica-Bold",
                              fontSize=14, leading=18, alignment=TA_CENTER))
    styles.add(ParagraphStyle(name="Amount", fontName="Helvetica-Bold",
                              fontSize=16, leading=20))
    return styles


def _cover(contract, owner, tenant, property, payments, styles):
    elements = []

    elements.append(Paragraph("<b>CARNÊS DE PAGAMENTO</b>", styles["Title"]))
    elements.append(
        Paragraph(f"Contrato Nº: {contract.id}", styles["Heading2"]))
    elements.append(Spacer(1, 15))

    elements.append(
        Paragraph("<b>LOCADOR (PROPRIETÁRIO):</b>", styles["Normal"]))
    elements.append(Paragraph(f"Nome: {escape(owner.name or '')}", styles["Normal"]))
    elements.append(Paragraph(f"CPF: {escape(owner.document or '')}", styles["Normal"]))
    elements.append(Spacer(1, 10))

    elements.append(
        Paragraph("<b>LOCATÁRIO (INQUILINO):</b>", styles["Normal"]))
    elements.append(Paragraph(f"Nome: {escape(tenant.name or '')}", styles["Normal"]))
    elements.append(Paragraph(f"CPF: {escape(tenant.document or '')}", styles["Normal"]))
    elements.append(Spacer(1, 10))

    elements.append(Paragraph("<b>IMÓVEL:</b>", styles["Normal"]))
    elements.append(
        Paragraph(escape(format_address(property.address)), styles["Normal"]))
    elements.append(Spacer(1, 10))

    elements.append(
        Paragraph("<b>INFORMAÇÕES DO CONTRATO:</b>", styles["Normal"]))
    elements.append(Paragraph(
        f"Valor do Aluguel: {format_currency(contract.rent_value)}", styles["Normal"]))
    elements.append(Paragraph(
        f"Início: {format_date_short(contract.start_date)}", styles["Normal"]))
    elements.append(Paragraph(
        f"Término: {format_date_short(contract.end_date)}", styles["Normal"]))
    elements.append(
        Paragraph(f"Duração: {contract.duration} meses", styles["Normal"]))
    elements.append(Spacer(1, 15))

    elements.append(Paragraph("<b>PARCELAS INCLUÍDAS:</b>", styles["Normal"]))
    rows = [["Nº", "Vencimento", "Valor (R$)"]]
    total = Decimal(0)
    for number, payment in enumerate(payments, start=1):
        rows.append([str(number), format_date_short(payment.due_date),
                     format_amount(payment.value)])
        total += Decimal(str(payment.value or 0))
    rows.append(["TOTAL:", "", format_amount(total)])

    table = Table(rows, colWidths=[40, 120, 100])
    table.setStyle(TableStyle([
        ("FONT", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONT", (0, -1), (-1, -1), "Helvetica-Bold"),
        ("LINEBELOW", (0, 0), (-1, 0), 0.5, colors.black),
        ("LINEABOVE", (0, -1), (-1, -1), 0.5, colors.black),
        ("ALIGN", (2, 0), (2, -1), "RIGHT"),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
    ]))
    elements.append(table)
    elements.append(Spacer(1, 15))

    elements.append(Paragraph(
        "Este documento contém os carnês para pagamento das parcelas do seu "
        "contrato de aluguel. Nas páginas seguintes você encontrará 2 recibos "
        "por folha. Recorte nos locais indicados pelas linhas tracejadas para "
        "separar os recibos.",
        styles["Justify"]))
    return elements


def _slip(payment, number, total, contract, owner, tenant, property, styles):
    elements = [
        Paragraph("RECIBO DE PAGAMENTO - ALUGUEL", styles["SlipTitle"]),
        Paragraph(
            f"{month_name(payment.due_date)} / {year_of(payment.due_date)}",
            styles["Center"]),
        Paragraph(
            f"Parcela {number} de {total} - Contrato Nº {contract.id}",
            styles["Center"]),
        Spacer(1, 8),
    ]

    label = styles["Normal"]
    grid = Table(
        [
            [
                [Paragraph("<b>LOCADOR:</b>", label),
                 Paragraph(escape(owner.name or ""), label)],
                [Paragraph("<b>LOCATÁRIO:</b>", label),
                 Paragraph(escape(tenant.name or ""), label)],
            ],
            [
                [Paragraph("<b>IMÓVEL:</b>", label),
                 Paragraph(escape(format_address_short(property.address)), styles["Small"])],
                [Paragraph("<b>VENCIMENTO:</b>", label),
                 Paragraph(format_date_short(payment.due_date), label)],
            ],
            [
                [Paragraph("<b>VALOR:</b>", label),
                 Paragraph(format_currency(payment.value), styles["Amount"]),
                 Paragraph(f"({amount_in_words(payment.value)})", styles["Small"])],
                # left blank, filled in by hand on payment
                [Paragraph("<b>DATA DO PAGAMENTO:</b>", label)],
            ],
        ],
        colWidths=[257, 257],
        rowHeights=[55, 60, 80],
    )
    grid.setStyle(TableStyle([
        ("BOX", (0, 0), (-1, -1), 0.8, colors.black),
        ("INNERGRID", (0, 0), (-1, -1), 0.5, colors.black),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("LEFTPADDING", (0, 0), (-1, -1), 8),
        ("TOPPADDING", (0, 0), (-1, -1), 6),
    ]))
    elements.append(grid)
    elements.append(Spacer(1, 30))
    elements.append(Paragraph(SIGNATURE_LINE, styles["Center"]))
    elements.append(Paragraph("Assinatura do recebedor", styles["Center"]))
    elements.append(Spacer(1, 12))
    elements.append(Paragraph(CUT_LINE, styles["Cut"]))
    elements.append(Spacer(1, 12))
    return KeepTogether(elements)


def generate_payment_slips_pdf(contract, owner, tenant, property, payments):
    """
    Booklet of rent receipts: a cover page with the installment table, then
    two cut-out slips per page. `payments` are the pending installments
    already sorted by due date.
    """
    buffer = BytesIO()

    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=40,
        leftMargin=40,
        topMargin=40,
        bottomMargin=40,
        title=f"Carnês de Pagamento - Contrato {contract.id}",
    )

    styles = _styles()
    elements = _cover(contract, owner, tenant, property, payments, styles)

    total = len(payments)
    for index, payment in enumerate(payments):
        if index % SLIPS_PER_PAGE == 0:
            elements.append(PageBreak())
            elements.append(Paragraph(CUT_LINE, styles["Cut"]))
            elements.append(Spacer(1, 6))
        elements.append(_slip(payment, index + 1, total, contract,
                              owner, tenant, property, styles))

    doc.build(elements)
    buffer.seek(0)
    return buffer


def _receipt_total(payment) -> Decimal:
    return sum(
        (Decimal(str(v or 0)) for v in
         (payment.value, payment.interest_amount, payment.late_payment_fee)),
        Decimal(0),
    )


def generate_payment_receipt_pdf(payment, contract, owner, tenant, property):
    """
    Single receipt for one installment. Interest and late fee are added to
    the amount received; an unpaid installment gets a blank payment date to
    be filled in by hand.
    """
    buffer = BytesIO()

    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=40,
        leftMargin=40,
        topMargin=40,
        bottomMargin=40,
        title=f"Recibo de Pagamento - Parcela {payment.id}",
    )

    styles = _styles()
    total = _receipt_total(payment)
    number = payment.receipt_number or str(payment.id)

    elements = [
        Paragraph("RECIBO DE PAGAMENTO - ALUGUEL", styles["SlipTitle"]),
        Paragraph(f"Recibo Nº {escape(number)}", styles["Center"]),
        Spacer(1, 10),
        Paragraph(format_currency(total), styles["Amount"]),
        Spacer(1, 10),
        Paragraph(
            f"Recebi de <b>{escape(tenant.name or '')}</b>, CPF "
            f"{escape(tenant.document or '')}, a importância de "
            f"{format_currency(total)} ({amount_in_words(total)}), referente ao "
            f"aluguel de {month_name(payment.due_date)} de {year_of(payment.due_date)} "
            f"do imóvel situado em {escape(format_address(property.address))}, "
            f"parcela {payment.installment_number or '-'} do contrato Nº {contract.id}.",
            styles["Justify"]),
        Spacer(1, 12),
    ]

    rows = [
        ["Vencimento", format_date_short(payment.due_date)],
        ["Valor do aluguel (R$)", format_amount(payment.value)],
        ["Juros (R$)", format_amount(payment.interest_amount or 0)],
        ["Multa (R$)", format_amount(payment.late_payment_fee or 0)],
        ["Total recebido (R$)", format_amount(total)],
        ["Data do pagamento",
         format_date_short(payment.payment_date) if payment.is_paid else ""],
        ["Forma de pagamento", payment.payment_method or ""],
    ]
    table = Table(rows, colWidths=[200, 200])
    table.setStyle(TableStyle([
        ("BOX", (0, 0), (-1, -1), 0.8, colors.black),
        ("INNERGRID", (0, 0), (-1, -1), 0.5, colors.black),
        ("FONT", (0, 0), (0, -1), "Helvetica-Bold"),
        ("FONT", (0, 4), (-1, 4), "Helvetica-Bold"),
        ("ALIGN", (1, 1), (1, 4), "RIGHT"),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ]))
    elements.append(table)

    if payment.observations:
        elements.append(Spacer(1, 8))
        elements.append(Paragraph(escape(payment.observations), styles["Small"]))

    elements.append(Spacer(1, 40))
    elements.append(Paragraph(SIGNATURE_LINE, styles["Center"]))
    elements.append(Paragraph(escape(owner.name or ""), styles["Center"]))
    elements.append(Paragraph(
        f"CPF: {escape(owner.document or '')} - LOCADOR", styles["Center"]))

    doc.build(elements)
    buffer.seek(0)
    return buffer
