"""PDF receipt generation for contract bills."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from rental_billing.config import PDF_ISSUER, ShopIssuerInfo
from rental_billing.domain.models import AppliedTariff, Bill, Contract
from rental_billing.utils.formatting import (
    format_currency,
    format_datetime,
    format_duration,
)

_TARIFF_LABELS = {
    AppliedTariff.HOURLY: "Oraria",
    AppliedTariff.DAILY: "Giornaliera",
    AppliedTariff.CUSTOM: "Personalizzata",
}


def _document_title(bill: Bill) -> str:
    if bill.is_reservation:
        return "RIEPILOGO PRENOTAZIONE"
    return "RICEVUTA DI NOLEGGIO"


def _build_contract_rows(contract: Contract, bill: Bill) -> list[list[str]]:
    rows = [
        ["Inizio", format_datetime(contract.start_at or contract.created_at)],
        ["Fine", format_datetime(contract.end_at) if contract.end_at else "In corso"],
    ]
    if bill.duration is not None:
        rows.append(["Durata", format_duration(bill.duration)])
    rows.append(["Stato", contract.status.value])
    return rows


def _build_item_rows(bill: Bill) -> list[list[object]]:
    cell_style = getSampleStyleSheet()["BodyText"]
    rows: list[list[object]] = [["Articolo", "Durata", "Tariffa", "Assic.", "Totale"]]
    for charge in bill.items:
        name = charge.name
        if charge.returned:
            name += " (restituito)"
        tariff = _TARIFF_LABELS.get(charge.applied_tariff, "—")
        rows.append(
            [
                Paragraph(escape(name), cell_style),
                Paragraph(escape(charge.duration_label), cell_style),
                tariff,
                format_currency(charge.insurance),
                format_currency(charge.total),
            ]
        )
    if bill.contract_insurance > 0:
        rows.append(
            [
                "Assicurazione Contratto",
                "Flat",
                "—",
                format_currency(bill.contract_insurance),
                format_currency(bill.contract_insurance),
            ]
        )
    for extra in bill.extra_charges:
        rows.append(
            [
                Paragraph(escape(extra.description), cell_style),
                Paragraph(escape(extra.reason or "Aggiunto manualmente"), cell_style),
                "—",
                format_currency(0),
                format_currency(extra.amount),
            ]
        )
    return rows


def generate_bill_pdf(
    contract: Contract,
    bill: Bill,
    output_path: Path,
    *,
    issuer: ShopIssuerInfo = PDF_ISSUER,
) -> Path:
    """Write a receipt PDF for ``bill`` and return its path."""
    output_path.parent.mkdir(parents=True, exist_ok=True)

    title = _document_title(bill)
    doc = SimpleDocTemplate(
        str(output_path),
        pagesize=A4,
        rightMargin=18 * mm,
        leftMargin=18 * mm,
        topMargin=18 * mm,
        bottomMargin=18 * mm,
        title=title,
        author=issuer.name,
    )

    styles = getSampleStyleSheet()
    styles.add(
        ParagraphStyle(
            name="SectionTitle",
            parent=styles["Heading3"],
            spaceBefore=12,
            spaceAfter=6,
        )
    )
    styles.add(
        ParagraphStyle(
            name="SmallText",
            parent=styles["Normal"],
            fontSize=9,
            leading=12,
        )
    )

    elements: list[object] = []
    customer_name = escape(contract.customer.name or "Cliente")
    elements.append(Paragraph(f"<b>{customer_name}</b>", styles["Title"]))
    elements.append(Paragraph(title, styles["Heading2"]))
    elements.append(Spacer(1, 8))

    issuer_lines = [
        f"<b>{escape(issuer.name)}</b>",
        f"Telefono: {escape(issuer.phone)}",
        escape(issuer.vat_number),
        escape(issuer.address),
    ]
    elements.append(Paragraph("<br/>".join(issuer_lines), styles["Normal"]))
    elements.append(Spacer(1, 10))

    customer_lines = [
        "<b>Cliente</b>",
        f"Nome: {customer_name}",
        f"Telefono: {escape(contract.customer.phone or '—')}",
    ]
    if contract.id:
        customer_lines.append(f"Contratto: {escape(str(contract.id))}")
    elements.append(Paragraph("<br/>".join(customer_lines), styles["Normal"]))

    contract_table = Table(_build_contract_rows(contract, bill), colWidths=[40 * mm, 120 * mm])
    contract_table.setStyle(
        TableStyle(
            [
                ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ]
        )
    )
    elements.append(Paragraph("Dati del noleggio", styles["SectionTitle"]))
    elements.append(contract_table)

    items_table = Table(
        _build_item_rows(bill),
        colWidths=[50 * mm, 55 * mm, 25 * mm, 20 * mm, 25 * mm],
        repeatRows=1,
    )
    items_table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ("ALIGN", (2, 1), (-1, -1), "RIGHT"),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ]
        )
    )
    elements.append(Paragraph("Dettaglio articoli", styles["SectionTitle"]))
    elements.append(items_table)

    totals_rows = [
        ["Noleggio", format_currency(bill.subtotal)],
        ["Assicurazione", format_currency(bill.insurance_total)],
    ]
    if bill.extras_total:
        totals_rows.append(["Extra", format_currency(bill.extras_total)])
    totals_rows.append(["Totale", format_currency(bill.final_total)])
    totals_table = Table(totals_rows, colWidths=[40 * mm, 50 * mm])
    totals_table.setStyle(
        TableStyle(
            [
                ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ("BACKGROUND", (0, -1), (-1, -1), colors.whitesmoke),
                ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                ("ALIGN", (1, 0), (1, -1), "RIGHT"),
            ]
        )
    )
    elements.append(Paragraph("Importi", styles["SectionTitle"]))
    elements.append(totals_table)
    elements.append(Spacer(1, 18))

    signature_table = Table(
        [
            ["Operatore", "Cliente"],
            ["_____________________________", "_____________________________"],
        ],
        colWidths=[80 * mm, 80 * mm],
    )
    signature_table.setStyle(TableStyle([("ALIGN", (0, 0), (-1, -1), "CENTER")]))
    elements.append(signature_table)

    footer = f"{escape(issuer.name)} - generato il {datetime.now().strftime('%d/%m/%Y %H:%M')}"
    elements.append(Spacer(1, 12))
    elements.append(Paragraph(footer, styles["SmallText"]))

    doc.build(elements)
    return output_path
