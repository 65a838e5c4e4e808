"""
Request-for-quote PDF.

A4 portrait with 15 mm margins: centred title, buyer block on the left,
supplier block on the right, a gridded line-item table, the grand total
and signature lines. Short RFQs fit on one page; longer tables continue
on following pages with the header row repeated.
"""

import io
from dataclasses import dataclass
from datetime import date
from typing import Any, List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import KeepTogether, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from solar_inventory.application.rfq import RFQLine

MARGIN = 15 * mm
HEADER_BLUE = colors.Color(59 / 255, 130 / 255, 246 / 255)
COLUMN_WIDTHS = [12 * mm, 60 * mm, 20 * mm, 18 * mm, 28 * mm, 28 * mm]
TABLE_HEADERS = ["No.", "Item", "Unit", "Quantity", "Unit price", "Total"]
TOTAL_LABEL = "TOTAL VALUE:"


@dataclass
class Party:
    name: str
    address: str
    email: str
    phone: Optional[str] = None


def rfq_filename(on: Optional[date] = None) -> str:
    return f"rfq_{(on or date.today()).isoformat()}.pdf"


def _money(value: float, currency: str) -> str:
    return f"{value:.2f} {currency}"


def _styles():
    styles = getSampleStyleSheet()
    title = styles["Title"].clone("RFQTitle")
    title.fontSize = 20
    title.leading = 24
    title.alignment = TA_CENTER
    title.spaceAfter = 10 * mm
    party = styles["BodyText"].clone("RFQParty")
    party.fontSize = 8
    party.leading = 11
    cell = styles["BodyText"].clone("RFQCell")
    cell.fontSize = 8
    cell.leading = 10
    total = styles["BodyText"].clone("RFQTotal")
    total.fontName = "Helvetica-Bold"
    total.fontSize = 10
    total.alignment = TA_RIGHT
    small = styles["BodyText"].clone("RFQSmall")
    small.fontSize = 8
    small.leading = 14
    return {"title": title, "party": party, "cell": cell, "total": total, "small": small}


def _party_block(heading: str, lines: List[str], style) -> Paragraph:
    body = "<br/>".join(escape(line) for line in lines if line)
    return Paragraph(f"<b>{escape(heading)}</b><br/>{body}", style)


def _line_table(lines: List[RFQLine], currency: str, cell_style) -> Table:
    rows = [TABLE_HEADERS]
    for index, line in enumerate(lines, start=1):
        rows.append([
            str(index),
            Paragraph(escape(line.name), cell_style),
            line.unit,
            str(line.quantity),
            _money(line.unit_price, currency),
            _money(line.line_total, currency),
        ])

    # repeatRows keeps the header on every page the table splits onto
    table = Table(rows, colWidths=COLUMN_WIDTHS, repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_BLUE),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, 0), 9),
        ("FONTSIZE", (0, 1), (-1, -1), 8),
        ("ALIGN", (0, 0), (-1, 0), "CENTER"),
        ("ALIGN", (0, 1), (0, -1), "CENTER"),
        ("ALIGN", (2, 1), (3, -1), "CENTER"),
        ("ALIGN", (4, 1), (5, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
    ]))
    return table


def rfq_flowables(
    lines: List[RFQLine],
    buyer: Party,
    supplier: Party,
    currency: str = "RSD",
    issued_on: Optional[date] = None,
) -> List[Any]:
    """Document content in reading order, ready for ``SimpleDocTemplate.build``."""
    issued_on = issued_on or date.today()
    styles = _styles()
    lines = list(lines)

    buyer_lines = [buyer.name, buyer.address, f"Email: {buyer.email}"]
    if buyer.phone:
        buyer_lines.append(f"Tel: {buyer.phone}")
    supplier_lines = [
        supplier.name,
        supplier.address,
        f"Email: {supplier.email}",
        f"Date: {issued_on.strftime('%d.%m.%Y.')}",
    ]
    half = (A4[0] - 2 * MARGIN) / 2
    parties = Table(
        [[
            _party_block("BUYER:", buyer_lines, styles["party"]),
            _party_block("SUPPLIER:", supplier_lines, styles["party"]),
        ]],
        colWidths=[half, half],
    )
    parties.setStyle(TableStyle([
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("LEFTPADDING", (0, 0), (0, -1), 0),
        ("LEFTPADDING", (1, 0), (1, -1), 10 * mm),
    ]))

    total = sum(line.line_total for line in lines)
    return [
        Paragraph("REQUEST FOR QUOTE", styles["title"]),
        parties,
        Spacer(1, 8 * mm),
        _line_table(lines, currency, styles["cell"]),
        Spacer(1, 8 * mm),
        KeepTogether([
            Paragraph(f"{TOTAL_LABEL} {_money(total, currency)}", styles["total"]),
            Spacer(1, 15 * mm),
            Paragraph("Authorised signature: ____________________________", styles["small"]),
            Paragraph("Date: ____________________________", styles["small"]),
        ]),
    ]


def render_rfq_pdf(
    lines: List[RFQLine],
    buyer: Party,
    supplier: Party,
    currency: str = "RSD",
    issued_on: Optional[date] = None,
) -> bytes:
    """Render the RFQ and return the PDF bytes."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=MARGIN,
        rightMargin=MARGIN,
        topMargin=MARGIN,
        bottomMargin=MARGIN,
        title="Request for quote",
    )
    doc.build(rfq_flowables(lines, buyer, supplier, currency=currency, issued_on=issued_on))
    return buffer.getvalue()
