"""Receipt service - printable PDF receipts for completed sales."""

from io import BytesIO
from typing import Any, Dict

from reportlab.lib.pagesizes import A5
from reportlab.lib import colors
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.enums import TA_CENTER
from xml.sax.saxutils import escape

from supermarket_pos.models import Sale
from supermarket_pos.utils.formatters import money, datetime_short


def render_receipt_pdf(sale: Sale, business_info: Dict[str, Any]) -> BytesIO:
    """
    Render a receipt for a persisted sale.

    Args:
        sale: Sale with its items loaded
        business_info: dict with 'name' and 'currency'

    Returns:
        BytesIO positioned at 0 holding the PDF document
    """
    currency = business_info.get('currency', '')
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A5,
        rightMargin=0.4*inch,
        leftMargin=0.4*inch,
        topMargin=0.5*inch,
        bottomMargin=0.5*inch,
        title=f"Receipt #{sale.id}"
    )

    elements = []
    styles = getSampleStyleSheet()

    title_style = ParagraphStyle(
        'ReceiptTitle',
        parent=styles['Heading1'],
        fontSize=18,
        textColor=colors.HexColor('#2C3E50'),
        spaceAfter=6,
        alignment=TA_CENTER,
        fontName='Helvetica-Bold'
    )

    header_style = ParagraphStyle(
        'ReceiptHeader',
        parent=styles['Normal'],
        fontSize=10,
        textColor=colors.HexColor('#7F8C8D'),
        alignment=TA_CENTER,
        spaceAfter=4
    )

    # 1. Business header
    elements.append(Paragraph(escape(business_info.get('name') or 'RECEIPT'), title_style))
    elements.append(Paragraph(f"Receipt #{sale.id}", header_style))
    elements.append(Paragraph(datetime_short(sale.sale_date), header_style))
    elements.append(Spacer(1, 0.2*inch))

    # 2. Customer / payment
    info_table = Table([
        ['Customer:', sale.customer_name or 'N/A'],
        ['Payment:', sale.payment_method or 'N/A'],
    ], colWidths=[1.2*inch, 3.6*inch])
    info_table.setStyle(TableStyle([
        ('ALIGN', (0, 0), (0, -1), 'RIGHT'),
        ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 10),
        ('TEXTCOLOR', (0, 0), (-1, -1), colors.HexColor('#34495E')),
    ]))
    elements.append(info_table)
    elements.append(Spacer(1, 0.2*inch))

    # 3. Items
    table_data = [['Item', 'Qty', 'Price', 'Subtotal']]
    for item in sale.items:
        table_data.append([
            item.product_name,
            str(item.quantity),
            money(item.price),
            money(item.subtotal),
        ])

    items_table = Table(table_data, colWidths=[2.1*inch, 0.5*inch, 1.1*inch, 1.2*inch])
    items_table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#3498DB')),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('ALIGN', (1, 0), (-1, -1), 'RIGHT'),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.HexColor('#BDC3C7')),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#ECF0F1')]),
    ]))
    elements.append(items_table)
    elements.append(Spacer(1, 0.15*inch))

    # 4. Totals
    totals_table = Table([
        ['Subtotal:', money(sale.total_amount, currency)],
        ['Discount:', money(sale.discount, currency)],
        ['TOTAL:', money(sale.final_amount, currency)],
    ], colWidths=[3.4*inch, 1.5*inch])
    totals_table.setStyle(TableStyle([
        ('ALIGN', (0, 0), (-1, -1), 'RIGHT'),
        ('FONTSIZE', (0, 0), (-1, -1), 10),
        ('FONTNAME', (0, 2), (-1, 2), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 2), (-1, 2), 13),
        ('TEXTCOLOR', (0, 2), (-1, 2), colors.HexColor('#27AE60')),
        ('LINEABOVE', (0, 2), (-1, 2), 1, colors.HexColor('#27AE60')),
    ]))
    elements.append(totals_table)
    elements.append(Spacer(1, 0.3*inch))

    footer_style = ParagraphStyle('Footer', parent=styles['Normal'], fontSize=9, textColor=colors.HexColor('#95A5A6'), alignment=TA_CENTER)
    elements.append(Paragraph("Thank you for your purchase!<br/>Please visit again", footer_style))

    doc.build(elements)
    buffer.seek(0)
    return buffer
