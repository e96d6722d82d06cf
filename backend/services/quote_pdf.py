# backend/services/quote_pdf.py
from io import BytesIO
from flask import make_response, current_app
from reportlab.lib.pagesizes import letter
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.lib import colors
from xml.sax.saxutils import escape
import logging

from services.date_utils import to_business_tz

logger = logging.getLogger(__name__)


def _money(value):
    return f"${value:,.2f}"


def _text(value, fallback='N/A'):
    return escape(value) if value else fallback


def _format_quantity(value):
    return f"{value:g}"


def build_quote_pdf(quote, items):
    """
    Render a customer-facing quote.

    Args:
        quote (Quote): The quote row; its stored totals are printed as-is
        items (list): Line items of the source estimate (may be empty)

    Returns:
        bytes: PDF document
    """
    cfg = current_app.config
    customer = quote.customer

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=letter,
        rightMargin=72,
        leftMargin=72,
        topMargin=72,
        bottomMargin=72,
        title=f"Quote #{quote.quote_number}"
    )

    elements = []
    styles = getSampleStyleSheet()

    title_style = ParagraphStyle(
        'TitleStyle',
        parent=styles['Heading1'],
        fontSize=24,
        leading=30,
        alignment=1,  # Center alignment
        spaceAfter=24
    )

    section_title_style = ParagraphStyle(
        'SectionTitle',
        parent=styles['Heading2'],
        fontSize=14,
        leading=18,
        spaceBefore=12,
        spaceAfter=6,
        textColor=colors.darkblue
    )

    normal_style = ParagraphStyle(
        'CustomNormal',
        parent=styles['Normal'],
        fontSize=10,
        leading=14,
        spaceAfter=3
    )

    bold_style = ParagraphStyle(
        'BoldText',
        parent=normal_style,
        fontName='Helvetica-Bold'
    )

    elements.append(Paragraph("QUOTE", title_style))

    created = to_business_tz(quote.created_at).strftime("%B %d, %Y") if quote.created_at else ''
    header_rows = [
        [Paragraph(f"Quote #: {quote.quote_number}", normal_style)],
        [Paragraph(f"Date: {created}", normal_style)],
    ]
    if quote.valid_until:
        header_rows.append([Paragraph(f"Valid until: {quote.valid_until.strftime('%B %d, %Y')}", normal_style)])

    header_table = Table(header_rows, colWidths=[450])
    header_table.setStyle(TableStyle([
        ('ALIGN', (0, 0), (-1, -1), 'RIGHT'),
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
    ]))
    elements.append(header_table)
    elements.append(Spacer(1, 0.1 * inch))

    # Company and customer side by side
    if customer is not None:
        customer_lines = [
            Paragraph(_text(customer.name), bold_style),
            Paragraph(_text(customer.address, 'Address on file'), normal_style),
            Paragraph(f"Phone: {_text(customer.phone)}", normal_style),
            Paragraph(f"Email: {_text(customer.email)}", normal_style),
        ]
    else:
        customer_lines = [Paragraph("No customer", normal_style), '', '', '']

    company_lines = [
        Paragraph(f"<b>{_text(cfg.get('COMPANY_NAME'))}</b>", bold_style),
        Paragraph(_text(cfg.get('COMPANY_ADDRESS'), ''), normal_style),
        Paragraph(f"Phone: {_text(cfg.get('COMPANY_PHONE'))}", normal_style),
        Paragraph(f"Email: {_text(cfg.get('COMPANY_EMAIL'))}", normal_style),
    ]

    party_data = [[Paragraph("", normal_style), Paragraph("<b>Prepared For:</b>", bold_style)]]
    party_data += [list(row) for row in zip(company_lines, customer_lines)]

    party_table = Table(party_data, colWidths=[225, 225])
    party_table.setStyle(TableStyle([
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('TOPPADDING', (0, 0), (-1, -1), 3),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 3),
    ]))
    elements.append(party_table)
    elements.append(Spacer(1, 0.3 * inch))

    elements.append(Paragraph("Scope and Pricing", section_title_style))

    price_data = [["Description", "Qty", "Rate", "Amount"]]
    for item in items:
        price_data.append([
            Paragraph(_text(item.label, '-'), normal_style),
            _format_quantity(item.quantity),
            _money(item.rate),
            _money(item.amount),
        ])

    price_data.append(["", "", "", ""])
    price_data.append(["Subtotal:", "", "", _money(quote.subtotal)])
    if quote.tax_rate > 0:
        price_data.append([f"Tax ({quote.tax_rate:g}%):", "", "", _money(quote.tax_amount)])
    price_data.append(["Total:", "", "", _money(quote.total)])

    price_table = Table(price_data, colWidths=[230, 50, 80, 90])
    price_table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.darkblue),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('ALIGN', (0, 0), (-1, 0), 'CENTER'),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('PADDING', (0, 0), (-1, -1), 6),
        ('GRID', (0, 0), (-1, 0), 1, colors.darkblue),
        ('ALIGN', (1, 1), (1, -1), 'CENTER'),
        ('ALIGN', (2, 1), (3, -1), 'RIGHT'),
        ('LINEBELOW', (0, -2), (-1, -2), 1, colors.black),
        ('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold'),
        ('TEXTCOLOR', (0, -1), (-1, -1), colors.darkblue),
    ]))
    elements.append(price_table)
    elements.append(Spacer(1, 0.3 * inch))

    if quote.notes:
        elements.append(Paragraph("Notes", section_title_style))
        elements.append(Paragraph(_text(quote.notes), normal_style))

    if quote.terms:
        elements.append(Paragraph("Terms and Conditions", section_title_style))
        elements.append(Paragraph(_text(quote.terms), normal_style))

    elements.append(Spacer(1, 0.4 * inch))

    signature_data = [
        ["Accepted By:", "Date:"],
        ["", ""],
        [customer.name if customer is not None else "", ""]
    ]
    signature_table = Table(signature_data, colWidths=[225, 225])
    signature_table.setStyle(TableStyle([
        ('ALIGN', (0, 0), (-1, 0), 'LEFT'),
        ('FONTNAME', (0, 0), (1, 0), 'Helvetica-Bold'),
        ('LINEBELOW', (0, 1), (0, 1), 1, colors.black),
        ('LINEBELOW', (1, 1), (1, 1), 1, colors.black),
        ('TOPPADDING', (0, 1), (1, 1), 36),
        ('BOTTOMPADDING', (0, 1), (1, 1), 6),
    ]))
    elements.append(signature_table)
    elements.append(Spacer(1, 0.5 * inch))

    footer_style = ParagraphStyle(
        'FooterStyle',
        parent=normal_style,
        alignment=1,  # Center
        textColor=colors.darkgrey,
        fontSize=9
    )
    elements.append(Paragraph("Thank you for the opportunity to earn your business!", footer_style))

    doc.build(elements)
    buffer.seek(0)
    return buffer.getvalue()


def quote_pdf_response(quote, items):
    """Wrap the rendered quote in an inline PDF response"""
    try:
        pdf_bytes = build_quote_pdf(quote, items)
    except Exception as e:
        logger.error(f"Error generating PDF for quote {quote.id}: {str(e)}")
        raise

    response = make_response(pdf_bytes)
    response.headers['Content-Type'] = 'application/pdf'
    response.headers['Content-Disposition'] = f'inline; filename=quote_{quote.quote_number}.pdf'
    return response
