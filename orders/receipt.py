import io

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle


def _xaf(amount):
    return f"{amount:,} XAF"


def build_receipt_pdf(order):
    """Render an order receipt as a PDF and return the buffer, rewound."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=30,
        leftMargin=30,
        topMargin=30,
        bottomMargin=18
    )

    elements = []
    styles = getSampleStyleSheet()

    title_style = ParagraphStyle(
        'ReceiptTitle',
        fontName='Helvetica-Bold',
        fontSize=20,
        leading=24,
        alignment=1,  # 0=left, 1=center
        textColor=colors.darkgreen,
    )

    elements.append(Paragraph("Order Receipt", title_style))
    elements.append(Spacer(1, 12))

    rule = Table([['']], colWidths=[400], hAlign='CENTER')
    rule.setStyle(TableStyle([
        ('LINEBELOW', (0, 0), (0, 0), 0.5, colors.darkgreen),
    ]))
    elements.append(rule)
    elements.append(Spacer(1, 20))

    common_style = TableStyle([
        ('FONTNAME', (0, 0), (-1, -1), 'Helvetica'),
        ('FONTSIZE', (0, 0), (-1, -1), 11),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
        ('TOPPADDING', (0, 0), (-1, -1), 4),
        ('BOX', (0, 0), (-1, -1), 0.25, colors.grey),
        ('INNERGRID', (0, 0), (-1, -1), 0.25, colors.grey),
    ])

    payment = getattr(order, 'payment', None)
    order_info = [
        ['Order ID:', str(order.id)],
        ['Date:', order.createdAt.strftime('%Y-%m-%d %H:%M')],
        ['Status:', order.get_status_display()],
        ['Vendor:', order.vendor.businessName],
        ['Payment Method:', order.get_paymentMethod_display()],
        ['Payment Status:', payment.get_status_display() if payment else 'N/A'],
        ['Customer:', order.customer.name],
        ['Phone:', order.deliveryPhone],
        ['Deliver To:', f"{order.deliveryAddress}, {order.deliveryCity}"],
    ]
    order_table = Table(order_info, hAlign='LEFT', colWidths=[140, 350])
    order_table.setStyle(common_style)

    elements.append(Paragraph("<strong>Order Details</strong>", styles['Heading3']))
    elements.append(Spacer(1, 6))
    elements.append(order_table)
    elements.append(Spacer(1, 20))

    item_data = [['Product', 'Quantity', 'Unit Price', 'Subtotal']]
    for item in order.items.all():
        item_data.append([
            item.productName,
            str(item.quantity),
            _xaf(item.unitPrice),
            _xaf(item.lineTotal),
        ])
    item_data.append(['Delivery', '', '', _xaf(order.deliveryFee)])
    item_data.append(['Total', '', '', _xaf(order.totalAmount)])

    item_table = Table(item_data, hAlign='LEFT', colWidths=[200, 60, 90, 100])
    item_table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.darkgreen),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
        ('FONTNAME', (0, 0), (-1, -1), 'Helvetica'),
        ('FONTSIZE', (0, 0), (-1, -1), 11),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
        ('TOPPADDING', (0, 0), (-1, -1), 4),
        ('BOX', (0, 0), (-1, -1), 0.25, colors.grey),
        ('INNERGRID', (0, 0), (-1, -2), 0.25, colors.grey),
        ('BACKGROUND', (0, -1), (-1, -1), colors.lightgrey),
        ('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold')
    ]))

    elements.append(Paragraph("<strong>Order Items</strong>", styles['Heading3']))
    elements.append(Spacer(1, 6))
    elements.append(item_table)
    elements.append(Spacer(1, 40))
    elements.append(Paragraph("<i>Thank you for your purchase!</i>", styles['Italic']))

    doc.build(elements)
    buffer.seek(0)
    return buffer
