"""
Plain-text receipts for ESC/POS style thermal printers.

Paper width is given in millimetres; each width maps to a fixed number of
monospace columns.
"""
import textwrap

from django.utils import timezone

PAPER_COLUMNS = {
    80: 32,
    58: 24,
}
DEFAULT_PAPER_WIDTH = 80


class ReceiptError(ValueError):
    pass


def columns_for(paper_width):
    try:
        return PAPER_COLUMNS[int(paper_width)]
    except (KeyError, TypeError, ValueError):
        raise ReceiptError(f"Unsupported paper width '{paper_width}'. Use one of: "
                           f"{', '.join(str(w) for w in sorted(PAPER_COLUMNS))}")


def format_line(left, right, width):
    """Left and right text on one line, at least one space apart"""
    spaces = width - len(left) - len(right)
    return left + ' ' * max(1, spaces) + right


def center(text, width):
    return text[:width].center(width).rstrip()


def wrap(text, width):
    lines = []
    for paragraph in (text or '').splitlines() or ['']:
        lines.extend(textwrap.wrap(paragraph, width) or [''])
    return lines


def _date(value):
    return value.strftime('%d/%m/%Y') if value else '-'


def render_invoice_receipt(invoice, paper_width=DEFAULT_PAPER_WIDTH, company_name=None, printed_at=None):
    """Render an invoice as fixed-width receipt text"""
    width = columns_for(paper_width)
    rule = '=' * width
    dotted = '-' * width
    printed_at = printed_at or timezone.localtime()

    lines = []
    if company_name:
        lines.extend(center(line, width) for line in wrap(company_name.upper(), width))
    lines.append(center('BILL', width))
    lines.append(rule)
    lines.append(f'Bill#: {invoice.invoice_number}')
    lines.append(f'Date    : {_date(invoice.invoice_date)}')
    lines.append(f'Due Date: {_date(invoice.due_date)}')
    lines.append(dotted)
    lines.append('BILL TO:')
    lines.extend(wrap(invoice.customer_name, width))
    lines.append(rule)
    lines.append(format_line('Item', 'Amount', width))
    lines.append('Qty x Rate')
    lines.append(dotted)

    for item in invoice.items:
        amount = f"{float(item['amount']):.2f}"
        material = item['material'][:width - len(amount) - 1]
        lines.append(format_line(material, amount, width))
        lines.append(f"  {item['quantity']:g} x {float(item['rate']):.2f}")

    lines.append(dotted)
    if invoice.net_weight is not None:
        lines.append(format_line('Net Weight:', f'{invoice.net_weight:.3f}', width))
    lines.append(format_line('Subtotal:', f'{invoice.subtotal:.2f}', width))
    lines.append(format_line(f'GST ({invoice.tax_rate:g}%):', f'{invoice.tax_amount:.2f}', width))
    lines.append(rule)
    lines.append(format_line('Total Amount:', f'{invoice.total_amount:.2f}', width))
    if invoice.amount_paid > 0:
        lines.append(dotted)
        lines.append(format_line('Paid:', f'{invoice.amount_paid:.2f}', width))
        lines.append(format_line('Balance:', f'{invoice.balance:.2f}', width))
    lines.append('')
    lines.append(center(f'[ {invoice.status.upper()} ]', width))

    if invoice.notes:
        lines.append(dotted)
        lines.append('Notes:')
        lines.extend(wrap(invoice.notes, width))
    if invoice.terms_conditions:
        lines.append(dotted)
        lines.append(center('Terms & Conditions', width))
        lines.extend(wrap(invoice.terms_conditions, width))

    lines.append(dotted)
    lines.extend(center(line, width) for line in wrap('Thank you for your business!', width))
    lines.extend(center(line, width) for line in wrap(f"Printed: {printed_at:%d/%m/%Y %H:%M}", width))
    return '\n'.join(lines) + '\n'
