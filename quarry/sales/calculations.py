"""Invoice arithmetic. Rates are tax inclusive."""
from decimal import Decimal, ROUND_HALF_UP

TWO_PLACES = Decimal('0.01')
THREE_PLACES = Decimal('0.001')


def money(value):
    return Decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def net_weight(empty_weight, gross_weight):
    """gross - empty when both are known, otherwise None"""
    if empty_weight is None or gross_weight is None:
        return None
    return (Decimal(gross_weight) - Decimal(empty_weight)).quantize(THREE_PLACES)


def price_items(items, weight=None):
    """
    Return a new item list with `amount` filled in.

    When a net weight is given it replaces the first item's quantity, since
    weighbridge tickets are written for single-material loads.
    """
    priced = []
    for index, item in enumerate(items):
        quantity = Decimal(str(item['quantity']))
        if index == 0 and weight is not None:
            quantity = weight
        rate = Decimal(str(item['rate']))
        priced.append({
            'material': item['material'],
            'quantity': float(quantity),
            'rate': float(rate),
            'amount': float(money(quantity * rate)),
        })
    return priced


def invoice_totals(items, tax_rate):
    """(subtotal, tax_amount, total) for priced items; total includes tax"""
    total = money(sum((Decimal(str(item['amount'])) for item in items), Decimal('0')))
    divisor = Decimal('1') + Decimal(tax_rate or 0) / Decimal('100')
    subtotal = money(total / divisor)
    return subtotal, total - subtotal, total


def payment_status(total, paid):
    if paid >= total:
        return 'paid'
    if paid > 0:
        return 'partial'
    return 'unpaid'
