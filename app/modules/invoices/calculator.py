"""
Line item and total calculations for invoices.

Amounts are never taken from the client: each line is quantity x rate and the
invoice totals are sums over the lines.
"""
from decimal import Decimal
from typing import Iterable, List

from app.common.formatters import to_money, to_quantity
from app.modules.invoices.schemas import InvoiceItem, InvoiceItemIn, InvoiceTotals


def build_items(lines: Iterable[InvoiceItemIn]) -> List[InvoiceItem]:
    """Number the lines from 1 and compute each amount"""
    items = []
    for position, line in enumerate(lines, start=1):
        items.append(InvoiceItem(
            sl_no=position,
            description=line.description,
            quantity=line.quantity,
            unit=line.unit,
            rate=line.rate,
            per=line.unit,
            amount=to_money(line.quantity * line.rate),
        ))
    return items


def calculate_totals(items: Iterable[InvoiceItem]) -> InvoiceTotals:
    total_quantity = Decimal("0")
    total_amount = Decimal("0")
    for item in items:
        total_quantity += item.quantity
        total_amount += item.amount
    return InvoiceTotals(total_quantity=to_quantity(total_quantity), total_amount=to_money(total_amount))
