"""
Figures derived from the accounting snapshot.

Everything here is recomputed from the records passed in on every call;
nothing is cached or stored.
"""
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple
from uuid import UUID

from app.common.formatters import format_display_date, to_money
from app.core.config import settings
from app.modules.dashboard.schemas import DashboardSummary
from app.modules.invoices.schemas import InvoiceOut
from app.modules.ledger.schemas import BalanceLabel, LedgerBalance, LedgerEntryOut, LedgerLine, LedgerStatement

ZERO = Decimal("0.00")


def _filter(entries: Iterable[LedgerEntryOut], party_id: Optional[UUID]) -> List[LedgerEntryOut]:
    if party_id is None:
        return list(entries)
    return [e for e in entries if e.party_id == party_id]


def total_sales(invoices: Iterable[InvoiceOut]) -> Decimal:
    return to_money(sum((i.total_amount for i in invoices), ZERO))


def total_debits(entries: Iterable[LedgerEntryOut], party_id: Optional[UUID] = None) -> Decimal:
    return to_money(sum((e.debit or ZERO for e in _filter(entries, party_id)), ZERO))


def total_credits(entries: Iterable[LedgerEntryOut], party_id: Optional[UUID] = None) -> Decimal:
    return to_money(sum((e.credit or ZERO for e in _filter(entries, party_id)), ZERO))


def balance_of(net: Decimal) -> LedgerBalance:
    """Cr when credits cover debits (net >= 0), Dr otherwise"""
    net = to_money(net)
    return LedgerBalance(net=net, amount=abs(net), label=BalanceLabel.CR if net >= 0 else BalanceLabel.DR)


def net_balance(entries: Iterable[LedgerEntryOut], party_id: Optional[UUID] = None) -> LedgerBalance:
    entries = _filter(entries, party_id)
    return balance_of(total_credits(entries) - total_debits(entries))


def average_invoice_value(invoices: Sequence[InvoiceOut]) -> Decimal:
    """0.00 when there are no invoices"""
    if not invoices:
        return ZERO
    return to_money(total_sales(invoices) / len(invoices))


def running_balances(entries: Iterable[LedgerEntryOut]) -> List[Tuple[LedgerEntryOut, LedgerBalance]]:
    """Each entry paired with the credit - debit balance after it"""
    running = ZERO
    lines = []
    for entry in entries:
        running += (entry.credit or ZERO) - (entry.debit or ZERO)
        lines.append((entry, balance_of(running)))
    return lines


def recent_invoices(invoices: Sequence[InvoiceOut], limit: int = 5) -> List[InvoiceOut]:
    """The last `limit` invoices in the list, newest first"""
    if limit <= 0:
        return []
    return list(reversed(invoices[-limit:]))


def dashboard_summary(store) -> DashboardSummary:
    """Headline figures for the dashboard"""
    invoices = store.invoices
    entries = store.ledger_entries
    return DashboardSummary(
        company_name=store.company.name,
        total_sales=total_sales(invoices),
        invoice_count=len(invoices),
        party_count=len(store.parties),
        average_invoice_value=average_invoice_value(invoices),
        total_debits=total_debits(entries),
        total_credits=total_credits(entries),
        net_balance=net_balance(entries),
        recent_invoices=recent_invoices(invoices, settings.RECENT_INVOICES_LIMIT),
    )


def ledger_statement(store, party_id: Optional[UUID] = None) -> LedgerStatement:
    """Ledger lines (optionally one party's) with running and closing balances"""
    entries = _filter(store.ledger_entries, party_id)
    lines = [
        LedgerLine(
            **entry.model_dump(),
            party_name=store.party_name(entry.party_id),
            display_date=format_display_date(entry.date),
            balance=balance,
        )
        for entry, balance in running_balances(entries)
    ]
    return LedgerStatement(
        party_id=party_id,
        party_name=store.party_name(party_id) if party_id else None,
        company_name=store.company.name,
        entries=lines,
        total=len(lines),
        total_debit=total_debits(entries),
        total_credit=total_credits(entries),
        closing_balance=net_balance(entries),
    )
