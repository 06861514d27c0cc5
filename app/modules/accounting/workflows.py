"""
Form-level operations that span more than one store call.

The invoice <-> Sales ledger entry pairing lives here rather than in the
store. The two writes are separate commits: if the ledger write fails after
the invoice was stored, the invoice stays and the error is re-raised.
"""
from uuid import UUID
import logging

from app.common.formatters import amount_in_words
from app.modules.accounting.exceptions import AccountingError, PartyNotFoundError, RecordNotFoundError
from app.modules.accounting.store import AccountingStore
from app.modules.invoices.calculator import build_items, calculate_totals
from app.modules.invoices.schemas import (
    INVOICE_METADATA_FIELDS, InvoiceCreate, InvoiceData, InvoiceOut, InvoiceRevision, InvoiceUpdate
)
from app.modules.ledger.models import VoucherType
from app.modules.ledger.schemas import LedgerEntryCreate, LedgerEntryData, LedgerEntryOut, TransactionType
from app.modules.locations.crud import get_state_code
from app.modules.parties.schemas import PartyCreate, PartyOut, PartyUpdate

logger = logging.getLogger(__name__)

SALES_PARTICULARS = "To Sales"


# ===== PARTIES =====

async def register_party(store: AccountingStore, form: PartyCreate) -> PartyOut:
    return await store.add_party(form)


async def edit_party(store: AccountingStore, party_id: UUID, form: PartyUpdate) -> PartyOut:
    """Apply the edit form; a new state name brings its state code along"""
    if "state" in form.model_fields_set and "state_code" not in form.model_fields_set:
        form = PartyUpdate(**form.model_dump(exclude_unset=True), state_code=get_state_code(form.state))
    return await store.update_party(party_id, form)


# ===== INVOICES =====

async def create_invoice(store: AccountingStore, form: InvoiceCreate) -> InvoiceOut:
    """Store a new invoice and then its Sales ledger entry (debit = invoice total)"""
    party = store.get_party(form.party_id)
    if not party:
        raise PartyNotFoundError(form.party_id)

    invoice_no = store.get_next_invoice_no()
    items = build_items(form.items)
    totals = calculate_totals(items)

    invoice = await store.add_invoice(InvoiceData(
        invoice_no=invoice_no,
        date=form.date,
        party=party,
        items=items,
        total_quantity=totals.total_quantity,
        total_amount=totals.total_amount,
        amount_in_words=amount_in_words(totals.total_amount),
        **form.model_dump(include=set(INVOICE_METADATA_FIELDS)),
    ))

    try:
        await store.add_ledger_entry(LedgerEntryData(
            date=form.date,
            party_id=party.id,
            particulars=SALES_PARTICULARS,
            voucher_type=VoucherType.SALES,
            voucher_no=invoice_no,
            debit=totals.total_amount,
        ))
    except AccountingError:
        logger.error(f"Invoice {invoice_no} was stored but its Sales ledger entry was not")
        raise

    return invoice


async def delete_invoice(store: AccountingStore, invoice_id: UUID) -> None:
    """Delete the paired Sales entry (when there is one), then the invoice"""
    invoice = store.get_invoice(invoice_id)
    if not invoice:
        raise RecordNotFoundError("Invoice", invoice_id)

    entry = store.find_sales_entry(invoice.invoice_no, invoice.total_amount)
    if entry:
        await store.delete_ledger_entry(entry.id)
    else:
        logger.warning(f"Invoice {invoice.invoice_no} has no Sales ledger entry")

    await store.delete_invoice(invoice_id)


async def revise_invoice(store: AccountingStore, invoice_id: UUID, form: InvoiceRevision) -> InvoiceOut:
    """Partial edit; replacing the items recomputes totals and amount in words.

    The paired Sales entry is not adjusted.
    """
    if not store.get_invoice(invoice_id):
        raise RecordNotFoundError("Invoice", invoice_id)

    changes = form.model_dump(exclude_unset=True, exclude={"items"})
    if form.items is not None:
        items = build_items(form.items)
        totals = calculate_totals(items)
        changes.update(
            items=items,
            total_quantity=totals.total_quantity,
            total_amount=totals.total_amount,
            amount_in_words=amount_in_words(totals.total_amount),
        )

    return await store.update_invoice(invoice_id, InvoiceUpdate(**changes))


# ===== LEDGER =====

async def record_ledger_entry(store: AccountingStore, form: LedgerEntryCreate) -> LedgerEntryOut:
    """Number the voucher within its type and book the amount on one side"""
    party = store.get_party(form.party_id)
    if not party:
        raise PartyNotFoundError(form.party_id)

    is_credit = form.transaction_type == TransactionType.CREDIT
    particulars = form.particulars or f"{'By' if is_credit else 'To'} {party.name}"

    return await store.add_ledger_entry(LedgerEntryData(
        date=form.date,
        party_id=party.id,
        particulars=particulars,
        voucher_type=form.voucher_type,
        voucher_no=store.get_next_voucher_no(form.voucher_type),
        debit=None if is_credit else form.amount,
        credit=form.amount if is_credit else None,
    ))
