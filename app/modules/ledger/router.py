"""
Router for the ledger

The statement view filters by party and carries running balances; entries
are added through the ledger form (numbered within their voucher type).
"""
from fastapi import APIRouter, status, Path, Query, HTTPException
from typing import Optional
from uuid import UUID

from app.modules.accounting import workflows
from app.modules.accounting.aggregates import ledger_statement
from app.modules.accounting.dependencies import StoreDependency, http_error
from app.modules.accounting.exceptions import AccountingError
from app.modules.ledger.models import VoucherType
from app.modules.ledger.schemas import (
    LedgerEntryCreate, LedgerEntryOut, LedgerEntryUpdate, LedgerStatement, NextVoucherNumber
)

router = APIRouter(prefix="/ledger", tags=["Ledger"])


@router.get("", response_model=LedgerStatement)
async def get_ledger(
    store: StoreDependency,
    party_id: Optional[UUID] = Query(None, description="Only this party's entries")
):
    """
    Ledger statement in date order

    Each line carries the party name ("Unknown" once the party is deleted) and
    the running credit - debit balance; totals and the closing balance (Cr/Dr)
    cover the lines shown.
    """
    return ledger_statement(store, party_id)


@router.post("", response_model=LedgerEntryOut, status_code=status.HTTP_201_CREATED)
async def create_ledger_entry(entry_data: LedgerEntryCreate, store: StoreDependency):
    """
    Record a transaction

    - **transaction_type**: debit or credit; **amount** goes on that side
    - **particulars**: defaults to "By <party>" (credit) or "To <party>" (debit)
    """
    try:
        return await workflows.record_ledger_entry(store, entry_data)
    except AccountingError as e:
        raise http_error(e)


@router.get("/next-voucher-no", response_model=NextVoucherNumber)
async def get_next_voucher_no(
    store: StoreDependency,
    voucher_type: VoucherType = Query(..., description="Voucher type")
):
    return NextVoucherNumber(voucher_type=voucher_type, voucher_no=store.get_next_voucher_no(voucher_type))


@router.get("/{entry_id}", response_model=LedgerEntryOut)
async def get_ledger_entry(store: StoreDependency, entry_id: UUID = Path(..., description="Ledger entry ID")):
    entry = store.get_ledger_entry(entry_id)
    if not entry:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Ledger entry {entry_id} not found")
    return entry


@router.patch("/{entry_id}", response_model=LedgerEntryOut)
async def update_ledger_entry(
    entry_data: LedgerEntryUpdate,
    store: StoreDependency,
    entry_id: UUID = Path(..., description="Ledger entry ID")
):
    """Only the fields sent are changed; nothing is recalculated"""
    try:
        return await store.update_ledger_entry(entry_id, entry_data)
    except AccountingError as e:
        raise http_error(e)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_ledger_entry(store: StoreDependency, entry_id: UUID = Path(..., description="Ledger entry ID")):
    try:
        await store.delete_ledger_entry(entry_id)
    except AccountingError as e:
        raise http_error(e)
