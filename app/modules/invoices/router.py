from fastapi import APIRouter, status, Path, HTTPException
from fastapi.responses import HTMLResponse
from uuid import UUID

from app.modules.accounting import workflows
from app.modules.accounting.aggregates import total_sales
from app.modules.accounting.dependencies import StoreDependency, http_error
from app.modules.accounting.exceptions import AccountingError
from app.modules.invoices.document import document_filename, render_invoice
from app.modules.invoices.schemas import InvoiceCreate, InvoiceOut, InvoiceList, InvoiceRevision, NextInvoiceNumber

router = APIRouter(prefix="/invoices", tags=["Invoices"])


def _get_invoice_or_404(store, invoice_id: UUID) -> InvoiceOut:
    invoice = store.get_invoice(invoice_id)
    if not invoice:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Invoice {invoice_id} not found")
    return invoice


@router.get("", response_model=InvoiceList)
async def list_invoices(store: StoreDependency):
    """All invoices in invoice number order, with the grand total"""
    return InvoiceList(
        invoices=store.invoices,
        total=len(store.invoices),
        grand_total=total_sales(store.invoices)
    )


@router.post("", response_model=InvoiceOut, status_code=status.HTTP_201_CREATED)
async def create_invoice(invoice_data: InvoiceCreate, store: StoreDependency):
    """
    Create a sales invoice

    The next invoice number is assigned, line amounts and totals are calculated,
    and a Sales ledger entry (voucher no = invoice no, debit = total) is recorded
    against the party.
    """
    try:
        return await workflows.create_invoice(store, invoice_data)
    except AccountingError as e:
        raise http_error(e)


@router.get("/next-number", response_model=NextInvoiceNumber)
async def get_next_invoice_number(store: StoreDependency):
    """Number the next invoice will get (not reserved)"""
    return NextInvoiceNumber(invoice_no=store.get_next_invoice_no())


@router.get("/{invoice_id}", response_model=InvoiceOut)
async def get_invoice(store: StoreDependency, invoice_id: UUID = Path(..., description="Invoice ID")):
    return _get_invoice_or_404(store, invoice_id)


@router.patch("/{invoice_id}", response_model=InvoiceOut)
async def update_invoice(
    invoice_data: InvoiceRevision,
    store: StoreDependency,
    invoice_id: UUID = Path(..., description="Invoice ID")
):
    """
    Edit an invoice. Sending `items` replaces all lines and recalculates totals.
    The Sales ledger entry is not changed.
    """
    try:
        return await workflows.revise_invoice(store, invoice_id, invoice_data)
    except AccountingError as e:
        raise http_error(e)


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invoice(store: StoreDependency, invoice_id: UUID = Path(..., description="Invoice ID")):
    """Delete an invoice together with its Sales ledger entry"""
    try:
        await workflows.delete_invoice(store, invoice_id)
    except AccountingError as e:
        raise http_error(e)


@router.get("/{invoice_id}/document", response_class=HTMLResponse)
async def get_invoice_document(store: StoreDependency, invoice_id: UUID = Path(..., description="Invoice ID")):
    """Printable tax invoice (HTML)"""
    invoice = _get_invoice_or_404(store, invoice_id)
    html = render_invoice(invoice, store.company)
    return HTMLResponse(
        content=html,
        headers={"Content-Disposition": f'inline; filename="{document_filename(invoice.invoice_no)}"'}
    )
