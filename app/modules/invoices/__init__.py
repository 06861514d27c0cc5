"""
Invoices module

GST sales invoices with numbered line items.

Components:
- models.py: invoices table (items and party snapshot stored as JSON)
- schemas.py: form, update and output schemas
- calculator.py: line amounts and invoice totals
- crud.py: row <-> schema mapping
- document.py: tax invoice HTML (Jinja2)
- router.py: REST endpoints; creation and deletion also maintain the paired Sales ledger entry
"""

from .models import Invoice
from .schemas import InvoiceItem, InvoiceData, InvoiceOut, InvoiceCreate, InvoiceRevision, InvoiceUpdate

__all__ = [
    "Invoice",
    "InvoiceItem", "InvoiceData", "InvoiceOut", "InvoiceCreate", "InvoiceRevision", "InvoiceUpdate",
]
