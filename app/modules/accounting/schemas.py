from pydantic import BaseModel
from typing import Optional


class StoreStatus(BaseModel):
    loading: bool
    last_error: Optional[str] = None
    company_persisted: bool
    parties: int
    invoices: int
    ledger_entries: int
    next_invoice_no: int
