from pydantic import BaseModel
from decimal import Decimal
from typing import List

from app.modules.invoices.schemas import InvoiceOut
from app.modules.ledger.schemas import LedgerBalance


class DashboardSummary(BaseModel):
    company_name: str
    total_sales: Decimal
    invoice_count: int
    party_count: int
    average_invoice_value: Decimal
    total_debits: Decimal
    total_credits: Decimal
    net_balance: LedgerBalance
    recent_invoices: List[InvoiceOut]
