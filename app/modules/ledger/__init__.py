"""
Ledger module

Debit/credit transactions per party, numbered per voucher type.
"""

from .models import LedgerEntry, VoucherType
from .schemas import LedgerEntryOut, LedgerEntryCreate, LedgerEntryUpdate

__all__ = ["LedgerEntry", "VoucherType", "LedgerEntryOut", "LedgerEntryCreate", "LedgerEntryUpdate"]
